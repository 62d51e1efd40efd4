"""
Path: texture_forge/utils/error_handler.py

Funktionsweise: Zentrale Error-Behandlung für alle Texture-Forge Komponenten
- Paralleles Error Handling ohne Unterdrückung von Exceptions (alles wird re-raised)
- Logging nur auf die Konsole, das Dateisystem wird nie angefasst
- Spezialisierte Handler für Generierung, Parameter-Validation und Speicher
- Ein/Aus-Schalter für flexibles Error-Management
- Decorator-System für die Einbindung in bestehenden Code
- Automatische Error-Statistiken mit Rate-Limiting pro Funktion

Kategorien:
1. CORE GENERATION - Pipeline-Durchlauf, Generatoren, Grunge, Normal-Map
2. PARAMETERS      - InvalidParameter aus der Validation
3. MEMORY          - Buffer-Allokation (bis 2048x2048x4 float32 pro Buffer)
"""

import datetime
import functools
import gc
import logging
import traceback
from typing import Any, Callable, Dict

import psutil

# =============================================================================
# GLOBALE KONFIGURATION - HIER EIN/AUSSCHALTEN
# =============================================================================

# Hauptschalter - True = Error Handler aktiv
ERROR_HANDLER_ENABLED = True

ERROR_CATEGORIES = {
    "core_generation": True,
    "parameters": True,
    "memory": True,
}

ERROR_LOG_LEVEL = "DEBUG"
SHOW_FULL_TRACEBACK = True

MAX_ERRORS_PER_FUNCTION = 10
ERROR_RATE_LIMITING = True


class ErrorStatistics:
    """
    Funktionsweise: Sammelt und verwaltet Error-Statistiken
    Aufgabe: Zählt Fehler pro Kategorie und Funktion, merkt sich kritische Fehler
    """

    def __init__(self):
        self.total_errors = 0
        self.errors_by_category = {cat: 0 for cat in ERROR_CATEGORIES.keys()}
        self.errors_by_function = {}
        self.critical_errors = []

    def record_error(self, category: str, function_name: str, error_type: str, severity: str) -> bool:
        """
        Funktionsweise: Protokolliert Errors mit Timestamp und Kontext
        Returns: bool - True wenn geloggt werden soll, False wenn rate-limited
        Besonderheit: MemoryErrors werden nie rate-limited
        """
        self.total_errors += 1
        self.errors_by_category[category] = self.errors_by_category.get(category, 0) + 1
        self.errors_by_function[function_name] = self.errors_by_function.get(function_name, 0) + 1

        if severity == "CRITICAL":
            self.critical_errors.append({
                'function': function_name,
                'error_type': error_type,
                'timestamp': datetime.datetime.now(),
                'category': category
            })

        if error_type == "MemoryError":
            return True

        if ERROR_RATE_LIMITING and self.errors_by_function[function_name] > MAX_ERRORS_PER_FUNCTION:
            return False

        return True


class TextureForgeErrorHandler:
    """
    Funktionsweise: Zentrale Error-Handler Klasse für Texture-Forge
    Aufgabe: Koordiniert alle Error-Handling Operationen mit Kategorie-Support
    """

    def __init__(self):
        self.logger = logging.getLogger('TextureForgeErrorHandler')
        self.statistics = ErrorStatistics()

        if ERROR_HANDLER_ENABLED:
            self._setup_logging()

    def _setup_logging(self):
        """
        Funktionsweise: Konfiguriert eigenen Logger mit Kategorie-Formatierung
        """
        self.logger.setLevel(getattr(logging, ERROR_LOG_LEVEL))
        self.logger.propagate = False

        # Verhindere Duplikate
        if self.logger.handlers:
            self.logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | [%(category)s] %(function)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

    # =============================================================================
    # 1. CORE GENERATION ERROR HANDLERS
    # =============================================================================

    def handle_core_generation_error(self, func_name: str, error: Exception,
                                     stage: str, args: tuple, kwargs: dict):
        """
        Funktionsweise: Behandelt Fehler in Pipeline, Generatoren und Post-Passes
        Aufgabe: Loggt Material-Kontext (Typ, Größe, Seed) aus den Aufruf-Argumenten
        Kategorie: core_generation
        """
        if not self._should_handle_category("core_generation"):
            return

        severity = self._determine_severity(error)

        if not self.statistics.record_error("core_generation", func_name, type(error).__name__, severity):
            return

        error_msg = f"CORE GENERATION ERROR in {stage.upper()}"
        error_msg += f"\nFunction: {func_name}"
        error_msg += f"\nError Type: {type(error).__name__}"
        error_msg += f"\nError Message: {str(error)}"
        error_msg += self._get_material_context(args, kwargs)

        if SHOW_FULL_TRACEBACK:
            error_msg += f"\n\nTraceback:\n{traceback.format_exc()}"

        extra = {'category': 'CORE_GEN', 'function': func_name}
        self.logger.log(getattr(logging, severity), error_msg, extra=extra)

    # =============================================================================
    # 2. PARAMETER ERROR HANDLERS
    # =============================================================================

    def handle_parameter_error(self, func_name: str, error: Exception, args: tuple, kwargs: dict):
        """
        Funktionsweise: Behandelt Fehler der Parameter-Validation
        Aufgabe: Loggt Feld, Wert und erwarteten Bereich von InvalidParameter
        Kategorie: parameters
        """
        if not self._should_handle_category("parameters"):
            return

        severity = self._determine_severity(error)

        if not self.statistics.record_error("parameters", func_name, type(error).__name__, severity):
            return

        error_msg = "PARAMETER ERROR"
        error_msg += f"\nFunction: {func_name}"
        error_msg += f"\nError: {type(error).__name__}: {str(error)}"

        if hasattr(error, "field"):
            error_msg += f"\nField: {error.field}"
            error_msg += f"\nValue: {error.value!r}"
            error_msg += f"\nExpected: {error.expected_range}"

        extra = {'category': 'PARAMS', 'function': func_name}
        self.logger.log(getattr(logging, severity), error_msg, extra=extra)

    # =============================================================================
    # 3. MEMORY ERROR HANDLERS
    # =============================================================================

    def handle_memory_critical_error(self, func_name: str, error: MemoryError,
                                     operation_type: str, args: tuple, kwargs: dict):
        """
        Funktionsweise: Behandelt MemoryErrors bei Buffer-Allokation
        Aufgabe: Ergänzt System- und Prozess-Speicherdiagnose
        Kategorie: memory
        """
        if not self._should_handle_category("memory"):
            return

        self.statistics.record_error("memory", func_name, type(error).__name__, "CRITICAL")

        error_msg = "MEMORY CRITICAL ERROR"
        error_msg += f"\nOperation: {operation_type}"
        error_msg += f"\nFunction: {func_name}"
        error_msg += f"\nError: {type(error).__name__}: {str(error)}"
        error_msg += self._get_memory_diagnostics()
        error_msg += self._get_gc_diagnostics()

        extra = {'category': 'MEMORY', 'function': func_name}
        self.logger.critical(error_msg, extra=extra)

    # =============================================================================
    # HILFSMETHODEN
    # =============================================================================

    def _should_handle_category(self, category: str) -> bool:
        return ERROR_HANDLER_ENABLED and ERROR_CATEGORIES.get(category, False)

    def _determine_severity(self, error: Exception) -> str:
        """
        Funktionsweise: Bestimmt Log-Level anhand des Fehlertyps
        Returns: str - "CRITICAL", "ERROR" oder "WARNING"
        """
        if isinstance(error, MemoryError):
            return "CRITICAL"
        if isinstance(error, ValueError):
            return "WARNING"
        return "ERROR"

    def _get_material_context(self, args: tuple, kwargs: dict) -> str:
        """Sucht einen Parameter-Satz in den Argumenten und formatiert die Kernfelder"""
        for candidate in list(args) + list(kwargs.values()):
            if hasattr(candidate, "describe"):
                try:
                    description = candidate.describe()
                except (AttributeError, TypeError):
                    continue
                context = "\n--- MATERIAL CONTEXT ---"
                context += f"\nMaterial: {description.get('material_type')}"
                context += f"\nSize: {description.get('size')}"
                context += f"\nSeed: {description.get('seed')}"
                context += f"\nTiling: {description.get('tiling')}"
                return context
        return ""

    def _get_memory_diagnostics(self) -> str:
        """
        Funktionsweise: Sammelt System- und Prozess-Speicherinformationen via psutil
        Return: Formatierter String mit Speicherinformationen
        """
        try:
            memory = psutil.virtual_memory()
            process = psutil.Process()

            diagnostics = "\n--- MEMORY DIAGNOSTICS ---"
            diagnostics += f"\nSystem RAM Total: {memory.total / (1024 ** 3):.2f} GB"
            diagnostics += f"\nSystem RAM Available: {memory.available / (1024 ** 3):.2f} GB"
            diagnostics += f"\nSystem RAM Used: {memory.percent:.1f}%"

            process_memory = process.memory_info()
            diagnostics += f"\nProcess Memory RSS: {process_memory.rss / (1024 ** 2):.2f} MB"

            if memory.percent > 90:
                diagnostics += "\nCRITICAL: System memory usage > 90%"

            return diagnostics

        except psutil.Error as e:
            return f"\nMemory Diagnostics Error: {type(e).__name__}: {str(e)}"

    def _get_gc_diagnostics(self) -> str:
        """GC-Statistiken für die Analyse von Speicherfehlern"""
        diagnostics = "\n--- GARBAGE COLLECTION DIAGNOSTICS ---"
        diagnostics += f"\nGC Generation Counts: {gc.get_count()}"

        uncollectable = len(gc.garbage)
        if uncollectable > 0:
            diagnostics += f"\nCRITICAL: {uncollectable} uncollectable objects detected"

        collected = gc.collect()
        if collected > 0:
            diagnostics += f"\nGC Run: Collected {collected} objects"

        return diagnostics

    def get_statistics_summary(self) -> Dict[str, Any]:
        """
        Funktionsweise: Gibt Error-Statistiken zurück
        Return: Dict mit allen Error-Statistiken
        """
        return {
            'total_errors': self.statistics.total_errors,
            'errors_by_category': dict(self.statistics.errors_by_category),
            'errors_by_function': dict(self.statistics.errors_by_function),
            'critical_errors': len(self.statistics.critical_errors),
            'most_problematic_function': max(self.statistics.errors_by_function.items(),
                                             key=lambda x: x[1]) if self.statistics.errors_by_function else None
        }


# =============================================================================
# GLOBALE ERROR HANDLER INSTANZ
# =============================================================================

_error_handler = TextureForgeErrorHandler()


# =============================================================================
# DECORATOR FUNKTIONEN (Kategorisiert)
# =============================================================================

def core_generation_handler(stage: str):
    """Decorator für Generierungs-Funktionen (Pipeline, Generatoren, Post-Passes)"""

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not ERROR_HANDLER_ENABLED:
                return func(*args, **kwargs)
            try:
                return func(*args, **kwargs)
            except MemoryError:
                # MemoryErrors laufen über memory_critical_handler
                raise
            except Exception as e:
                # Parameter-Fehler sind bereits in ihrer eigenen Kategorie geloggt
                if getattr(e, "error_category", None) != "parameters":
                    _error_handler.handle_core_generation_error(func.__name__, e, stage, args, kwargs)
                raise

        return wrapper

    return decorator


def parameter_handler(func: Callable) -> Callable:
    """Decorator für Parameter-Validation"""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if not ERROR_HANDLER_ENABLED:
            return func(*args, **kwargs)
        try:
            return func(*args, **kwargs)
        except ValueError as e:
            _error_handler.handle_parameter_error(func.__name__, e, args, kwargs)
            e.error_category = "parameters"
            raise

    return wrapper


def memory_critical_handler(operation_type: str = "buffer_allocation"):
    """Decorator für speicherkritische Operationen"""

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not ERROR_HANDLER_ENABLED:
                return func(*args, **kwargs)
            try:
                return func(*args, **kwargs)
            except MemoryError as e:
                _error_handler.handle_memory_critical_error(func.__name__, e, operation_type, args, kwargs)
                raise

        return wrapper

    return decorator


# =============================================================================
# UTILITY FUNKTIONEN
# =============================================================================

def toggle_error_handler(enabled: bool):
    """Schaltet den Error Handler global ein oder aus"""
    global ERROR_HANDLER_ENABLED
    ERROR_HANDLER_ENABLED = enabled


def toggle_error_category(category: str, enabled: bool):
    """Schaltet eine einzelne Error-Kategorie ein oder aus"""
    if category not in ERROR_CATEGORIES:
        raise ValueError(f"Unknown error category: {category}")
    ERROR_CATEGORIES[category] = enabled


def get_error_statistics() -> Dict[str, Any]:
    return _error_handler.get_statistics_summary()


def reset_error_statistics():
    """Setzt alle Zähler zurück (z.B. zwischen Tests)"""
    _error_handler.statistics = ErrorStatistics()
