"""
Path: texture_forge/utils/__init__.py

Funktionsweise: Querschnitts-Hilfen (kategorisiertes Error-Logging)
"""
