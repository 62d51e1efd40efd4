"""
Path: texture_forge/config/__init__.py

Funktionsweise: Wertebereiche, Defaults und validierte Parameter-Sätze
"""
