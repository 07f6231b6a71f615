"""
Character Validator - Character File Validation Tool

A FastAPI-based tool that validates character configuration JSON files
against a fixed schema and renders either a friendly error report or an
interactive, collapsible tree of the validated data.
"""

__version__ = "0.1.0"
