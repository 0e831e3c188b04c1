"""Top-level init file to make package available for import.

Edits module templates: file trees whose names carry ${KEY} placeholders.
"""
__version__ = "1.0.0"
