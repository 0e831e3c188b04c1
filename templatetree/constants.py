"""
Central location for constants used throughout TemplateTree.
"""

# ============================================================================
# Colors
# ============================================================================

class Colors:
    """Color constants used throughout the application."""

    # Toggle switch colors
    TOGGLE_ON = "#4CAF50"
    TOGGLE_OFF = "#9E9E9E"
    TOGGLE_THUMB = "#FFFFFF"

    # Resolved-name preview in dialogs
    PREVIEW_OK = "#1ABC9D"
    PREVIEW_ERROR = "#E74C3C"


# ============================================================================
# UI Widget Dimensions
# ============================================================================

class Dimensions:
    """Size constants for UI widgets."""

    # Toggle switch
    TOGGLE_WIDTH = 44
    TOGGLE_HEIGHT = 24
    TOGGLE_THUMB_RADIUS = 8
    TOGGLE_THUMB_MARGIN = 4

    # Margins and spacing
    PANEL_MARGIN = 12
    PANEL_SPACING = 8
    TREE_INDENT = 14

    # Dialogs
    DIALOG_MIN_WIDTH = 450
    DIALOG_MARGIN = 16


# ============================================================================
# Timing
# ============================================================================

class Timing:
    """Timing constants for animations."""

    TOGGLE_ANIMATION_MS = 150


# ============================================================================
# Menu Labels
# ============================================================================

class MenuLabels:
    """Context menu entries of the preview tree."""

    NEW_DIRECTORY = "New Directory"
    NEW_FILE = "New File"
    RENAME = "Rename"
    DELETE = "Delete"


# ============================================================================
# File System
# ============================================================================

class FileSystem:
    """File system related constants."""

    YAML_EXTENSION = ".yaml"
    INVALID_NAME_CHARS = '/\\'
    RESERVED_NAMES = {".", ".."}


# ============================================================================
# Default Content
# ============================================================================

class Defaults:
    """Default content for various features."""

    UNTITLED_MODULE_NAME = "Untitled Module"
    SHOW_PLACEHOLDERS_LABEL = "Show placeholders"
    FILE_NAME_PLACEHOLDER = "File name, e.g. Main.${FILE_EXT}"
    DIRECTORY_NAME_PLACEHOLDER = "Directory name, e.g. ${MODULE_NAME}"


# ============================================================================
# Application Info
# ============================================================================

class App:
    """Application-level constants."""

    NAME = "TemplateTree"
