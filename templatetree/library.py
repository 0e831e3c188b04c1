"""
Persistence layer for TemplateTree.
Handles storage in ~/.templatetree/
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from .constants import Defaults, FileSystem
from .model import Module
from .template_engine import (
    DEFAULT_MODULE_YAML, ModuleParseError, dump_module_yaml, parse_module_yaml
)

logger = logging.getLogger(__name__)

# Application support paths
APP_SUPPORT_DIR = Path.home() / ".templatetree"
DEFAULT_MODULES_DIR = APP_SUPPORT_DIR / "modules"
PREFERENCES_PATH = APP_SUPPORT_DIR / "preferences.yaml"
MODULES_DIR_PREF_KEY = "modules_dir"
SHOW_PLACEHOLDERS_PREF_KEY = "show_placeholders"
LAST_MODULE_PREF_KEY = "last_module"
APP_OPENED_PREF_KEY = "app_opened"

# Preference caching - reduces YAML parsing overhead
_preferences_cache = None
_preferences_mtime = None


def _ensure_app_support_dir():
    """Create base app support directory."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)


def ensure_directories():
    """Create required directories if they don't exist."""
    _ensure_app_support_dir()
    get_modules_dir().mkdir(parents=True, exist_ok=True)


def seed_defaults():
    """Seed the example module on first app launch."""
    ensure_directories()
    if load_preferences().get(APP_OPENED_PREF_KEY) is True:
        return
    if not list_modules():
        save_module(parse_module_yaml(DEFAULT_MODULE_YAML))


def initialize():
    """Initialize the library on app startup."""
    ensure_directories()
    seed_defaults()
    set_preference(APP_OPENED_PREF_KEY, True)


def get_modules_dir() -> Path:
    """Return the modules directory, honoring user preferences."""
    return _get_path_preference(MODULES_DIR_PREF_KEY, DEFAULT_MODULES_DIR)


def set_modules_dir(modules_dir: Optional[Path]):
    """Persist the modules storage location."""
    _set_path_preference(MODULES_DIR_PREF_KEY, modules_dir)


def get_show_placeholders() -> bool:
    """Return True if names should be shown with their raw placeholders."""
    return get_preference(SHOW_PLACEHOLDERS_PREF_KEY, False) is True


def set_show_placeholders(show: bool):
    set_preference(SHOW_PLACEHOLDERS_PREF_KEY, bool(show))


# --- Modules ---

def sanitize_module_name(name: str) -> Optional[str]:
    """Turn a module name into a safe file stem, or None if nothing is left."""
    if not isinstance(name, str):
        return None
    stem = re.sub(r'[<>:"/\\|?*\x00-\x1f]', '_', name).strip().rstrip('.')
    if not stem or stem in FileSystem.RESERVED_NAMES:
        return None
    return stem


def get_module_path(name: str) -> Optional[Path]:
    stem = sanitize_module_name(name)
    if stem is None:
        return None
    return get_modules_dir() / f"{stem}{FileSystem.YAML_EXTENSION}"


def list_modules() -> List[str]:
    """List saved module names, sorted case-insensitively."""
    modules_dir = get_modules_dir()
    if not modules_dir.exists():
        return []
    names = [
        path.stem for path in modules_dir.glob(f"*{FileSystem.YAML_EXTENSION}")
        if path.is_file()
    ]
    return sorted(names, key=str.lower)


def load_module(name: str) -> Optional[Module]:
    """Load a saved module by name. Returns None if missing or unreadable."""
    path = get_module_path(name)
    if path is None or not path.is_file():
        return None
    try:
        return parse_module_yaml(path.read_text(encoding="utf-8"))
    except (OSError, ModuleParseError) as exc:
        logger.warning("Could not load module %s: %s", name, exc)
        return None


def save_module(module: Module) -> Path:
    """Save a module under its own name and return the written path."""
    ensure_directories()
    path = get_module_path(module.name)
    if path is None:
        path = get_module_path(Defaults.UNTITLED_MODULE_NAME)
    path.write_text(dump_module_yaml(module), encoding="utf-8")
    set_preference(LAST_MODULE_PREF_KEY, path.stem)
    return path


def delete_module(name: str) -> bool:
    """Delete a saved module. Returns True if deleted."""
    path = get_module_path(name)
    if path is None or not path.is_file():
        return False
    path.unlink()
    if get_preference(LAST_MODULE_PREF_KEY) == path.stem:
        set_preference(LAST_MODULE_PREF_KEY, None)
    return True


# --- Preferences ---

def load_preferences() -> Dict:
    """Load user preferences from disk with caching."""
    global _preferences_cache, _preferences_mtime
    _ensure_app_support_dir()

    if PREFERENCES_PATH.exists():
        try:
            # Check if cache is valid by comparing modification time
            current_mtime = PREFERENCES_PATH.stat().st_mtime
            if _preferences_cache is not None and _preferences_mtime == current_mtime:
                return _preferences_cache.copy()

            # Cache miss or invalidated - load from disk
            with open(PREFERENCES_PATH, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
                _preferences_cache = data if isinstance(data, dict) else {}
                _preferences_mtime = current_mtime
                return _preferences_cache.copy()
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable preferences: %s", exc)
            return {}
    return {}


def save_preferences(prefs: Dict):
    """Save user preferences to disk and update cache."""
    global _preferences_cache, _preferences_mtime
    _ensure_app_support_dir()
    with open(PREFERENCES_PATH, "w", encoding="utf-8") as f:
        yaml.dump(prefs, f, default_flow_style=False, allow_unicode=True)

    # Update cache with the saved data
    _preferences_cache = prefs.copy()
    _preferences_mtime = PREFERENCES_PATH.stat().st_mtime if PREFERENCES_PATH.exists() else None


def invalidate_preferences_cache():
    global _preferences_cache, _preferences_mtime
    _preferences_cache = None
    _preferences_mtime = None


def _get_path_preference(key: str, default: Path) -> Path:
    """Generic path preference getter with validation and expansion."""
    prefs = load_preferences()
    path_value = prefs.get(key)
    if isinstance(path_value, str) and path_value.strip():
        return Path(path_value).expanduser()
    return default


def _set_path_preference(key: str, value: Optional[Path]):
    """Generic path preference setter with None handling."""
    prefs = load_preferences()
    if value is None:
        prefs.pop(key, None)
    else:
        path_value = str(value).strip()
        if path_value:
            prefs[key] = path_value
        else:
            prefs.pop(key, None)
    save_preferences(prefs)


def get_preference(key: str, default=None):
    """Get a single preference value."""
    prefs = load_preferences()
    return prefs.get(key, default)


def set_preference(key: str, value):
    """Set a single preference value."""
    prefs = load_preferences()
    prefs[key] = value
    save_preferences(prefs)
