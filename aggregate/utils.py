"""
Configuration helpers for the activity filters.
Loads default toggles, the task-key marker and named presets from a YAML file.
"""
from typing import Any, Dict, Optional
import os
import yaml
from aggregate.classifier import ActivityFilters
from correlate.linker import DEFAULT_TASK_MARKER

# filename used for the filter YAML configuration
CONFIG_FILENAME = 'activity_filters.yaml'

# environment variable overriding the config path
CONFIG_ENV_VAR = 'WORKLOG_CONFIG'


def default_config_path() -> str:
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return env_path
    return os.path.join(os.path.dirname(os.path.dirname(__file__)), 'config', CONFIG_FILENAME)


def _read_config(path: str) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        doc = yaml.safe_load(f) or {}
    if not isinstance(doc, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return doc


def _filters_from_mapping(mapping: Any, base: ActivityFilters) -> ActivityFilters:
    if not isinstance(mapping, dict):
        return base
    known = {k: v for k, v in mapping.items() if k in ActivityFilters.FIELDS}
    return base.replace(**known)


def load_filters(path: Optional[str] = None) -> ActivityFilters:
    """
    Load the default activity filters from YAML if available, otherwise return built-in defaults.
    Keys missing from the file keep their built-in default.
    """
    path = path or default_config_path()
    if not os.path.exists(path):
        return ActivityFilters()
    try:
        doc = _read_config(path)
    except (OSError, ValueError, yaml.YAMLError):
        # unreadable config: use defaults
        return ActivityFilters()
    return _filters_from_mapping(doc.get('filters'), ActivityFilters())


def load_task_marker(path: Optional[str] = None) -> str:
    """Return the configured task-key marker, or the default 'SG-'."""
    path = path or default_config_path()
    if not os.path.exists(path):
        return DEFAULT_TASK_MARKER
    try:
        doc = _read_config(path)
    except (OSError, ValueError, yaml.YAMLError):
        return DEFAULT_TASK_MARKER
    marker = doc.get('task_marker')
    return str(marker) if marker else DEFAULT_TASK_MARKER


def load_preset(preset_name: str, path: Optional[str] = None) -> ActivityFilters:
    """
    Load the filters for a named preset.

    Behavior:
    - Loads the base filters using the same path resolution as load_filters().
    - If the config file contains a 'presets' section and the named preset exists, the
      preset toggles are merged over the base filters.
    - If the file or the preset is missing, raises a ValueError.

    Example:
        filters = load_preset('billable_work')
    """
    path = path or default_config_path()
    base = load_filters(path)
    if not os.path.exists(path):
        raise ValueError(f"Filter config file not found at: {path}")
    try:
        doc = _read_config(path)
    except (OSError, yaml.YAMLError) as ex:
        raise ValueError(f"Failed to load presets from {path}: {ex}")

    presets = doc.get('presets') or {}
    if not isinstance(presets, dict) or preset_name not in presets:
        raise ValueError(f"Preset '{preset_name}' not found in {path}")
    return _filters_from_mapping(presets.get(preset_name) or {}, base)


def list_presets(path: Optional[str] = None) -> list:
    """Return a list of available preset names from the config YAML (or empty list)."""
    path = path or default_config_path()
    if not os.path.exists(path):
        return []
    try:
        doc = _read_config(path)
    except (OSError, ValueError, yaml.YAMLError):
        return []
    presets = doc.get('presets')
    return list(presets.keys()) if isinstance(presets, dict) else []
