# config_manager.py
import json
import logging
from pathlib import Path

from . import error as E

logger = logging.getLogger(__name__)

config_json = Path(__file__).resolve().parent.parent / "config.json"
ui_strings = Path(__file__).resolve().parent.parent / "ui_strings.json"


DEFAULT_SETTINGS = {
    "angle_mode": "DEG",
    "decimal_places": 5,
    "show_errors": True,
    "darkmode": False,
    "debounce_ms": 120,
    "export_column_width": 50,
    "sessions_file": "sessions.json",
}

# Lower bound (and optional upper bound) for every integer setting
INTEGER_RANGES = {
    "decimal_places": (0, 10),
    "debounce_ms": (0, None),
    "export_column_width": (1, None),
}

BOOLEAN_SETTINGS = ("show_errors", "darkmode")


def _read_json(path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        logger.warning("Could not read %s, falling back to defaults", path.name)
        return {}


def load_setting_value(key_value):
    settings_dict = dict(DEFAULT_SETTINGS)
    stored = _read_json(config_json)
    if isinstance(stored, dict):
        settings_dict.update(stored)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, DEFAULT_SETTINGS.get(key_value))


def load_setting_description(key_value):
    settings_dict = _read_json(ui_strings)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, key_value)


def validate_settings(settings_dict):
    """Raise ConfigurationError (code 5000) for the first invalid value."""
    angle_mode = str(settings_dict.get("angle_mode", DEFAULT_SETTINGS["angle_mode"])).upper()
    if angle_mode not in ("DEG", "RAD"):
        raise E.ConfigurationError(f"Invalid configuration value: angle_mode = {settings_dict.get('angle_mode')}")

    for key in BOOLEAN_SETTINGS:
        if key in settings_dict and not isinstance(settings_dict[key], bool):
            raise E.ConfigurationError(f"Invalid configuration value: {key} must be true or false")

    for key, (lower, upper) in INTEGER_RANGES.items():
        if key not in settings_dict:
            continue
        value = settings_dict[key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise E.ConfigurationError(f"Invalid configuration value: {key} must be a whole number")
        if value < lower or (upper is not None and value > upper):
            raise E.ConfigurationError(f"Invalid configuration value: {key} = {value}")

    sessions_file = settings_dict.get("sessions_file", DEFAULT_SETTINGS["sessions_file"])
    if not isinstance(sessions_file, str) or not sessions_file.strip():
        raise E.ConfigurationError("Invalid configuration value: sessions_file")

    return settings_dict


def save_setting(settings_dict):
    validate_settings(settings_dict)
    try:
        with open(config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            logger.info("Settings saved to %s", config_json.name)
            return settings_dict

    except OSError as e:
        logger.error("Could not write %s: %s", config_json.name, e)
        return {}
