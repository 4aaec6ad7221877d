# config_manager.py
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

config_json = Path(__file__).resolve().parent / "config.json"
ui_strings = Path(__file__).resolve().parent / "ui_strings.json"


DEFAULT_SETTINGS = {
    "arithmetic_mode": "normal",
    "precision": 4,
    "use_significant_digits": False,
    "show_steps": True,
    "max_steps": 20,
    "display_width": 40,
    "darkmode": False,
    "log_level": "INFO",
}


def _read_json(path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return {}


def load_setting_value(key_value, path=None):
    """Return one setting, or the whole settings dict for key_value == "all".

    Settings missing from the file fall back to DEFAULT_SETTINGS.
    """
    settings_dict = dict(DEFAULT_SETTINGS)
    stored = _read_json(path or config_json)
    if isinstance(stored, dict):
        settings_dict.update(stored)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_setting_description(key_value, path=None):
    descriptions = _read_json(path or ui_strings)

    if key_value == "all":
        return descriptions

    else:
        return descriptions.get(key_value, key_value)


def save_setting(settings_dict, path=None):
    """Write settings_dict to the config file. Returns the saved dict, or {} on failure."""
    try:
        with open(path or config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except (OSError, TypeError) as e:
        logger.error("Could not save settings: %s", e)
        return {}
