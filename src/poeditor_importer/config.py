import json
import logging
from pathlib import Path
from typing import Dict, Any

from poeditor_importer.logger import clear_log_settings_cache, get_logger

# Configured by get_logger at the end of the module, once load_config exists
logger = logging.getLogger(__name__)

# PoEditor API constants
POEDITOR_API_URL = "https://api.poeditor.com/v2/"
ANDROID_STRINGS_EXPORT_TYPE = "android_strings"

# Keys ending with this suffix are moved to the tablet resource folder
TABLET_REGEX_STRING = r"_tablet$"
TABLET_QUALIFIER = "tablet"

# Android resource constants
VALUES_FOLDER_NAME = "values"
STRINGS_FILE_NAME = "strings.xml"

HTTP_DEFAULTS = {
    "timeout": 60
}

# Get base directory (project root)
BASE_DIR = Path(__file__).parent.parent.parent
CONFIG_DIR = BASE_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Default configuration template
DEFAULT_CONFIG = {
    "poeditor": {
        "api_token": "YOUR_API_TOKEN_HERE",
        "project_id": 0,
        "default_lang": "en",
        "res_dir_path": "app/src/main/res"
    },
    "timeout": 60,
    "log_mode": "info",
    "log_to_file": False
}


def ensure_config_directory():
    """Ensure the config directory exists."""
    CONFIG_DIR.mkdir(exist_ok=True)
    logger.debug(f"Config directory ensured: {CONFIG_DIR}")


def create_default_config():
    """Create the default config.json file."""
    ensure_config_directory()
    with open(CONFIG_FILE, 'w', encoding='utf-8') as f:
        json.dump(DEFAULT_CONFIG, f, indent=4, ensure_ascii=False)
    logger.info(f"Created default config file: {CONFIG_FILE}")


def _merge_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Fill in any keys missing from a loaded config with their default values."""
    merged = json.loads(json.dumps(DEFAULT_CONFIG))
    for key, value in config.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def load_config(config_file: Path = None) -> Dict[str, Any]:
    """
    Load the configuration from the JSON config file.

    Missing keys are filled in from DEFAULT_CONFIG. A missing or unreadable
    file yields the default configuration.
    """
    config_file = Path(config_file) if config_file else CONFIG_FILE

    if not config_file.exists():
        return _merge_defaults({})

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            config = json.load(f)
        if not isinstance(config, dict):
            raise ValueError("config root must be a JSON object")
        return _merge_defaults(config)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read config file {config_file}: {e}")
        logger.warning("Using default configuration")
        return _merge_defaults({})


def save_config(config: Dict[str, Any], config_file: Path = None):
    """Save the configuration to the JSON config file."""
    config_file = Path(config_file) if config_file else CONFIG_FILE
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=4, ensure_ascii=False)
        logger.info(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save config to {config_file}: {e}")
        raise

    if config_file == CONFIG_FILE:
        clear_log_settings_cache()


def get_poeditor_settings(config: Dict[str, Any] = None) -> Dict[str, Any]:
    """Get the importer run parameters from the 'poeditor' config section."""
    config = config if config is not None else load_config()
    settings = config.get('poeditor', {})
    return {
        'api_token': settings.get('api_token', ''),
        'project_id': int(settings.get('project_id', 0)),
        'default_lang': settings.get('default_lang', 'en'),
        'res_dir_path': settings.get('res_dir_path', ''),
    }


get_logger(__name__)
