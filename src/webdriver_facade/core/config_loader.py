import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Union

from ..constants import DEFAULT_ENVIRONMENTS, ENV_SETTINGS_FILE
from ..data_models import SessionSettings

SETTINGS_RELATIVE_PATH = Path('config') / 'settings.json'

logger = logging.getLogger(__name__)


def default_settings_file() -> Path:
    """config/settings.json under the current working directory, resolved at call time."""
    return Path.cwd() / SETTINGS_RELATIVE_PATH


class ConfigLoader:
    def __init__(self, settings_file: Union[str, Path, None] = None):
        """
        Initializes the ConfigLoader.

        Args:
            settings_file (Union[str, Path], optional): Path to the settings JSON file.
                Defaults to $WEBDRIVER_FACADE_SETTINGS_FILE, then 'config/settings.json'
                under the current working directory.
        """
        if settings_file is None:
            settings_file = os.environ.get(ENV_SETTINGS_FILE) or default_settings_file()
        self.settings_file: Path = Path(settings_file)
        self.settings: Dict[str, Any] = self._load_json(self.settings_file, default_value={})

        if not self.settings:
            logger.debug(f"Settings file '{self.settings_file}' was not found or is empty/invalid. Using defaults.")

    def _load_json(self, file_path: Path, default_value: Dict) -> Any:
        """
        Loads a JSON file.

        Args:
            file_path (Path): The path to the JSON file.
            default_value (Dict): The default value to return if loading fails.

        Returns:
            Any: The loaded JSON data or the default value.
        """
        if not file_path.exists():
            logger.debug(f"Configuration file not found: {file_path}")
            return default_value
        if not file_path.is_file():
            logger.error(f"Configuration path is not a file: {file_path}")
            return default_value

        try:
            with file_path.open('r', encoding='utf-8') as f:
                data = json.load(f)
                logger.debug(f"Successfully loaded JSON from {file_path}")
        except json.JSONDecodeError as e:
            logger.error(f"Could not decode JSON from {file_path}: {e}")
            return default_value
        if not isinstance(data, dict):
            logger.error(f"Expected a JSON object at the top of {file_path}, found {type(data).__name__}")
            return default_value
        return data

    def get_settings(self) -> Dict[str, Any]:
        """Returns all loaded settings."""
        return self.settings

    def get_setting(self, path_str: str, default: Any = None) -> Any:
        """
        Retrieves a setting value using a dot-separated path.

        Args:
            path_str (str): Dot-separated path to the setting (e.g., "logging.level").
            default (Any, optional): Default value if the setting is not found. Defaults to None.

        Returns:
            Any: The setting value or the default.
        """
        keys = path_str.split('.')
        current_level = self.settings
        for key in keys:
            if not isinstance(current_level, dict):
                logger.warning(f"Invalid path '{path_str}' at key '{key}'. Expected a dictionary, found {type(current_level)}.")
                return default
            if key not in current_level:
                logger.debug(f"Setting '{path_str}' not found. Returning default: {default}")
                return default
            current_level = current_level[key]
        return current_level

    def get_browser_setting(self, setting_name: str, default: Any = None) -> Any:
        """Retrieves a specific setting from the 'browser_settings' block."""
        return self.get_setting(f'browser_settings.{setting_name}', default)

    def get_logging_setting(self, setting_name: str, default: Any = None) -> Any:
        """Retrieves a specific setting from the 'logging' block."""
        return self.get_setting(f'logging.{setting_name}', default)

    def load_session_settings(self) -> SessionSettings:
        """
        Builds the SessionSettings for a BrowserManager.

        Precedence, lowest first: built-in defaults, the 'browser_settings' block,
        then WEBDRIVER_FACADE_* environment variables (read by SessionSettings).
        Environment names from the file are merged over the built-in qa/staging/prod registry.
        """
        values: Dict[str, Any] = {}
        file_settings = self.get_setting('browser_settings', {})
        if isinstance(file_settings, dict):
            values.update(file_settings)
        else:
            logger.warning(f"'browser_settings' is not an object: {file_settings!r}. Ignoring it.")

        environments = dict(DEFAULT_ENVIRONMENTS)
        environments.update(values.pop('environments', None) or {})
        values['environments'] = environments

        return SessionSettings(**values)
