"""
Options file loader for codeimport.

An options file is a YAML mapping using the camelCase option names of the
remark code-import plugin, for example:

    async: true
    preserveTrailingNewline: false
    removeRedundantIndentations: true
    rootDir: /home/me/project
    allowImportingFromOutside: false

Settings field names (async_mode, root_dir, ...) are accepted as well.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from ..config import AppSettings
from .errors import ConfigurationError


# Option name → AppSettings field
OPTION_FIELDS: Dict[str, str] = {
    'async': 'async_mode',
    'preserveTrailingNewline': 'preserve_trailing_newline',
    'removeRedundantIndentations': 'remove_redundant_indentations',
    'rootDir': 'root_dir',
    'allowImportingFromOutside': 'allow_importing_from_outside',
}


class OptionsFile:
    """
    A YAML file of import options.

    Attributes:
        path: Location of the options file
        options: Parsed mapping, keyed by AppSettings field name
    """

    def __init__(self, path: Union[str, Path]):
        """
        Load an options file.

        Raises:
            ConfigurationError: If the file is missing, is not valid YAML,
                                is not a mapping, or names unknown options
        """
        self.path = Path(path)
        if not self.path.exists():
            raise ConfigurationError(f"Options file not found: {self.path}")

        self.options = self._options_load()

    def _options_load(self) -> Dict[str, Any]:
        """Load and parse the YAML options file"""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse {self.path.name}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to load {self.path.name}: {e}")

        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ConfigurationError(f"{self.path.name} must contain a mapping of options")

        options: Dict[str, Any] = {}
        for key, value in raw.items():
            field_name = OPTION_FIELDS.get(key, key)
            if field_name not in AppSettings.model_fields:
                raise ConfigurationError(f"Unknown option '{key}' in {self.path.name}")
            options[field_name] = value
        return options

    def option_get(self, key: str, default: Any = None) -> Any:
        """Get an option by camelCase or field name"""
        return self.options.get(OPTION_FIELDS.get(key, key), default)

    def settings_merge(self, base: AppSettings) -> AppSettings:
        """
        Overlay the file's options on a settings instance.

        Returns:
            New AppSettings; base is left untouched

        Raises:
            ConfigurationError: If a value has the wrong type
        """
        try:
            return type(base).model_validate({**base.model_dump(), **self.options})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid option in {self.path.name}: {e}")

    def __repr__(self) -> str:
        return f"OptionsFile(path='{self.path}', options={self.options})"
