import os
from pathlib import Path

from markdown_adf.constants import DEFAULT_CONFIG_FILE_NAME

_APPLICATION_DIRECTORY_NAME = 'markdown-adf'


def get_config_directory() -> Path:
    """Return the configuration directory, honouring `XDG_CONFIG_HOME`."""
    if xdg_config_home := os.getenv('XDG_CONFIG_HOME'):
        return Path(xdg_config_home) / _APPLICATION_DIRECTORY_NAME
    return Path.home() / '.config' / _APPLICATION_DIRECTORY_NAME


def get_config_file() -> Path:
    return get_config_directory() / DEFAULT_CONFIG_FILE_NAME
