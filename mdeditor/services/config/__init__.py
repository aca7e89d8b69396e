"""Configuration: INI defaults and the editor preferences built from them."""

from .editor_config import EditorConfig, build_editor_config
from .ini_config_service import IniConfigService

__all__ = ["EditorConfig", "IniConfigService", "build_editor_config"]
