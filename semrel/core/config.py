"""Typed configuration loading.

The config file is optional. It lives at ``<repo>/.semrel.toml`` by default:

    [editor]
    command = "nvim"

    [git]
    executable = "git"

The editor command is resolved once at start-up (config first, then the
``EDITOR`` environment variable) and handed to the notes editor explicitly.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "EditorConfig",
    "GitConfig",
    "load_config",
    "load_config_or_default",
    "resolve_editor",
]

CONFIG_FILENAME = ".semrel.toml"
DEFAULT_GIT_EXECUTABLE = "git"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Editor used for release notes. None defers to ``$EDITOR``."""

    command: str | None = None


@dataclass(frozen=True, slots=True)
class GitConfig:
    executable: str = DEFAULT_GIT_EXECUTABLE


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    editor: EditorConfig = field(default_factory=EditorConfig)
    git: GitConfig = field(default_factory=GitConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        editor: StrDict = get_table(data, "editor") or {}
        git: StrDict = get_table(data, "git") or {}

        return cls(
            editor=EditorConfig(command=get_str(editor, "command")),
            git=GitConfig(executable=get_str(git, "executable") or DEFAULT_GIT_EXECUTABLE),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(Config.from_dict(result.value))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config from ``path``, or defaults when the file does not exist.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)


def resolve_editor(config: Config, environ: Mapping[str, str]) -> str | None:
    """Pick the notes editor: config value first, then ``EDITOR``."""
    if config.editor.command:
        return config.editor.command
    value = environ.get("EDITOR", "").strip()
    return value or None
