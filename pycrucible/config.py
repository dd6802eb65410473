"""Project configuration read from ``pycrucible.toml``."""

from __future__ import annotations

import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

CONFIG_FILE_NAME = "pycrucible.toml"

DEFAULT_INCLUDE = ("**/*.py",)
DEFAULT_EXCLUDE = (
    ".venv/**/*",
    "**/__pycache__/**",
    ".git/**/*",
    "**/*.pyc",
    "**/*.pyo",
    "**/*.pyd",
)


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read or is malformed."""


def _require_table(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"invalid type for `{name}`: expected a table")
    return value


def _require_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"invalid type for `{name}`: expected a string")
    return value


def _optional_str(value: Any, name: str) -> str | None:
    return None if value is None else _require_str(value, name)


def _require_str_list(value: Any, name: str) -> list[str]:
    if not isinstance(value, list):
        raise ConfigError(f"invalid type for `{name}`: expected an array")
    return [_require_str(item, f"{name}[]") for item in value]


@dataclass
class FilePatterns:
    """Glob patterns selecting which project files are packaged."""

    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)

    @classmethod
    def _from_dict(cls, data: Any) -> FilePatterns:
        table = _require_table(data, "package.patterns")
        return cls(
            include=_require_str_list(table.get("include", []), "package.patterns.include"),
            exclude=_require_str_list(table.get("exclude", []), "package.patterns.exclude"),
        )


@dataclass
class PackageConfig:
    """The ``[package]`` section."""

    entrypoint: str
    patterns: FilePatterns = field(default_factory=FilePatterns)

    @classmethod
    def _from_dict(cls, data: Any) -> PackageConfig:
        table = _require_table(data, "package")
        if "entrypoint" not in table:
            raise ConfigError("missing field `entrypoint`")
        patterns = (
            FilePatterns._from_dict(table["patterns"]) if "patterns" in table else FilePatterns()
        )
        return cls(
            entrypoint=_require_str(table["entrypoint"], "package.entrypoint"),
            patterns=patterns,
        )


@dataclass
class UVConfig:
    """The ``[uv]`` section."""

    args: list[str] | None = None

    @classmethod
    def _from_dict(cls, data: Any) -> UVConfig:
        table = _require_table(data, "uv")
        args = table.get("args")
        return cls(args=None if args is None else _require_str_list(args, "uv.args"))


@dataclass
class EnvConfig:
    """The ``[env]`` section: environment variables for the application."""

    variables: dict[str, str] = field(default_factory=dict)

    @classmethod
    def _from_dict(cls, data: Any) -> EnvConfig:
        table = _require_table(data, "env")
        return cls(
            variables={key: _require_str(value, f"env.{key}") for key, value in table.items()}
        )


@dataclass
class Hooks:
    """The ``[hooks]`` section."""

    pre_run: str | None = None
    post_run: str | None = None

    @classmethod
    def _from_dict(cls, data: Any) -> Hooks:
        table = _require_table(data, "hooks")
        return cls(
            pre_run=_optional_str(table.get("pre_run"), "hooks.pre_run"),
            post_run=_optional_str(table.get("post_run"), "hooks.post_run"),
        )


@dataclass
class ProjectConfig:
    """Complete project configuration."""

    package: PackageConfig
    uv: UVConfig | None = None
    env: EnvConfig | None = None
    hooks: Hooks | None = None

    @classmethod
    def from_file(cls, path: str | Path) -> ProjectConfig:
        """Load configuration from a TOML file, raising ConfigError on failure."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(str(exc)) from exc
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(str(exc)) from exc
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectConfig:
        """Build a configuration from already parsed TOML data."""
        table = _require_table(data, "root")
        if "package" not in table:
            raise ConfigError("missing field `package`")
        return cls(
            package=PackageConfig._from_dict(table["package"]),
            uv=UVConfig._from_dict(table["uv"]) if table.get("uv") is not None else None,
            env=EnvConfig._from_dict(table["env"]) if table.get("env") is not None else None,
            hooks=Hooks._from_dict(table["hooks"]) if table.get("hooks") is not None else None,
        )

    @classmethod
    def default(cls) -> ProjectConfig:
        """The configuration used when no usable config file exists."""
        return cls(
            package=PackageConfig(
                entrypoint="main.py",
                patterns=FilePatterns(
                    include=list(DEFAULT_INCLUDE),
                    exclude=list(DEFAULT_EXCLUDE),
                ),
            )
        )


def load_project_config(source_dir: str | Path) -> ProjectConfig:
    """Load ``pycrucible.toml`` from a project, falling back to defaults."""
    config_path = Path(source_dir) / CONFIG_FILE_NAME
    if not config_path.exists():
        return ProjectConfig.default()
    try:
        return ProjectConfig.from_file(config_path)
    except ConfigError as exc:
        print(f"Warning: Failed to load config, using defaults. Error: {exc}", file=sys.stderr)
        return ProjectConfig.default()