from pathlib import Path

import pytest

from pycrucible.config import (
    ConfigError,
    EnvConfig,
    FilePatterns,
    Hooks,
    ProjectConfig,
    UVConfig,
    load_project_config,
)

VALID_TOML = """
[package]
entrypoint = "app.py"
[package.patterns]
include = ["src/**/*.py"]
exclude = ["tests/**/*"]

[uv]
args = ["--debug"]

[env]
VAR1 = "value1"
VAR2 = "value2"

[hooks]
pre_run = "echo Pre-run"
post_run = "echo Post-run"
"""


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "pycrucible.toml"
    path.write_text(content, encoding="utf-8")
    return path


def test_project_config_default():
    config = ProjectConfig.default()
    assert config.package.entrypoint == "main.py"
    assert "**/*.py" in config.package.patterns.include
    assert ".venv/**/*" in config.package.patterns.exclude
    assert config.uv is None
    assert config.env is None
    assert config.hooks is None


def test_default_instances_are_independent():
    first = ProjectConfig.default()
    first.package.patterns.include.append("extra")
    assert "extra" not in ProjectConfig.default().package.patterns.include


def test_project_config_from_file_valid(tmp_path):
    config = ProjectConfig.from_file(_write(tmp_path, VALID_TOML))
    assert config.package.entrypoint == "app.py"
    assert "src/**/*.py" in config.package.patterns.include
    assert "tests/**/*" in config.package.patterns.exclude
    assert config.uv == UVConfig(args=["--debug"])
    assert config.env.variables["VAR1"] == "value1"
    assert config.env == EnvConfig(variables={"VAR1": "value1", "VAR2": "value2"})
    assert config.hooks.pre_run == "echo Pre-run"
    assert config.hooks == Hooks(pre_run="echo Pre-run", post_run="echo Post-run")


def test_project_config_from_file_invalid(tmp_path):
    path = _write(tmp_path, '[package]\nentrypoint = 123  # Invalid type\n')
    with pytest.raises(ConfigError):
        ProjectConfig.from_file(path)


def test_from_file_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        ProjectConfig.from_file(tmp_path / "absent.toml")


def test_from_file_bad_toml_syntax(tmp_path):
    with pytest.raises(ConfigError):
        ProjectConfig.from_file(_write(tmp_path, "[package\nentrypoint="))


def test_from_dict_missing_package():
    with pytest.raises(ConfigError, match="package"):
        ProjectConfig.from_dict({"uv": {"args": []}})


def test_from_dict_missing_entrypoint():
    with pytest.raises(ConfigError, match="entrypoint"):
        ProjectConfig.from_dict({"package": {}})


def test_from_dict_patterns_absent_are_empty():
    config = ProjectConfig.from_dict({"package": {"entrypoint": "run.py"}})
    assert config.package.patterns == FilePatterns(include=[], exclude=[])


def test_from_dict_partial_patterns():
    config = ProjectConfig.from_dict(
        {"package": {"entrypoint": "run.py", "patterns": {"include": ["*.py"]}}}
    )
    assert config.package.patterns.include == ["*.py"]
    assert config.package.patterns.exclude == []


def test_from_dict_env_requires_strings():
    with pytest.raises(ConfigError):
        ProjectConfig.from_dict({"package": {"entrypoint": "a.py"}, "env": {"N": 1}})


def test_from_dict_uv_without_args():
    config = ProjectConfig.from_dict({"package": {"entrypoint": "a.py"}, "uv": {}})
    assert config.uv == UVConfig(args=None)


def test_from_dict_bad_args_type():
    with pytest.raises(ConfigError):
        ProjectConfig.from_dict({"package": {"entrypoint": "a.py"}, "uv": {"args": "x"}})


def test_load_project_config_with_existing_file(tmp_path):
    _write(tmp_path, '[package]\nentrypoint = "app.py"\n')
    assert load_project_config(tmp_path).package.entrypoint == "app.py"


def test_load_project_config_with_missing_file(tmp_path):
    assert load_project_config(tmp_path).package.entrypoint == "main.py"


def test_load_project_config_invalid_falls_back(tmp_path, capsys):
    _write(tmp_path, "[package]\nentrypoint = 123\n")
    config = load_project_config(tmp_path)
    assert config == ProjectConfig.default()
    assert "Failed to load config, using defaults" in capsys.readouterr().err