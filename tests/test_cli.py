from pathlib import Path

import pytest

from pycrucible.cli import build_parser, main


def test_build_defaults():
    args = build_parser().parse_args(["build", "project"])
    assert args.source_dir == Path("project")
    assert args.output_path == "./pycrucible-launcher"
    assert args.extract_to_temp == "true"
    assert args.target is None
    assert args.uv_path is None


def test_build_options():
    args = build_parser().parse_args(
        ["build", "project", "-B", "bin/uv", "-o", "out", "-t", "x86_64-unknown-linux-gnu",
         "--extract-to-temp", "false"]
    )
    assert args.uv_path == Path("bin/uv")
    assert args.output_path == "out"
    assert args.target == "x86_64-unknown-linux-gnu"
    assert args.extract_to_temp == "false"


def test_missing_command_is_an_error():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert "0.1.0" in capsys.readouterr().out


def test_check(tmp_path, capsys):
    (tmp_path / "uv.lock").write_text("")
    assert main(["check", str(tmp_path)]) == 0
    assert "You are good to go!!!" in capsys.readouterr().out


def test_check_incompatible(tmp_path, capsys):
    assert main(["check", str(tmp_path)]) == 0
    assert "Project is not compatibility!!!" in capsys.readouterr().out


def test_clean(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "payload" / "src").mkdir(parents=True)
    assert main(["clean"]) == 0
    assert not (tmp_path / "payload").exists()
    assert "Successfully Deleted Previous Build!!" in capsys.readouterr().out


def test_quit(capsys):
    assert main(["quit"]) == 0
    assert "Quiting the app..." in capsys.readouterr().out


def test_build_failure_reports_error(tmp_path, capsys):
    assert main(["build", str(tmp_path)]) == 1
    captured = capsys.readouterr()
    assert "Building the app...." in captured.out
    assert "No Python source files found in the specified directory" in captured.err


def test_build_bad_target(tmp_path, capsys):
    (tmp_path / "main.py").write_text("print(1)")
    (tmp_path / "pyproject.toml").write_text("[project]")
    assert main(["build", str(tmp_path), "-t", "mips-unknown-none"]) == 1
    assert "Unsupported target: mips-unknown-none" in capsys.readouterr().err