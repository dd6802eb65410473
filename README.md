# pycrucible

pycrucible bundles a Python project managed with `uv` into one launcher.
It collects the project's source files and its `pyproject.toml` into a zip payload.
It puts that payload and a `uv` binary into a build directory, and then compiles the launcher there.

## Installation

```
pip install .
```

The build step runs `cargo build --release` in the build directory. When a target is given, it runs `cross build --release --target TRIPLE` instead. The chosen tool must be on your `PATH`.

## Commands

Check whether a project has a `uv.lock` file:

```
pycrucible check path/to/project
```

This prints `You are good to go!!!` when the file exists and `Project is not compatibility!!!` when it does not.

Build a launcher:

```
pycrucible build path/to/project -o ./my-app
```

Options for `build`:

- `-B`, `--uv-path PATH`: the `uv` executable to embed. The default is `uv` (`uv.exe` on Windows) in the directory of the running program. If that file does not exist, pycrucible downloads uv release 0.7.4 for this host or for the chosen target and unpacks the executable into that directory.
- `--extract-to-temp VALUE`: with `true`, the default, the launcher unpacks into `python_app_payload` under the system temp directory. With any other value, it unpacks into a `payload` directory next to the launcher.
- `-o`, `--output-path PATH`: where to copy the built launcher. The default is `./pycrucible-launcher`.
- `-t`, `--target TRIPLE`: build with `cross` for a target. The supported targets are `x86_64-unknown-linux-gnu` and `x86_64-pc-windows-gnu`. Any other value is an error.

A build needs at least one selected source file and a `pyproject.toml` in the project directory. The build runs inside a `payload` directory in the current working directory. When the build succeeds, the binary at `payload/target/release/pycrucible-launcher` is copied to the output path and the `payload` directory is removed. When the build fails, the command prints the error and exits with status 1.

Remove a `payload` directory left behind by a build that did not finish:

```
pycrucible clean
```

`pycrucible quit` prints a message and exits. `pycrucible --version` prints the version.

## Project configuration

To change the defaults, put a `pycrucible.toml` file in the project directory:

```toml
[package]
entrypoint = "app.py"

[package.patterns]
include = ["src/**/*.py"]
exclude = ["tests/**/*"]

[uv]
args = ["--debug"]

[env]
VAR1 = "value1"

[hooks]
pre_run = "echo Pre-run"
post_run = "echo Post-run"
```

Without this file, the entry point is `main.py` and every file matching `**/*.py` is included. These patterns are excluded: `.venv/**/*`, `**/__pycache__/**`, `.git/**/*`, `**/*.pyc`, `**/*.pyo` and `**/*.pyd`.

Patterns are matched against paths relative to the project directory, written with `/`. Exclude patterns are checked first. `**` must be a whole path component.

If the file cannot be read or is malformed, a warning is printed and the defaults are used. `ProjectConfig.from_file` raises `ConfigError` in that case.

## Library use

```python
from pycrucible.config import load_project_config
from pycrucible.builder import collect_source_files, build_launcher

config = load_project_config("path/to/project")
files = collect_source_files("path/to/project")
print(config.package.entrypoint, [f.relative_path for f in files])

build_launcher("path/to/project", output_path="./my-app", extract_to_temp=True)
```

Other modules:

- `pycrucible.uv_handler`: `CrossTarget`, `get_architecture`, `host_artifact_name`, `extract_uv` and `download_binary_and_unpack`.
- `pycrucible.generator`: `LauncherGenerator`, which builds the zip payload, writes the build directory and compiles it. It raises `BuildError` when compilation fails.
- `pycrucible.template`: `render_launcher(entrypoint, extract_to_temp)` returns the launcher program text. That program unpacks the payload, installs `uv`, runs `uv sync`, and then runs `uv run ENTRYPOINT`.
- `pycrucible.spinner`: the terminal progress `Spinner`.

## What it does not do

- The `[uv]`, `[env]` and `[hooks]` sections are read and validated, but the build does not use them. No arguments are passed to `uv`, no environment variables are set, and no hooks are run.
- pycrucible does not compile anything itself. It hands the build directory to `cargo` or `cross` and copies out the binary they produce.