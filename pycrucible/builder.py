"""Collecting a project's files and building its launcher."""

from __future__ import annotations

import functools
import os
import re
import shutil
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from pycrucible.config import load_project_config
from pycrucible.generator import FAIL_SYMBOL, BuildError, LauncherGenerator
from pycrucible.spinner import create_spinner, stop_and_persist
from pycrucible.uv_handler import CrossTarget, default_output_dir, download_binary_and_unpack

UV_BINARY = "uv.exe" if sys.platform == "win32" else "uv"
DEFAULT_OUTPUT_PATH = "./pycrucible-launcher"
MANIFEST_NAME = "pyproject.toml"
LOCK_FILE_NAME = "uv.lock"


@dataclass
class SourceFile:
    """A project file to embed, with its path relative to the project root."""

    relative_path: Path
    content: bytes


@dataclass
class BuilderConfig:
    """Everything needed to generate a launcher."""

    source_dir: Path
    source_files: list[SourceFile] = field(default_factory=list)
    manifest: bytes = b""
    uv_binary: bytes = b""
    output_path: str = DEFAULT_OUTPUT_PATH
    cross: str | None = None
    extract_to_temp: bool = True


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate a ``[...]`` class beginning at ``start``; return regex and end index."""
    n = len(pattern)
    j = start + 1
    negate = j < n and pattern[j] == "!"
    if negate:
        j += 1
    body_start = j
    if j < n and pattern[j] == "]":
        j += 1
    while j < n and pattern[j] != "]":
        j += 1
    if j >= n:
        raise ValueError(f"invalid pattern {pattern!r}: unterminated character class")
    body = pattern[body_start:j]

    items = []
    k = 0
    while k < len(body):
        if k + 2 < len(body) and body[k + 1] == "-":
            items.append(f"{re.escape(body[k])}-{re.escape(body[k + 2])}")
            k += 3
        else:
            items.append(re.escape(body[k]))
            k += 1
    return f"[{'^' if negate else ''}{''.join(items)}]", j + 1


@functools.lru_cache(maxsize=None)
def _compile_glob(pattern: str) -> re.Pattern[str]:
    parts = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if pattern.startswith("**", i):
            if i > 0 and pattern[i - 1] != "/":
                raise ValueError(f"invalid pattern {pattern!r}: `**` must be a whole component")
            end = i + 2
            if end == n:
                parts.append(".*")
                i = end
            elif pattern[end] == "/":
                parts.append("(?:.*/)?")
                i = end + 1
            else:
                raise ValueError(f"invalid pattern {pattern!r}: `**` must be a whole component")
        elif ch == "*":
            parts.append(".*")
            i += 1
        elif ch == "?":
            parts.append(".")
            i += 1
        elif ch == "[":
            translated, i = _translate_class(pattern, i)
            parts.append(translated)
        else:
            parts.append(re.escape(ch))
            i += 1
    return re.compile("".join(parts), re.DOTALL)


def _matches(pattern: str, path: str) -> bool:
    return _compile_glob(pattern).fullmatch(path) is not None


def should_include_file(
    file_path: str | Path,
    source_dir: str | Path,
    include_patterns: Iterable[str],
    exclude_patterns: Iterable[str],
) -> bool:
    """Whether a file is packaged: it matches no exclude and at least one include pattern."""
    relative = Path(file_path).relative_to(source_dir).as_posix()
    if any(_matches(pattern, relative) for pattern in exclude_patterns):
        return False
    return any(_matches(pattern, relative) for pattern in include_patterns)


def collect_source_files(source_dir: str | Path) -> list[SourceFile]:
    """Collect the project files selected by the project's patterns."""
    root = Path(source_dir).resolve(strict=True)
    patterns = load_project_config(root).package.patterns

    files: list[SourceFile] = []
    seen: set[Path] = set()
    visited: set[str] = set()
    for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
        real = os.path.realpath(dirpath)
        if real in visited:
            dirnames[:] = []
            continue
        visited.add(real)
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if not path.is_file():
                continue
            if not should_include_file(path, root, patterns.include, patterns.exclude):
                continue
            relative = path.relative_to(root)
            if relative in seen:
                continue
            seen.add(relative)
            files.append(SourceFile(relative, path.read_bytes()))
    return files


def build_launcher(
    source_dir: str | Path,
    uv_path: str | Path | None = None,
    output_path: str | Path = DEFAULT_OUTPUT_PATH,
    target: str | None = None,
    extract_to_temp: bool = True,
) -> Path:
    """Build a launcher binary for the project in ``source_dir``."""
    source_dir = Path(source_dir)

    spinner = create_spinner("Collecting source files ...")
    try:
        source_files = collect_source_files(source_dir)
        if not source_files:
            raise BuildError("No Python source files found in the specified directory")
        manifest_path = source_dir / MANIFEST_NAME
        if not manifest_path.exists():
            raise BuildError("No pyproject.toml found in the source directory")
    except BaseException:
        spinner.stop_and_persist(FAIL_SYMBOL, "Failed to collect source files")
        raise
    stop_and_persist(spinner, "Source files collected")

    cross_target = CrossTarget.parse(target) if target is not None else None

    uv = Path(uv_path) if uv_path is not None else default_output_dir() / UV_BINARY
    if not uv.exists():
        spinner = create_spinner("UV binary not found, downloading...")
        try:
            uv = download_binary_and_unpack(cross_target)
        except Exception as exc:
            spinner.stop_and_persist(
                FAIL_SYMBOL,
                "Failed to download UV binary. Please check your internet connection.",
            )
            raise BuildError(f"Failed to download UV binary: {exc}") from exc
        stop_and_persist(spinner, "UV binary downloaded")

    config = BuilderConfig(
        source_dir=source_dir,
        source_files=source_files,
        manifest=manifest_path.read_bytes(),
        uv_binary=uv.read_bytes(),
        output_path=str(output_path),
        cross=target,
        extract_to_temp=extract_to_temp,
    )
    return LauncherGenerator(config).generate_and_compile()


def check_compatibility(source_dir: str | Path) -> bool:
    """Report whether the project has a ``uv.lock`` file."""
    compatible = (Path(source_dir) / LOCK_FILE_NAME).exists()
    print("You are good to go!!!" if compatible else "Project is not compatibility!!!")
    return compatible


def clean_build(payload_dir: str | Path = "payload") -> bool:
    """Remove a previous build directory; return whether one existed."""
    print("Cleaning the previous build...")
    try:
        shutil.rmtree(payload_dir)
    except OSError:
        print("No Previous Build Exist!!")
        return False
    print("Successfully Deleted Previous Build!!")
    return True