"""Locating and downloading the ``uv`` binary."""

from __future__ import annotations

import platform
import sys
import tarfile
import tempfile
import zipfile
from enum import Enum
from pathlib import Path

import requests

UV_RELEASE_URL = "https://github.com/astral-sh/uv/releases/download/0.7.4"
DOWNLOAD_TIMEOUT = 300


class UnsupportedPlatformError(Exception):
    """Raised when no uv build exists for the requested platform."""


class CrossTarget(Enum):
    """Targets supported for cross-compilation."""

    LINUX_X86_64 = "x86_64-unknown-linux-gnu"
    WINDOWS_X86_64 = "x86_64-pc-windows-gnu"

    @classmethod
    def parse(cls, value: str) -> CrossTarget:
        """Parse a target triple, raising ValueError for unknown ones."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unsupported target: {value}") from None

    def artifact_name(self) -> str:
        """Name of the uv release archive for this target."""
        if self is CrossTarget.LINUX_X86_64:
            return "uv-x86_64-unknown-linux-gnu.tar.gz"
        return "uv-x86_64-pc-windows-msvc.zip"


_HOST_ARTIFACTS = {
    ("x86_64", "linux"): "uv-x86_64-unknown-linux-gnu.tar.gz",
    ("x86_64", "darwin"): "uv-x86_64-apple-darwin.tar.gz",
    ("x86_64", "windows"): "uv-x86_64-pc-windows-msvc.zip",
    ("aarch64", "linux"): "uv-aarch64-unknown-linux-gnu.tar.gz",
    ("aarch64", "darwin"): "uv-aarch64-apple-darwin.tar.gz",
    ("aarch64", "windows"): "uv-aarch64-pc-windows-msvc.zip",
}

_MACHINE_ALIASES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
}


def host_artifact_name(machine: str | None = None, system: str | None = None) -> str | None:
    """Name of the uv archive for a machine/system pair, defaulting to this host."""
    machine = (machine if machine is not None else platform.machine()).lower()
    system = (system if system is not None else platform.system()).lower()
    arch = _MACHINE_ALIASES.get(machine)
    if arch is None:
        return None
    return _HOST_ARTIFACTS.get((arch, system))


def get_architecture(target: CrossTarget | None = None) -> str | None:
    """Archive name for ``target``, or for this host when no target is given."""
    if target is not None:
        return target.artifact_name()
    return host_artifact_name()


def default_output_dir() -> Path:
    """Directory holding the running program."""
    return Path(sys.argv[0]).resolve().parent


def extract_uv(archive_path: str | Path, artifact_name: str, output_dir: str | Path) -> Path:
    """Extract the uv executable from a release archive into ``output_dir``."""
    archive_path = Path(archive_path)
    output_dir = Path(output_dir)
    if artifact_name.endswith(".zip"):
        destination = output_dir / "uv.exe"
        with zipfile.ZipFile(archive_path) as archive:
            for info in archive.infolist():
                if "uv.exe" in info.filename:
                    destination.write_bytes(archive.read(info))
                    break
        return destination
    if artifact_name.endswith(".tar.gz"):
        destination = output_dir / "uv"
        with tarfile.open(archive_path, "r:gz") as archive:
            for member in archive:
                if member.isfile() and "uv" in member.name:
                    extracted = archive.extractfile(member)
                    if extracted is not None:
                        with extracted:
                            destination.write_bytes(extracted.read())
                    break
        return destination
    raise ValueError("Unsupported archive format")


def download_binary_and_unpack(
    target: CrossTarget | None = None, output_dir: str | Path | None = None
) -> Path:
    """Download the uv release for ``target`` and unpack its executable."""
    artifact_name = get_architecture(target)
    if artifact_name is None:
        raise UnsupportedPlatformError("Unsupported platform")
    destination = Path(output_dir) if output_dir is not None else default_output_dir()

    response = requests.get(f"{UV_RELEASE_URL}/{artifact_name}", timeout=DOWNLOAD_TIMEOUT)
    response.raise_for_status()

    with tempfile.TemporaryDirectory() as tmp:
        archive_path = Path(tmp) / artifact_name
        archive_path.write_bytes(response.content)
        return extract_uv(archive_path, artifact_name, destination)