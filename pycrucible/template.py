"""Launcher program that unpacks the embedded payload and runs it with uv."""

from __future__ import annotations

LAUNCHER_TEMPLATE = '''\
"""Self-contained application launcher."""

import os
import stat
import subprocess
import sys
import tempfile
import zipfile
from io import BytesIO
from pathlib import Path

ENTRYPOINT = {entrypoint}
EXTRACT_TO_TEMP = {extract_to_temp}
EMBEDDED_DIR = "embedded"


def _archive_path():
    return Path(__file__).resolve().parent


def _embedded(name):
    with zipfile.ZipFile(_archive_path()) as bundle:
        return bundle.read(f"{EMBEDDED_DIR}/{name}")


def _payload_dir():
    if EXTRACT_TO_TEMP:
        target = Path(tempfile.gettempdir()) / "python_app_payload"
        target.mkdir(parents=True, exist_ok=True)
        print("[-]: Created temporary directory")
    else:
        target = _archive_path().parent / "payload"
        target.mkdir(parents=True, exist_ok=True)
        print("[-]: Created payload directory next to executable")
    return target


def _extract_files(base_dir):
    with zipfile.ZipFile(BytesIO(_embedded("payload.zip"))) as payload:
        for member in payload.infolist():
            if member.is_dir():
                continue
            destination = base_dir / member.filename
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(payload.read(member))
            print(f"[-]: Extracted {member.filename}")


def _install_uv(base_dir):
    uv_path = base_dir / ("uv.exe" if os.name == "nt" else "uv")
    uv_path.write_bytes(_embedded("uv"))
    if os.name != "nt":
        uv_path.chmod(uv_path.stat().st_mode | stat.S_IRWXU | stat.S_IRGRP
                      | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH)
    return uv_path


def main():
    base_dir = _payload_dir()
    _extract_files(base_dir)
    print("[-]: Extracted all source files")

    uv_path = _install_uv(base_dir)

    if subprocess.run([str(uv_path), "sync"], cwd=base_dir).returncode != 0:
        raise SystemExit("uv sync failed")
    print("[-]: Synced virtual environment")

    if subprocess.run([str(uv_path), "run", ENTRYPOINT], cwd=base_dir).returncode != 0:
        raise SystemExit("Python application failed")


if __name__ == "__main__":
    main()
'''


def render_launcher(entrypoint: str, extract_to_temp: bool) -> str:
    """Fill the launcher template with the entrypoint and extraction mode."""
    source = LAUNCHER_TEMPLATE.replace("{entrypoint}", repr(entrypoint), 1)
    return source.replace("{extract_to_temp}", "True" if extract_to_temp else "False", 1)