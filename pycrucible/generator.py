"""Generation and compilation of the launcher binary."""

from __future__ import annotations

import os
import shutil
import subprocess
import zipfile
from io import BytesIO
from pathlib import Path, PurePath
from typing import TYPE_CHECKING

from pycrucible.config import load_project_config
from pycrucible.spinner import create_spinner, stop_and_persist
from pycrucible.template import render_launcher

if TYPE_CHECKING:
    from pycrucible.builder import BuilderConfig

DEFAULT_PAYLOAD_DIR = "payload"
FAIL_SYMBOL = "✗"

RUSTFLAGS = (
    "-C opt-level=z -C target-cpu=native -C link-arg=-s "
    "-C embed-bitcode=yes -C codegen-units=1"
)

LAUNCHER_CARGO_TOML = """[package]
name = "pycrucible-launcher"
version = "0.1.0"
edition = "2024"

[dependencies]
zip = { version = "3", default-features = false, features = ["deflate"] }
rust-embed = "8.0"
lazy_static = "1.4"

[profile.release]
opt-level = "z"     # Optimize for size
codegen-units = 1   # Optimize for size
panic = "abort"     # Remove panic unwinding
strip = "symbols"   # More aggressive stripping
debug = false       # No debug symbols
debug-assertions = false
incremental = false
overflow-checks = false
"""

LAUNCHER_BINARY = Path("target") / "release" / "pycrucible-launcher"


class BuildError(Exception):
    """Raised when the launcher cannot be built."""


class LauncherGenerator:
    """Writes the launcher project into a payload directory and compiles it."""

    def __init__(self, config: BuilderConfig, payload_dir: str | Path = DEFAULT_PAYLOAD_DIR) -> None:
        self.config = config
        self.payload_dir = Path(payload_dir)

    @property
    def embedded_dir(self) -> Path:
        return self.payload_dir / "embedded"

    def generate_and_compile(self) -> Path:
        """Generate the launcher source, compile it and return the output path."""
        spinner = create_spinner("Generating launcher template ...")
        try:
            source = self.generate_source()
        except BaseException:
            spinner.stop_and_persist(FAIL_SYMBOL, "Failed to generate launcher source code")
            raise
        stop_and_persist(spinner, "Launcher source code generated")
        return self.write_and_compile_source(source)

    def generate_zip_payload(self) -> bytes:
        """Zip the source files together with the project manifest."""
        buffer = BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for source_file in self.config.source_files:
                archive.writestr(PurePath(source_file.relative_path).as_posix(), source_file.content)
            archive.writestr("pyproject.toml", self.config.manifest)
        return buffer.getvalue()

    def generate_source(self) -> str:
        """Write the embedded files and return the launcher's program text."""
        zip_data = self.generate_zip_payload()
        self.embedded_dir.mkdir(parents=True, exist_ok=True)
        (self.embedded_dir / "payload.zip").write_bytes(zip_data)
        (self.embedded_dir / "uv").write_bytes(self.config.uv_binary)

        launcher_config = load_project_config(self.config.source_dir)
        return render_launcher(launcher_config.package.entrypoint, self.config.extract_to_temp)

    def _build_command(self) -> list[str]:
        if self.config.cross is not None:
            return ["cross", "build", "--release", "--target", self.config.cross]
        return ["cargo", "build", "--release"]

    def write_and_compile_source(self, source: str) -> Path:
        """Write the launcher project, compile it and copy out the binary."""
        src_dir = self.payload_dir / "src"
        src_dir.mkdir(parents=True, exist_ok=True)
        (src_dir / "main.rs").write_text(source, encoding="utf-8")
        (self.payload_dir / "Cargo.toml").write_text(LAUNCHER_CARGO_TOML, encoding="utf-8")

        env = {**os.environ, "RUSTFLAGS": RUSTFLAGS}
        result = subprocess.run(self._build_command(), cwd=self.payload_dir, env=env, check=False)
        if result.returncode != 0:
            raise BuildError("Failed to compile the launcher binary.")

        output_path = Path(self.config.output_path)
        shutil.copy(self.payload_dir / LAUNCHER_BINARY, output_path)
        print(f"Launcher binary created at: {self.config.output_path}")

        shutil.rmtree(self.payload_dir)
        return output_path