"""Bundler interface and the esbuild-backed default."""

from __future__ import annotations

import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, Field

from cmssy_cli.client.errors import BundlerError


class BundleOptions(BaseModel):
    minify: bool = True
    sourcemap: bool = True
    target: str = "es2020"
    framework: str = "react"
    external: list[str] = Field(default_factory=list)


class BundleResult(BaseModel):
    """Bundled script plus optional source map and stylesheet."""

    script: bytes
    sourcemap: bytes | None = None
    stylesheet: bytes | None = None


class Bundler(Protocol):
    def bundle(self, entry_point: Path, options: BundleOptions) -> BundleResult: ...


class EsbuildBundler:
    """Runs the ``esbuild`` executable on an entry point."""

    def __init__(self, executable: str = "esbuild") -> None:
        self.executable = executable

    def command(self, entry_point: Path, outfile: Path, options: BundleOptions) -> list[str]:
        exe = shutil.which(self.executable)
        if exe is None:
            raise BundlerError(
                f"'{self.executable}' not found on PATH. "
                "Install it with: npm install --global esbuild"
            )
        cmd = [
            exe,
            str(entry_point),
            "--bundle",
            "--format=esm",
            f"--target={options.target}",
            f"--outfile={outfile}",
        ]
        if options.framework == "react":
            cmd.append("--jsx=automatic")
        if options.minify:
            cmd.append("--minify")
        if options.sourcemap:
            cmd.append("--sourcemap")
        cmd.extend(f"--external:{name}" for name in options.external)
        return cmd

    def bundle(self, entry_point: Path, options: BundleOptions) -> BundleResult:
        with tempfile.TemporaryDirectory() as tmpdir:
            outfile = Path(tmpdir) / "index.js"
            cmd = self.command(entry_point, outfile, options)
            try:
                proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
            except OSError as exc:
                raise BundlerError(f"Cannot run {self.executable}: {exc}") from exc
            if proc.returncode != 0:
                detail = proc.stderr.strip() or f"exit status {proc.returncode}"
                raise BundlerError(f"Bundling {entry_point} failed: {detail}")

            sourcemap = outfile.with_suffix(".js.map")
            stylesheet = outfile.with_suffix(".css")
            return BundleResult(
                script=outfile.read_bytes(),
                sourcemap=sourcemap.read_bytes() if sourcemap.exists() else None,
                stylesheet=stylesheet.read_bytes() if stylesheet.exists() else None,
            )
