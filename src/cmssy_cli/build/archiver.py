"""Archiver interface and the zip-backed default.

Archives are written to ``<name>.partial`` and renamed on finalize, so a
failed archive never leaves a truncated zip behind.
"""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Any, Protocol

from cmssy_cli.client.errors import ArchiveError


class Archive(Protocol):
    def __enter__(self) -> Archive: ...

    def __exit__(self, exc_type: Any, *args: Any) -> None: ...

    def add_directory(self, source_dir: Path, dest_name: str) -> None: ...

    def add_file(self, source_path: Path, dest_name: str) -> None: ...

    def finalize(self) -> int: ...

    def abort(self) -> None: ...


class Archiver(Protocol):
    def create_archive(self, output_path: Path) -> Archive: ...


class ZipArchive:
    """An open zip archive. Use as a context manager to abort on error."""

    def __init__(self, output_path: Path, compresslevel: int = 9) -> None:
        self.output_path = output_path
        self.temp_path = output_path.with_name(output_path.name + ".partial")
        try:
            self._zip = zipfile.ZipFile(
                self.temp_path, "w", zipfile.ZIP_DEFLATED, compresslevel=compresslevel,
            )
        except OSError as exc:
            raise ArchiveError(f"Cannot create {output_path}: {exc}") from exc

    def __enter__(self) -> ZipArchive:
        return self

    def __exit__(self, exc_type: Any, *args: Any) -> None:
        if exc_type is not None:
            self.abort()

    def add_directory(self, source_dir: Path, dest_name: str) -> None:
        try:
            for file in sorted(source_dir.rglob("*")):
                if file.is_file():
                    arcname = Path(dest_name) / file.relative_to(source_dir)
                    self._zip.write(file, arcname.as_posix())
        except (OSError, ValueError) as exc:
            raise ArchiveError(f"Cannot add {source_dir} to archive: {exc}") from exc

    def add_file(self, source_path: Path, dest_name: str) -> None:
        try:
            self._zip.write(source_path, dest_name)
        except (OSError, ValueError) as exc:
            raise ArchiveError(f"Cannot add {source_path} to archive: {exc}") from exc

    def finalize(self) -> int:
        """Close the archive, move it into place, and return its size in bytes."""
        try:
            self._zip.close()
            self.temp_path.replace(self.output_path)
        except OSError as exc:
            self.abort()
            raise ArchiveError(f"Cannot write {self.output_path}: {exc}") from exc
        return self.output_path.stat().st_size

    def abort(self) -> None:
        self._zip.close()
        self.temp_path.unlink(missing_ok=True)


class ZipArchiver:
    def __init__(self, compresslevel: int = 9) -> None:
        self.compresslevel = compresslevel

    def create_archive(self, output_path: Path) -> ZipArchive:
        return ZipArchive(output_path, self.compresslevel)
