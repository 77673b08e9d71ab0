"""Import of a previous installation's preference file.

On a fresh install the preference file of a previous installation can be
copied verbatim from an external content source. Failures are never raised
to the caller; the result says what happened.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Optional, Protocol

from suconfig.core.utils.logger import log_file_operation, log_info, log_warning
from suconfig.core.utils.paths import PREFS_NAME


class ContentSource(Protocol):
    """External provider of a previous installation's preference bytes."""

    def open_stream(self, identifier: str) -> BinaryIO:
        """Open the preference byte stream of ``identifier``.

        Raises:
            OSError: if the source cannot be reached or has no such data.
        """
        ...


class DirectoryContentSource:
    """Serves ``<root>/<identifier>/<prefs name>.json`` from a directory tree."""

    def __init__(self, root: Path, prefs_name: Optional[str] = None):
        self.root = Path(root)
        self.prefs_name = prefs_name or PREFS_NAME

    def path_for(self, identifier: str) -> Path:
        if not identifier or "/" in identifier or "\\" in identifier or identifier in {".", ".."}:
            raise FileNotFoundError(f"Invalid installation identifier: {identifier!r}")
        return self.root / identifier / f"{self.prefs_name}.json"

    def open_stream(self, identifier: str) -> BinaryIO:
        return self.path_for(identifier).open("rb")


class ImportStatus(str, Enum):
    IMPORTED = "imported"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ImportResult:
    status: ImportStatus
    identifier: Optional[str] = None
    bytes_copied: int = 0
    error: Optional[str] = None

    @property
    def imported(self) -> bool:
        return self.status is ImportStatus.IMPORTED


def import_previous_preferences(
    source: Optional[ContentSource],
    identifier: Optional[str],
    target_path: Path,
) -> ImportResult:
    """
    Copy a previous installation's preference bytes to ``target_path``.

    The bytes are streamed into a temp file that replaces the target only
    after the copy completes, so a failed import leaves no partial file.

    Returns:
        ``SKIPPED`` without an identifier or source, ``IMPORTED`` on success,
        ``FAILED`` on any I/O error (which is logged, not raised).
    """
    if identifier is None or source is None:
        return ImportResult(ImportStatus.SKIPPED, identifier)

    temp_path = target_path.with_suffix(target_path.suffix + ".import")
    try:
        target_path.parent.mkdir(parents=True, exist_ok=True)
        with source.open_stream(identifier) as stream, temp_path.open("wb") as out:
            shutil.copyfileobj(stream, out)
        copied = temp_path.stat().st_size
        temp_path.replace(target_path)
    except OSError as e:
        temp_path.unlink(missing_ok=True)
        log_file_operation("import", str(target_path), False, str(e))
        log_warning("IMPORT", f"Preferences of {identifier} not imported", str(e))
        return ImportResult(ImportStatus.FAILED, identifier, error=str(e))

    log_info("IMPORT", f"Imported {copied} bytes of preferences from {identifier}")
    return ImportResult(ImportStatus.IMPORTED, identifier, bytes_copied=copied)
