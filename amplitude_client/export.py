"""
Reader for Export API archives.

The Export API returns a ZIP archive (sometimes gzip-compressed as a whole)
whose members are gzip-compressed JSON-lines files, one event per line.
"""

import gzip
import json
import logging
import zipfile
import zlib
from io import BytesIO
from typing import Any, Dict, Iterator, List

from .exceptions import ExportFormatError

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


def _maybe_gunzip(content: bytes, source: str = "archive") -> bytes:
    if content[:2] != GZIP_MAGIC:
        return content
    try:
        return gzip.decompress(content)
    except (OSError, EOFError, zlib.error) as e:
        raise ExportFormatError(
            f"Export {source} is not valid gzip data",
            details={"source": source, "error": str(e)}
        ) from e


def iter_export_events(content: bytes) -> Iterator[Dict[str, Any]]:
    """
    Yield events from an Export API archive.

    Lines that are not valid JSON are skipped with a warning.

    Raises:
        ExportFormatError: If content (or a member) is not valid ZIP/gzip data
    """
    content = _maybe_gunzip(content)

    try:
        archive = zipfile.ZipFile(BytesIO(content), "r")
    except zipfile.BadZipFile as e:
        raise ExportFormatError(
            "Export content is not a valid ZIP archive",
            details={"size_bytes": len(content), "error": str(e)}
        ) from e

    with archive:
        for file_name in archive.namelist():
            with archive.open(file_name) as f:
                file_content = _maybe_gunzip(f.read(), source=file_name)

            for line in file_content.split(b"\n"):
                if not line.strip():
                    continue
                try:
                    yield json.loads(line)
                except json.JSONDecodeError as e:
                    logger.warning(f"Skipping unparsable export line in {file_name}: {e}")


def read_export_archive(content: bytes) -> List[Dict[str, Any]]:
    """
    Parse an Export API archive into a list of events.

    Example:
        archive = client.export(start="20250101T00", end="20250102T00")
        events = read_export_archive(archive)
    """
    return list(iter_export_events(content))
