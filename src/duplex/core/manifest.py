"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/manifest.py
Imports precomputed digests in md5deep format (`md5deep -zr` output).

One record per line: decimal size, 32 hex digit MD5, path, separated by whitespace.
Example:
    43912  ccd6dad4b72d1255cf2e7a9dadd64083  C:\\Documents and Settings\\test.txt
"""

import logging
import os
import re
from typing import List, Optional

from duplex.core.models import File, DuplexParams
from duplex.core.errors import ManifestError

logger = logging.getLogger(__name__)

_MANIFEST_LINE = re.compile(r"^\s*([0-9]+)\s+([0-9a-fA-F]{32})\s+(.+?)\s*$")


def parse_manifest_line(line: str) -> Optional[File]:
    """Returns the File described by a manifest line, or None if the line is malformed."""
    match = _MANIFEST_LINE.match(line)
    if not match:
        return None
    size, digest, path = match.groups()
    return File(
        path=os.path.normpath(os.path.abspath(path)),
        size=int(size),
        digest=digest.lower(),
    )


def load_manifest(manifest_path: str, params: Optional[DuplexParams] = None) -> List[File]:
    """
    Reads a manifest file. Malformed lines are skipped with a warning.

    Raises:
        ManifestError: the manifest itself cannot be opened or read
    """
    files = []
    try:
        with open(manifest_path, "r", encoding="utf-8", errors="surrogateescape") as f:
            for line_no, line in enumerate(f, 1):
                if not line.strip():
                    continue
                file = parse_manifest_line(line)
                if file is None:
                    logger.warning(f"Malformed line {line_no} in manifest {manifest_path}: {line.rstrip()}")
                    continue
                if file.size == 0:
                    continue
                if params is not None and not params.size_passes(file.size):
                    logger.debug(f"Ignored file outside size filters: {file}")
                    continue
                logger.debug(f"Imported: {file}")
                files.append(file)
    except OSError as e:
        raise ManifestError(f"Couldn't open file: {manifest_path} ({e.strerror or e})") from e

    return files
