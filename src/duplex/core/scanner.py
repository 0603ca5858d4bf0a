"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Collects the regular files that are checked for duplicates.
Features:
- Non-recursive and recursive search folders
- Skips symbolic links, junctions/reparse points, special files and zero-byte files
- Applies the inclusive small/large size filters
- Lists every absolute path once, even when search folders overlap
"""

import os
import stat
import logging
import time
from typing import List, Optional, Callable, Iterable, Set
from pathlib import Path

from duplex.core.models import File, DuplexParams
from duplex.core.interfaces import FileScanner
from duplex.core.errors import ScanError

logger = logging.getLogger(__name__)


def is_junction(path: Path, st: os.stat_result = None) -> bool:
    """True for Windows junctions and other reparse points; always False elsewhere."""
    try:
        st = st or os.lstat(path)
    except OSError:
        return False
    return bool(getattr(st, "st_file_attributes", 0) & getattr(stat, "FILE_ATTRIBUTE_REPARSE_POINT", 0))


def validate_search_folders(folders: Iterable[str]) -> List[str]:
    """Returns the folders that are not existing directories."""
    return [folder for folder in folders if not Path(folder).is_dir()]


class FileScannerImpl(FileScanner):
    """
    Walks the configured search folders and returns File records.

    Attributes:
        folders: Folders whose direct children are scanned
        recursive_folders: Folders scanned with all subfolders
        params: Run configuration providing the size filters
    """

    PROGRESS_INTERVAL = 1.0  # seconds between progress callbacks

    def __init__(
        self,
        folders: Iterable[str] = (),
        recursive_folders: Iterable[str] = (),
        params: Optional[DuplexParams] = None
    ):
        self.folders = list(folders)
        self.recursive_folders = list(recursive_folders)
        self.params = params
        self._seen: Set[str] = set()
        self._last_progress = 0.0

    @classmethod
    def from_params(cls, params: DuplexParams) -> "FileScannerImpl":
        return cls(params.folders, params.recursive_folders, params)

    def scan(self,
             stopped_flag: Optional[Callable[[], bool]] = None,
             progress_callback: Optional[Callable[[str, int, object], None]] = None) -> List[File]:
        """
        Scans all folders, non-recursive ones first.

        Raises:
            ScanError: a search folder does not exist or is not a directory
        """
        invalid = validate_search_folders(self.folders + self.recursive_folders)
        if invalid:
            raise ScanError(f"Invalid path: {invalid[0]}")

        found_files: List[File] = []
        start_time = time.time()

        for folder, recursive in [(f, False) for f in self.folders] + [(f, True) for f in self.recursive_folders]:
            if stopped_flag and stopped_flag():
                logger.debug("Scan interrupted by user")
                return []
            root = Path(folder).resolve()
            logger.debug(f"Processing {'recursive' if recursive else 'non-recursive'}: {root}")
            self._scan_folder(root, recursive, found_files, stopped_flag, progress_callback)

        if progress_callback:
            progress_callback('scanning', len(found_files), None)

        logger.debug(f"Scan completed in {time.time() - start_time:.2f}s. Found {len(found_files)} files.")
        return found_files

    def _scan_folder(self, root: Path, recursive: bool, found_files: List[File],
                     stopped_flag: Optional[Callable[[], bool]],
                     progress_callback: Optional[Callable[[str, int, object], None]]) -> None:
        """Walks the folder tree with an explicit stack of pending folders."""
        pending = [root]
        while pending:
            folder = pending.pop()
            subfolders = self._scan_entries(folder, recursive, found_files, stopped_flag, progress_callback)
            if subfolders is None:
                return
            # Reversed so subfolders are visited in name order
            pending.extend(reversed(subfolders))

    def _scan_entries(self, folder: Path, recursive: bool, found_files: List[File],
                      stopped_flag: Optional[Callable[[], bool]],
                      progress_callback: Optional[Callable[[str, int, object], None]]) -> Optional[List[Path]]:
        """Lists one folder. Returns its subfolders to visit, or None when stopped."""
        subfolders: List[Path] = []
        try:
            with os.scandir(folder) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Error processing: {folder} ({e.strerror or e})")
            return subfolders

        for entry in entries:
            if stopped_flag and stopped_flag():
                return None
            path = Path(entry.path)
            try:
                if entry.is_symlink() or is_junction(path, entry.stat(follow_symlinks=False)):
                    logger.debug(f"Ignored special file: {path}")
                    continue
                if entry.is_dir(follow_symlinks=False):
                    if recursive:
                        logger.debug(f"Entering dir: {path}")
                        subfolders.append(path)
                    continue
                if not entry.is_file(follow_symlinks=False):
                    logger.debug(f"Ignored special file: {path}")
                    continue
                size = entry.stat(follow_symlinks=False).st_size
            except OSError as e:
                logger.warning(f"Error processing: {path} ({e.strerror or e})")
                continue

            file = self._process_file(path, size)
            if file:
                found_files.append(file)
                self._report_progress(len(found_files), progress_callback)

        return subfolders

    def _process_file(self, path: Path, size: int) -> Optional[File]:
        """Returns a File if the path is new and passes the size filters."""
        # A zero-byte file has nothing to compare and may hide a read error
        if size == 0:
            logger.debug(f"Skipping zero-byte file: {path}")
            return None

        if self.params is not None and not self.params.size_passes(size):
            logger.debug(f"Ignored file outside size filters: {size:,} {path}")
            return None

        normalized = os.path.normpath(os.path.abspath(path))
        if normalized in self._seen:
            logger.debug(f"Skipping already listed file: {normalized}")
            return None
        self._seen.add(normalized)

        file = File(path=normalized, size=size)
        logger.debug(f"Found: {file}")
        return file

    def _report_progress(self, count: int,
                         progress_callback: Optional[Callable[[str, int, object], None]]) -> None:
        now = time.time()
        if progress_callback and now - self._last_progress >= self.PROGRESS_INTERVAL:
            progress_callback('scanning', count, None)
            self._last_progress = now
