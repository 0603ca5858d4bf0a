"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements file grouping by size and by content digest using File objects and a Hasher.
"""

import logging
from typing import List, Dict, Any, Callable
from collections import defaultdict
from duplex.core.interfaces import FileGrouper
from duplex.core.models import File, GroupCollection
from duplex.core.hasher import HasherImpl, Hasher
from duplex.core.errors import HashError

logger = logging.getLogger(__name__)


class FileGrouperImpl(FileGrouper):
    """
    A concrete implementation of FileGrouper.
    Uses an injected Hasher instance for flexibility and testability.
    """

    def __init__(self, hasher: Hasher = None):
        self.hasher = hasher or HasherImpl()
        self.skipped_files = 0

    def group_by_size(self, files: List[File]) -> Dict[int, List[File]]:
        """Groups files by their size. Files with a unique size cannot have duplicates."""
        return self._group_by(files, lambda f: f.size)

    def group_by_digest(self, files: List[File]) -> Dict[str, List[File]]:
        """Groups files by content digest, computing digests that are not known yet."""
        return self._group_by(files, self.hasher.compute_digest)

    def _group_by(self, files: List[File], key_func: Callable[[File], Any]) -> Dict[Any, List[File]]:
        """
        Helper method to group files by any computed key.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key from a File
        Returns:
            Dict[key, List[File]] sorted by path inside each group, groups of 2+ files only
        """
        groups = defaultdict(list)
        for file in files:
            try:
                key = key_func(file)
            except HashError as e:
                logger.warning(f"Ignored file: {file.path} ({e.reason})")
                self.skipped_files += 1
                continue
            groups[key].append(file)

        result = {}
        for key, group in groups.items():
            if len(group) >= 2:  # Avoid groups with less than 2 files
                result[key] = sorted(group, key=lambda f: f.path)

        return result


def remove_single_item_groups(groups: GroupCollection) -> int:
    """
    Drops groups with one file or none, in place. Returns how many were removed.
    """
    stale = [key for key, group in groups.items() if not group.is_duplicate()]
    for key in stale:
        del groups[key]
    if stale:
        logger.info(f"Filtered out {len(stale):,} single item or empty groups")
    return len(stale)
