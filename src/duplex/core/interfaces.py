"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate review system.

Key Components:
---------------
- HashAlgorithm: Incremental hash function (xxHash64, MD5, ...).
- Hasher: Computes and caches the content digest of a File.
- FileScanner: Walks search folders and returns File records.
- FileGrouper: Groups files by size or digest, dropping single-file groups.
- SizeStage / HashStage: Individual stages of the grouping pipeline.
- Deduplicator: Runs the stages and returns the group collection.
"""

from typing import Protocol, List, Dict, Tuple, Optional, Callable
from duplex.core.models import (
    File,
    DuplicateGroup,
    DeduplicationStats,
    GroupCollection,
)


class HashState(Protocol):
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for incremental hash algorithms.

    Allows plugging in different hashing functions without affecting the grouping logic.
    """
    name: str
    digest_length: int

    def new(self) -> HashState:
        """Returns a fresh hash state to feed file blocks into."""
        ...


class Hasher(Protocol):
    """Interface for computing the content digest of a file."""
    def compute_digest(self, file: File) -> str: ...


class FileScanner(Protocol):
    def scan(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[File]:
        """
        Scan the configured search folders.

        Args:
            stopped_flag: Function that returns True if operation should be canceled.
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            Files that passed all filters, each path listed once.
        """
        ...


class FileGrouper(Protocol):
    """
    Interface for grouping files by size or content digest.
    Implementations drop every group with fewer than two files.
    """
    def group_by_size(self, files: List[File]) -> Dict[int, List[File]]: ...

    def group_by_digest(self, files: List[File]) -> Dict[str, List[File]]: ...


# =============================
# Stage Interfaces
# =============================

class SizeStage(Protocol):
    def process(
        self,
        files: List[File],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[DuplicateGroup]:
        """Returns groups of 2+ files sharing the same size."""
        ...


class HashStage(Protocol):
    def process(
        self,
        groups: List[DuplicateGroup],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> GroupCollection:
        """Returns digest-keyed groups of 2+ identical files, members sorted by path."""
        ...


class Deduplicator(Protocol):
    def find_duplicates(
        self,
        files: List[File],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[GroupCollection, DeduplicationStats]:
        """
        Run size grouping followed by content hashing.

        Returns:
            A tuple containing:
                - Mapping of digest to duplicate group
                - Statistics collected during processing
        """
        ...
