"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Grouping pipeline stages for duplex's two-phase duplicate detection.

CLASS HIERARCHY
---------------
SizeStageImpl  : Partitions files by exact size and drops unique sizes (no I/O)
HashStageImpl  : Hashes the survivors and partitions each size class by digest

STAGE CONTRACTS
---------------
Each stage implements a `process()` method that:
  • Accepts the output of the previous stage
  • Reports progress via callback (stage name, processed count, total count)
  • Respects cancellation via stopped_flag callback

CONCURRENCY
-----------
HashStageImpl may compute digests on a thread pool. All futures are collected
before any grouping happens, and grouping/sorting runs on the calling thread,
so the result is identical to a single-threaded run.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Callable, Set
from duplex.core.models import File, DuplicateGroup, GroupCollection, Stage
from duplex.core.grouper import FileGrouperImpl
from duplex.core.interfaces import SizeStage, HashStage
from duplex.core.errors import HashError

logger = logging.getLogger(__name__)


class SizeStageImpl(SizeStage):
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            files: List[File],
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[DuplicateGroup]:
        """
        Group by file size.
        Returns list of DuplicateGroups with 2+ files of same size, largest size first.
        """
        if stopped_flag and stopped_flag():
            return []

        size_groups = self.grouper.group_by_size(files)
        groups = [
            DuplicateGroup(size=size, files=files_list)
            for size, files_list in sorted(size_groups.items(), reverse=True)
        ]

        if progress_callback:
            total_files = len(files)
            progress_callback(Stage.SIZE.value, total_files, total_files)  # Fake instant progress

        return groups


class HashStageImpl(HashStage):
    def __init__(self, grouper: FileGrouperImpl, workers: int = 1):
        self.grouper = grouper
        self.workers = workers

    def process(
            self,
            groups: List[DuplicateGroup],
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> GroupCollection:
        """
        Splits every size group by content digest.
        Unreadable files are skipped; digest groups of one file are dropped.
        """
        if stopped_flag and stopped_flag():
            return {}

        failed: Set[str] = set()
        if self.workers > 1:
            failed = self._compute_digests_parallel(groups, stopped_flag, progress_callback)
            if stopped_flag and stopped_flag():
                return {}

        collection: GroupCollection = {}
        total_bytes = sum(f.size for g in groups for f in g.files if f.digest is None)
        processed_bytes = 0

        for group in groups:
            if stopped_flag and stopped_flag():
                return {}

            candidates = [f for f in group.files if f.path not in failed]
            processed_bytes += sum(f.size for f in candidates if f.digest is None)

            for digest, files in self.grouper.group_by_digest(candidates).items():
                key = digest
                if key in collection:
                    logger.warning(
                        f"Digest {digest} shared by files of {collection[digest].size:,} and {group.size:,} bytes"
                    )
                    key = f"{digest}:{group.size}"
                collection[key] = DuplicateGroup(size=group.size, files=files)

            if progress_callback and self.workers == 1:
                progress_callback(Stage.HASH.value, processed_bytes, total_bytes)

        return collection

    def _compute_digests_parallel(
            self,
            groups: List[DuplicateGroup],
            stopped_flag: Optional[Callable[[], bool]],
            progress_callback: Optional[Callable[[str, int, object], None]]
    ) -> Set[str]:
        """Computes missing digests on a thread pool. Returns paths that could not be read."""
        pending = [f for g in groups for f in g.files if f.digest is None]
        total_bytes = sum(f.size for f in pending)
        processed_bytes = 0
        failed: Set[str] = set()

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = {executor.submit(self.grouper.hasher.compute_digest, f): f for f in pending}
            for future in as_completed(futures):
                file = futures[future]
                try:
                    future.result()
                except HashError as e:
                    logger.warning(f"Ignored file: {file.path} ({e.reason})")
                    self.grouper.skipped_files += 1
                    failed.add(file.path)

                processed_bytes += file.size
                if progress_callback:
                    progress_callback(Stage.HASH.value, processed_bytes, total_bytes)

                if stopped_flag and stopped_flag():
                    for f in futures:
                        f.cancel()
                    break

        return failed
