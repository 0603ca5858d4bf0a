"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Runs the grouping pipeline: size → content hash.
Only files sharing their size with another file are ever hashed.
"""
import logging
import time
from typing import List, Tuple, Optional, Callable
from duplex.core.models import File, DuplicateGroup, DeduplicationStats, GroupCollection
from duplex.core.grouper import FileGrouperImpl
from duplex.core.interfaces import Deduplicator
from duplex.core.sorter import Sorter
from duplex.core.stages import SizeStageImpl, HashStageImpl

logger = logging.getLogger(__name__)


class DeduplicatorImpl(Deduplicator):
    """
    Implements two-stage duplicate detection and collects timing statistics.
    """
    def __init__(self, grouper: FileGrouperImpl = None, workers: int = 1):
        self.grouper = grouper or FileGrouperImpl()
        self.workers = workers

    def find_duplicates(
        self,
        files: List[File],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[GroupCollection, DeduplicationStats]:
        """
        Args:
            files: List of scanned file objects
            stopped_flag (Optional[Callable[[], bool]]): Function that returns True if operation should be stopped.
            progress_callback (Optional[Callable[[str, int, int], None]]): Reports progress per stage.
        Returns:
            Tuple[GroupCollection, DeduplicationStats]
        """
        stats = DeduplicationStats()
        total_start_time = time.time()

        size_stage = SizeStageImpl(self.grouper)
        start_time = time.time()
        size_groups = size_stage.process(
            files,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )
        DeduplicatorImpl._update_stats(stats, "size", time.time() - start_time, size_groups)
        logger.debug(f"Size groups: {len(size_groups):,}")

        hash_stage = HashStageImpl(self.grouper, workers=self.workers)
        start_time = time.time()
        collection = hash_stage.process(
            size_groups,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )
        DeduplicatorImpl._update_stats(stats, "hash", time.time() - start_time, list(collection.values()))
        logger.debug(f"Digest groups: {len(collection):,}")

        Sorter.sort_files_inside_groups(collection)

        stats.hash_failures = self.grouper.skipped_files
        stats.total_time = time.time() - total_start_time
        return collection, stats

    @staticmethod
    def _update_stats(
        stats: DeduplicationStats,
        stage: str,
        duration: float,
        groups: List[DuplicateGroup],
    ):
        stats.update_stage(
            stage_name=stage,
            groups_found=len(groups),
            files_processed=sum(len(g.files) for g in groups),
            duration=duration
        )
