"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/deletion_service.py
Applies the current rules to every group and removes the marked files.
"""
import logging
import time
from typing import Callable, Optional

from duplex.core.errors import DeletionError
from duplex.core.grouper import remove_single_item_groups
from duplex.core.models import GroupCollection, DeletionReport, DuplexParams
from duplex.core.rules import RuleSet
from duplex.core.stats import marked_files, total_stats
from duplex.services.file_service import FileService

logger = logging.getLogger(__name__)


class DeletionExecutor:
    """
    Deletes the files selected by a RuleSet, never the last copy in a group.

    Files that cannot be removed stay in their group. Only removed files are
    evicted from the model, and groups left with one file are pruned afterwards.
    """

    PROGRESS_INTERVAL = 1.0

    def __init__(self, params: Optional[DuplexParams] = None, file_service: FileService = None):
        self.dry_run = params.dry_run if params else False
        self.use_trash = params.use_trash if params else False
        self.file_service = file_service or FileService()

    def execute(
            self,
            groups: GroupCollection,
            rules: RuleSet,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> DeletionReport:
        report = DeletionReport(dry_run=self.dry_run)
        total = total_stats(groups, rules).marked_files
        processed = 0
        last_progress = time.time()

        for group in groups.values():
            # Selection is fixed before any removal touches the member list
            for file in marked_files(group, rules):
                processed += 1
                error = self._delete(file.path)
                if error is None:
                    group.remove_file(file)
                    report.deleted.append(file.path)
                    report.freed_bytes += file.size
                else:
                    report.failed.append((file.path, error))

                now = time.time()
                if progress_callback and (now - last_progress >= self.PROGRESS_INTERVAL or processed == total):
                    progress_callback("deleting", processed, total)
                    last_progress = now

        remove_single_item_groups(groups)
        logger.info(f"Deleted {report.deleted_count:,} files, {report.failed_count:,} failed")
        return report

    def _delete(self, path: str) -> Optional[str]:
        """Returns None on success, otherwise the reason the file was kept."""
        if self.dry_run:
            logger.info(f"Dry-run: Skipped delete: {path}")
            return None
        try:
            self.file_service.remove(path, use_trash=self.use_trash)
        except DeletionError as e:
            logger.warning(f"Couldn't delete: {path} ({e})")
            return str(e)
        logger.debug(f"Deleted: {path}")
        return None
