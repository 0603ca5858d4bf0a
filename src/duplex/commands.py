"""
Command orchestrator for finding duplicates.
Single source of the scan → import → group workflow, used by the CLI and tests.
"""
import logging
from typing import List, Optional, Callable, Tuple

from duplex.core.models import DeduplicationStats, DuplexParams, File, GroupCollection
from duplex.core.scanner import FileScannerImpl
from duplex.core.manifest import load_manifest
from duplex.core.grouper import FileGrouperImpl
from duplex.core.hasher import HasherImpl, algorithm_for
from duplex.core.deduplicator import DeduplicatorImpl
from duplex.core.errors import ManifestError

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Orchestrates the whole detection workflow:
    1. Scan search folders
    2. Import manifest files, skipping paths already found
    3. Group by size, then by content digest

    Usage:
        params = DuplexParams(recursive_folders=("/photos",))
        groups, stats = DeduplicationCommand().execute(params, progress_callback=printer)
    """

    def __init__(self):
        self._files: List[File] = []

    def collect_files(
            self,
            params: DuplexParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> List[File]:
        scanner = FileScannerImpl.from_params(params)
        files = scanner.scan(stopped_flag=stopped_flag, progress_callback=progress_callback)

        seen = {f.path for f in files}
        for manifest in params.manifests:
            logger.debug(f"Processing manifest file: {manifest}")
            try:
                imported = load_manifest(manifest, params)
            except ManifestError as e:
                logger.error(str(e))
                continue
            for file in imported:
                if file.path not in seen:
                    seen.add(file.path)
                    files.append(file)

        return files

    def execute(
            self,
            params: DuplexParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Tuple[GroupCollection, DeduplicationStats]:
        """
        Execute detection with given parameters.

        Args:
            params: Validated run configuration
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            stopped_flag: () -> bool (returns True if operation should stop)

        Returns:
            Tuple of (digest-keyed duplicate groups, statistics)

        Raises:
            ScanError: If a search folder is invalid
        """
        self._files = self.collect_files(params, progress_callback, stopped_flag)
        logger.info(f"Files found: {len(self._files):,}")

        hasher = HasherImpl(algorithm_for(params.hash_algorithm))
        deduplicator = DeduplicatorImpl(FileGrouperImpl(hasher), workers=params.workers)
        return deduplicator.find_duplicates(
            self._files,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )

    def get_files(self) -> List[File]:
        """Get scanned files after execution."""
        return self._files.copy()  # Return copy to prevent external mutation
