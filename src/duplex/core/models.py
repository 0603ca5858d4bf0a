"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and domain logic for file scanning, grouping and review.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union, Tuple
import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)


# =============================
# Enums
# =============================

class HashAlgorithmName(Enum):
    """
    Content hash used to confirm that same-size files are identical.
    """
    XXHASH = "xxhash"
    MD5 = "md5"

    @property
    def display_name(self) -> str:
        """Human-readable name for status output."""
        mapping = {
            HashAlgorithmName.XXHASH: "xxHash64",
            HashAlgorithmName.MD5: "MD5",
        }
        return mapping.get(self, self.value)


class Stage(str, Enum):
    SIZE = "Size grouping"
    HASH = "Content hash"


# ======================
#  Core Data Models
# ======================

@dataclass
class File:
    """
    A single regular file found during ingestion.
    Path and size are fixed at creation; the digest is computed lazily and set once.
    """
    path: str
    size: int  # in bytes
    digest: Optional[str] = None

    def __post_init__(self):
        if self.size < 0:
            raise ValueError(f"File size cannot be negative: {self.path}")

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def set_digest(self, digest: str) -> None:
        """Stores the digest. A second, different digest for the same file is an error."""
        if self.digest is not None and self.digest != digest:
            raise ValueError(f"Digest already set for {self.path}")
        self.digest = digest

    def __str__(self):
        if self.digest is None:
            return f"{self.size:>14,} {self.path}"
        return f"{self.size:>14,} {self.digest} {self.path}"

    def __repr__(self):
        return f"<File path={self.path}, size={self.size}>"


@dataclass
class DuplicateGroup:
    """
    Files that share size and, once hashed, content digest.
    A live group always holds at least two files.
    """
    size: int
    files: List[File]

    @property
    def digest(self) -> Optional[str]:
        return self.files[0].digest if self.files else None

    def remove_file(self, file: File) -> None:
        self.files.remove(file)

    def sort_by_path(self) -> None:
        self.files.sort(key=lambda f: f.path)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return len(self.files) >= 2

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.files)}>"


# Digest (or size, before hashing) -> group
GroupCollection = Dict[Union[str, int], DuplicateGroup]


@dataclass
class Stats:
    """
    Counters for one group or, summed with +, for a whole collection.
    """
    total_files: int = 0
    duplicate_files: int = 0
    marked_files: int = 0
    group_count: int = 0
    total_bytes: int = 0
    duplicate_bytes: int = 0
    marked_bytes: int = 0

    def __add__(self, other: "Stats") -> "Stats":
        return Stats(
            total_files=self.total_files + other.total_files,
            duplicate_files=self.duplicate_files + other.duplicate_files,
            marked_files=self.marked_files + other.marked_files,
            group_count=self.group_count + other.group_count,
            total_bytes=self.total_bytes + other.total_bytes,
            duplicate_bytes=self.duplicate_bytes + other.duplicate_bytes,
            marked_bytes=self.marked_bytes + other.marked_bytes,
        )

    @property
    def files_per_group(self) -> float:
        if not self.group_count:
            return 0.0
        return self.total_files / self.group_count


@dataclass
class DeletionReport:
    """Outcome of one deletion pass."""
    deleted: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)
    freed_bytes: int = 0
    dry_run: bool = False

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)

    @property
    def failed_count(self) -> int:
        return len(self.failed)


@dataclass
class DeduplicationStats:
    """
    Statistics collected during the grouping pipeline.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.hash_failures: int = 0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def print_summary(self) -> str:
        labels = {
            "size": "Size Groups",
            "hash": "Content Hash Groups",
        }

        lines = [
            "Grouping Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage.lower(), stage.title())
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        if self.hash_failures:
            lines.append(f"Files skipped (unreadable): {self.hash_failures}")

        return "\n".join(lines)


"""
Run configuration, built once from the command line and passed to every component.
"""

@dataclass(frozen=True)
class DuplexParams:
    """Immutable run configuration with built-in validation."""
    folders: Tuple[str, ...] = ()
    recursive_folders: Tuple[str, ...] = ()
    manifests: Tuple[str, ...] = ()
    rules: Tuple[str, ...] = ()
    automatic: bool = False
    dry_run: bool = False
    use_trash: bool = False
    quiet: bool = False
    verbose: bool = False
    hash_algorithm: HashAlgorithmName = HashAlgorithmName.XXHASH
    ignore_smaller: Optional[int] = None
    ignore_larger: Optional[int] = None
    workers: int = 1

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not (self.folders or self.recursive_folders or self.manifests):
            raise ValueError("No search folders or manifest files given")

        if self.ignore_smaller is not None and self.ignore_smaller < 0:
            raise ValueError("Small file filter cannot be negative")

        if self.ignore_larger is not None and self.ignore_larger < 0:
            raise ValueError("Large file filter cannot be negative")

        if (self.ignore_smaller is not None and self.ignore_larger is not None
                and self.ignore_larger <= self.ignore_smaller):
            raise ValueError("Large file filter must be greater than small file filter")

        if self.workers < 1:
            raise ValueError("Number of workers must be at least 1")

        # Imported manifests carry MD5 digests, so freshly computed ones must match
        if self.manifests and self.hash_algorithm != HashAlgorithmName.MD5:
            logger.info("Enabled MD5 hashes because a manifest file is used")
            object.__setattr__(self, "hash_algorithm", HashAlgorithmName.MD5)

        for name in ("folders", "recursive_folders", "manifests", "rules"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def size_passes(self, size: int) -> bool:
        """Size filters are inclusive: a filter of N ignores files of exactly N bytes."""
        if self.ignore_smaller is not None and size <= self.ignore_smaller:
            return False
        if self.ignore_larger is not None and size >= self.ignore_larger:
            return False
        return True
