"""
Core duplicate detection engine — scanner, hasher, grouper, rules and statistics.

This package contains the foundation of duplex:
- FileScannerImpl: folder traversal with size filters, skipping links and junctions
- load_manifest: import of precomputed MD5 digests (md5deep format)
- HasherImpl + XXHashAlgorithmImpl / MD5AlgorithmImpl: streamed content hashing
- FileGrouperImpl: size and digest grouping with single-file filtering
- DeduplicatorImpl: two-stage pipeline (size → content hash)
- Sorter: deterministic ordering of files and groups
- RuleSet: path and pattern rules marking files for deletion
- group_stats / total_stats: counters honouring the keep-one-copy guarantee

All components are pure Python with no terminal I/O.
"""

from .models import (
    File, DuplicateGroup, GroupCollection, Stats, DeletionReport,
    DeduplicationStats, DuplexParams, HashAlgorithmName)
from .errors import (
    DuplexError, ScanError, ManifestError, HashError, FileVanishedError,
    FileAccessError, RuleError, DeletionError)
from .scanner import FileScannerImpl
from .manifest import load_manifest
from .hasher import HasherImpl, XXHashAlgorithmImpl, MD5AlgorithmImpl, algorithm_for
from .grouper import FileGrouperImpl, remove_single_item_groups
from .deduplicator import DeduplicatorImpl
from .sorter import Sorter
from .rules import RuleSet, PathRule, PatternRule
from .stats import group_stats, total_stats, marked_files

__all__ = [
    "File",
    "DuplicateGroup",
    "GroupCollection",
    "Stats",
    "DeletionReport",
    "DeduplicationStats",
    "DuplexParams",
    "HashAlgorithmName",
    "DuplexError",
    "ScanError",
    "ManifestError",
    "HashError",
    "FileVanishedError",
    "FileAccessError",
    "RuleError",
    "DeletionError",
    "FileScannerImpl",
    "load_manifest",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "MD5AlgorithmImpl",
    "algorithm_for",
    "FileGrouperImpl",
    "remove_single_item_groups",
    "DeduplicatorImpl",
    "Sorter",
    "RuleSet",
    "PathRule",
    "PatternRule",
    "group_stats",
    "total_stats",
    "marked_files",
]
