"""
Duplex — find duplicate files and delete them by rules.

Core features:
- Two-stage detection: files are grouped by size, and only same-size files are hashed (xxHash64 or MD5)
- Path and case-insensitive regex rules mark files for deletion
- At least one copy of every file is always kept
- Interactive review loop, or automatic deletion for scripts
- Optional deletion to the system trash (via send2trash)
"""

from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("duplex")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from duplex.commands import DeduplicationCommand
from duplex.core import (
    DuplexParams, HashAlgorithmName, File, DuplicateGroup, Stats, RuleSet,
    group_stats, total_stats)
from duplex.interactive import InteractiveNavigator, ReviewSession
from duplex.services import DeletionExecutor, FileService
from duplex.utils.convert_utils import ConvertUtils

__all__ = [
    "DeduplicationCommand",
    "DuplexParams",
    "HashAlgorithmName",
    "File",
    "DuplicateGroup",
    "Stats",
    "RuleSet",
    "group_stats",
    "total_stats",
    "InteractiveNavigator",
    "ReviewSession",
    "DeletionExecutor",
    "FileService",
    "ConvertUtils",
    "__version__",
]
