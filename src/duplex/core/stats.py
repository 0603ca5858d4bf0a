"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stats.py
Per-group and total counters for the review screen and the deletion pass.

Marking never selects every file of a group: when the next match would mark
the last unmarked file, that file is kept regardless of the rules.
"""

from typing import List
from duplex.core.models import DuplicateGroup, GroupCollection, Stats, File
from duplex.core.rules import RuleSet


def marked_files(group: DuplicateGroup, rules: RuleSet) -> List[File]:
    """Files of the group selected for deletion, in stored order. Always leaves one file unmarked."""
    marked = []
    limit = len(group.files) - 1
    for file in group.files:
        if len(marked) >= limit:
            break
        if rules.is_match(file):
            marked.append(file)
    return marked


def group_stats(group: DuplicateGroup, rules: RuleSet) -> Stats:
    count = len(group.files)
    marked_count = len(marked_files(group, rules))
    duplicates = max(count - 1, 0)
    return Stats(
        total_files=count,
        duplicate_files=duplicates,
        marked_files=marked_count,
        group_count=1,
        total_bytes=group.size * count,
        duplicate_bytes=group.size * duplicates,
        marked_bytes=group.size * marked_count,
    )


def total_stats(groups: GroupCollection, rules: RuleSet) -> Stats:
    stats = Stats()
    for group in groups.values():
        stats += group_stats(group, rules)
    return stats
