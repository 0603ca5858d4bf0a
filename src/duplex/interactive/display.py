"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interactive/display.py
Text screens for the review loop. Every function returns lines; printing is left to the caller.
"""

from typing import List

from duplex.core.models import DuplicateGroup, Stats, DeletionReport
from duplex.core.rules import RuleSet
from duplex.core.stats import group_stats, marked_files
from duplex.utils.convert_utils import ConvertUtils

_count = ConvertUtils.format_count

HELP_ENTRIES = [
    ("<Enter>", "go to next group"),
    ("f (first)", "go to first group"),
    ("l (last)", "go to last group"),
    ("p (previous)", "go to previous group"),
    ("regex string", "add rule to delete all files in all groups matching the regex"),
    ("index number", "add rule to delete the single file with given index in the group"),
    ("d (index)", "remove rule"),
    ("h, help, ?", "display this message"),
    ("exit", "exit program without deleting anything"),
    ("delete", "prompt, then delete all marked files"),
]


def format_help() -> List[str]:
    lines = ["", "    Commands:"]
    lines.extend(f"        {cmd:<15}{text}" for cmd, text in HELP_ENTRIES)
    return lines


def format_rules(rules: RuleSet) -> List[str]:
    lines = ["", "    Rules:"]
    if not rules:
        lines.append("              No rules defined")
        return lines
    for idx, rule in enumerate(rules.rules_for_display(), 1):
        lines.append(f"           {idx:>3}: {rule}")
    return lines


def format_group(group: DuplicateGroup, rules: RuleSet) -> List[str]:
    """Lists the group's files with '*' in front of those marked for deletion."""
    marked = {id(f) for f in marked_files(group, rules)}
    lines = ["", "    Duplicates:"]
    for idx, file in enumerate(group.files, 1):
        flag = "*" if id(file) in marked else " "
        lines.append(f"{'':>9}{flag} {idx:>3} {file.path}")

    stats = group_stats(group, rules)
    lines.append("")
    lines.append(f"{_count(group.size)} bytes per file, all with hash {group.digest}")
    lines.append(f"{_count(stats.total_bytes)} bytes in group")
    lines.append(f"{_count(stats.duplicate_bytes)} bytes in duplicates")
    lines.append(f"{_count(stats.marked_bytes)} bytes in marked files")
    return lines


def format_total_stats(stats: Stats) -> List[str]:
    return [
        "",
        "    Total:",
        f"{_count(stats.total_files)} files",
        f"{_count(stats.group_count)} groups",
        f"{_count(stats.duplicate_files)} duplicates",
        f"{_count(stats.marked_files)} marked files",
        f"{_count(stats.total_bytes)} bytes in all groups",
        f"{_count(stats.duplicate_bytes)} bytes in duplicates",
        f"{_count(stats.marked_bytes)} bytes in all marked files",
        f"{stats.files_per_group:>14.2f} files per group (average)",
    ]


def format_deletion_report(report: DeletionReport, verbose: bool = False) -> List[str]:
    lines = []
    if report.dry_run:
        lines.extend(f"Dry-run: Skipped delete: {path}" for path in report.deleted)
    elif verbose:
        lines.extend(f"Deleted: {path}" for path in report.deleted)

    if report.failed:
        lines.append(f"Couldn't delete {report.failed_count:,} file(s):")
        for path, error in report.failed[:5]:
            lines.append(f"  • {path}: {error}")
        if report.failed_count > 5:
            lines.append(f"  ...and {report.failed_count - 5} more files")
    return lines


def format_prompt(cursor: int, group_count: int) -> str:
    return f"\n    {cursor + 1:,} / {group_count:,} > "
