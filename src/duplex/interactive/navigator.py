"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interactive/navigator.py
Cursor-based state machine behind the interactive review loop.

The navigator owns no files. It holds the shared group collection and rule set,
a cursor into the current group order, and turns one operator command line into
a CommandResult. Failed commands never change the cursor, the rules or the groups.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple, Union

from duplex.core.errors import RuleError
from duplex.core.grouper import remove_single_item_groups
from duplex.core.models import DuplicateGroup, GroupCollection, DeletionReport
from duplex.core.rules import RuleSet
from duplex.core.sorter import Sorter
from duplex.core.stats import total_stats
from duplex.services.deletion_service import DeletionExecutor

logger = logging.getLogger(__name__)


class NavigatorState(Enum):
    REVIEW = "review"
    DONE = "done"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one dispatched command."""
    ok: bool
    message: str = ""
    show_help: bool = False
    quit: bool = False

    @classmethod
    def success(cls, message: str = "", show_help: bool = False) -> "CommandResult":
        return cls(ok=True, message=message, show_help=show_help)

    @classmethod
    def failure(cls, message: str, show_help: bool = False) -> "CommandResult":
        return cls(ok=False, message=message, show_help=show_help)


NEXT_COMMANDS = ("n", "next", "")
PREVIOUS_COMMANDS = ("p", "previous")
FIRST_COMMANDS = ("f", "first")
LAST_COMMANDS = ("l", "last")
REMOVE_COMMANDS = ("d", "remove")
HELP_COMMANDS = ("h", "help", "?")
QUIT_COMMANDS = ("quit", "exit")
DELETE_COMMAND = "delete"


def parse_command(line: str) -> Tuple[str, str]:
    """Splits a command line at the first space into (command, argument)."""
    cmd, _, arg = line.strip().partition(" ")
    return cmd.strip(), arg.strip()


def arg_to_index(arg: str, max_index: int) -> int:
    """Parses a 1-based index and checks it against [1, max_index]."""
    if not arg:
        raise RuleError("Missing index argument")
    try:
        index = int(arg)
    except ValueError:
        raise RuleError(f"Invalid index: {arg}")
    if index < 1 or index > max_index:
        raise RuleError(f"Index must be between 1 and {max_index}")
    return index


class InteractiveNavigator:
    """
    State machine over the ordered group list.

    States: REVIEW while groups remain, DONE once the collection is empty.
    Call refresh() before displaying; it prunes, reorders and clamps the cursor.
    """

    def __init__(
            self,
            groups: GroupCollection,
            rules: RuleSet,
            executor: DeletionExecutor,
            confirm: Callable[[str], bool]
    ):
        self.groups = groups
        self.rules = rules
        self.executor = executor
        self.confirm = confirm
        self.cursor = 0
        self.order: List[Union[str, int]] = []
        self.state = NavigatorState.REVIEW
        self.last_report: Optional[DeletionReport] = None

    @property
    def group_count(self) -> int:
        return len(self.order)

    @property
    def current_group(self) -> DuplicateGroup:
        return self.groups[self.order[self.cursor]]

    def refresh(self) -> NavigatorState:
        remove_single_item_groups(self.groups)
        self.order = Sorter.order_groups(self.groups)
        if not self.order:
            self.state = NavigatorState.DONE
            self.cursor = 0
            return self.state
        self.cursor = min(self.cursor, len(self.order) - 1)
        return self.state

    # =============================
    # Dispatch
    # =============================

    def dispatch(self, line: str) -> CommandResult:
        if not self.order:
            self.refresh()
        if self.state == NavigatorState.DONE:
            return CommandResult(ok=True, quit=True)

        cmd, arg = parse_command(line)

        if cmd in QUIT_COMMANDS:
            return CommandResult(ok=True, quit=True)

        navigation = self._go_to_group(cmd)
        if navigation is not None:
            return navigation

        if cmd == DELETE_COMMAND:
            return self._delete()

        try:
            if cmd in REMOVE_COMMANDS:
                rule = self.rules.remove_rule(arg_to_index(arg, self.rules.rule_count))
                return CommandResult.success(f"Removed rule: {rule}")

            if cmd in HELP_COMMANDS:
                return CommandResult.success(show_help=True)

            if cmd.isdigit():
                files = self.current_group.files
                file = files[arg_to_index(cmd, len(files)) - 1]
                rule = self.rules.add_path_rule(file.path)
                return CommandResult.success(f"Added rule: {rule}")

            if len(cmd) >= 2:
                rule = self.rules.add_pattern_rule(cmd)
                return CommandResult.success(f"Added rule: {rule}")
        except RuleError as e:
            return CommandResult.failure(str(e))

        return CommandResult.failure(f"Unknown command: {cmd}", show_help=True)

    def _go_to_group(self, cmd: str) -> Optional[CommandResult]:
        """Handles navigation commands; returns None for anything else."""
        last = self.group_count - 1
        if cmd in FIRST_COMMANDS:
            if self.cursor == 0:
                return CommandResult.failure("Already at the first group")
            self.cursor = 0
        elif cmd in PREVIOUS_COMMANDS:
            if self.cursor == 0:
                return CommandResult.failure("Already at the first group")
            self.cursor -= 1
        elif cmd in LAST_COMMANDS:
            if self.cursor == last:
                return CommandResult.failure("Already at the last group")
            self.cursor = last
        elif cmd in NEXT_COMMANDS:
            if self.cursor == last:
                return CommandResult.failure("Already at the last group")
            self.cursor += 1
        else:
            return None
        return CommandResult.success()

    def _delete(self) -> CommandResult:
        stats = total_stats(self.groups, self.rules)
        if not stats.marked_bytes:
            return CommandResult.failure("Nothing to delete yet")

        prompt = (f"About to delete {stats.marked_files:,} files "
                  f"({stats.marked_bytes:,} bytes) Delete? (y/n) > ")
        if not self.confirm(prompt):
            return CommandResult.success("Deletion cancelled")

        self.last_report = self.executor.execute(self.groups, self.rules)
        self.refresh()
        self.rules.clear()

        report = self.last_report
        message = f"Deleted {report.deleted_count:,} files ({report.freed_bytes:,} bytes)"
        if report.dry_run:
            message = f"Dry-run: {message}"
        if report.failed:
            message += f", {report.failed_count:,} could not be deleted"
        return CommandResult.success(message)
