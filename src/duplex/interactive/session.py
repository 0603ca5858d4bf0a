"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interactive/session.py
Blocking review loop: display the current group, read a command, dispatch it.
"""

import logging
from typing import Callable, Optional

from duplex.core.stats import total_stats
from duplex.interactive import display
from duplex.interactive.navigator import InteractiveNavigator, NavigatorState

logger = logging.getLogger(__name__)


def confirm_prompt(prompt: str, input_func: Callable[[str], str] = input,
                   output: Callable[[str], None] = print) -> bool:
    """Asks until the answer is y or n (any case). End of input counts as no."""
    output("")
    while True:
        try:
            answer = input_func(prompt).strip()
        except EOFError:
            return False
        if answer in ("y", "Y"):
            return True
        if answer in ("n", "N"):
            return False


class ReviewSession:
    """
    Drives an InteractiveNavigator from a terminal.

    Each iteration refreshes the navigator, prints rules, the current group,
    totals, help when requested and the previous command's error, then reads
    one command. The loop ends when no groups remain or on quit/exit.
    """

    def __init__(
            self,
            navigator: InteractiveNavigator,
            input_func: Callable[[str], str] = input,
            output: Callable[[str], None] = print,
            quiet: bool = False,
            verbose: bool = False
    ):
        self.navigator = navigator
        self.input_func = input_func
        self.output = output
        self.quiet = quiet
        self.verbose = verbose

    def _print_lines(self, lines) -> None:
        for line in lines:
            self.output(line)

    def run(self) -> None:
        show_help = True
        error: Optional[str] = None
        notice: Optional[str] = None
        self.output("")

        while True:
            if self.navigator.refresh() == NavigatorState.DONE:
                if not self.quiet:
                    self.output("No more duplicates found")
                return

            nav = self.navigator
            stats = total_stats(nav.groups, nav.rules)
            self._print_lines(display.format_rules(nav.rules))
            self._print_lines(display.format_group(nav.current_group, nav.rules))
            self._print_lines(display.format_total_stats(stats))

            if show_help:
                show_help = False
                self._print_lines(display.format_help())
            if notice:
                self.output(f"\n    {notice}")
                notice = None
            if error:
                self.output(f"\n{'':>4}Error:\n{'':>15}{error}")
                error = None

            try:
                line = self.input_func(display.format_prompt(nav.cursor, nav.group_count))
            except EOFError:
                logger.debug("End of input, leaving review loop")
                return

            result = nav.dispatch(line)
            if result.quit:
                return
            show_help = result.show_help
            if not result.ok:
                error = result.message
            elif result.message:
                notice = result.message

            if nav.last_report is not None:
                self._print_lines(display.format_deletion_report(nav.last_report, self.verbose))
                nav.last_report = None
