from .navigator import InteractiveNavigator, NavigatorState, CommandResult, parse_command
from .session import ReviewSession, confirm_prompt

__all__ = [
    "InteractiveNavigator",
    "NavigatorState",
    "CommandResult",
    "parse_command",
    "ReviewSession",
    "confirm_prompt",
]
