"""Command-line option processing."""

from .dispatcher import ParseResult, apply_termination_policy, dispatch
from .main import main, parse_cmdline_args
from .options import OptionTag, ParsedOption, parse_options, to_action, to_actions


__all__ = [
    "OptionTag",
    "ParseResult",
    "ParsedOption",
    "apply_termination_policy",
    "dispatch",
    "main",
    "parse_cmdline_args",
    "parse_options",
    "to_action",
    "to_actions",
]
