"""Bash-style command-line flag completion."""

from .completions import complete_flags, handle_command_line_completions
from .flags import FlagDescriptor, RegistryError, flags_from_click_command, load_registry
from .integration import completing_command, completing_group

__all__ = [
    "complete_flags",
    "handle_command_line_completions",
    "FlagDescriptor",
    "RegistryError",
    "flags_from_click_command",
    "load_registry",
    "completing_command",
    "completing_group",
]
