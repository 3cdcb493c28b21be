"""Records passed between completion stages."""

from dataclasses import dataclass, field

from .flags import FlagDescriptor

# Flags keyed by name, in registry order
FlagSet = dict[str, FlagDescriptor]


@dataclass(frozen=True)
class CompletionOptions:
    """Search hints deduced from the word being completed.

    return_all_matching_flags: list every match instead of trimming the
    output to what fits in the line budget.
    force_no_update: tell bash not to replace the current word with the
    common prefix of the listed lines.
    """

    flag_name_substring_search: bool = False
    flag_location_substring_search: bool = False
    flag_description_substring_search: bool = False
    return_all_matching_flags: bool = False
    force_no_update: bool = False


@dataclass
class RelevanceTiers:
    """Matching flags worth showing first, in precedence order.

    A flag placed in a higher tier is never placed in a lower one.
    """

    perfect_match: FlagSet = field(default_factory=dict)
    module: FlagSet = field(default_factory=dict)       # Declared in the module file
    package: FlagSet = field(default_factory=dict)      # Same directory as the module
    most_common: FlagSet = field(default_factory=dict)  # Never populated
    subpackage: FlagSet = field(default_factory=dict)   # Subdirectories of the package


@dataclass
class DisplayGroup:
    """A block of completion lines sharing one indentation."""

    header: str
    footer: str
    members: FlagSet
    indent: int = 0
    long_format: bool = False

    def size_in_lines(self) -> int:
        size = len(self.members) + 1
        if self.header:
            size += 1
        if self.footer:
            size += 1
        return size


@dataclass(frozen=True)
class CompletionResult:
    """Lines produced for one completion request."""

    lines: list[str]
    force_no_update: bool = False
    common_prefix_shortcut: bool = False
