"""Bash-style flag completion.

Completing a word runs in five steps:

1. Examine the word for search hints (canonicalize_cursor_word)
2. Find all matching flags; if they share a prefix longer than the word,
   output just that prefix
3. Categorize the matches by relevance to the running program
4. Trim the output to a line budget bash is happy with
5. Output the matches in groups, most relevant first, with descriptions
   cut to fit a terminal line
"""

import dataclasses

import click
from click.shell_completion import CompletionItem

from .config import get_columns
from .flags import FlagDescriptor, RegistryError, describe_flag, flag_detail_parts, load_registry
from .models import CompletionOptions, CompletionResult, DisplayGroup, FlagSet, RelevanceTiers
from .relevance import categorize_matching_flags, find_module_and_package_dir
from .search import canonicalize_cursor_word, find_matching_flags
from .utils import log_debug, log_verbose

MAX_DESIRED_LINES = 98
ALL_LINES = 999999
HIDDEN_FLAGS_LINE = "~ (Remaining flags hidden) ~"
NO_UPDATE_LINE = "~"

PERFECT_MATCH_FOOTER = "=========="
OTHER_FLAGS_HEADER = "-* Other flags *-"

# (tier, header) in display order; footers underline the header with '='
NOTABLE_GROUPS = (
    ("module", "-* Matching module flags *-"),
    ("package", "-* Matching package flags *-"),
    ("most_common", "-* Commonly used flags *-"),
    ("subpackage", "-* Matching sub-package flags *-"),
)


def retrieve_unused_flags(matches: FlagSet, tiers: RelevanceTiers) -> FlagSet:
    """Matches not placed in any relevance tier."""
    notable = (tiers.perfect_match, tiers.module, tiers.package, tiers.most_common, tiers.subpackage)
    return {
        name: flag
        for name, flag in matches.items()
        if not any(name in tier for tier in notable)
    }


def build_output_groups(
    matches: FlagSet,
    tiers: RelevanceTiers,
    max_lines: int,
) -> list[DisplayGroup]:
    """Pick the display groups that start within the line budget.

    Groups are indented so that bash, which sorts completion lines, keeps
    the most relevant group at the top.
    """
    groups = []
    lines_so_far = 0

    if tiers.perfect_match:
        group = DisplayGroup("", PERFECT_MATCH_FOOTER, tiers.perfect_match, long_format=True)
        lines_so_far += group.size_in_lines()
        groups.append(group)

    for tier_name, header in NOTABLE_GROUPS:
        members = getattr(tiers, tier_name)
        if lines_so_far < max_lines and members:
            group = DisplayGroup(header, "=" * len(header), members)
            lines_so_far += group.size_in_lines()
            groups.append(group)

    if lines_so_far < max_lines:
        obscure_flags = retrieve_unused_flags(matches, tiers)
        if obscure_flags:
            group = DisplayGroup(OTHER_FLAGS_HEADER, "", obscure_flags)
            lines_so_far += group.size_in_lines()
            groups.append(group)

    for position, group in enumerate(groups):
        group.indent = len(groups) - 1 - position
    return groups


def get_short_flag_line(indentation: str, flag: FlagDescriptor, columns: int) -> str:
    """One-line rendering: --name [default] description, cut to columns."""
    quote = "'" if flag.type == "string" else ""
    prefix = f"{indentation}--{flag.name} [{quote}{flag.default_value}{quote}] "
    remainder = columns - len(prefix)
    suffix = ""
    if remainder > 0:
        if len(flag.description) <= remainder:
            suffix = flag.description
        elif remainder > 3:
            suffix = flag.description[:remainder - 3] + "..."
    return prefix + suffix


def get_long_flag_line(indentation: str, flag: FlagDescriptor, columns: int) -> str:
    """Multi-line rendering with type, values and declaring file.

    Newlines are replaced by padding up to the next column boundary, so the
    result is one completion entry that the terminal wraps into lines.
    """
    output = describe_flag(flag, columns)

    old_flagname = "-" + flag.name
    output = output.replace(old_flagname, "-" + old_flagname, 1)

    # Locate type and default from the end so a description mentioning
    # "type:" or "default:" is left alone
    parts = flag_detail_parts(flag)
    end = len(output) - 1
    if len(parts) == 3:
        end -= len(parts[2])
    default_at = output.rfind(" " + parts[1], 0, end)
    type_at = output.rfind(" " + parts[0], 0, default_at)
    output = (
        output[:type_at] + "\n    " + output[type_at + 1:default_at]
        + "\n    " + output[default_at + 1:]
    )
    output = (
        f"{indentation} Details for '--{flag.name}':\n"
        f"{output}    defined: {flag.filename}"
    )

    # A break describe_flag placed right before type or default leaves a
    # line of indentation only
    doubled_newlines = "\n     \n"
    while doubled_newlines in output:
        output = output.replace(doubled_newlines, "\n")

    newline = output.find("\n")
    while newline != -1:
        # A line that exactly fills the width needs no padding
        missing_spaces = (columns - newline % columns) % columns
        output = output[:newline] + " " * missing_spaces + output[newline + 1:]
        newline = output.find("\n")
    return output


def output_single_group_with_limit(
    group: DisplayGroup,
    remaining_lines: int,
    columns: int,
) -> tuple[list[str], int, int]:
    """Render one group within the remaining line budget.

    Returns (lines, remaining_lines, flags_output).
    """
    lines = []
    if not group.members:
        return lines, remaining_lines, 0

    indentation = " " * group.indent
    if group.header:
        if remaining_lines < 2:
            return lines, remaining_lines, 0
        remaining_lines -= 2
        lines.append(indentation + group.header)
        lines.append(indentation + "-" * len(group.header))

    flags_output = 0
    for flag in group.members.values():
        if remaining_lines <= 0:
            break
        remaining_lines -= 1
        flags_output += 1
        if group.long_format:
            lines.append(get_long_flag_line(indentation, flag, columns))
        else:
            lines.append(get_short_flag_line(indentation, flag, columns))

    if group.footer and remaining_lines >= 1:
        remaining_lines -= 1
        lines.append(indentation + group.footer)

    return lines, remaining_lines, flags_output


def finalize_completion_output(
    matches: FlagSet,
    options: CompletionOptions,
    tiers: RelevanceTiers,
    columns: int,
) -> tuple[list[str], CompletionOptions]:
    """Render the matches in relevance groups under the line budget.

    Returns the lines and the options with force_no_update set when every
    match was shown.
    """
    max_lines = ALL_LINES if options.return_all_matching_flags else MAX_DESIRED_LINES
    groups = build_output_groups(matches, tiers, max_lines)

    completions = []
    remaining_lines = max_lines
    flags_output = 0
    for group in groups:
        lines, remaining_lines, added = output_single_group_with_limit(group, remaining_lines, columns)
        completions.extend(lines)
        flags_output += added

    if flags_output != len(matches):
        completions.append(HIDDEN_FLAGS_LINE)
        return completions, dataclasses.replace(options, force_no_update=False)
    return completions, dataclasses.replace(options, force_no_update=True)


def complete_flags(
    cursor_word: str,
    all_flags: list[FlagDescriptor],
    columns: int | None = None,
    program_name: str | None = None,
) -> CompletionResult:
    """Compute the completion lines for one word against a flag registry."""
    if not cursor_word:
        return CompletionResult(lines=[])
    if columns is None:
        columns = get_columns()

    token, options = canonicalize_cursor_word(cursor_word)
    log_verbose(f"Identified canonical token: '{token}'")
    log_debug(f"Found {len(all_flags)} flags overall")

    matches, longest_common_prefix = find_matching_flags(all_flags, options, token)
    log_verbose(f"Identified {len(matches)} matching flags")
    log_verbose(f"Identified '{longest_common_prefix}' as longest common prefix")

    if len(longest_common_prefix) > len(token):
        log_verbose(
            f"The common prefix '{longest_common_prefix}' was longer than the token "
            f"'{token}'. Returning just this prefix for completion."
        )
        return CompletionResult(lines=[f"--{longest_common_prefix}"], common_prefix_shortcut=True)
    if not matches:
        log_verbose("There were no matching flags, returning nothing.")
        return CompletionResult(lines=[])

    module, package_dir = find_module_and_package_dir(all_flags, program_name)
    log_verbose(f"Identified module: '{module}'")
    log_verbose(f"Identified package_dir: '{package_dir}'")

    tiers = categorize_matching_flags(matches, token, module, package_dir)
    lines, options = finalize_completion_output(matches, options, tiers, columns)
    if options.force_no_update:
        lines.append(NO_UPDATE_LINE)

    log_verbose(f"Finalized with {len(lines)} chosen completions")
    return CompletionResult(lines=lines, force_no_update=options.force_no_update)


def handle_command_line_completions(
    cursor_word: str,
    all_flags: list[FlagDescriptor],
    columns: int | None = None,
    program_name: str | None = None,
) -> bool:
    """Print completions for cursor_word to stdout.

    Returns False without output when there is no word to complete, True
    otherwise; the caller should then exit with status 0.
    """
    if not cursor_word:
        return False
    result = complete_flags(cursor_word, all_flags, columns, program_name)
    for line in result.lines:
        click.echo(line)
    return True


def complete_registry_flag(ctx, param, incomplete: str) -> list:
    """Shell completion for flag names of the registry given with --registry."""
    registry = ctx.params.get("registry")
    if not registry:
        return []
    try:
        all_flags = load_registry(registry)
    except RegistryError:
        return []

    token, options = canonicalize_cursor_word(incomplete)
    matches, _ = find_matching_flags(all_flags, options, token)
    return [
        CompletionItem(flag.name, help=flag.description)
        for flag in matches.values()
    ]
