"""Select the flags matching a search token."""

from ..flags import FlagDescriptor
from ..models import CompletionOptions, FlagSet


def does_single_flag_match(flag: FlagDescriptor, options: CompletionOptions, token: str) -> bool:
    """Check a flag against the token under the active search options.

    Prefix matches on the name always count. Substring matches on name,
    location and description count only when enabled. Case-sensitive.
    """
    pos = flag.name.find(token)
    if pos == 0:
        return True

    if options.flag_name_substring_search and pos != -1:
        return True

    if options.flag_location_substring_search and token in flag.filename:
        return True

    if options.flag_description_substring_search and token in flag.description:
        return True

    return False


def common_prefix(prefix: str, name: str) -> str:
    """Longest shared leading text of prefix and name."""
    pos = 0
    while pos < len(prefix) and pos < len(name) and prefix[pos] == name[pos]:
        pos += 1
    return prefix[:pos]


def find_matching_flags(
    all_flags: list[FlagDescriptor],
    options: CompletionOptions,
    token: str,
) -> tuple[FlagSet, str]:
    """Find every flag matching token.

    Returns (matches, longest_common_prefix). Once the common prefix
    collapses to empty it stays empty.
    """
    matches: FlagSet = {}
    longest_common_prefix = ""
    first_match = True
    for flag in all_flags:
        if not does_single_flag_match(flag, options, token):
            continue
        matches[flag.name] = flag
        if first_match:
            first_match = False
            longest_common_prefix = flag.name
        elif not longest_common_prefix or not flag.name:
            longest_common_prefix = ""
        else:
            longest_common_prefix = common_prefix(longest_common_prefix, flag.name)
    return matches, longest_common_prefix
