"""Rank matching flags by how relevant they are to the running program."""

import os
import sys

from .flags import FlagDescriptor
from .models import FlagSet, RelevanceTiers
from .utils import log_debug

PATH_SEPARATOR = "/"

# Conventional names for a program's main file, tried in order. Each ends
# in '.' so "/foo." does not match "/foobar.py".
MODULE_SUFFIXES = (".", "-main.", "_main.", "-test.", "_test.", "-unittest.", "_unittest.")


def program_invocation_name() -> str:
    """Short name the program was invoked as (basename of argv[0])."""
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""


def module_patterns(program_name: str) -> list[str]:
    return [f"{PATH_SEPARATOR}{program_name}{suffix}" for suffix in MODULE_SUFFIXES]


def find_module_and_package_dir(
    all_flags: list[FlagDescriptor],
    program_name: str | None = None,
) -> tuple[str, str]:
    """Find the file declaring the program's own flags and its directory.

    The first flag whose location contains one of the main-file patterns
    wins. Returns ("", "") when nothing matches. Directories sharing the
    same trailing structure are not told apart.
    """
    if program_name is None:
        program_name = program_invocation_name()
    if not program_name:
        return "", ""

    patterns = module_patterns(program_name)
    for flag in all_flags:
        for pattern in patterns:
            if pattern in flag.filename:
                module = flag.filename
                sep = module.rfind(PATH_SEPARATOR)
                package_dir = module[:sep] if sep != -1 else ""
                return module, package_dir
    return "", ""


def categorize_matching_flags(
    matches: FlagSet,
    search_token: str,
    module: str,
    package_dir: str,
) -> RelevanceTiers:
    """Place each match in the first tier it qualifies for.

    Tiers, highest first: exact name match, declared in the module,
    declared directly in the package directory, declared below it.
    Flags qualifying for none stay out of every tier.
    """
    tiers = RelevanceTiers()
    for name, flag in matches.items():
        pos = flag.filename.find(package_dir) if package_dir else -1
        slash = -1
        if pos != -1:
            slash = flag.filename.find(PATH_SEPARATOR, pos + len(package_dir) + 1)

        if flag.name == search_token:
            tiers.perfect_match[name] = flag
        elif module and flag.filename == module:
            tiers.module[name] = flag
        elif package_dir and pos != -1 and slash == -1:
            tiers.package[name] = flag
        elif package_dir and pos != -1:
            tiers.subpackage[name] = flag

    log_debug(
        f"Categorized: perfect={len(tiers.perfect_match)} module={len(tiers.module)} "
        f"package={len(tiers.package)} most_common={len(tiers.most_common)} "
        f"subpackage={len(tiers.subpackage)}"
    )
    return tiers
