"""Bash hook that routes <TAB> on a flag to the program itself."""

import shlex

from .integration import COLUMNS_OPTION, WORD_OPTION

# bash runs the -C command with three extra arguments: the command being
# completed, the word being completed and the word before it.
HOOK_SCRIPT = """\
#!/usr/bin/env bash
# Flag completion hook generated by flagcomp.
#
# Register with:
#   complete -o bashdefault -o default -o nospace -C \\
#     '/path/to/this/script %(columns_option)s $COLUMNS' binary [...]

completion_word_index="$(($# - 1))"
completion_word="${!completion_word_index}"

# An empty word is not a completion request; don't run the binary.
if [ -z "$completion_word" ]; then
  exit 0
fi

binary_index="$(($# - 2))"
binary="${!binary_index}"

# For pass-through commands the real binary is the next word on the line.
if [ "$binary" == "time" ] || [ "$binary" == "env" ]; then
  parts=( ${COMP_LINE} )
  binary=${parts[1]}
fi

# Pass through our own arguments (minus the three bash added) and ask the
# binary to complete the word.
params=""
for ((i=1; i<=$(($# - 3)); ++i)); do
  params="$params \\"${!i}\\"";
done
params="$params %(word_option)s \\"$completion_word\\""

candidate=$(type -p "$binary")
if [ ! -z "$candidate" ]; then
  eval "$candidate 2>/dev/null $params"
elif [ -f "$binary" ] && [ -x "$binary" ]; then
  eval "$binary 2>/dev/null $params"
fi
"""


def render_bash_hook() -> str:
    """The hook script, ready to be saved as an executable file."""
    return HOOK_SCRIPT % {"columns_option": COLUMNS_OPTION, "word_option": WORD_OPTION}


def render_complete_command(script_path: str, binaries: list[str]) -> str:
    """The `complete` builtin call registering the hook for binaries."""
    names = " ".join(shlex.quote(b) for b in binaries)
    return (
        "complete -o bashdefault -o default -o nospace -C "
        f"'{script_path} {COLUMNS_OPTION} $COLUMNS' {names}"
    ).rstrip()
