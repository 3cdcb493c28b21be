"""Flag registry records and the sources they are read from.

A registry is an ordered list of FlagDescriptor records. It can be loaded
from a YAML file or built from the options of a click command.
"""

import inspect
from dataclasses import dataclass
from pathlib import Path

import click
import yaml


class RegistryError(ValueError):
    """Raised when a flag registry cannot be loaded."""


@dataclass(frozen=True)
class FlagDescriptor:
    """One declared command-line flag."""

    name: str
    type: str = "string"
    default_value: str = ""
    current_value: str = ""
    description: str = ""
    filename: str = ""  # Declaring location
    is_default: bool = True


# click parameter types mapped to the registry's type tags
CLICK_TYPE_TAGS = {
    "boolean": "bool",
    "text": "string",
    "integer": "int32",
    "float": "double",
}


def _render_value(value) -> str:
    """Render a flag value the way it would be typed on the command line."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_render_value(v) for v in value)
    if isinstance(value, (str, int, float, Path)):
        return str(value)
    # None, callables and click's unset-default sentinel
    return ""


def _flag_from_mapping(entry: dict, index: int) -> FlagDescriptor:
    name = entry.get("name")
    if not name or not isinstance(name, str):
        raise RegistryError(f"Entry {index} has no flag name")

    default_value = _render_value(entry.get("default"))
    current_value = _render_value(entry.get("current", entry.get("default")))
    is_default = entry.get("is_default")
    if is_default is None:
        is_default = current_value == default_value

    return FlagDescriptor(
        name=name,
        type=str(entry.get("type", "string")),
        default_value=default_value,
        current_value=current_value,
        description=str(entry.get("description") or ""),
        filename=str(entry.get("filename") or ""),
        is_default=bool(is_default),
    )


def load_registry(path: Path) -> list[FlagDescriptor]:
    """Load a flag registry from a YAML file.

    The file holds a list of mappings with keys name, type, default,
    current, description, filename and is_default. Only name is required.

    Raises:
        RegistryError: if the file is unreadable, malformed, or declares
            the same flag name twice.
    """
    try:
        data = yaml.safe_load(Path(path).read_text())
    except OSError as e:
        raise RegistryError(f"Cannot read registry {path}: {e}") from e
    except yaml.YAMLError as e:
        raise RegistryError(f"Invalid YAML in registry {path}: {e}") from e

    if data is None:
        return []
    if not isinstance(data, list):
        raise RegistryError(f"Registry {path} must contain a list of flags")

    flags = []
    seen = set()
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise RegistryError(f"Entry {index} in {path} is not a mapping")
        flag = _flag_from_mapping(entry, index)
        if flag.name in seen:
            raise RegistryError(f"Flag '{flag.name}' is declared more than once")
        seen.add(flag.name)
        flags.append(flag)
    return flags


def _option_name(option: click.Option) -> str:
    """Long option name without dashes (--log-file -> log-file)."""
    for opt in option.opts + option.secondary_opts:
        if opt.startswith("--"):
            return opt.lstrip("-")
    return option.name or option.opts[0].lstrip("-")


def _type_tag(option: click.Option) -> str:
    if option.is_flag:
        return "bool"
    type_name = getattr(option.type, "name", "string")
    return CLICK_TYPE_TAGS.get(type_name, type_name)


def _declaring_file(command: click.Command) -> str:
    if command.callback is None:
        return ""
    callback = inspect.unwrap(command.callback)
    try:
        return inspect.getsourcefile(callback) or ""
    except TypeError:
        return ""


def flags_from_click_command(command: click.Command) -> list[FlagDescriptor]:
    """Build a registry from the visible options of a click command."""
    filename = _declaring_file(command)
    flags = []
    seen = set()
    for param in command.params:
        if not isinstance(param, click.Option) or param.hidden:
            continue
        name = _option_name(param)
        if name in seen:
            continue
        seen.add(name)
        default_value = _render_value(param.default)
        flags.append(FlagDescriptor(
            name=name,
            type=_type_tag(param),
            default_value=default_value,
            current_value=default_value,
            description=param.help or "",
            filename=filename,
            is_default=True,
        ))
    return flags


def _quoted_value(flag: FlagDescriptor, label: str, value: str) -> str:
    if flag.type == "string":
        return f'{label}: "{value}"'
    return f"{label}: {value}"


def flag_detail_parts(flag: FlagDescriptor) -> list[str]:
    """The "type: ...", "default: ..." and, if changed, "currently: ..." parts."""
    parts = [f"type: {flag.type}", _quoted_value(flag, "default", flag.default_value)]
    if not flag.is_default:
        parts.append(_quoted_value(flag, "currently", flag.current_value))
    return parts


def _add_part(text: str, final: str, chars_in_line: int, line_length: int) -> tuple[str, int]:
    """Append a part to the current line, or to a new continuation line if it won't fit."""
    if chars_in_line + 1 + len(text) >= line_length:
        final += "\n      "
        chars_in_line = 6
    else:
        final += " "
        chars_in_line += 1
    return final + text, chars_in_line + len(text)


def describe_flag(flag: FlagDescriptor, line_length: int = 80) -> str:
    """Describe a flag for help output.

    Produces "    -name (description)" wrapped on whitespace at line_length,
    continuation lines indented by six spaces, followed by the type, the
    default and (if changed) the current value. Always ends with a newline.
    """
    remaining = f"    -{flag.name} ({flag.description})"
    final = ""
    chars_in_line = 0
    while True:
        newline = remaining.find("\n")
        if newline == -1 and chars_in_line + len(remaining) < line_length:
            # The whole remainder fits on this line
            final += remaining
            chars_in_line += len(remaining)
            break
        if newline != -1 and newline < line_length - chars_in_line:
            final += remaining[:newline]
            remaining = remaining[newline + 1:]
        else:
            # Break at the last whitespace that keeps the line short enough
            whitespace = line_length - chars_in_line - 1
            while whitespace > 0 and not remaining[whitespace].isspace():
                whitespace -= 1
            if whitespace <= 0:
                # No place to break; dump the rest and force a new line
                final += remaining
                chars_in_line = line_length
                break
            final += remaining[:whitespace]
            chars_in_line += whitespace
            while whitespace < len(remaining) and remaining[whitespace].isspace():
                whitespace += 1
            remaining = remaining[whitespace:]
        if not remaining:
            break
        final += "\n      "
        chars_in_line = 6

    for part in flag_detail_parts(flag):
        final, chars_in_line = _add_part(part, final, chars_in_line, line_length)
    return final + "\n"
