"""Shared test fixtures for flagcomp tests."""

from pathlib import Path

import pytest
import yaml

from flagcomp.flags import FlagDescriptor


@pytest.fixture(autouse=True)
def temp_config(tmp_path, monkeypatch):
    """Point flagcomp at an empty config directory.

    Sets up:
    - XDG_CONFIG_HOME pointing into tmp_path
    - No FLAGCOMP_COLUMNS override
    - FLAGCOMP_VERBOSITY=0 so diagnostics stay out of captured output

    Returns the config directory (not created yet).
    """
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("FLAGCOMP_COLUMNS", raising=False)
    monkeypatch.setenv("FLAGCOMP_VERBOSITY", "0")
    return config_home / "flagcomp"


@pytest.fixture
def sample_flags():
    """Flags of a program called 'myapp'.

    - port: declared in the module file (/src/myapp/myapp.py)
    - ip: declared next to it (package)
    - isvip: declared in a subdirectory (sub-package)
    - logtostderr, log_dir: declared in an unrelated library
    """
    return [
        FlagDescriptor("port", "int32", "80", "80", "listen port", "/src/myapp/myapp.py"),
        FlagDescriptor("ip", "string", "127.0.0.1", "127.0.0.1", "connect ip", "/src/myapp/net.py"),
        FlagDescriptor("isvip", "bool", "true", "true", "If Is VIP", "/src/myapp/util/vip.py"),
        FlagDescriptor("logtostderr", "bool", "false", "false", "log messages to stderr",
                       "/lib/logging/logging.py"),
        FlagDescriptor("log_dir", "string", "", "", "directory for log files",
                       "/lib/logging/logging.py"),
    ]


def write_registry(path: Path, flags: list[FlagDescriptor]) -> Path:
    """Write flags as a YAML registry file."""
    entries = [
        {
            "name": f.name,
            "type": f.type,
            "default": f.default_value,
            "current": f.current_value,
            "description": f.description,
            "filename": f.filename,
            "is_default": f.is_default,
        }
        for f in flags
    ]
    path.write_text(yaml.safe_dump(entries))
    return path


@pytest.fixture
def registry_file(tmp_path, sample_flags):
    """sample_flags saved as myapp.yaml."""
    return write_registry(tmp_path / "myapp.yaml", sample_flags)


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for CLI testing."""
    from click.testing import CliRunner

    return CliRunner()
