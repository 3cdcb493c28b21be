"""Tests for module detection and relevance categorization."""

import pytest

from flagcomp.flags import FlagDescriptor
from flagcomp.relevance import (
    categorize_matching_flags,
    find_module_and_package_dir,
    module_patterns,
)


def _by_name(flags):
    return {f.name: f for f in flags}


class TestFindModuleAndPackageDir:
    """Tests for find_module_and_package_dir."""

    def test_module_and_package(self, sample_flags):
        module, package_dir = find_module_and_package_dir(sample_flags, "myapp")
        assert module == "/src/myapp/myapp.py"
        assert package_dir == "/src/myapp"

    @pytest.mark.parametrize("filename", [
        "/src/tool/myapp.cc",
        "/src/tool/myapp-main.cc",
        "/src/tool/myapp_main.cc",
        "/src/tool/myapp-test.cc",
        "/src/tool/myapp_test.cc",
        "/src/tool/myapp-unittest.cc",
        "/src/tool/myapp_unittest.cc",
    ])
    def test_naming_conventions(self, filename):
        flags = [FlagDescriptor("other", filename="/lib/x.cc"), FlagDescriptor("f", filename=filename)]
        assert find_module_and_package_dir(flags, "myapp") == (filename, "/src/tool")

    def test_longer_name_does_not_match(self):
        flags = [FlagDescriptor("f", filename="/src/tool/myapplication.cc")]
        assert find_module_and_package_dir(flags, "myapp") == ("", "")

    def test_first_flag_wins(self):
        flags = [
            FlagDescriptor("a", filename="/one/myapp_test.cc"),
            FlagDescriptor("b", filename="/two/myapp.cc"),
        ]
        assert find_module_and_package_dir(flags, "myapp") == ("/one/myapp_test.cc", "/one")

    def test_no_match_is_not_an_error(self, sample_flags):
        assert find_module_and_package_dir(sample_flags, "otherapp") == ("", "")
        assert find_module_and_package_dir([], "myapp") == ("", "")

    def test_defaults_to_invocation_name(self, sample_flags, monkeypatch):
        monkeypatch.setattr("sys.argv", ["/usr/local/bin/myapp", "--port"])
        module, _ = find_module_and_package_dir(sample_flags)
        assert module == "/src/myapp/myapp.py"

    def test_module_patterns(self):
        assert module_patterns("app") == [
            "/app.", "/app-main.", "/app_main.", "/app-test.",
            "/app_test.", "/app-unittest.", "/app_unittest.",
        ]


class TestCategorizeMatchingFlags:
    """Tests for categorize_matching_flags."""

    def test_tiers(self, sample_flags):
        tiers = categorize_matching_flags(
            _by_name(sample_flags), "x", "/src/myapp/myapp.py", "/src/myapp"
        )
        assert list(tiers.perfect_match) == []
        assert list(tiers.module) == ["port"]
        assert list(tiers.package) == ["ip"]
        assert list(tiers.subpackage) == ["isvip"]
        assert tiers.most_common == {}

    def test_perfect_match_wins(self, sample_flags):
        tiers = categorize_matching_flags(
            _by_name(sample_flags), "port", "/src/myapp/myapp.py", "/src/myapp"
        )
        assert list(tiers.perfect_match) == ["port"]
        assert "port" not in tiers.module
        assert "port" not in tiers.package

    def test_package_and_subpackage(self):
        flags = [
            FlagDescriptor("a", filename="/proj/pkg/a.cc"),
            FlagDescriptor("b", filename="/proj/pkg/sub/b.cc"),
            FlagDescriptor("c", filename="/elsewhere/c.cc"),
        ]
        tiers = categorize_matching_flags(_by_name(flags), "", "/proj/pkg/main.cc", "/proj/pkg")
        assert list(tiers.package) == ["a"]
        assert list(tiers.subpackage) == ["b"]
        assert "c" not in tiers.package and "c" not in tiers.subpackage

    def test_unknown_module_and_package(self, sample_flags):
        tiers = categorize_matching_flags(_by_name(sample_flags), "ip", "", "")
        assert list(tiers.perfect_match) == ["ip"]
        assert tiers.module == {}
        assert tiers.package == {}
        assert tiers.subpackage == {}

    def test_tiers_are_disjoint(self, sample_flags):
        tiers = categorize_matching_flags(
            _by_name(sample_flags), "ip", "/src/myapp/myapp.py", "/src/myapp"
        )
        names = (
            list(tiers.perfect_match) + list(tiers.module) + list(tiers.package)
            + list(tiers.most_common) + list(tiers.subpackage)
        )
        assert len(names) == len(set(names))
