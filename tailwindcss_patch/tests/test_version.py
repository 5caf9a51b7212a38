"""Tests for major version resolution."""

import pytest

from tailwindcss_patch.core.version import coerce_version, resolve_major_version


class TestCoerceVersion:
    @pytest.mark.parametrize("raw,expected", [
        ("4.0.0", (4, 0, 0)),
        ("v3.4", (3, 4, 0)),
        ("^3.3.0-beta.1", (3, 3, 0)),
        ("2", (2, 0, 0)),
    ])
    def test_loose_parsing(self, raw, expected):
        assert coerce_version(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "latest", 3])
    def test_unparseable(self, raw):
        assert coerce_version(raw) is None


class TestResolveMajorVersion:
    def test_v4(self):
        assert resolve_major_version("4.0.0") == 4
        assert resolve_major_version("4.5.2") == 4

    def test_default(self):
        assert resolve_major_version() == 3
        assert resolve_major_version("latest") == 3

    def test_hint_wins(self):
        assert resolve_major_version("3.1.0", 2) == 2
        assert resolve_major_version("4.1.0", 3) == 3

    def test_invalid_hint_ignored(self):
        assert resolve_major_version("2.2.19", 7) == 2

    def test_future_major_uses_v4(self):
        assert resolve_major_version("5.0.0") == 4

    def test_pre_v2_uses_default(self):
        assert resolve_major_version("1.9.6") == 3
