"""Tests for resync.version module."""

import re

from resync.version import __version__


class TestVersion:
    """Tests for version constant."""

    def test_version_is_string(self) -> None:
        """Version should be a string."""
        assert isinstance(__version__, str)

    def test_version_matches_release_pattern(self) -> None:
        """Version should look like major.minor.patch."""
        assert re.match(r"^\d+\.\d+\.\d+", __version__), (
            f"Version '{__version__}' does not match major.minor.patch"
        )
