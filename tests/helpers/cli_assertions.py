"""CLI output assertion helpers for reducing test brittleness.

These helpers prioritize semantic assertions (exit codes, file existence) over
exact string matching. When output validation is necessary, they use regex
patterns to be resilient to cosmetic changes like colors or wording updates.

Available helpers:
- assert_command_success/failed: Exit code validation
- assert_output_matches/contains: Pattern and substring matching
- assert_error_message: Error and hint detection
"""

import re

from click.testing import Result


def assert_command_success(result: Result, *, context: str = "") -> None:
    """Assert that a CLI command succeeded.

    Args:
        result: Click test runner Result object.
        context: Optional context string for error messages.

    Example:
        result = runner.invoke(cli, ["populate"])
        assert_command_success(result, context="resync populate")
    """
    ctx = f" ({context})" if context else ""
    assert result.exit_code == 0, (
        f"Command failed{ctx}:\n"
        f"  Exit code: {result.exit_code}\n"
        f"  Output: {result.output[:500]}\n"
        f"  Exception: {result.exception!r}"
    )


def assert_command_failed(
    result: Result,
    *,
    expected_code: int = 1,
    context: str = "",
) -> None:
    """Assert that a CLI command failed with expected exit code.

    Args:
        result: Click test runner Result object.
        expected_code: Expected non-zero exit code (default: 1).
        context: Optional context string for error messages.
    """
    ctx = f" ({context})" if context else ""
    assert result.exit_code == expected_code, (
        f"Expected command to fail{ctx} with code {expected_code}, "
        f"but got {result.exit_code}:\n"
        f"  Output: {result.output[:500]}"
    )


def assert_output_matches(
    result: Result,
    pattern: str,
    *,
    flags: int = 0,
    context: str = "",
) -> re.Match[str]:
    """Assert that output matches a regex pattern.

    Returns:
        The regex Match object for further inspection if needed.

    Example:
        assert_output_matches(result, r"Synchronized Documents: \\d+")
    """
    ctx = f" ({context})" if context else ""
    match = re.search(pattern, result.output, flags)
    assert match is not None, (
        f"Pattern not found{ctx}:\n"
        f"  Pattern: {pattern}\n"
        f"  Output: {result.output[:500]}"
    )
    return match


def assert_output_contains(
    result: Result,
    *substrings: str,
    context: str = "",
) -> None:
    """Assert that output contains all specified substrings."""
    ctx = f" ({context})" if context else ""
    for substring in substrings:
        assert substring in result.output, (
            f"Substring not found{ctx}:\n"
            f"  Expected: {substring!r}\n"
            f"  Output: {result.output[:500]}"
        )


def assert_error_message(result: Result, *, hint: str | None = None) -> None:
    """Assert that output contains an error indication.

    Args:
        result: Click test runner Result object (should have non-zero exit code).
        hint: Optional substring that should appear as a hint.

    Example:
        result = runner.invoke(cli, ["populate", "--source", "cassandra"])
        assert_command_failed(result)
        assert_error_message(result, hint="relational")
    """
    assert re.search(r"error", result.output, re.IGNORECASE) is not None, (
        f"Expected error message in output:\n"
        f"  Output: {result.output[:500]}"
    )

    if hint:
        assert re.search(rf"Hint:.*{re.escape(hint)}", result.output) is not None, (
            f"Expected hint '{hint}' in error output:\n"
            f"  Output: {result.output[:500]}"
        )
