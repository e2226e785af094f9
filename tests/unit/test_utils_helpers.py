"""Unit tests for the helpers module."""

from datetime import datetime, timedelta, timezone

from github_artifact_sync.utils.helpers import first_non_empty, generate_head_branch_name


def test_generate_head_branch_name_uses_utc() -> None:
    """Test that the derived head branch carries a UTC timestamp."""
    moment = datetime(2024, 1, 2, 17, 4, 5, tzinfo=timezone(timedelta(hours=2)))
    assert generate_head_branch_name(moment) == "auto/sync/20240102T150405Z"


def test_generate_head_branch_name_custom_prefix() -> None:
    """Test that the prefix can be overridden."""
    moment = datetime(2024, 1, 2, 15, 4, 5, tzinfo=timezone.utc)
    assert generate_head_branch_name(moment, prefix="ci") == "ci/20240102T150405Z"


def test_generate_head_branch_name_differs_over_time() -> None:
    """Test that two runs at different times derive different head branches."""
    first = datetime(2024, 1, 2, 15, 4, 5, tzinfo=timezone.utc)
    assert generate_head_branch_name(first) != generate_head_branch_name(first + timedelta(seconds=1))


def test_generate_head_branch_name_defaults_to_now() -> None:
    """Test that the current time is used when none is given."""
    assert generate_head_branch_name().startswith("auto/sync/")


def test_first_non_empty() -> None:
    """Test that the first non-empty value wins."""
    assert first_non_empty(None, "", "a", "b") == "a"
    assert first_non_empty(None, "") == ""
