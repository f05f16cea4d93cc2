"""Tests for domain entities."""

import pytest

from resync.domain.entities import (
    EntityTypeDescriptor,
    SkipReason,
    SyncOutcome,
    SyncStatus,
    SyncSummary,
    TypeNotice,
)
from resync.domain.results import Fail, Ok, Skip


def test_descriptor_requires_type_name():
    """Test descriptors reject blank type names."""
    with pytest.raises(ValueError, match="type_name cannot be empty"):
        EntityTypeDescriptor(type_name="  ")


def test_unresolved_descriptor_has_only_name():
    descriptor = EntityTypeDescriptor.unresolved("Foo")
    assert descriptor == EntityTypeDescriptor("Foo", None, None)


def test_success_outcome():
    outcome = SyncOutcome.success("1")
    assert outcome.succeeded is True
    assert outcome.cause is None


def test_failure_outcome_requires_cause():
    with pytest.raises(ValueError, match="requires a cause"):
        SyncOutcome(record_id="1", status=SyncStatus.FAILURE)


def test_success_outcome_rejects_cause():
    with pytest.raises(ValueError, match="cannot carry a cause"):
        SyncOutcome(record_id="1", status=SyncStatus.SUCCESS, cause="oops")


def test_sync_status_is_string_enum():
    assert SyncStatus.FAILURE == "failure"


class TestSyncSummary:
    """Tests for SyncSummary invariants."""

    def test_valid_summary(self):
        summary = SyncSummary(
            type_name="Book",
            index_name="books",
            total_records=3,
            succeeded_count=2,
            failed_count=1,
            failures=(SyncOutcome.failure("2", "bad"),),
        )
        assert summary.processed_count == 3
        assert summary.has_errors is True

    def test_summary_without_failures(self):
        summary = SyncSummary("Book", "books", 0, 0, 0)
        assert summary.has_errors is False

    def test_processed_cannot_exceed_total(self):
        with pytest.raises(ValueError, match="only 1 were counted"):
            SyncSummary("Book", "books", 1, 2, 0)

    def test_failure_list_must_match_count(self):
        with pytest.raises(ValueError, match="does not match"):
            SyncSummary("Book", "books", 5, 0, 2, (SyncOutcome.failure("1", "x"),))

    def test_failure_ids_must_be_unique(self):
        failures = (SyncOutcome.failure("1", "x"), SyncOutcome.failure("1", "y"))
        with pytest.raises(ValueError, match="Duplicate failure ids"):
            SyncSummary("Book", "books", 5, 0, 2, failures)

    def test_negative_counts_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            SyncSummary("Book", "books", -1, 0, 0)


@pytest.mark.parametrize(
    ("reason", "is_error"),
    [
        (SkipReason.EMPTY, False),
        (SkipReason.REPOSITORY_NOT_FOUND, True),
        (SkipReason.NO_IDENTIFIER, True),
        (SkipReason.NO_INDEX_METADATA, True),
    ],
)
def test_type_notice_is_error(reason, is_error):
    assert TypeNotice("Book", reason, "message").is_error is is_error


def test_results_compare_by_value():
    assert Ok(3) == Ok(3)
    assert Fail("x") != Fail("y")
    assert Skip(SkipReason.EMPTY, "m") == Skip(SkipReason.EMPTY, "m")
