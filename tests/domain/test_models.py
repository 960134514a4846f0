"""Tests for ledger value objects."""

from decimal import Decimal

from bankroll.domain.models import (
    ImportSummary,
    OperationResult,
    StatsResult,
    ValidationIssue,
)


def test_import_summary_describes_added_records():
    summary = ImportSummary(platforms=1, live_sessions=2, online_sessions=1)

    assert summary.total == 4
    assert summary.describe() == "3 sessions, 1 platform were added."


def test_import_summary_reports_duplicates_only():
    summary = ImportSummary(skipped={"platforms": 2})

    assert summary.describe() == (
        "No new records were added (all duplicates skipped)."
    )


def test_operation_result_separates_warnings():
    warning = ValidationIssue("W", "careful", blocking=False)
    result = OperationResult(
        ok=True,
        issues=(warning, ValidationIssue("E", "stop")),
    )

    assert result.warnings == (warning,)


def test_stats_result_rates_handle_empty_totals():
    empty = StatsResult()
    filled = StatsResult(
        net_result=Decimal("100"),
        total_hours=Decimal("4"),
        session_count=2,
    )

    assert empty.hourly_rate == Decimal("0")
    assert empty.average_result == Decimal("0")
    assert filled.hourly_rate == Decimal("25")
    assert filled.average_result == Decimal("50")
