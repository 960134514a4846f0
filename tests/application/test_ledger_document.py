"""Tests for the export document codec."""

from decimal import Decimal

import pytest

from bankroll.application.use_cases.ledger_document import (
    decode_document,
    decode_platforms,
)
from bankroll.domain.errors import ImportFormatError
from bankroll.domain.models import ReconciliationState


@pytest.mark.parametrize(
    "document",
    [
        [],
        "export",
        {"platforms": []},
        {"exportVersion": 1, "platforms": {}},
        {"exportVersion": 1, "platforms": [{"currency": "USD"}]},
        {"exportVersion": 1, "liveSessions": ["session"]},
        {"exportVersion": 1, "onlineSessions": [{"startTime": "yesterday"}]},
    ],
)
def test_malformed_documents_raise(document):
    with pytest.raises(ImportFormatError):
        decode_document(document)


def test_decode_applies_defaults_and_resolves_names():
    document = {
        "exportVersion": 1,
        "exportDate": "2024-03-01T19:00:00Z",
        "baseCurrency": "EUR",
        "platforms": [{"name": "Stars"}],
        "onlineSessions": [
            {"platformName": "Stars", "balanceAfter": 120.5},
            {"platformName": "Unknown", "isVerified": True},
        ],
        "adjustments": [{"name": "Bonus", "amount": 5}],
    }

    snapshot = decode_document(document)

    platform = snapshot.platforms[0]
    assert platform.currency == "EUR"
    assert snapshot.export_date.tzinfo is not None
    first, second = snapshot.online_sessions
    assert first.platform_id == platform.id
    assert first.balance_after == Decimal("120.5")
    assert first.reconciliation is ReconciliationState.UNRESOLVED
    assert second.platform_id is None
    assert second.reconciliation is ReconciliationState.RESOLVED
    assert snapshot.adjustments[0].currency == "EUR"


def test_decode_platforms_keeps_ids():
    platform_id = "6f1c1f4e-8f33-4d5f-9a56-3e2c7c1d2b10"

    platforms = decode_platforms(
        {
            "exportVersion": 1,
            "platforms": [{"id": platform_id, "name": "GG", "currency": "USD"}],
        }
    )

    assert str(platforms[0].id) == platform_id


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (True, True),
        (False, False),
        ("false", False),
        ("True", True),
        (0, False),
    ],
)
def test_decode_reads_text_flags(raw, expected):
    snapshot = decode_document(
        {"exportVersion": 1, "liveSessions": [{"isVerified": raw}]}
    )

    assert snapshot.live_sessions[0].is_verified is expected


def test_decode_rejects_unreadable_flags():
    with pytest.raises(ImportFormatError):
        decode_document(
            {"exportVersion": 1, "deposits": [{"isForeignExchange": "maybe"}]}
        )
