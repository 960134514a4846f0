"""Encoding of the ledger backup document.

The document is a JSON object with camelCase keys. Decimal values are
written as strings so they read back exactly. Platform references are
written by platform name so exports can be merged across devices; decoding
maps each name back to a local platform id.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from bankroll.domain.constants import DEFAULT_BASE_CURRENCY, EXPORT_VERSION
from bankroll.domain.errors import ImportFormatError
from bankroll.domain.models import (
    Adjustment,
    Deposit,
    LiveSession,
    OnlineSession,
    Platform,
    ReconciliationState,
    Withdrawal,
)
from bankroll.domain.services.normalization import parse_bool
from bankroll.utils.decimal_utils import coerce_decimal

PLATFORM_NAME_KEY = "platformName"

_GAME_FIELDS = (
    ("gameType", "game_type", "text"),
    ("blinds", "blinds", "text"),
    ("smallBlind", "small_blind", "decimal"),
    ("bigBlind", "big_blind", "decimal"),
    ("straddle", "straddle", "decimal"),
    ("ante", "ante", "decimal"),
    ("tableSize", "table_size", "int"),
)

_TIMING_FIELDS = (
    ("startTime", "start_time", "datetime"),
    ("endTime", "end_time", "datetime"),
    ("duration", "duration", "decimal"),
    ("breakMinutes", "break_minutes", "decimal"),
)

PLATFORM_FIELDS = (
    ("id", "id", "uuid"),
    ("name", "name", "text"),
    ("currency", "currency", "text"),
    ("currentBalance", "current_balance", "decimal"),
    ("createdAt", "created_at", "datetime"),
)

LIVE_SESSION_FIELDS = (
    ("id", "id", "uuid"),
    ("location", "location", "text"),
    ("currency", "currency", "text"),
    ("exchangeRateBuyIn", "exchange_rate_buy_in", "decimal"),
    ("exchangeRateCashOut", "exchange_rate_cash_out", "decimal"),
    ("exchangeRateToBase", "exchange_rate_to_base", "decimal"),
    *_GAME_FIELDS,
    *_TIMING_FIELDS,
    ("buyIn", "buy_in", "decimal"),
    ("cashOut", "cash_out", "decimal"),
    ("tips", "tips", "decimal"),
    ("netProfitLoss", "net_profit_loss", "decimal"),
    ("netProfitLossBase", "net_profit_loss_base", "decimal"),
    ("handsCount", "hands_count", "int"),
    ("notes", "notes", "text"),
    ("isVerified", "is_verified", "bool"),
)

ONLINE_SESSION_FIELDS = (
    ("id", "id", "uuid"),
    *_GAME_FIELDS,
    ("tables", "tables", "int"),
    *_TIMING_FIELDS,
    ("balanceBefore", "balance_before", "decimal"),
    ("balanceAfter", "balance_after", "decimal"),
    ("checkedPlatformBalance", "checked_platform_balance", "decimal"),
    ("netProfitLoss", "net_profit_loss", "decimal"),
    ("netProfitLossBase", "net_profit_loss_base", "decimal"),
    ("exchangeRateToBase", "exchange_rate_to_base", "decimal"),
    ("handsCount", "hands_count", "int"),
    ("notes", "notes", "text"),
    ("isVerified", "is_verified", "bool"),
)

_TRANSFER_FIELDS = (
    ("date", "date", "datetime"),
    ("isForeignExchange", "is_foreign_exchange", "bool"),
    ("effectiveExchangeRate", "effective_exchange_rate", "decimal"),
    ("processingFee", "processing_fee", "decimal"),
    ("method", "method", "text"),
)

DEPOSIT_FIELDS = (
    ("id", "id", "uuid"),
    ("amountSent", "amount_sent", "decimal"),
    ("amountReceived", "amount_received", "decimal"),
    *_TRANSFER_FIELDS,
)

WITHDRAWAL_FIELDS = (
    ("id", "id", "uuid"),
    ("amountRequested", "amount_requested", "decimal"),
    ("amountReceived", "amount_received", "decimal"),
    *_TRANSFER_FIELDS,
)

ADJUSTMENT_FIELDS = (
    ("id", "id", "uuid"),
    ("name", "name", "text"),
    ("amount", "amount", "decimal"),
    ("date", "date", "datetime"),
    ("currency", "currency", "text"),
    ("exchangeRateToBase", "exchange_rate_to_base", "decimal"),
    ("amountBase", "amount_base", "decimal"),
    ("isOnline", "is_online", "bool"),
    ("location", "location", "text"),
    ("notes", "notes", "text"),
)


@dataclass
class LedgerSnapshot:
    """Every ledger record plus the platform names they reference.

    Attributes:
        base_currency: Reporting currency of the exporting ledger.
        export_date: When the document was produced.
        export_version: Document format version.
    """

    base_currency: str = DEFAULT_BASE_CURRENCY
    export_date: datetime | None = None
    export_version: int = EXPORT_VERSION
    platforms: list[Platform] = field(default_factory=list)
    live_sessions: list[LiveSession] = field(default_factory=list)
    online_sessions: list[OnlineSession] = field(default_factory=list)
    deposits: list[Deposit] = field(default_factory=list)
    withdrawals: list[Withdrawal] = field(default_factory=list)
    adjustments: list[Adjustment] = field(default_factory=list)


def _encode_value(kind: str, value: Any) -> Any:
    if value is None:
        return None
    if kind == "decimal":
        return str(value)
    if kind == "uuid":
        return str(value)
    if kind == "datetime":
        return value.isoformat()
    if kind == "bool":
        return bool(value)
    if kind == "int":
        return int(value)
    return value


def _decode_value(kind: str, value: Any, key: str) -> Any:
    if value is None:
        return None
    try:
        if kind == "decimal":
            return coerce_decimal(value)
        if kind == "uuid":
            return UUID(str(value))
        if kind == "datetime":
            raw = str(value)
            if raw.endswith("Z"):
                raw = raw[:-1] + "+00:00"
            return datetime.fromisoformat(raw)
        if kind == "bool":
            flag = parse_bool(value)
            if flag is None:
                raise ValueError(value)
            return flag
        if kind == "int":
            return int(value)
    except (TypeError, ValueError) as exc:
        raise ImportFormatError(f"Invalid value for '{key}': {value!r}") from exc
    return str(value)


def _encode_record(entity, specs, platform_names=None) -> dict[str, Any]:
    record = {
        key: _encode_value(kind, getattr(entity, attr))
        for key, attr, kind in specs
    }
    if platform_names is not None:
        platform_id = getattr(entity, "platform_id", None)
        record[PLATFORM_NAME_KEY] = platform_names.get(platform_id)
    return record


def _decode_record(raw, specs, section: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise ImportFormatError(f"Entries of '{section}' must be objects")
    values = {}
    for key, attr, kind in specs:
        if key in raw and raw[key] is not None:
            values[attr] = _decode_value(kind, raw[key], key)
    return values


def encode_snapshot(snapshot: LedgerSnapshot) -> dict[str, Any]:
    """Return the JSON-ready export document for ``snapshot``.

    Args:
        snapshot: Records to export.

    Returns:
        dict[str, Any]: Document with camelCase keys and ISO-8601 dates.
    """
    names = {platform.id: platform.name for platform in snapshot.platforms}
    return {
        "exportVersion": snapshot.export_version,
        "exportDate": _encode_value("datetime", snapshot.export_date),
        "baseCurrency": snapshot.base_currency,
        "platforms": [
            _encode_record(p, PLATFORM_FIELDS) for p in snapshot.platforms
        ],
        "liveSessions": [
            _encode_record(s, LIVE_SESSION_FIELDS)
            for s in snapshot.live_sessions
        ],
        "onlineSessions": [
            _encode_record(s, ONLINE_SESSION_FIELDS, names)
            for s in snapshot.online_sessions
        ],
        "deposits": [
            _encode_record(d, DEPOSIT_FIELDS, names) for d in snapshot.deposits
        ],
        "withdrawals": [
            _encode_record(w, WITHDRAWAL_FIELDS, names)
            for w in snapshot.withdrawals
        ],
        "adjustments": [
            _encode_record(a, ADJUSTMENT_FIELDS, names)
            for a in snapshot.adjustments
        ],
    }


def _section(document: dict, key: str) -> list:
    entries = document.get(key, [])
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ImportFormatError(f"'{key}' must be a list")
    return entries


def _platform_id(raw: dict, platform_ids: Mapping[str, UUID]) -> UUID | None:
    name = raw.get(PLATFORM_NAME_KEY)
    if not name:
        return None
    return platform_ids.get(str(name))


def _check_document(document: Any) -> None:
    if not isinstance(document, dict):
        raise ImportFormatError("Export document must be a JSON object")
    if "exportVersion" not in document:
        raise ImportFormatError("Export document has no exportVersion")


def decode_platforms(document: Any) -> list[Platform]:
    """Parse the platforms section of an export document.

    Raises:
        ImportFormatError: If the document or a platform entry is invalid.
    """
    _check_document(document)
    base_currency = str(document.get("baseCurrency") or DEFAULT_BASE_CURRENCY)
    platforms = []
    for raw in _section(document, "platforms"):
        values = _decode_record(raw, PLATFORM_FIELDS, "platforms")
        if not values.get("name"):
            raise ImportFormatError("Platform entries require a name")
        values.setdefault("currency", base_currency)
        platforms.append(Platform(**values))
    return platforms


def decode_document(
    document: Any,
    platform_ids: Mapping[str, UUID] | None = None,
) -> LedgerSnapshot:
    """Parse an export document into entities.

    Platform references resolve through ``platform_ids``; by default they
    resolve to the platforms of the document itself. Unknown names leave
    ``platform_id`` empty. Online sessions come back RESOLVED when verified
    and UNRESOLVED otherwise.

    Args:
        document: Parsed JSON object.
        platform_ids: Local platform id per platform name.

    Returns:
        LedgerSnapshot: Decoded records.

    Raises:
        ImportFormatError: If the document or one of its values is invalid.
    """
    platforms = decode_platforms(document)
    if platform_ids is None:
        platform_ids = {platform.name: platform.id for platform in platforms}

    snapshot = LedgerSnapshot(
        base_currency=str(
            document.get("baseCurrency") or DEFAULT_BASE_CURRENCY
        ),
        export_date=_decode_value(
            "datetime", document.get("exportDate"), "exportDate"
        ),
        export_version=_decode_value(
            "int", document["exportVersion"], "exportVersion"
        ),
        platforms=platforms,
    )

    for raw in _section(document, "liveSessions"):
        values = _decode_record(raw, LIVE_SESSION_FIELDS, "liveSessions")
        snapshot.live_sessions.append(LiveSession(**values))

    for raw in _section(document, "onlineSessions"):
        values = _decode_record(raw, ONLINE_SESSION_FIELDS, "onlineSessions")
        values["platform_id"] = _platform_id(raw, platform_ids)
        values["reconciliation"] = (
            ReconciliationState.RESOLVED
            if values.get("is_verified")
            else ReconciliationState.UNRESOLVED
        )
        snapshot.online_sessions.append(OnlineSession(**values))

    for raw in _section(document, "deposits"):
        values = _decode_record(raw, DEPOSIT_FIELDS, "deposits")
        values.setdefault("amount_sent", Decimal("0"))
        values.setdefault("amount_received", Decimal("0"))
        snapshot.deposits.append(
            Deposit(platform_id=_platform_id(raw, platform_ids), **values)
        )

    for raw in _section(document, "withdrawals"):
        values = _decode_record(raw, WITHDRAWAL_FIELDS, "withdrawals")
        values.setdefault("amount_requested", Decimal("0"))
        values.setdefault("amount_received", Decimal("0"))
        snapshot.withdrawals.append(
            Withdrawal(platform_id=_platform_id(raw, platform_ids), **values)
        )

    for raw in _section(document, "adjustments"):
        values = _decode_record(raw, ADJUSTMENT_FIELDS, "adjustments")
        values.setdefault("name", "")
        values.setdefault("amount", Decimal("0"))
        values.setdefault("currency", snapshot.base_currency)
        values["platform_id"] = _platform_id(raw, platform_ids)
        snapshot.adjustments.append(Adjustment(**values))

    return snapshot


__all__ = [
    "LedgerSnapshot",
    "PLATFORM_NAME_KEY",
    "encode_snapshot",
    "decode_platforms",
    "decode_document",
]
