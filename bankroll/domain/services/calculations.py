"""Ledger calculation engine.

Pure derivations of financial figures from entity fields: net results in the
session and base currencies, effective exchange rates, processing fees,
durations and hand estimates. Nothing here performs I/O.

Tips are recorded on live sessions but never enter a net result.
"""

from collections.abc import Iterable
from datetime import datetime
from decimal import ROUND_FLOOR, Decimal

from bankroll.domain.constants import (
    EXCHANGE_INPUT_AMOUNTS,
    EXCHANGE_INPUT_DIRECT,
)
from bankroll.domain.models import (
    Deposit,
    LiveSession,
    OnlineSession,
    Platform,
    Withdrawal,
)
from bankroll.utils.decimal_utils import coerce_decimal, quantize_rate

_ZERO = Decimal("0")
_ONE = Decimal("1")
_SECONDS_PER_HOUR = Decimal("3600")
_MINUTES_PER_HOUR = Decimal("60")


def session_net_result(entry_amount, exit_amount) -> Decimal:
    """Return exit minus entry, in the session currency."""
    return coerce_decimal(exit_amount) - coerce_decimal(entry_amount)


def live_net_result_base(
    buy_in,
    cash_out,
    buy_in_rate,
    cash_out_rate,
) -> Decimal:
    """Return a live session result in the base currency.

    Each leg converts at its own rate because buy-in and cash-out happen at
    different moments.

    Args:
        buy_in: Buy-in amount in the session currency.
        cash_out: Cash-out amount in the session currency.
        buy_in_rate: Base units per session unit when buying in.
        cash_out_rate: Base units per session unit when cashing out.

    Returns:
        Decimal: ``cash_out * cash_out_rate - buy_in * buy_in_rate``.
    """
    return (
        coerce_decimal(cash_out) * coerce_decimal(cash_out_rate, _ONE)
        - coerce_decimal(buy_in) * coerce_decimal(buy_in_rate, _ONE)
    )


def online_net_result_base(
    net_result,
    *,
    platform_currency: str,
    base_currency: str,
    platform_rate=None,
) -> Decimal:
    """Return an online session result in the base currency.

    Args:
        net_result: Result in the platform currency.
        platform_currency: Currency of the platform.
        base_currency: Reporting currency.
        platform_rate: Latest base units per platform unit, if known.

    Returns:
        Decimal: Converted result; unchanged when currencies match.
    """
    net = coerce_decimal(net_result)
    if platform_currency == base_currency:
        return net
    rate = coerce_decimal(platform_rate, _ONE)
    if rate <= 0:
        rate = _ONE
    return net * rate


def session_net_result_base(
    session: LiveSession | OnlineSession,
    *,
    base_currency: str = "",
    platform: Platform | None = None,
    platform_rate=None,
) -> Decimal:
    """Return the base-currency result for either session kind.

    Args:
        session: Live or online session.
        base_currency: Reporting currency (online sessions only).
        platform: Platform of an online session.
        platform_rate: Latest conversion rate of that platform.

    Returns:
        Decimal: Net result in the base currency.
    """
    if isinstance(session, LiveSession):
        return live_net_result_base(
            session.buy_in,
            session.cash_out,
            session.exchange_rate_buy_in,
            session.exchange_rate_cash_out,
        )
    net = session_net_result(session.balance_before, session.balance_after)
    if platform is None:
        return net
    return online_net_result_base(
        net,
        platform_currency=platform.currency,
        base_currency=base_currency,
        platform_rate=platform_rate,
    )


def effective_rate(sent, received) -> Decimal:
    """Back-calculate an exchange rate from two amounts.

    Args:
        sent: Amount leaving the source currency.
        received: Amount arriving in the target currency.

    Returns:
        Decimal: ``received / sent`` to four decimals, or 0 when either
        amount is not positive. Callers treat 0 as "not yet computable".
    """
    sent_value = coerce_decimal(sent)
    received_value = coerce_decimal(received)
    if sent_value <= 0 or received_value <= 0:
        return _ZERO
    return quantize_rate(received_value / sent_value)


def processing_fee(amount_out, amount_in) -> Decimal:
    """Return the value lost in a same-unit transfer (positive = loss)."""
    return coerce_decimal(amount_out) - coerce_decimal(amount_in)


def resolve_exchange_rate(
    mode: str,
    direct_rate=None,
    amount_from=None,
    amount_to=None,
) -> Decimal:
    """Return the rate for the configured exchange-rate input mode.

    Args:
        mode: ``"direct"`` when the user types the rate, ``"amounts"`` when
            the rate is derived from the amounts in both currencies.
        direct_rate: Rate typed by the user.
        amount_from: Amount in the source currency.
        amount_to: Amount in the target currency.

    Returns:
        Decimal: The resolved rate; 0 in amounts mode when not computable.
    """
    if mode == EXCHANGE_INPUT_AMOUNTS:
        return effective_rate(amount_from, amount_to)
    if mode != EXCHANGE_INPUT_DIRECT:
        raise ValueError(f"Unknown exchange rate input mode: {mode}")
    rate = coerce_decimal(direct_rate, _ONE)
    return rate if rate > 0 else _ONE


def convert_to_base(amount, rate) -> Decimal:
    """Convert an amount into the base currency at ``rate``."""
    return coerce_decimal(amount) * coerce_decimal(rate, _ONE)


def session_duration(
    start: datetime,
    end: datetime,
    break_minutes=0,
) -> Decimal:
    """Return played hours between two timestamps, net of breaks.

    The result is floored at zero so long breaks or clock skew never yield
    a negative duration.
    """
    elapsed = Decimal(str((end - start).total_seconds())) / _SECONDS_PER_HOUR
    hours = elapsed - coerce_decimal(break_minutes) / _MINUTES_PER_HOUR
    return max(_ZERO, hours)


def computed_duration(
    session: LiveSession | OnlineSession,
    now: datetime | None = None,
) -> Decimal:
    """Return a session's duration from its stored timestamps.

    Args:
        session: Session to measure.
        now: Current time, used as the end of an active session.

    Returns:
        Decimal: Hours played; the stored duration when timestamps are
        missing.
    """
    if session.start_time is None:
        return max(_ZERO, coerce_decimal(session.duration))
    end = session.end_time or now
    if end is None:
        return max(_ZERO, coerce_decimal(session.duration))
    return session_duration(session.start_time, end, session.break_minutes)


def estimated_hands(duration_hours, hands_per_hour, table_count: int = 1) -> int:
    """Return ``floor(duration * hands_per_hour * tables)``."""
    tables = max(1, int(table_count or 1))
    total = (
        max(_ZERO, coerce_decimal(duration_hours))
        * coerce_decimal(hands_per_hour)
        * tables
    )
    return max(0, int(total.to_integral_value(rounding=ROUND_FLOOR)))


def effective_hands(manual_hands: int, estimate: int) -> int:
    """Return the manual hand count when set, otherwise the estimate."""
    if manual_hands and manual_hands > 0:
        return int(manual_hands)
    return estimate


def is_profit_transaction(
    amount_out,
    amount_in,
    *,
    same_currency: bool,
    is_foreign_exchange: bool,
) -> bool:
    """Return True when a same-unit transfer claims to gain value.

    Only same-currency or non-FX transfers are comparable unit for unit;
    for those, receiving more than was sent is rejected.
    """
    sent = coerce_decimal(amount_out)
    received = coerce_decimal(amount_in)
    if sent <= 0 or received <= 0:
        return False
    return (same_currency or not is_foreign_exchange) and received > sent


def latest_conversion_rate(
    deposits: Iterable[Deposit],
    withdrawals: Iterable[Withdrawal],
) -> Decimal | None:
    """Return base units per platform unit from the latest FX transfer.

    Deposit rates are stored as platform units per base unit and are
    inverted; withdrawal rates are already base per platform unit.

    Returns:
        Decimal | None: Rate of the most recent dated FX transfer, or None
        when the platform has none.
    """
    candidates: list[tuple[datetime, Decimal]] = []
    for deposit in deposits:
        if not deposit.is_foreign_exchange or deposit.date is None:
            continue
        rate = coerce_decimal(deposit.effective_exchange_rate)
        if rate <= 0:
            rate = effective_rate(deposit.amount_sent, deposit.amount_received)
        if rate > 0:
            candidates.append((deposit.date, quantize_rate(_ONE / rate)))
    for withdrawal in withdrawals:
        if not withdrawal.is_foreign_exchange or withdrawal.date is None:
            continue
        rate = coerce_decimal(withdrawal.effective_exchange_rate)
        if rate <= 0:
            rate = effective_rate(
                withdrawal.amount_requested,
                withdrawal.amount_received,
            )
        if rate > 0:
            candidates.append((withdrawal.date, rate))
    if not candidates:
        return None
    return max(candidates, key=lambda item: item[0])[1]


def total_deposited(deposits: Iterable[Deposit]) -> Decimal:
    """Return the total amount sent across ``deposits``."""
    return sum((coerce_decimal(d.amount_sent) for d in deposits), _ZERO)


def total_withdrawn(withdrawals: Iterable[Withdrawal]) -> Decimal:
    """Return the total amount received across ``withdrawals``."""
    return sum((coerce_decimal(w.amount_received) for w in withdrawals), _ZERO)


def average_deposit_rate(deposits: Iterable[Deposit]) -> Decimal:
    """Return platform units per base unit across FX deposits (1 if none)."""
    fx = [d for d in deposits if d.is_foreign_exchange]
    total_sent = sum((coerce_decimal(d.amount_sent) for d in fx), _ZERO)
    total_received = sum((coerce_decimal(d.amount_received) for d in fx), _ZERO)
    if not fx or total_sent <= 0:
        return _ONE
    return total_received / total_sent


def platform_net_result(
    platform: Platform,
    deposits: Iterable[Deposit],
    withdrawals: Iterable[Withdrawal],
) -> Decimal:
    """Return withdrawn + current value - deposited, in the base currency.

    The current balance is valued at the latest conversion rate, falling
    back to the inverse of the average FX deposit rate.
    """
    deposits = list(deposits)
    withdrawals = list(withdrawals)
    rate = latest_conversion_rate(deposits, withdrawals)
    if rate is None:
        rate = _ONE / average_deposit_rate(deposits)
    current_value = coerce_decimal(platform.current_balance) * rate
    return (
        total_withdrawn(withdrawals)
        + current_value
        - total_deposited(deposits)
    )


__all__ = [
    "session_net_result",
    "live_net_result_base",
    "online_net_result_base",
    "session_net_result_base",
    "effective_rate",
    "processing_fee",
    "resolve_exchange_rate",
    "convert_to_base",
    "session_duration",
    "computed_duration",
    "estimated_hands",
    "effective_hands",
    "is_profit_transaction",
    "latest_conversion_rate",
    "total_deposited",
    "total_withdrawn",
    "average_deposit_rate",
    "platform_net_result",
]
