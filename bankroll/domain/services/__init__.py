"""Domain services package."""

from .calculations import (
    average_deposit_rate,
    computed_duration,
    convert_to_base,
    effective_hands,
    effective_rate,
    estimated_hands,
    is_profit_transaction,
    latest_conversion_rate,
    live_net_result_base,
    online_net_result_base,
    platform_net_result,
    processing_fee,
    resolve_exchange_rate,
    session_duration,
    session_net_result,
    session_net_result_base,
    total_deposited,
    total_withdrawn,
)
from .normalization import (
    normalize_currency,
    parse_amount,
    parse_blinds,
    parse_bool,
    parse_count,
    parse_rate,
)
from .reconciliation import (
    build_discrepancy_adjustment,
    check_discrepancy,
    check_session_discrepancy,
    requires_balance_check,
)
from .stats import DateFilter, SessionFilter, compute_stats
from .verification import can_verify, evaluate_verification, mark_verified

__all__ = [
    "average_deposit_rate",
    "computed_duration",
    "convert_to_base",
    "effective_hands",
    "effective_rate",
    "estimated_hands",
    "is_profit_transaction",
    "latest_conversion_rate",
    "live_net_result_base",
    "online_net_result_base",
    "platform_net_result",
    "processing_fee",
    "resolve_exchange_rate",
    "session_duration",
    "session_net_result",
    "session_net_result_base",
    "total_deposited",
    "total_withdrawn",
    "normalize_currency",
    "parse_amount",
    "parse_blinds",
    "parse_bool",
    "parse_count",
    "parse_rate",
    "build_discrepancy_adjustment",
    "check_discrepancy",
    "check_session_discrepancy",
    "requires_balance_check",
    "DateFilter",
    "SessionFilter",
    "compute_stats",
    "can_verify",
    "evaluate_verification",
    "mark_verified",
]
