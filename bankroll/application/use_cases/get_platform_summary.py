"""Use case summarising money moved through a platform."""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from bankroll.application.ports.ledger_repository import LedgerRepositoryPort
from bankroll.domain.models import Platform
from bankroll.domain.services.calculations import (
    average_deposit_rate,
    latest_conversion_rate,
    platform_net_result,
    total_deposited,
    total_withdrawn,
)


@dataclass(frozen=True)
class PlatformSummary:
    """Aggregates for one platform.

    Attributes:
        platform: The platform summarised.
        total_deposited: Sum of amounts sent to the platform.
        total_withdrawn: Sum of amounts received from the platform.
        average_deposit_rate: Platform units per base unit over FX deposits.
        latest_rate: Base units per platform unit from the latest FX
            transfer, or None.
        net_result: Withdrawn plus current value minus deposited.
    """

    platform: Platform
    total_deposited: Decimal
    total_withdrawn: Decimal
    average_deposit_rate: Decimal
    latest_rate: Decimal | None
    net_result: Decimal


class GetPlatformSummaryUseCase:
    """Read a platform's transfers and derive its aggregates."""

    def __init__(self, repository: LedgerRepositoryPort) -> None:
        self._repository = repository

    def execute(self, platform_id: UUID) -> PlatformSummary | None:
        """Return the summary of ``platform_id``, or None if unknown."""
        platform = self._repository.get_platform(platform_id)
        if platform is None:
            return None
        deposits = self._repository.list_deposits(platform.id)
        withdrawals = self._repository.list_withdrawals(platform.id)
        return PlatformSummary(
            platform=platform,
            total_deposited=total_deposited(deposits),
            total_withdrawn=total_withdrawn(withdrawals),
            average_deposit_rate=average_deposit_rate(deposits),
            latest_rate=latest_conversion_rate(deposits, withdrawals),
            net_result=platform_net_result(platform, deposits, withdrawals),
        )


__all__ = ["GetPlatformSummaryUseCase", "PlatformSummary"]
