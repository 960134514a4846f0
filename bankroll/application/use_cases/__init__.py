"""Application use cases package."""

from .export_ledger import ExportLedgerUseCase, export_file_name
from .get_platform_summary import GetPlatformSummaryUseCase, PlatformSummary
from .get_stats import GetStatsUseCase
from .import_ledger import ImportLedgerUseCase
from .record_adjustment import RecordAdjustmentUseCase
from .record_transfer import RecordTransferUseCase
from .reconcile_session import ReconcileSessionUseCase
from .session_entry import LiveSessionEntryUseCase, OnlineSessionEntryUseCase
from .verify_session import VerifySessionUseCase

__all__ = [
    "ExportLedgerUseCase",
    "export_file_name",
    "GetPlatformSummaryUseCase",
    "PlatformSummary",
    "GetStatsUseCase",
    "ImportLedgerUseCase",
    "RecordAdjustmentUseCase",
    "RecordTransferUseCase",
    "ReconcileSessionUseCase",
    "LiveSessionEntryUseCase",
    "OnlineSessionEntryUseCase",
    "VerifySessionUseCase",
]
