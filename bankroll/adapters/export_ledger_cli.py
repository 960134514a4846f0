"""CLI adapter writing the ledger backup document to disk.

The destination comes from ``LEDGER_EXPORT_PATH``; by default the file is
written under ``<project>/exports/`` with a date-stamped name.
"""

from datetime import datetime
import json
import os
from pathlib import Path

from bankroll.application.use_cases.export_ledger import (
    ExportLedgerUseCase,
    export_file_name,
)
from bankroll.infrastructure.container import (
    build_ledger_repository,
    build_settings,
)
from bankroll.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from bankroll.utils.utils import get_project_root


def _resolve_destination(now: datetime) -> Path:
    """Return the export file path.

    Args:
        now: Export timestamp used for the default file name.

    Returns:
        Path: Configured path, or the default under ``exports/``.
    """
    configured = os.getenv("LEDGER_EXPORT_PATH")
    if configured:
        path = Path(configured).expanduser()
        if path.is_dir():
            return path / export_file_name(now)
        return path
    return get_project_root() / "exports" / export_file_name(now)


def main() -> None:
    """Export every ledger record to a JSON file."""
    logger = get_app_logger()
    get_usage_logger().info("export_ledger_cli invoked")
    now = datetime.now()
    use_case = ExportLedgerUseCase(
        build_ledger_repository(),
        build_settings(),
        clock=lambda: now,
        logger=logger,
    )
    document = use_case.execute()

    destination = _resolve_destination(now)
    destination.parent.mkdir(parents=True, exist_ok=True)
    with destination.open("w", encoding="utf-8") as handle:
        json.dump(document, handle, indent=2, sort_keys=True)
    logger.info(f"Wrote ledger export to {destination}")

    session_count = len(document["liveSessions"]) + len(
        document["onlineSessions"]
    )
    print(
        f"Exported {session_count} sessions and "
        f"{len(document['platforms'])} platforms to {destination}."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
