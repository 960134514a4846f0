"""CLI adapter merging a ledger backup document into the ledger.

The source file comes from ``LEDGER_IMPORT_FILE``.
"""

from decimal import Decimal
import json
import os
from pathlib import Path

from bankroll.application.use_cases.import_ledger import ImportLedgerUseCase
from bankroll.domain.errors import ImportFormatError
from bankroll.infrastructure.container import build_ledger_repository
from bankroll.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


def main() -> None:
    """Import the file named by LEDGER_IMPORT_FILE."""
    logger = get_app_logger()
    get_usage_logger().info("import_ledger_cli invoked")
    source = os.getenv("LEDGER_IMPORT_FILE")
    if not source:
        logger.warning("LEDGER_IMPORT_FILE is required to import a ledger.")
        return

    path = Path(source).expanduser()
    try:
        with path.open(encoding="utf-8") as handle:
            document = json.load(handle, parse_float=Decimal)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error(f"Cannot read {path}: {exc}")
        print(f"Import failed: cannot read {path}.")
        return

    use_case = ImportLedgerUseCase(build_ledger_repository(), logger=logger)
    try:
        summary = use_case.execute(document)
    except ImportFormatError as exc:
        logger.error(f"Invalid export document {path}: {exc}")
        print(f"Import failed: {exc}")
        return

    print(summary.describe())


if __name__ == "__main__":  # pragma: no cover
    main()
