"""CLI adapter exporting the ledger change log as CSV.

This module loads a month of ledger data through the sync engine and prints
the resulting change log CSV to standard output.
"""

import os

from src.application.use_cases.load_ledger import LoadLedgerUseCase
from src.infrastructure.container import (
    build_ledger_repository,
    build_ledger_sync_engine,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.currency import translate_month


def _parse_year(value: str | None, logger) -> int | None:
    """Parse a year from an environment value.

    Args:
        value: Raw year string.
        logger: Logger used for warnings.

    Returns:
        int | None: Parsed year or None when missing or invalid.
    """
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid year '{value}'. Using the current year.")
        return None


def main() -> None:
    """Load the configured month and print its change log."""
    logger = get_app_logger()
    raw_month = os.getenv("LEDGER_MONTH", "").strip()
    month = translate_month(raw_month).lower() if raw_month else None
    year = _parse_year(os.getenv("LEDGER_YEAR"), logger)

    engine = build_ledger_sync_engine(with_archive=False)
    try:
        repository = build_ledger_repository()
        use_case = LoadLedgerUseCase(
            ledger_repository=repository,
            engine=engine,
            logger=logger,
        )
        use_case.execute(month=month, year=year)
        print(engine.export_to_csv())
    except RuntimeError as exc:
        logger.error(str(exc))
    finally:
        engine.dispose()


if __name__ == "__main__":  # pragma: no cover
    main()
