"""CLI adapter closing a ledger month into the history.

By default the previous calendar month is closed, which makes the command
suitable for a job running on the first day of each month.
"""

from datetime import date
import os

from src.application.use_cases.close_month import CloseMonthUseCase
from src.domain.services.calendar import (
    month_name,
    month_number,
    previous_month,
)
from src.infrastructure.container import (
    build_ledger_repository,
    build_ledger_sync_engine,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings
from src.utils.currency import format_currency, translate_month


def _resolve_period(logger) -> tuple[str, int] | None:
    """Return the month to close from CLOSE_MONTH/CLOSE_YEAR.

    Args:
        logger: Logger used for warnings.

    Returns:
        tuple[str, int] | None: Month name and year, or None when invalid.
    """
    default = previous_month(date.today())
    raw_month = os.getenv("CLOSE_MONTH", "").strip()
    month = (
        translate_month(raw_month).lower() if raw_month else month_name(default)
    )
    if month_number(month) is None:
        logger.warning(f"Invalid month '{month}'. Expected e.g. 'janeiro'.")
        return None
    raw_year = os.getenv("CLOSE_YEAR", "").strip()
    if not raw_year:
        return month, default.year
    try:
        return month, int(raw_year)
    except ValueError:
        logger.warning(f"Invalid year '{raw_year}'.")
        return None


def main() -> None:
    """Close the configured month and print its totals."""
    logger = get_app_logger()
    period = _resolve_period(logger)
    if period is None:
        return
    month, year = period

    settings = LedgerSettings.from_env()
    engine = build_ledger_sync_engine(settings=settings)
    try:
        repository = build_ledger_repository(settings=settings)
        closed = CloseMonthUseCase(
            ledger_repository=repository,
            engine=engine,
            logger=logger,
            user_id=settings.user_id,
        ).execute(month=month, year=year)
    except RuntimeError as exc:
        logger.error(str(exc))
        return
    finally:
        engine.dispose()

    print(
        f"Closed {month} {year}: "
        f"income={format_currency(closed.total_income)}, "
        f"expenses={format_currency(closed.total_expenses)}, "
        f"remaining={format_currency(closed.remaining_income)}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
