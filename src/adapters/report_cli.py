"""CLI adapter printing a financial report payload as JSON.

The report type and period come from ``REPORT_TYPE``, ``REPORT_START_DATE``
and ``REPORT_END_DATE``.
"""

import json
import sys

from sqlalchemy.exc import SQLAlchemyError

from src.application.use_cases.report_payload import build_report_payload
from src.infrastructure.container import build_report_use_case
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import DashboardSettings


def main() -> int:
    """Compute the configured report and print its payload.

    Returns:
        int: Process exit code, 1 when the record store is unreachable.
    """
    logger = get_app_logger()
    settings = DashboardSettings.from_env()
    use_case = build_report_use_case(settings=settings)
    try:
        report = use_case.execute(
            settings.report_type,
            start_date=settings.start_date,
            end_date=settings.end_date,
        )
    except SQLAlchemyError as exc:
        logger.error(f"Failed to load {settings.report_type} report: {exc}")
        return 1
    print(json.dumps(build_report_payload(report), indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
