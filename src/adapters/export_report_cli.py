"""CLI adapter writing a report CSV export to disk."""

import sys

from sqlalchemy.exc import SQLAlchemyError

from src.infrastructure.container import build_export_use_case
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.infrastructure.settings import DashboardSettings


def main() -> int:
    """Export the configured report period to ``DASHBOARD_EXPORT_DIR``.

    Returns:
        int: Process exit code, 1 when the record store is unreachable.
    """
    logger = get_app_logger()
    settings = DashboardSettings.from_env()
    use_case = build_export_use_case()
    try:
        export = use_case.execute(
            settings.report_type,
            start_date=settings.start_date,
            end_date=settings.end_date,
        )
    except SQLAlchemyError as exc:
        logger.error(f"Failed to export {settings.report_type} report: {exc}")
        return 1

    settings.export_dir.mkdir(parents=True, exist_ok=True)
    target = settings.export_dir / export.filename
    target.write_text(export.content, encoding="utf-8")
    get_usage_logger().info(f"CSV export written: {target}")
    print(f"Exported {export.row_count} rows to {target}.")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
