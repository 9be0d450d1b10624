"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from datetime import date
import os
from pathlib import Path

import dotenv

from src.domain.constants import REPORT_TYPES
from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root


@dataclass(frozen=True)
class DashboardSettings:
    """Settings for the reporting dashboard and command-line tools.

    Attributes:
        currency_code: Currency the stored amounts are expressed in.
        report_types: Departments offered in report selectors.
        export_dir: Directory where CSV exports are written.
        report_type: Report type selected for command-line runs.
        start_date: Optional lower bound for command-line runs.
        end_date: Optional upper bound for command-line runs.
    """

    currency_code: str = "AFN"
    report_types: tuple[str, ...] = REPORT_TYPES
    export_dir: Path | None = None
    report_type: str = "laboratory"
    start_date: date | None = None
    end_date: date | None = None

    @classmethod
    def from_env(cls) -> "DashboardSettings":
        """Build settings from environment variables.

        Returns:
            DashboardSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        currency_code = (
            os.getenv("DASHBOARD_CURRENCY", "AFN").strip().upper() or "AFN"
        )
        report_types = cls._parse_report_types(
            os.getenv("DASHBOARD_REPORT_TYPES"),
            logger=logger,
        )
        raw_export_dir = os.getenv("DASHBOARD_EXPORT_DIR")
        export_dir = (
            Path(raw_export_dir).expanduser().resolve()
            if raw_export_dir
            else get_project_root() / "exports"
        )
        report_type = os.getenv("REPORT_TYPE", report_types[0]).strip().lower()
        if report_type not in report_types:
            logger.warning(
                f"Unknown REPORT_TYPE '{report_type}'. "
                f"Falling back to {report_types[0]}."
            )
            report_type = report_types[0]
        return cls(
            currency_code=currency_code,
            report_types=report_types,
            export_dir=export_dir,
            report_type=report_type,
            start_date=parse_iso_date(os.getenv("REPORT_START_DATE"), logger),
            end_date=parse_iso_date(os.getenv("REPORT_END_DATE"), logger),
        )

    @staticmethod
    def _parse_report_types(raw: str | None, logger) -> tuple[str, ...]:
        """Parse a comma separated list of report types.

        Args:
            raw: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            tuple[str, ...]: Known report types, all of them when unset.
        """
        if not raw:
            return REPORT_TYPES
        selected = []
        for item in raw.split(","):
            cleaned = item.strip().lower()
            if not cleaned:
                continue
            if cleaned not in REPORT_TYPES:
                logger.warning(f"Ignoring unknown report type '{cleaned}'")
                continue
            if cleaned not in selected:
                selected.append(cleaned)
        return tuple(selected) or REPORT_TYPES


def parse_iso_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Full ISO-8601 timestamps are accepted and truncated to their date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when missing or invalid.
    """
    if not value or not value.strip():
        return None
    cleaned = value.strip()
    try:
        return date.fromisoformat(cleaned[:10])
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


__all__ = ["DashboardSettings", "parse_iso_date"]
