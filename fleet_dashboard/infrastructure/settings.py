"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import dotenv

from fleet_dashboard.domain.constants import DEFAULT_PAGE_SIZE
from fleet_dashboard.infrastructure.logging.logger import get_app_logger
from fleet_dashboard.utils.utils import get_project_root


@dataclass(frozen=True)
class FleetDashboardSettings:
    """Settings for the record store, paging and exports.

    Attributes:
        record_store: Backend identifier (api or sql).
        api_base_url: Base URL of the dashboard API.
        api_timeout: HTTP timeout in seconds.
        page_size: Rows per on-screen page.
        export_page_size: Items per store page while exporting.
        export_dir: Directory receiving export files.
        debounce_seconds: Quiet period before a live refresh fires.
        timezone: IANA zone used to resolve date ranges.
    """

    record_store: str = "api"
    api_base_url: str = "http://localhost:8055"
    api_timeout: float = 30.0
    page_size: int = DEFAULT_PAGE_SIZE
    export_page_size: int = 200
    export_dir: Optional[Path] = None
    debounce_seconds: float = 0.4
    timezone: str = "Asia/Manila"

    @classmethod
    def from_env(cls) -> "FleetDashboardSettings":
        """Build settings from environment variables.

        Invalid numeric values fall back to their defaults with a warning.

        Returns:
            FleetDashboardSettings: Settings sourced from environment
            variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        defaults = cls()
        raw_export_dir = os.getenv("FLEET_EXPORT_DIR")
        if raw_export_dir:
            export_dir = Path(raw_export_dir).expanduser().resolve()
        else:
            export_dir = get_project_root() / "exports"
        return cls(
            record_store=(
                os.getenv("FLEET_RECORD_STORE", "api").strip().lower()
            ),
            api_base_url=os.getenv(
                "FLEET_API_BASE_URL", defaults.api_base_url
            ).rstrip("/"),
            api_timeout=cls._read_number(
                "FLEET_API_TIMEOUT", defaults.api_timeout, float, logger
            ),
            page_size=cls._read_number(
                "FLEET_PAGE_SIZE", defaults.page_size, int, logger
            ),
            export_page_size=cls._read_number(
                "FLEET_EXPORT_PAGE_SIZE",
                defaults.export_page_size,
                int,
                logger,
            ),
            export_dir=export_dir,
            debounce_seconds=cls._read_number(
                "FLEET_DEBOUNCE_SECONDS",
                defaults.debounce_seconds,
                float,
                logger,
                minimum=0,
            ),
            timezone=os.getenv("FLEET_TIMEZONE", defaults.timezone).strip(),
        )

    def zone(self) -> ZoneInfo | None:
        """Return the configured zone, or None when it is unknown."""
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            get_app_logger().warning(
                f"Unknown timezone {self.timezone!r}; using naive local time"
            )
            return None

    @staticmethod
    def _read_number(name: str, default, cast, logger, minimum=1):
        """Read a number no smaller than ``minimum`` from the environment.

        Args:
            name: Environment variable name.
            default: Value used when unset or invalid.
            cast: Numeric type to convert to.
            logger: Logger used for warnings.
            minimum: Smallest accepted value.

        Returns:
            The parsed value, or the default.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = cast(raw.strip())
        except ValueError:
            logger.warning(f"Invalid {name}={raw!r}; using {default}")
            return default
        if value < minimum:
            logger.warning(f"Out of range {name}={raw!r}; using {default}")
            return default
        return value


__all__ = ["FleetDashboardSettings"]
