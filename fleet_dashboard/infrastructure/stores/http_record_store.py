"""Record store reading paged report payloads from the dashboard API."""

from collections.abc import Callable, Iterable, Mapping
from datetime import tzinfo
from typing import Any

import httpx

from fleet_dashboard.application.errors import RecordStoreError
from fleet_dashboard.application.ports.record_store import (
    RecordPage,
    RecordQuery,
    RecordStorePort,
)
from fleet_dashboard.infrastructure.logging.logger import get_app_logger

PayloadMapper = Callable[[Iterable[Mapping], tzinfo | None], tuple]


class HttpRecordStore(RecordStorePort):
    """RecordStorePort implementation backed by an ``httpx.Client``.

    Each page is a GET on ``<base_url>/<endpoint>`` returning
    ``{"data": [...], "meta": {"filter_count": n}}``. The ``data`` list is
    handed to the view's payload mapper.
    """

    def __init__(
        self,
        client: httpx.Client,
        endpoint: str,
        mapper: PayloadMapper,
        tz: tzinfo | None = None,
        logger=None,
    ) -> None:
        """Initialize the store.

        Args:
            client: HTTP client configured with the API base URL.
            endpoint: Path of the report endpoint, relative to the base URL.
            mapper: Callable turning the ``data`` list into group trees.
            tz: Zone handed to the mapper for local day keys.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._client = client
        self._endpoint = endpoint.strip("/")
        self._mapper = mapper
        self._tz = tz
        self._logger = logger or get_app_logger()

    def fetch_page(self, query: RecordQuery) -> RecordPage:
        """Fetch and map one page of records.

        Args:
            query: Page number, page size and server-side filters.

        Returns:
            RecordPage: Mapped items and the reported filter count.

        Raises:
            RecordStoreError: On transport errors, error statuses or a
                malformed body.
        """
        params: dict[str, Any] = {
            "page": query.page,
            "limit": query.limit,
            "meta": "filter_count",
        }
        if query.search:
            params["search"] = query.search
        if query.date_filter:
            params["dateFilter"] = query.date_filter
        try:
            response = self._client.get(f"/{self._endpoint}", params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as exc:
            self._logger.error(f"Timeout fetching {self._endpoint}: {exc}")
            raise RecordStoreError(
                f"Request timeout for {self._endpoint}"
            ) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            self._logger.error(f"{self._endpoint} returned HTTP {status}")
            raise RecordStoreError(
                f"API error {status} for {self._endpoint}"
            ) from exc
        except httpx.RequestError as exc:
            self._logger.error(f"Request error for {self._endpoint}: {exc}")
            raise RecordStoreError(
                f"Request error for {self._endpoint}: {exc}"
            ) from exc
        except ValueError as exc:
            self._logger.error(f"Malformed JSON from {self._endpoint}")
            raise RecordStoreError(
                f"Malformed response from {self._endpoint}"
            ) from exc
        return self._to_page(payload)

    def _to_page(self, payload) -> RecordPage:
        if not isinstance(payload, Mapping):
            raise RecordStoreError(
                f"Unexpected payload from {self._endpoint}: expected an object"
            )
        data = payload.get("data") or []
        if not isinstance(data, list):
            raise RecordStoreError(
                f"Unexpected payload from {self._endpoint}: data is not a list"
            )
        meta = payload.get("meta") or {}
        filter_count = None
        if isinstance(meta, Mapping) and meta.get("filter_count") is not None:
            try:
                filter_count = int(meta["filter_count"])
            except (TypeError, ValueError):
                self._logger.warning(
                    f"Ignoring invalid filter_count {meta['filter_count']!r}"
                )
        try:
            items = tuple(self._mapper(data, self._tz))
        except (AttributeError, TypeError) as exc:
            raise RecordStoreError(
                f"Malformed records from {self._endpoint}: {exc}"
            ) from exc
        return RecordPage(
            items=items,
            filter_count=filter_count,
            fetched_count=len(data),
        )

    def close(self) -> None:
        self._client.close()


def build_http_client(base_url: str, timeout: float) -> httpx.Client:
    """Return an HTTP client for the dashboard API."""
    return httpx.Client(
        base_url=base_url,
        headers={"Accept": "application/json"},
        timeout=timeout,
    )


__all__ = ["HttpRecordStore", "build_http_client"]
