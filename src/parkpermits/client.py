"""Read-only client for the permit administration API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from .const import (
    APPLICATIONS_ENDPOINT,
    DEFAULT_API_URI,
    DEFAULT_HEADERS,
    DEFAULT_TIMEOUT_SECONDS,
    INVOICES_ENDPOINT,
    PARKS_ENDPOINT,
    PERMIT_TEMPLATES_ENDPOINT,
    PERMITS_ENDPOINT,
)
from .exceptions import ApiError, AuthError, NetworkError, NotFoundError, ValidationError
from .mapping import (
    map_application,
    map_invoice,
    map_list,
    map_park,
    map_permit,
    map_permit_template,
)
from .models import Application, Invoice, Park, Permit, PermitTemplate, Snapshot

_LOGGER = logging.getLogger(__name__)
_DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=DEFAULT_TIMEOUT_SECONDS)


class Client:
    """Fetch applications, invoices and park data for the engine."""

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        base_url: str | None = None,
        api_uri: str | None = DEFAULT_API_URI,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._base_url = self._normalize_base_url(base_url)
        self._api_uri = self._normalize_api_uri(api_uri)
        self._timeout = timeout or _DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)
        self._headers = {**DEFAULT_HEADERS, **(headers or {})}

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def list_applications(self) -> list[Application]:
        data = await self._get_json(APPLICATIONS_ENDPOINT)
        return map_list(data, map_application, "applications")

    async def get_application(self, application_id: int) -> Application:
        if isinstance(application_id, bool) or not isinstance(application_id, int):
            raise ValidationError("application_id must be an integer.")
        data = await self._get_json(f"{APPLICATIONS_ENDPOINT}/{application_id}")
        return map_application(data)

    async def list_invoices(self) -> list[Invoice]:
        data = await self._get_json(INVOICES_ENDPOINT)
        return map_list(data, map_invoice, "invoices")

    async def list_permits(self) -> list[Permit]:
        data = await self._get_json(PERMITS_ENDPOINT)
        return map_list(data, map_permit, "permits")

    async def list_parks(self) -> list[Park]:
        data = await self._get_json(PARKS_ENDPOINT)
        return map_list(data, map_park, "parks")

    async def list_permit_templates(self) -> list[PermitTemplate]:
        data = await self._get_json(PERMIT_TEMPLATES_ENDPOINT)
        return map_list(data, map_permit_template, "permit templates")

    async def load_snapshot(self) -> Snapshot:
        """Fetch everything the resolver, checker and reports need in one go."""
        _LOGGER.debug("Snapshot load started")
        applications, invoices, parks, templates, permits = await asyncio.gather(
            self.list_applications(),
            self.list_invoices(),
            self.list_parks(),
            self.list_permit_templates(),
            self.list_permits(),
        )
        _LOGGER.debug(
            "Snapshot load completed (%d applications, %d invoices)",
            len(applications),
            len(invoices),
        )
        return Snapshot(
            applications=applications,
            invoices=invoices,
            parks=parks,
            templates=templates,
            permits=permits,
        )

    def _build_url(self, path: str) -> str:
        if not isinstance(path, str) or not path:
            raise ValidationError("Path must be a non-empty string.")
        if path.startswith("http://") or path.startswith("https://"):
            raise ValidationError("Use relative paths when building API requests.")
        if self._base_url is None:
            raise ValidationError("base_url is required to build API requests.")
        normalized_path = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{self._api_uri}{normalized_path}"

    async def _get_json(self, path: str) -> Any:
        url = self._build_url(path)
        _LOGGER.debug("GET %s started", path)
        data = await self._request("GET", url)
        _LOGGER.debug("GET %s completed", path)
        return data

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        session = self._ensure_session()
        retries = self._retry_count if method.upper() == "GET" else 0
        attempts = retries + 1
        last_error: Exception | None = None
        for attempt in range(attempts):
            try:
                async with session.request(
                    method,
                    url,
                    headers=self._headers,
                    timeout=self._timeout,
                    **kwargs,
                ) as response:
                    await self._raise_for_status(response)
                    try:
                        return await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as exc:
                        raise ApiError("Response did not contain valid JSON.") from exc
            except (aiohttp.ClientError, TimeoutError) as exc:
                last_error = exc
                if attempt >= attempts - 1:
                    raise NetworkError("Network request failed.") from exc
                _LOGGER.warning("Request to %s failed, retrying (%d/%d)", url, attempt + 1, retries)
        if last_error is not None:
            raise NetworkError("Network request failed.") from last_error
        raise ApiError("Request failed.")

    async def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        if 200 <= response.status < 300:
            return
        if response.status in (401, 403):
            raise AuthError("Authentication failed.")
        message = await self._error_message_from_response(response)
        if response.status == 404:
            raise NotFoundError(message or "Record not found.")
        raise ApiError(message or f"API request failed with status {response.status}.")

    async def _error_message_from_response(self, response: aiohttp.ClientResponse) -> str | None:
        try:
            data = await response.json()
        except (aiohttp.ContentTypeError, ValueError):
            return None
        if isinstance(data, dict):
            message = data.get("message")
            if isinstance(message, str) and message.strip():
                return message.strip()
        return None

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    def _normalize_base_url(self, base_url: str | None) -> str | None:
        if base_url is None:
            return None
        if not isinstance(base_url, str) or not base_url.strip():
            raise ValidationError("base_url must be a non-empty string.")
        return base_url.strip().rstrip("/")

    def _normalize_api_uri(self, api_uri: str | None) -> str:
        if api_uri is None:
            return ""
        if not isinstance(api_uri, str):
            raise ValidationError("api_uri must be a string.")
        normalized = api_uri.strip().strip("/")
        if not normalized:
            return ""
        return f"/{normalized}"
