"""Bearer-authenticated JSON session for provisioning APIs."""

import logging
from types import TracebackType
from typing import Any, Self

import httpx

from spe.core.errors import ProvisioningRequestError
from spe.core.settings import HTTP_TIMEOUT_DEFAULT
from spe.oauth.types import AccessToken

logger = logging.getLogger(__name__)


class ApiSession:
    """Sends JSON requests under a base URL with a bearer token.

    A client passed in stays owned by the caller; one created here is
    closed by ``close``.
    """

    def __init__(
        self,
        access_token: AccessToken,
        base_url: str,
        http_client: httpx.Client | None = None,
        timeout: float = HTTP_TIMEOUT_DEFAULT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers = access_token.authorization_header()
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    @property
    def client(self) -> httpx.Client:
        return self._client

    def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request and raise ``ProvisioningRequestError`` on failure."""
        url = f"{self._base_url}{path}"
        response = self._client.request(
            method, url, json=json, params=params, headers=self._headers
        )
        if not response.is_success:
            logger.warning(
                "%s %s failed: HTTP %d", method, url, response.status_code
            )
            raise ProvisioningRequestError(
                response.status_code,
                response.text,
                f"{method} {path} failed with HTTP {response.status_code}",
            )
        logger.debug("%s %s -> HTTP %d", method, url, response.status_code)
        return response

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class SessionClient:
    """Base for API clients that wrap one ``ApiSession``."""

    _session: ApiSession

    def close(self) -> None:
        """Close the underlying HTTP client if this object created it."""
        self._session.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
