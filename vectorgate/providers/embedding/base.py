"""Shared HTTP plumbing for embedding provider adapters.

Every supported vendor speaks JSON over a single POST, so the request /
status-mapping / parsing flow lives here and the concrete adapters only
declare what differs: default path, request body, auth headers and the
response envelope.

Status mapping (identical for all vendors):

    2xx            -> parse the envelope, return the first vector
    401 / 403      -> AuthenticationError
    any other      -> ProviderError(status, body)
    no response    -> TransportError (network failure or timeout)
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

import httpx

from vectorgate.config.settings import ProviderConfig
from vectorgate.interfaces.embedding_provider import IEmbeddingProvider
from vectorgate.utils.errors import (
    AuthenticationError,
    InvalidResponseError,
    ProviderError,
    TransportError,
)
from vectorgate.utils.logging import get_logger

logger = get_logger(__name__)


class HttpEmbeddingProvider(IEmbeddingProvider):
    """Base class for adapters that embed text with one JSON POST.

    The ``httpx.AsyncClient`` is injected so all providers share one
    connection pool (and one timeout) and tests can swap in a
    ``httpx.MockTransport``.
    """

    #: Vendor identifier reported by :meth:`get_provider_name`.
    provider_type: str = ""
    #: Path appended to ``base_url`` unless ``embeddings_path`` overrides it.
    default_path: str = "/v1/embeddings"

    def __init__(self, config: ProviderConfig, http_client: httpx.AsyncClient) -> None:
        self._config = config
        self._http = http_client
        self._url = config.base_url + (config.embeddings_path or self.default_path)

    # ------------------------------------------------------------------
    # Vendor-specific hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _build_body(self, text: str) -> dict[str, Any]:
        """Return the JSON request body for *text*."""

    @abstractmethod
    def _auth_headers(self) -> dict[str, str]:
        """Return the authentication headers for this vendor."""

    @abstractmethod
    def _extract_vectors(self, data: Any) -> list[Any]:
        """Return the list of vectors held in the response envelope."""

    # ------------------------------------------------------------------
    # IEmbeddingProvider implementation
    # ------------------------------------------------------------------

    async def embed(self, text: str) -> list[float]:
        headers = {"Content-Type": "application/json", **self._auth_headers()}
        body = self._build_body(text)

        try:
            response = await self._http.post(self._url, json=body, headers=headers)
        except httpx.HTTPError as exc:
            logger.error(
                "embedding_request_failed",
                provider=self.provider_type,
                url=self._url,
                error=str(exc),
            )
            raise TransportError(
                message=f"Embedding request to {self._url} failed: {exc}",
                provider_name=self.provider_type,
            ) from exc

        if response.status_code in (401, 403):
            raise AuthenticationError(provider_name=self.provider_type)
        if not response.is_success:
            raise ProviderError(
                status=response.status_code,
                message=response.text,
                provider_name=self.provider_type,
            )

        vector = self._parse(response)
        logger.debug(
            "embedding_generated",
            provider=self.provider_type,
            model=self._config.model,
            dimensions=len(vector),
        )
        return vector

    def get_provider_name(self) -> str:
        return self.provider_type

    def get_model_name(self) -> str:
        return self._config.model

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _parse(self, response: httpx.Response) -> list[float]:
        try:
            vectors = self._extract_vectors(response.json())
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise InvalidResponseError(
                message=f"Failed to parse embedding response: {exc}",
                provider_name=self.provider_type,
            ) from exc

        if not isinstance(vectors, list) or not vectors:
            raise InvalidResponseError(
                message="No embeddings returned",
                provider_name=self.provider_type,
            )

        first = vectors[0]
        if not isinstance(first, list) or not first:
            raise InvalidResponseError(
                message="Embedding is not a non-empty array",
                provider_name=self.provider_type,
            )
        for value in first:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidResponseError(
                    message=f"Embedding contains a non-numeric value: {value!r}",
                    provider_name=self.provider_type,
                )
        return [float(value) for value in first]
