"""Qdrant REST vector store adapter.

Talks to Qdrant's HTTP API through the shared ``httpx.AsyncClient``:

* ``ensure_collection`` provisions the collection at startup, retrying
  transient failures with exponential backoff (1, 2, 4, 8 s; five attempts
  in total).
* ``upsert`` writes one point per call with ``?wait=true`` so a successful
  return means the point is searchable.
* ``search`` runs a similarity query, optionally restricted to one
  session via a payload filter.

Only provisioning is retried.  Request-time failures are surfaced to the
caller as-is.
"""

from __future__ import annotations

import asyncio
import enum
import uuid
from collections.abc import Mapping
from typing import Any

import httpx

from vectorgate.config.settings import QdrantConfig
from vectorgate.models.memory import Embedding, SearchResult
from vectorgate.utils.errors import (
    BadRequestError,
    InvalidResponseError,
    NotConfiguredError,
    TransportError,
    VectorStoreApiError,
)
from vectorgate.utils.logging import get_logger
from vectorgate.utils.metadata import SESSION_KEY, TEXT_KEY, check_reserved_keys, reserved_keys

logger = get_logger(__name__)

_PROVIDER_NAME = "qdrant"
_MAX_ATTEMPTS = 5
_TRANSIENT_STATUSES = frozenset({429, 503})
_UNREADABLE_BODY = "<failed to read response body>"


class ProvisionState(enum.Enum):
    """States of the collection provisioning loop."""

    CHECKING = "checking"
    CREATING = "creating"
    BACKING_OFF = "backing_off"
    DONE = "done"
    FAILED = "failed"


def _is_transient(exc: Exception) -> bool:
    if isinstance(exc, TransportError):
        return True
    return isinstance(exc, VectorStoreApiError) and exc.status in _TRANSIENT_STATUSES


def _api_error(response: httpx.Response) -> VectorStoreApiError:
    try:
        message = response.text
    except (httpx.StreamError, UnicodeDecodeError):
        message = _UNREADABLE_BODY
    return VectorStoreApiError(status=response.status_code, message=message)


def _hit_id(raw: Any) -> str:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return str(raw)
    logger.warning("qdrant_unexpected_id_format", id=repr(raw))
    return str(raw)


class QdrantVectorStore:
    """Remote vector store backed by a single Qdrant collection.

    Parameters
    ----------
    config:
        Collection name, dimension, distance metric, URL and optional API
        key.  The key is sent as an ``api-key`` header on every request.
    http_client:
        Shared async client; its timeout applies to every request.
    sessions_enabled:
        When ``True``, ``session_id`` becomes a reserved payload key and
        session-linked writes and filtered searches are allowed.
    """

    def __init__(
        self,
        config: QdrantConfig,
        http_client: httpx.AsyncClient,
        sessions_enabled: bool = False,
    ) -> None:
        self._config = config
        self._http = http_client
        self._sessions_enabled = sessions_enabled
        self._reserved = reserved_keys(sessions_enabled)

    @property
    def collection(self) -> str:
        return self._config.collection

    @property
    def sessions_enabled(self) -> bool:
        return self._sessions_enabled

    # ------------------------------------------------------------------
    # Provisioning
    # ------------------------------------------------------------------

    async def ensure_collection(self) -> None:
        """Create the collection if it does not exist.

        Transport failures and 429/503 responses are retried up to five
        attempts in total, sleeping ``2 ** (attempt - 1)`` seconds between
        attempts.  Any other failure, or running out of attempts, raises.
        """
        path = f"/collections/{self._config.collection}"
        state = ProvisionState.CHECKING
        attempt = 1
        last_error: TransportError | VectorStoreApiError | None = None

        while state not in (ProvisionState.DONE, ProvisionState.FAILED):
            try:
                if state is ProvisionState.CHECKING:
                    response = await self._request("GET", path)
                    if response.status_code == 200:
                        logger.info(
                            "qdrant_collection_exists",
                            collection=self._config.collection,
                        )
                        state = ProvisionState.DONE
                    elif response.status_code == 404:
                        state = ProvisionState.CREATING
                    else:
                        raise _api_error(response)

                elif state is ProvisionState.CREATING:
                    body = {
                        "vectors": {
                            "size": self._config.dimensions,
                            "distance": self._config.distance,
                        }
                    }
                    response = await self._request("PUT", path, json=body)
                    if not response.is_success:
                        raise _api_error(response)
                    logger.info(
                        "qdrant_collection_created",
                        collection=self._config.collection,
                        dimensions=self._config.dimensions,
                        distance=self._config.distance,
                    )
                    state = ProvisionState.DONE

                elif state is ProvisionState.BACKING_OFF:
                    wait_s = 2 ** (attempt - 1)
                    logger.warning(
                        "provisioning_retry",
                        collection=self._config.collection,
                        attempt=attempt,
                        wait_s=wait_s,
                        error=str(last_error),
                    )
                    await asyncio.sleep(wait_s)
                    attempt += 1
                    state = ProvisionState.CHECKING

            except (TransportError, VectorStoreApiError) as exc:
                last_error = exc
                if _is_transient(exc) and attempt < _MAX_ATTEMPTS:
                    state = ProvisionState.BACKING_OFF
                else:
                    state = ProvisionState.FAILED

        if state is ProvisionState.FAILED and last_error is not None:
            logger.error(
                "qdrant_provisioning_failed",
                collection=self._config.collection,
                attempts=attempt,
                error=str(last_error),
            )
            raise last_error

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def upsert(
        self,
        text: str,
        embedding: Embedding,
        point_id: str | None = None,
        metadata: Mapping[str, Any] | None = None,
        session_id: str | None = None,
    ) -> str:
        """Write one point and return its id.

        Raises:
            BadRequestError: Metadata uses a reserved key, or *point_id* is
                not a UUID.  No request is sent.
            NotConfiguredError: *session_id* given while sessions are off.
            VectorStoreApiError: Qdrant returned a non-2xx status.
        """
        check_reserved_keys(metadata, self._reserved)
        if session_id is not None and not self._sessions_enabled:
            raise NotConfiguredError("Sessions are not enabled", provider_name=_PROVIDER_NAME)

        if point_id is None:
            resolved_id = str(uuid.uuid4())
        else:
            try:
                resolved_id = str(uuid.UUID(point_id))
            except ValueError as exc:
                raise BadRequestError(f"Point id '{point_id}' is not a valid UUID") from exc

        payload: dict[str, Any] = dict(metadata or {})
        payload[TEXT_KEY] = text
        if session_id is not None:
            payload[SESSION_KEY] = session_id

        body = {"points": [{"id": resolved_id, "vector": list(embedding), "payload": payload}]}
        response = await self._request(
            "PUT",
            f"/collections/{self._config.collection}/points?wait=true",
            json=body,
        )
        if not response.is_success:
            raise _api_error(response)

        logger.debug(
            "qdrant_point_upserted",
            collection=self._config.collection,
            id=resolved_id,
            session_id=session_id,
        )
        return resolved_id

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def search(
        self,
        embedding: Embedding,
        limit: int,
        score_threshold: float | None = None,
        session_id: str | None = None,
    ) -> list[SearchResult]:
        """Return the nearest points in the order Qdrant ranks them."""
        if session_id is not None and not self._sessions_enabled:
            raise NotConfiguredError("Sessions are not enabled", provider_name=_PROVIDER_NAME)

        body: dict[str, Any] = {
            "vector": list(embedding),
            "limit": limit,
            "with_payload": True,
        }
        if score_threshold is not None:
            body["score_threshold"] = float(score_threshold)
        if session_id is not None:
            body["filter"] = {"must": [{"key": SESSION_KEY, "match": {"value": session_id}}]}

        response = await self._request(
            "POST",
            f"/collections/{self._config.collection}/points/search",
            json=body,
        )
        if not response.is_success:
            raise _api_error(response)

        try:
            hits = response.json()["result"]
            return [self._to_result(hit) for hit in hits]
        except (ValueError, KeyError, TypeError) as exc:
            raise InvalidResponseError(
                message=f"Failed to parse Qdrant search response: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _to_result(self, hit: Any) -> SearchResult:
        if not isinstance(hit, Mapping):
            raise TypeError(f"search hit is not an object: {hit!r}")
        payload = dict(hit.get("payload") or {})
        text = payload.pop(TEXT_KEY, "")
        if not isinstance(text, str):
            text = ""
        session = None
        if self._sessions_enabled:
            raw_session = payload.pop(SESSION_KEY, None)
            session = raw_session if isinstance(raw_session, str) else None
        return SearchResult(
            id=_hit_id(hit["id"]),
            text=text,
            metadata=payload,
            session=session,
            score=float(hit["score"]),
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        headers = {}
        if self._config.api_key:
            headers["api-key"] = self._config.api_key
        url = self._config.url + path
        try:
            return await self._http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("qdrant_request_failed", method=method, url=url, error=str(exc))
            raise TransportError(
                message=f"Qdrant {method} {path} failed: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc
