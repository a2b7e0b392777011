"""Unit tests for the error hierarchy and its HTTP status mapping."""

from __future__ import annotations

import pytest

from vectorgate.utils.errors import (
    AuthenticationError,
    BadRequestError,
    ConfigurationError,
    InvalidResponseError,
    NotConfiguredError,
    NotFoundError,
    ProviderError,
    ProviderNotFoundError,
    SessionStoreError,
    TransportError,
    UnauthorizedError,
    VectorGateError,
    VectorStoreApiError,
)


class TestStatusCodes:
    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (TransportError(), 500),
            (ConfigurationError(), 500),
            (BadRequestError(), 400),
            (ProviderNotFoundError("x"), 400),
            (AuthenticationError(), 401),
            (UnauthorizedError(), 401),
            (NotFoundError(), 404),
            (NotConfiguredError(), 503),
            (InvalidResponseError(), 502),
            (VectorStoreApiError(400, "bad"), 502),
            (SessionStoreError(), 500),
        ],
    )
    def test_status_code(self, error: VectorGateError, status: int) -> None:
        assert error.status_code == status

    @pytest.mark.parametrize(("upstream", "expected"), [(404, 404), (429, 429), (503, 503), (302, 500), (200, 500)])
    def test_provider_error_passes_valid_statuses_through(self, upstream: int, expected: int) -> None:
        assert ProviderError(upstream, "body").status_code == expected


class TestMessages:
    def test_str_prefixes_provider(self) -> None:
        assert str(AuthenticationError(provider_name="openai")).startswith("[openai] ")

    def test_str_without_provider(self) -> None:
        assert str(NotFoundError("gone")) == "gone"

    def test_provider_error_message(self) -> None:
        error = ProviderError(500, "overloaded", provider_name="ollama")
        assert error.message == "Provider returned error: 500 - overloaded"
        assert error.body == "overloaded"
        assert error.status == 500

    def test_provider_not_found_names_provider(self) -> None:
        error = ProviderNotFoundError("cohere")
        assert error.message == "Provider 'cohere' is not configured"
        assert isinstance(error, BadRequestError)

    def test_transport_error_hides_detail_from_clients(self) -> None:
        error = TransportError("connect to 10.0.0.5:6333 refused", provider_name="qdrant")
        assert "10.0.0.5" in error.message
        assert "10.0.0.5" not in error.client_message

    def test_vector_store_error_defaults_to_qdrant(self) -> None:
        assert VectorStoreApiError(400, "bad").provider_name == "qdrant"
