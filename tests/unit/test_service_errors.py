from __future__ import annotations

from src.services.errors import (
    CompletionConfigurationError,
    NetworkTimeoutError,
    ServiceError,
    UpstreamUnavailableError,
)


class TestServiceError:
    def test_base_exception(self) -> None:
        error = ServiceError("Base service error")
        assert str(error) == "Base service error"
        assert isinstance(error, Exception)


class TestCompletionConfigurationError:
    def test_is_service_error(self) -> None:
        assert isinstance(CompletionConfigurationError("Missing key"), ServiceError)


class TestUpstreamUnavailableError:
    def test_reason_and_status(self) -> None:
        error = UpstreamUnavailableError("upstream returned HTTP 503", status_code=503)
        assert "HTTP 503" in str(error)
        assert error.reason == "upstream returned HTTP 503"
        assert error.status_code == 503


class TestNetworkTimeoutError:
    def test_timeout_details(self) -> None:
        error = NetworkTimeoutError("https://api.openai.com/v1/chat/completions", 60.0)
        assert "60.0s" in str(error)
        assert error.url == "https://api.openai.com/v1/chat/completions"
        assert error.timeout_seconds == 60.0
        assert isinstance(error, UpstreamUnavailableError)
        assert error.status_code is None
