class ServiceError(Exception):
    pass


class CompletionConfigurationError(ServiceError):
    pass


class UpstreamUnavailableError(ServiceError):
    def __init__(self, reason: str, status_code: int | None = None):
        super().__init__(f"Completion upstream unavailable: {reason}")
        self.reason = reason
        self.status_code = status_code


class NetworkTimeoutError(UpstreamUnavailableError):
    def __init__(self, url: str, timeout_seconds: float):
        super().__init__(f"network timeout after {timeout_seconds}s: {url}")
        self.url = url
        self.timeout_seconds = timeout_seconds
