class ExporterError(Exception):
    """Base exception for the volume stats exporter."""

    pass


class CollectionError(ExporterError):
    """Base exception for errors raised while polling the kubelet."""

    pass


class TransportError(CollectionError):
    """Raised when the kubelet cannot be reached (network, timeout, TLS)."""

    pass


class UpstreamStatusError(CollectionError):
    """Raised when the kubelet answers with a non-200 status code."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"unexpected status code {status_code}: {body}")


class DecodeError(CollectionError):
    """Raised when a /stats/summary payload is malformed or has an unexpected shape."""

    def __init__(self, message: str, preview: str = ""):
        self.preview = preview
        super().__init__(message)


class PortBindError(ExporterError):
    """Raised when the metrics port cannot be bound at startup."""

    def __init__(self, host: str, port: int, reason: str):
        self.host = host
        self.port = port
        super().__init__(f"Failed to bind metrics server to {host}:{port}: {reason}")
