"""
Client-side error taxonomy for replica requests.
"""


class ServiceError(Exception):
    """Base exception for errors talking to a backend service."""

    def __init__(self, message: str, service_id: str | None = None):
        self.service_id = service_id
        super().__init__(message)


class TransportError(ServiceError):
    """No response came back: connection refused, DNS failure, reset."""

    def __init__(self, address: str, detail: str, service_id: str | None = None):
        self.address = address
        self.detail = detail
        super().__init__(f"Cannot reach {address}: {detail}", service_id=service_id)


class RequestTimeoutError(TransportError):
    """Request timed out."""

    def __init__(self, address: str, timeout: float, service_id: str | None = None):
        self.timeout = timeout
        super().__init__(
            address, f"timed out after {timeout}s", service_id=service_id
        )


class ServiceStatusError(ServiceError):
    """Replica answered with a non-success status."""

    def __init__(
        self,
        address: str,
        status_code: int,
        detail: str = "",
        service_id: str | None = None,
    ):
        self.address = address
        self.status_code = status_code
        self.detail = detail
        msg = f"HTTP {status_code} from {address}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg, service_id=service_id)


class NotFoundError(ServiceStatusError):
    """One replica does not know the requested resource."""

    def __init__(self, address: str, detail: str = "", service_id: str | None = None):
        super().__init__(address, 404, detail, service_id=service_id)


class NotFoundOnAllReplicasError(ServiceError):
    """Every configured replica answered not-found."""

    def __init__(self, path: str, replicas: int, service_id: str | None = None):
        self.path = path
        self.replicas = replicas
        super().__init__(
            f"Book or topic not found on any {service_id or 'service'} server "
            f"({replicas} tried)",
            service_id=service_id,
        )


class InvalidPayloadError(ServiceError):
    """Replica answered successfully but the body is not the expected shape."""

    def __init__(self, address: str, path: str, detail: str, service_id: str | None = None):
        self.address = address
        self.path = path
        self.detail = detail
        super().__init__(
            f"Unexpected response for {path} from {address}: {detail}",
            service_id=service_id,
        )
