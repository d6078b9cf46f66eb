class DomainError(Exception):
    """Base exception for gateway rule violations."""


class ValidationError(DomainError):
    """Raised when request input or configuration is invalid."""


class DeviceNotFoundError(DomainError):
    """Raised when a device prefix is not configured."""

    def __init__(self, prefix: str):
        super().__init__(f"Device not found: {prefix}")
        self.prefix = prefix


class DeviceConnectionError(DomainError):
    """Raised when a biometric device cannot be reached or read."""

    def __init__(self, prefix: str, reason: str):
        super().__init__(f"Failed to fetch data from device {prefix}: {reason}")
        self.prefix = prefix
        self.reason = reason


class WebhookDeliveryError(DomainError):
    """Raised when a webhook could not be delivered."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        super().__init__(f"Failed to deliver webhook to {url}: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code
