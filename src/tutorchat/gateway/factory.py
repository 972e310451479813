from typing import Any

from .base import TutorGateway


def create_tutor_gateway(kind: str = "http", **config: Any) -> TutorGateway:
    """Create a tutor gateway instance.

    This factory function hides the instantiation logic for different gateways.

    Args:
        kind: Gateway type (currently only 'http')
        **config: Gateway-specific configuration
            For HTTP:
                - endpoint: str (required)
                - timeout: float | None (default: 30.0)
                - any further httpx.AsyncClient keyword arguments

    Returns:
        Initialized tutor gateway instance

    Raises:
        ValueError: If gateway type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> gateway = create_tutor_gateway(
        ...     "http",
        ...     endpoint="http://localhost:3000/api/gemini",
        ...     timeout=10.0
        ... )
    """
    kind_lower = kind.lower()

    if kind_lower == "http":
        if "endpoint" not in config:
            raise TypeError("HTTP gateway requires 'endpoint' in config")
        from .http import HttpTutorGateway
        return HttpTutorGateway(**config)

    raise ValueError(
        f"Unsupported gateway: {kind}. "
        f"Supported gateways: 'http'"
    )
