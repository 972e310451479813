from abc import ABC, abstractmethod
from typing import Any

from .models import GatewayOutcome


class TutorGateway(ABC):
    """Abstract base class for tutor gateways.

    This module hides the design decision of how a message reaches the tutor.
    Implementations must handle transport-specific details like:
    - Client setup and endpoint addressing
    - Request/response format conversion
    - Classifying failures into the outcome union instead of raising

    Supports async context manager protocol for proper resource cleanup:
        async with gateway:
            outcome = await gateway.ask("Namaskar")
        # Automatically cleaned up
    """

    @abstractmethod
    async def ask(self, message: str) -> GatewayOutcome:
        """Send one message to the tutor and classify what came back.

        Args:
            message: Trimmed, non-empty user text

        Returns:
            GatewayReply, GatewayRejected or TransportFailure. Implementations
            report failures through the returned outcome, not by raising.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    @property
    @abstractmethod
    def gateway_type(self) -> str:
        """Get the gateway type identifier."""

    async def __aenter__(self) -> "TutorGateway":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
