from .base import TutorGateway
from .factory import create_tutor_gateway
from .http import HttpTutorGateway
from .models import (
    GatewayOutcome,
    GatewayRejected,
    GatewayReply,
    TransportFailure,
    TutorRequest,
)

__all__ = [
    "TutorGateway",
    "create_tutor_gateway",
    "HttpTutorGateway",
    "GatewayOutcome",
    "GatewayRejected",
    "GatewayReply",
    "TransportFailure",
    "TutorRequest",
]
