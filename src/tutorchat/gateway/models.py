from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class TutorRequest(BaseModel):
    """Wire body sent to the tutor gateway."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(description="Trimmed user message text")


class GatewayReply(BaseModel):
    """The gateway answered with a success status.

    ``reply`` is None when the body carried no usable reply field.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["reply"] = "reply"
    reply: str | None = Field(default=None, description="Reply text, if any")


class GatewayRejected(BaseModel):
    """The gateway was reachable but answered with a non-success status."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rejected"] = "rejected"
    status_code: int = Field(description="HTTP status returned by the gateway")
    error: str | None = Field(
        default=None,
        description="Error description from the response body, if present"
    )


class TransportFailure(BaseModel):
    """The exchange with the gateway could not be completed."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["transport_failure"] = "transport_failure"
    reason: str = Field(description="Low-level cause, for logging only")


GatewayOutcome = Annotated[
    GatewayReply | GatewayRejected | TransportFailure,
    Field(discriminator="kind"),
]
