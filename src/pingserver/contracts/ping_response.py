import orjson
from pydantic import BaseModel, Field


class PingResponse(BaseModel):
    """
    Data model for a successful ping measurement.
    """

    host: str
    latency_ms: float = Field(ge=0.0)

    def to_json(self) -> bytes:
        # latency_ms keeps exactly two decimals on the wire
        return orjson.dumps(
            {
                "host": self.host,
                "latency_ms": orjson.Fragment(f"{self.latency_ms:.2f}"),
            }
        )


class ErrorResponse(BaseModel):
    """
    Data model for the JSON error envelope shared by every non-2xx response.
    """

    error: str

    def to_json(self) -> bytes:
        return orjson.dumps(self.model_dump())
