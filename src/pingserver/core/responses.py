from pingserver.contracts.http_response import (
    JSON_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
    HttpResponse,
)
from pingserver.contracts.ping_response import ErrorResponse, PingResponse

HEALTH_BODY = b"OK\n"


def text_response(status: int, body: bytes) -> HttpResponse:
    return HttpResponse(status=status, body=body, content_type=TEXT_CONTENT_TYPE)


def json_error(status: int, message: str) -> HttpResponse:
    """Build a response carrying the ``{"error": ...}`` envelope."""
    return HttpResponse(
        status=status,
        body=ErrorResponse(error=message).to_json(),
        content_type=JSON_CONTENT_TYPE,
    )


def ping_result(host: str, latency_ms: float) -> HttpResponse:
    return HttpResponse(
        status=200,
        body=PingResponse(host=host, latency_ms=latency_ms).to_json(),
        content_type=JSON_CONTENT_TYPE,
    )


def health_response() -> HttpResponse:
    return text_response(200, HEALTH_BODY)
