from pydantic import BaseModel, ConfigDict

REASON_PHRASES = {
    200: "OK",
    400: "Bad Request",
    404: "Not Found",
    500: "Internal Server Error",
}

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"


class HttpResponse(BaseModel):
    """
    Data model for a response; immutable once constructed and written exactly once.
    """

    model_config = ConfigDict(frozen=True)

    status: int
    body: bytes = b""
    content_type: str = JSON_CONTENT_TYPE

    @property
    def reason(self) -> str:
        # Unknown codes fall back to "OK"
        return REASON_PHRASES.get(self.status, "OK")

    def to_bytes(self) -> bytes:
        """
        Serialize the status line, headers and body into wire format.

        Returns:
            bytes: The full HTTP/1.1 response, always with ``Connection: close``.
        """
        head = (
            f"HTTP/1.1 {self.status} {self.reason}\r\n"
            f"Content-Type: {self.content_type}\r\n"
            f"Content-Length: {len(self.body)}\r\n"
            "Connection: close\r\n"
            "\r\n"
        )
        return head.encode("latin-1") + self.body
