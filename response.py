"""HTTP response model and serializer."""

from dataclasses import dataclass

REASON_PHRASES: dict[int, str] = {
    200: "OK",
    404: "Not Found",
}


@dataclass(slots=True)
class HTTPResponse:
    status_code: int
    content_type: str = "text/html"
    body: bytes | str = b""
    separate_body_write: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")

    @property
    def status_line(self) -> str:
        reason = REASON_PHRASES.get(self.status_code, "Unknown")
        return f"HTTP/1.1 {self.status_code} {reason}"

    @property
    def content_length(self) -> int:
        return len(self.body)

    def encode_head(self) -> bytes:
        """Status line plus Content-Type and Content-Length, CRLF-terminated."""
        header_lines = [
            self.status_line,
            f"Content-Type: {self.content_type}",
            f"Content-Length: {self.content_length}",
        ]
        return "\r\n".join(header_lines).encode("iso-8859-1") + b"\r\n\r\n"

    def to_bytes(self) -> bytes:
        """Serialize the response into HTTP/1.1 wire format bytes."""
        return self.encode_head() + self.body
