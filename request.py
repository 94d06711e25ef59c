"""HTTP request-line model and best-effort parser."""

import os
from dataclasses import dataclass


@dataclass(slots=True)
class ParsedRequest:
    method: str = ""
    path: str = ""

    @classmethod
    def from_bytes(cls, raw: bytes) -> "ParsedRequest":
        """Take the first two whitespace-separated tokens as method and path.

        Only the request line matters; headers and body are never inspected.
        Missing tokens stay empty, so malformed input simply fails to route.
        Tokens are split on ASCII whitespace and decoded with the filesystem
        encoding, so a raw non-ASCII path maps back to the same bytes on disk.
        """
        tokens = raw.split(maxsplit=2)
        method = os.fsdecode(tokens[0]) if len(tokens) > 0 else ""
        path = os.fsdecode(tokens[1]) if len(tokens) > 1 else ""
        return cls(method=method, path=path)
