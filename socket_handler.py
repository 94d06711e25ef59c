"""Low-level socket read/write utilities."""

from __future__ import annotations

import socket

from config import BUFFER_SIZE
from response import HTTPResponse
from stats import StatsRegistry


def read_request_bytes(client_socket: socket.socket, buffer_size: int = BUFFER_SIZE) -> bytes:
    """Perform exactly one read of at most ``buffer_size`` bytes.

    There is no loop to the end of the headers: whatever the first read
    returns is the whole request as far as the server is concerned.
    """
    return client_socket.recv(buffer_size)


def write_http_response(client_socket: socket.socket, payload: bytes) -> None:
    """Write the complete response payload to a client socket."""
    client_socket.sendall(payload)


class ResponseWriter:
    """Sends framed responses and records the bytes sent."""

    def __init__(self, stats: StatsRegistry) -> None:
        self._stats = stats

    def send(self, client_socket: socket.socket, response: HTTPResponse) -> int:
        head = response.encode_head()
        if response.separate_body_write:
            write_http_response(client_socket, head)
            write_http_response(client_socket, response.body)
        else:
            write_http_response(client_socket, head + response.body)

        bytes_sent = len(head) + len(response.body)
        self._stats.add_bytes_sent(bytes_sent)
        return bytes_sent
