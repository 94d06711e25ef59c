"""Main HTTP server entry point and connection lifecycle orchestration."""

from __future__ import annotations

import argparse
import json
import logging
import socket
import sys
import time
from functools import partial
from pathlib import Path

from config import (
    ACCEPT_POLL_SECS,
    BUFFER_SIZE,
    CONFINE_STATIC_PATHS,
    HOST,
    LISTEN_BACKLOG,
    LOG_FORMAT,
    MAX_HANDLER_TASKS,
    PORT,
    STATIC_DIR,
)
from handlers.strategies import calculate, not_found, serve_static, show_stats
from request import ParsedRequest
from response import HTTPResponse
from router import Router
from socket_handler import ResponseWriter, read_request_bytes
from static_content import StaticContentResolver
from stats import StatsRegistry
from task_spawner import TaskSpawner

logger = logging.getLogger(__name__)


class HTTPServer:
    """Accept loop that hands every connection to its own handler task."""

    def __init__(
        self,
        host: str = HOST,
        port: int = PORT,
        *,
        static_dir: str | Path = STATIC_DIR,
        confine_static_paths: bool = CONFINE_STATIC_PATHS,
        max_handler_tasks: int = MAX_HANDLER_TASKS,
        buffer_size: int = BUFFER_SIZE,
        log_format: str = LOG_FORMAT,
    ) -> None:
        self.host = host
        self.port = port
        self.buffer_size = buffer_size
        self.log_format = log_format

        self.stats = StatsRegistry()
        self.static_content = StaticContentResolver(static_dir, confine=confine_static_paths)
        self.writer = ResponseWriter(self.stats)
        self.router = self._build_default_router()
        self._spawner = TaskSpawner(max_tasks=max_handler_tasks, handler=self._handle_client)

        self._server_socket: socket.socket | None = None
        self._running = False

    def _build_default_router(self) -> Router:
        router = Router(fallback=not_found)
        router.add_prefix_route("/static/", partial(serve_static, resolver=self.static_content))
        router.add_exact_route("/stats", partial(show_stats, stats=self.stats))
        router.add_prefix_route("/calc", calculate)
        return router

    def start(self) -> None:
        """Bind, listen, and accept connections until stop() is called.

        Socket setup errors propagate as OSError (or OverflowError for a port
        outside 0-65535) to the caller.
        """
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server_socket:
            self._server_socket = server_socket
            server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server_socket.bind((self.host, self.port))
            server_socket.listen(LISTEN_BACKLOG)
            server_socket.settimeout(ACCEPT_POLL_SECS)
            self.port = server_socket.getsockname()[1]
            logger.info("Listening on %s:%s", self.host, self.port)

            self._running = True
            while self._running:
                try:
                    client_socket, address = server_socket.accept()
                except socket.timeout:
                    continue
                except OSError as exc:
                    if not self._running:
                        break
                    logger.warning("Failed to accept connection: %s", exc)
                    continue

                if not self._spawner.spawn(client_socket, address):
                    logger.warning("Could not start handler for %s; closing connection", address[0])
                    client_socket.close()

    def stop(self) -> None:
        self._running = False
        self._spawner.shutdown()
        if self._server_socket is not None:
            self._server_socket.close()
            self._server_socket = None

    def wait_for_idle(self, timeout: float | None = None) -> bool:
        """Block until every in-flight handler task has finished."""
        return self._spawner.wait_for_drain(timeout=timeout)

    def _handle_client(self, client_socket: socket.socket, address: tuple[str, int]) -> None:
        with client_socket:
            started_at = time.perf_counter()
            try:
                raw_request = read_request_bytes(client_socket, self.buffer_size)
            except OSError as exc:
                logger.debug("Read from %s failed: %s", address[0], exc)
                return

            if not raw_request:
                return

            self.stats.record_request(len(raw_request))
            request = ParsedRequest.from_bytes(raw_request)
            response = self.router.dispatch(request)

            try:
                bytes_sent = self.writer.send(client_socket, response)
            except OSError as exc:
                logger.debug("Write to %s failed: %s", address[0], exc)
                return

            self._log_request(
                address=address,
                request=request,
                response=response,
                bytes_in=len(raw_request),
                bytes_out=bytes_sent,
                started_at=started_at,
            )

    def _log_request(
        self,
        *,
        address: tuple[str, int],
        request: ParsedRequest,
        response: HTTPResponse,
        bytes_in: int,
        bytes_out: int,
        started_at: float,
    ) -> None:
        duration_ms = (time.perf_counter() - started_at) * 1000
        event = {
            "client": address[0],
            "method": request.method or "-",
            "path": request.path or "-",
            "status": response.status_code,
            "bytes_in": bytes_in,
            "bytes_out": bytes_out,
            "duration_ms": round(duration_ms, 3),
        }
        if self.log_format == "json":
            logger.info(json.dumps(event, sort_keys=True))
            return

        logger.info(
            "client=%s method=%s path=%s status=%s bytes_in=%s bytes_out=%s duration_ms=%.2f",
            event["client"],
            event["method"],
            event["path"],
            event["status"],
            event["bytes_in"],
            event["bytes_out"],
            duration_ms,
        )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the minihttpd server")
    parser.add_argument("-p", "--port", type=int, default=PORT)
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--static-dir", default=STATIC_DIR)
    parser.add_argument("--max-handlers", type=int, default=MAX_HANDLER_TASKS)
    parser.add_argument("--log-format", choices=["plain", "json"], default=LOG_FORMAT)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    server = HTTPServer(
        host=args.host,
        port=args.port,
        static_dir=args.static_dir,
        max_handler_tasks=args.max_handlers,
        log_format=args.log_format,
    )
    try:
        server.start()
    except KeyboardInterrupt:
        server.stop()
    except (OSError, OverflowError) as exc:
        # OverflowError: bind() rejects ports outside 0-65535.
        logger.error("Server socket setup failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
