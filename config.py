"""Configuration constants for the minihttpd server."""

HOST: str = "0.0.0.0"
PORT: int = 80
BUFFER_SIZE: int = 2048
STATIC_DIR: str = "static"
LISTEN_BACKLOG: int = 10
ACCEPT_POLL_SECS: float = 0.2
MAX_HANDLER_TASKS: int = 1024
CONFINE_STATIC_PATHS: bool = True
LOG_FORMAT: str = "plain"
