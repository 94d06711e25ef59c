"""Response strategies for the four routes."""

import re

from request import ParsedRequest
from response import HTTPResponse
from static_content import StaticContentResolver
from stats import StatsRegistry

STATIC_ROUTE_PREFIX = "/static"
NOT_FOUND_BODY = "<html><body><h1>404 Not Found</h1></body></html>"
FILE_NOT_FOUND_BODY = "<html><body><h1>File Not Found</h1></body></html>"

_CALC_QUERY = re.compile(r"\?a=([+-]?\d+)(?:&b=([+-]?\d+))?")


def serve_static(request: ParsedRequest, *, resolver: StaticContentResolver) -> HTTPResponse:
    sub_path = request.path.removeprefix(STATIC_ROUTE_PREFIX)
    static_file = resolver.load(sub_path)
    if static_file is None:
        return HTTPResponse(status_code=404, body=FILE_NOT_FOUND_BODY)

    return HTTPResponse(
        status_code=200,
        content_type="application/octet-stream",
        body=static_file.data,
        separate_body_write=True,
    )


def show_stats(request: ParsedRequest, *, stats: StatsRegistry) -> HTTPResponse:
    _ = request
    snapshot = stats.snapshot()
    body = (
        "<html><body><h1>Server Statistics</h1>"
        f"<p>Total Requests: {snapshot.requests_handled}</p>"
        f"<p>Total Bytes Received: {snapshot.bytes_received}</p>"
        f"<p>Total Bytes Sent: {snapshot.bytes_sent}</p>"
        "</body></html>"
    )
    return HTTPResponse(status_code=200, body=body)


def parse_operands(path: str) -> tuple[int, int]:
    """Extract ``a`` and ``b`` from ``?a=<int>&b=<int>``; unmatched fields are 0."""
    query_start = path.find("?")
    if query_start == -1:
        return 0, 0

    match = _CALC_QUERY.match(path, query_start)
    if match is None:
        return 0, 0

    first = int(match.group(1))
    second = int(match.group(2)) if match.group(2) is not None else 0
    return first, second


def calculate(request: ParsedRequest) -> HTTPResponse:
    first, second = parse_operands(request.path)
    body = (
        "<html><body><h1>Calculation Result</h1>"
        f"<p>{first} + {second} = {first + second}</p>"
        "</body></html>"
    )
    return HTTPResponse(status_code=200, body=body)


def not_found(request: ParsedRequest) -> HTTPResponse:
    _ = request
    return HTTPResponse(status_code=404, body=NOT_FOUND_BODY)
