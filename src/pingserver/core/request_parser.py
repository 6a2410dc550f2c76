import logging
from typing import Dict

from pingserver.contracts.http_request import HttpRequest

logger = logging.getLogger(__name__)


def parse_query(query_string: str) -> Dict[str, str]:
    """
    Split a raw query string into a mapping.

    The first occurrence of a key wins, values are kept verbatim (no
    percent-decoding), and pairs without '=' are ignored.
    """
    params: Dict[str, str] = {}
    if not query_string:
        return params
    for pair in query_string.split("&"):
        name, sep, value = pair.partition("=")
        if not sep:
            continue
        params.setdefault(name, value)
    return params


def parse_request(raw: bytes) -> HttpRequest:
    """
    Parse the request line out of a raw request buffer.

    Only the first three whitespace-separated tokens are read (method, target,
    version). Missing tokens become empty strings, so a garbled request still
    yields a request object that the router can reject.

    Args:
        raw (bytes): Bytes read from the connection, possibly truncated.

    Returns:
        HttpRequest: The parsed request.
    """
    # Split before decoding: bytes.split only breaks on ASCII whitespace
    tokens = [token.decode("latin-1") for token in raw.split(maxsplit=3)[:3]]
    tokens += [""] * (3 - len(tokens))
    method, target, _version = tokens
    _, _, query_string = target.partition("?")
    request = HttpRequest(
        method=method,
        target=target,
        query=parse_query(query_string),
    )
    logger.debug(f"Parsed request: method={method} target={target}")
    return request
