"""Request id propagation.

Responses carry ``X-Request-ID``: the client's value when it sent a usable
one, otherwise a fresh UUID4. Log lines pick the id up through
``venture_hub.core.logging``.
"""

import uuid

from asgi_correlation_id import CorrelationIdMiddleware
from asgi_correlation_id.context import correlation_id
from fastapi import FastAPI

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


def _new_request_id() -> str:
    return str(uuid.uuid4())


def _accept_request_id(value: str) -> bool:
    """Client ids are echoed when short and printable; others are replaced."""
    return 0 < len(value) <= MAX_REQUEST_ID_LENGTH and value.isprintable()


def setup_correlation_middleware(app: FastAPI) -> None:
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name=REQUEST_ID_HEADER,
        generator=_new_request_id,
        validator=_accept_request_id,
    )


def get_correlation_id() -> str | None:
    """The current request's id, or None outside a request."""
    return correlation_id.get(None)
