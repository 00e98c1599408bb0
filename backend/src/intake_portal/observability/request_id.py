"""Request ID management for request correlation.

Keeps the current request ID in a context variable so log records emitted
anywhere while serving a request (uploads, submission orchestration, health
checks) can be correlated.
"""

import uuid
from contextvars import ContextVar, Token
from typing import Optional

NO_REQUEST_ID = "no-request-id"

# Context variable for request_id (async-safe)
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def generate_request_id() -> str:
    """Generate a new unique request ID (UUID v4)."""
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Get current request ID from context, or "no-request-id" outside a request."""
    return request_id_var.get() or NO_REQUEST_ID


def set_request_id(request_id: str) -> Token:
    """Set request ID in current context.

    Returns:
        Token: Pass to reset_request_id() once the request is done
    """
    return request_id_var.set(request_id)


def reset_request_id(token: Token) -> None:
    request_id_var.reset(token)
