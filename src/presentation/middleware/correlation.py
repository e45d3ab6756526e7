"""Correlation ID and request actor middleware"""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from src.shared.context import (clear_current_actor, set_correlation_id,
                                set_current_actor)
from src.shared.enums import ActorType

CORRELATION_HEADER = "X-Correlation-ID"
ACTOR_HEADER = "X-Actor-ID"


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with a correlation id and record who is acting.

    - Accepts X-Correlation-ID from clients or generates one
    - Echoes the id on the response and exposes it to log records
    - X-Actor-ID becomes the created_by/updated_by of any write; without
      it writes are attributed to "system"
    """

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        set_correlation_id(correlation_id)

        actor_id = (request.headers.get(ACTOR_HEADER) or "").strip() or None
        client_ip = request.client.host if request.client else None
        set_current_actor(actor_id, ActorType.USER, ip_address=client_ip)

        try:
            response = await call_next(request)
        finally:
            clear_current_actor()
            set_correlation_id(None)

        response.headers[CORRELATION_HEADER] = correlation_id
        return response
