from fastapi import Request
import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("baatcheet")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        # Get request details
        path = request.url.path
        query_string = request.url.query
        method = request.method
        client = request.client.host if request.client else "-"

        # Process the request
        response = await call_next(request)

        process_time = time.time() - start_time
        target = f"{path}?{query_string}" if query_string else path
        logger.info(f'{client} "{method} {target}" {response.status_code} in {process_time:.4f}s')

        # Log auth-related status codes
        if response.status_code in (401, 403):
            logger.warning(f"Auth error: {response.status_code} on {path}")

        return response
