from starlette.responses import JSONResponse

from plantation.core.logger import logger
from plantation.core.utils_logging import describe_exception
import traceback

class ExceptionLoggingMiddleware:
    """
    ASGI middleware that logs unhandled exceptions with the full stack trace
    and every chained cause, then answers with a generic 500 that carries
    the request id. If the response has already started the exception is
    re-raised instead.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        started = {"value": False}

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                started["value"] = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            request_id = scope.get("request_id")
            logger.error(
                f"Unhandled exception in request: {describe_exception(exc)}",
                extra={
                    "request_id": request_id,
                    "method": scope.get("method"),
                    "path": scope.get("path"),
                    "traceback": traceback.format_exc(),
                },
            )
            if started["value"]:
                raise

            response = JSONResponse(
                status_code=500,
                content={"detail": "Internal server error", "request_id": request_id},
                headers={"x-request-id": request_id} if request_id else None,
            )
            await response(scope, receive, send)
