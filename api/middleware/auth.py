# api/middleware/auth.py
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from api.config import api_key


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Require X-API-Key on every route when API_KEY is configured."""

    async def dispatch(self, request: Request, call_next):
        expected_key = api_key()
        if not expected_key:
            return await call_next(request)

        path = request.url.path

        # 1) health, metrics and docs stay open
        allowlisted = (
            path == "/health"
            or path == "/metrics"
            or path == "/openapi.json"
            or path.startswith("/docs")
            or path.startswith("/redoc")
        )
        if allowlisted:
            return await call_next(request)

        # 2) CORS preflight (OPTIONS) never carries the key
        if request.method.upper() == "OPTIONS":
            return await call_next(request)

        # 3) check the header
        provided_key = request.headers.get("X-API-Key")
        if provided_key != expected_key:
            return JSONResponse(
                status_code=401,
                content={"detail": "Unauthorized: invalid or missing API key."},
            )

        return await call_next(request)
