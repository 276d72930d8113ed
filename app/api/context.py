# app/api/context.py
"""
Kontekst requestu i lancuch interceptorow.

Middleware buduje RequestContext i przepuszcza go przez interceptory po kolei
(AccessGate pierwszy). Wyjatek StorefrontError z interceptora konczy request
odpowiedzia {"error": ...}, handler nie jest wywolywany.
"""
from dataclasses import dataclass, field
from typing import Callable, Mapping, Sequence

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.errors import (
    AuthError,
    StorefrontError,
    ERROR_TOKEN_REQUIRED,
    ERROR_UNAUTHORIZED,
)
from app.services.token_service import TokenService
from app.utils.logging import get_logger

logger = get_logger(__name__)

PUBLIC_PATHS = frozenset({"/register", "/login", "/docs", "/docs/oauth2-redirect", "/openapi.json"})


@dataclass
class RequestContext:
    method: str
    path: str
    headers: Mapping[str, str]
    user_id: int | None = None
    attributes: dict = field(default_factory=dict)


Interceptor = Callable[[RequestContext], None]


class AccessGate:
    """Weryfikuje bearer token i przypina user_id do kontekstu."""

    def __init__(self, token_service: TokenService, public_paths: frozenset[str] = PUBLIC_PATHS):
        self.token_service = token_service
        self.public_paths = public_paths

    def __call__(self, ctx: RequestContext) -> None:
        if ctx.path in self.public_paths:
            return

        header = ctx.headers.get("authorization", "")
        scheme, _, token = header.partition(" ")

        #brak tokena -> 403, zly/wygasly token -> 401
        if scheme.lower() != "bearer" or not token.strip():
            raise AuthError(ERROR_TOKEN_REQUIRED, status_code=403)

        ctx.user_id = self.token_service.verify(token.strip())


class RequestLogger:
    def __call__(self, ctx: RequestContext) -> None:
        logger.info(f"{ctx.method} {ctx.path} user={ctx.user_id}")


def install_interceptors(app: FastAPI, interceptors: Sequence[Interceptor]) -> None:
    app.state.interceptors = list(interceptors)

    @app.middleware("http")
    async def run_interceptors(request: Request, call_next):
        ctx = RequestContext(
            method=request.method,
            path=request.url.path,
            headers=request.headers,
        )

        try:
            for interceptor in request.app.state.interceptors:
                interceptor(ctx)
        except StorefrontError as e:
            return JSONResponse(status_code=e.status_code, content={"error": e.message})

        request.state.context = ctx
        return await call_next(request)


def current_user_id(request: Request) -> int:
    """Dependency dla chronionych endpointow."""
    ctx: RequestContext | None = getattr(request.state, "context", None)
    if ctx is None or ctx.user_id is None:
        raise AuthError(ERROR_UNAUTHORIZED)
    return ctx.user_id
