"""Bearer-token filter in front of every route.

``authenticate_request`` is the whole decision: it looks only at the method,
the path, the headers and the token service, and either returns the caller's
identity (``None`` for public routes) or raises ``Unauthenticated``. The
middleware just applies that decision to live requests.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from fastapi import FastAPI, Request

from app.auth import TokenService
from app.errors import Unauthenticated, error_response

logger = logging.getLogger(__name__)

PUBLIC_PATHS = frozenset({"/", "/actuator/health"})
PUBLIC_METHODS = frozenset({"GET", "HEAD"})
PUBLIC_PREFIXES = ("/auth/",)


@dataclass(frozen=True)
class Identity:
    username: str


def is_public(method: str, path: str) -> bool:
    if path.startswith(PUBLIC_PREFIXES):
        return True
    return path in PUBLIC_PATHS and method.upper() in PUBLIC_METHODS


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def extract_bearer_token(headers: Mapping[str, str]) -> str:
    authorization = _get_header(headers, "authorization")
    if not authorization:
        raise Unauthenticated()
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise Unauthenticated()
    return token


def authenticate_request(
    method: str,
    path: str,
    headers: Mapping[str, str],
    token_service: TokenService,
) -> Identity | None:
    if is_public(method, path):
        return None
    token = extract_bearer_token(headers)
    return Identity(username=token_service.verify(token))


def register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def bearer_token_filter(request: Request, call_next):
        token_service: TokenService = request.app.state.token_service
        try:
            identity = authenticate_request(
                request.method, request.url.path, request.headers, token_service
            )
        except Unauthenticated as exc:
            logger.debug(
                f"Rejected {request.method} {request.url.path}: {exc.detail}"
            )
            return error_response(exc)
        request.state.identity = identity
        return await call_next(request)
