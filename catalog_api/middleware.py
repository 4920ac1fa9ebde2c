"""
Request pipeline: logging, fault boundary, authentication, validation.

log_requests and catch_faults are HTTP middleware registered on every app.
Authentication and validation are Pipeline steps that route handlers run
explicitly; each step returns None to continue or a Response to stop.
"""

from __future__ import annotations

import json
import secrets
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from .config import API_KEY_HEADER
from .log import get_logger
from .models import ProductIn
from .validation import ValidationFailure, validate_product

logger = get_logger(__name__)

UNAUTHORIZED = "Unauthorized: Invalid or missing API key"
INVALID_JSON = "Request body must be valid JSON"
PRODUCT_NOT_FOUND = "Product not found"
ROUTE_NOT_FOUND = "Route not found"
INTERNAL_ERROR = "Something went wrong!"

JSON_MEDIA_TYPE = "application/json"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _original_url(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


# ---------------------------
# HTTP middleware
# ---------------------------
async def log_requests(request: Request, call_next):
    logger.info("request_received", method=request.method, path=_original_url(request))
    return await call_next(request)


async def catch_faults(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        # detail stays in the log, the caller gets the generic message
        logger.exception(
            "unhandled_error",
            method=request.method,
            path=_original_url(request),
            error=repr(exc),
        )
        return error_response(500, INTERNAL_ERROR)


# ---------------------------
# Pipeline steps
# ---------------------------
@dataclass
class RequestContext:
    request: Request
    product: Optional[ProductIn] = None


Step = Callable[[RequestContext], Awaitable[Optional[Response]]]


async def authenticate(ctx: RequestContext) -> Optional[Response]:
    supplied = ctx.request.headers.get(API_KEY_HEADER)
    expected = ctx.request.app.state.settings.api_key
    if not supplied or not secrets.compare_digest(supplied.encode(), expected.encode()):
        return error_response(401, UNAUTHORIZED)
    return None


async def validate_body(ctx: RequestContext) -> Optional[Response]:
    raw = await ctx.request.body()
    # only application/json bodies are decoded, anything else counts as empty
    media_type = ctx.request.headers.get("content-type", "").split(";")[0].strip().lower()
    if media_type == JSON_MEDIA_TYPE and raw.strip():
        try:
            payload = json.loads(raw)
        except ValueError:
            return error_response(400, INVALID_JSON)
    else:
        payload = {}

    outcome = validate_product(payload)
    if isinstance(outcome, ValidationFailure):
        return error_response(400, outcome.reason)
    ctx.product = outcome
    return None


class Pipeline:
    """Ordered steps; the first one that returns a Response short-circuits."""

    def __init__(self, *steps: Step):
        self.steps = steps

    async def run(self, request: Request) -> Tuple[RequestContext, Optional[Response]]:
        ctx = RequestContext(request=request)
        for step in self.steps:
            response = await step(ctx)
            if response is not None:
                logger.info("request_rejected", step=step.__name__, status=response.status_code)
                return ctx, response
        return ctx, None


PROTECTED = Pipeline(authenticate)
PROTECTED_WITH_BODY = Pipeline(authenticate, validate_body)
