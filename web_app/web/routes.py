"""Public routes: create, redirect and access report."""

import json
import re
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, HTTPException, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError as SchemaValidationError

from shortlink.errors import FieldErrors, ValidationError
from shortlink.common.links import access_context, public_base_url

from ..api.schemas import (
    ShortenRequest,
    ShortenResponse,
    AccessReportResponse,
    ErrorsResponse,
)
from ..api.serializers import serialize_link, serialize_accesses

router = APIRouter()

# Route-level code shape (ASCII word characters, like the stored codes)
CODE_PATTERN = re.compile(r"\w{6}", re.ASCII)

UNKNOWN_FIELD_MESSAGE = "is not a recognized field"
INVALID_MESSAGE = "is invalid"
MOVED_BODY = "301 Moved Permanently\n"


def require_json(request: Request) -> None:
    """Only JSON requests reach the create and report endpoints."""
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() != "application/json":
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)


def _require_code(code: str) -> str:
    if not CODE_PATTERN.fullmatch(code):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return code


async def _read_payload(request: Request) -> Dict[str, Any]:
    """Decode the JSON body; anything unparseable counts as an empty object."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _parse_shorten_request(payload: Dict[str, Any]) -> ShortenRequest:
    try:
        return ShortenRequest.model_validate(payload)
    except SchemaValidationError as e:
        errors = FieldErrors()
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "base"
            if error["type"] == "extra_forbidden":
                errors.add(field, UNKNOWN_FIELD_MESSAGE)
            else:
                errors.add(field, INVALID_MESSAGE)
        raise ValidationError(errors) from e


@router.post(
    "/short_link",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorsResponse, "description": "Invalid request"},
        404: {"description": "Request is not JSON"},
    },
    dependencies=[Depends(require_json)],
    summary="Create short link",
    description="Shorten a URL, reusing the existing link for equivalent URLs.",
)
async def create_short_link(request: Request):
    """Create (or reuse) the short link for a URL."""
    service = request.app.state.service
    config = request.app.state.config

    body = _parse_shorten_request(await _read_payload(request))
    link = await service.shorten(body.long_url)

    base_url = public_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )

    return serialize_link(link, base_url, config.path_prefix)


@router.get(
    "/{code}+",
    response_model=AccessReportResponse,
    responses={404: {"description": "Short code not found"}},
    dependencies=[Depends(require_json)],
    summary="Access report",
    description="List the recorded accesses of a short link, newest first.",
)
async def access_report(request: Request, code: str):
    """Report the accesses of a short link."""
    service = request.app.state.service

    accesses = await service.list_accesses(_require_code(code), newest_first=True)
    if accesses is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    return serialize_accesses(accesses)


@router.get(
    "/{code}",
    response_class=PlainTextResponse,
    status_code=status.HTTP_301_MOVED_PERMANENTLY,
    responses={404: {"description": "Short code not found"}},
    summary="Follow short link",
)
async def follow_short_link(request: Request, code: str):
    """Permanently redirect to the original URL and record the access."""
    service = request.app.state.service
    context = access_context(request.headers)

    link = await service.follow(
        _require_code(code),
        referrer_url=context.referrer_url,
        user_agent=context.user_agent,
    )
    if link is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    return PlainTextResponse(
        MOVED_BODY,
        status_code=status.HTTP_301_MOVED_PERMANENTLY,
        headers={"Location": link.url},
    )
