"""Validate endpoint for the API."""

import httpx
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from docschema.exceptions import ConfigurationError, DocumentError, FetchError
from docschema.heading_tree import build_heading_tree
from docschema.markdown_parser import parse_markdown
from docschema.reporters import DiagnosticCollector
from docschema.schema_loader import fetch_schema, schema_from_mapping
from docschema.utils.logging_config import get_logger
from docschema.validator import Validator
from server.models import ValidateErrorResponse, ValidateRequest, ValidateSuccessResponse
from server.server_config import SCHEMA_URL_ALLOWLIST

logger = get_logger(__name__)

router = APIRouter()

COMMON_VALIDATE_RESPONSES: dict[int | str, dict] = {
    status.HTTP_200_OK: {"model": ValidateSuccessResponse},
    status.HTTP_400_BAD_REQUEST: {"model": ValidateErrorResponse},
    status.HTTP_502_BAD_GATEWAY: {"model": ValidateErrorResponse},
}


@router.post("/api/validate", responses=COMMON_VALIDATE_RESPONSES)
async def api_validate(validate_request: ValidateRequest) -> JSONResponse:
    """Validate a markdown document against a structure schema.

    **The schema is given inline as ``schema`` or fetched from ``schema_url``.**
    ``schema_url`` must point at a host listed in
    ``DOCSCHEMA_SCHEMA_URL_ALLOWLIST``; redirects are not followed.
    Structural violations are part of a successful response; only a schema
    that cannot be used yields an error.

    **Returns**

    - **JSONResponse**: ``ValidateSuccessResponse`` with diagnostics, or
      ``ValidateErrorResponse`` with status **400** (bad schema, document or schema host)
      or **502** (schema could not be fetched)

    """
    if validate_request.schema_url is not None and not _is_allowed_schema_url(validate_request.schema_url):
        logger.warning("Schema URL host not allowed", extra={"schema_url": validate_request.schema_url})
        return _error("schema_url host is not allowed", status.HTTP_400_BAD_REQUEST)

    try:
        if validate_request.schema_url is not None:
            schema = await fetch_schema(validate_request.schema_url, follow_redirects=False)
        else:
            schema = schema_from_mapping(validate_request.schema_definition)
        validator = Validator(
            schema,
            rule_id=validate_request.rule_id,
            enforce_order=validate_request.enforce_order,
            allow_children=validate_request.allow_children,
        )
        sections = build_heading_tree(parse_markdown(validate_request.markdown))
    except FetchError as exc:
        logger.warning("Schema fetch failed", extra={"schema_url": validate_request.schema_url, "error": str(exc)})
        return _error(str(exc), status.HTTP_502_BAD_GATEWAY)
    except (ConfigurationError, DocumentError) as exc:
        logger.warning("Validation request rejected", extra={"error": str(exc)})
        return _error(str(exc), status.HTTP_400_BAD_REQUEST)

    collector = DiagnosticCollector()
    validator.validate_tree(sections, collector)
    logger.info(
        "Validated document",
        extra={"sections": len(sections), "diagnostics": len(collector.diagnostics)},
    )
    response = ValidateSuccessResponse(
        ok=not collector.diagnostics,
        sections=len(sections),
        diagnostics=collector.diagnostics,
    )
    return JSONResponse(content=response.model_dump(mode="json", by_alias=True))


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ValidateErrorResponse(error=message).model_dump(),
    )


def _is_allowed_schema_url(url: str) -> bool:
    """Only hosts listed in DOCSCHEMA_SCHEMA_URL_ALLOWLIST may be fetched."""
    try:
        host = httpx.URL(url).host.lower()
    except httpx.InvalidURL:
        return False
    return host in SCHEMA_URL_ALLOWLIST
