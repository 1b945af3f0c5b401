"""
Prep Routes - Briefings, transcript extraction and client config.

Endpoints:
- POST /api/prep     : Pre-1:1 briefing for a member
- POST /api/extract  : Structured draft from a transcript
- GET  /api/config   : Which integrations are configured
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from people_journal.api.deps import get_app_settings, get_briefing, get_extraction
from people_journal.core.config import Settings
from people_journal.core.logging_config import get_logger
from people_journal.models.briefing import (
    BriefingPayload,
    ConfigResponse,
    ErrorResponse,
    ExtractRequest,
    PrepRequest,
)
from people_journal.services.briefing_service import BriefingService
from people_journal.services.extraction_service import ExtractionService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Prep"],
    responses={
        404: {"model": ErrorResponse, "description": "Member not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)


@router.post(
    "/prep",
    response_model=BriefingPayload,
    response_model_exclude_none=True,
    summary="Build a 1:1 briefing",
    description="""
    Combines the member's last entries, their current tracker activity and
    an LLM narrative. Results are cached per member, day and entry version;
    pass `force=true` to rebuild.

    Tracker fields are present only when the tracker is configured and
    returned data. Tracker or LLM failures never fail the request; they
    only degrade the affected section.
    """,
)
def prep(
    request: PrepRequest,
    service: BriefingService = Depends(get_briefing),
) -> BriefingPayload:
    logger.info(f"[PREP] Briefing requested: member_id={request.member_id}, force={request.force}")
    return service.build_briefing(request.member_id, force=request.force)


@router.post("/extract", summary="Extract entry fields from a transcript")
def extract(
    request: ExtractRequest,
    service: ExtractionService = Depends(get_extraction),
) -> Dict[str, Any]:
    return service.extract(request.member_name, request.transcript)


@router.get("/config", response_model=ConfigResponse, response_model_exclude_none=True)
def get_config(settings: Settings = Depends(get_app_settings)) -> ConfigResponse:
    configured = settings.tracker_configured()
    return ConfigResponse(
        jira_configured=configured,
        jira_base_url=settings.jira_base_url if configured else None,
    )
