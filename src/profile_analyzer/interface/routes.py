"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from profile_analyzer.infrastructure.config import Settings, get_settings
from profile_analyzer.interface.dependencies import get_use_case
from profile_analyzer.interface.schemas import (
    AnalyzeRequest,
    ExampleProfile,
    RateLimitInfo,
    ReportResponse,
    StatusResponse,
)
from profile_analyzer.services.analyze_profile import AnalyzeProfileUseCase

router = APIRouter()

API_VERSION = "1.0.0"

_EXAMPLES: list[ExampleProfile] = [
    ExampleProfile(
        username="torvalds",
        name="Linus Torvalds",
        description="Creator of Linux kernel - Expect high scores for impact and technical depth",
        expected_score="85-95",
    ),
    ExampleProfile(
        username="facebook",
        name="Meta (Facebook)",
        description="Organization account - Well-organized repositories",
        expected_score="80-90",
    ),
    ExampleProfile(
        username="google",
        name="Google",
        description="Organization with diverse projects",
        expected_score="75-85",
    ),
    ExampleProfile(
        username="microsoft",
        name="Microsoft",
        description="Large organization with extensive open source",
        expected_score="80-90",
    ),
]


@router.post(
    "/analyze",
    response_model=ReportResponse,
    responses={
        400: {"description": "Invalid GitHub username or profile URL"},
        404: {"description": "GitHub profile not found"},
        429: {"description": "GitHub API rate limit exceeded"},
        503: {"description": "GitHub API unavailable"},
    },
)
async def analyze(
    body: AnalyzeRequest,
    use_case: AnalyzeProfileUseCase = Depends(get_use_case),
) -> ReportResponse:
    """Score a public GitHub profile (served from cache when fresh)."""
    report = await use_case.execute(body.github_url)
    return ReportResponse.model_validate(report)


@router.get(
    "/analysis/{username}",
    response_model=ReportResponse,
    responses={404: {"description": "No cached analysis for this user"}},
)
async def get_analysis(
    username: str,
    use_case: AnalyzeProfileUseCase = Depends(get_use_case),
) -> ReportResponse:
    """Return a previously computed analysis, for sharing."""
    return ReportResponse.model_validate(use_case.get_cached(username))


@router.get("/status", response_model=StatusResponse)
async def status(settings: Settings = Depends(get_settings)) -> StatusResponse:
    """Report service health and which GitHub rate limit applies."""
    authenticated = settings.github_token is not None
    return StatusResponse(
        version=API_VERSION,
        github_api=RateLimitInfo(
            authenticated=authenticated,
            requests_per_hour=5000 if authenticated else 60,
        ),
    )


@router.get("/examples", response_model=list[ExampleProfile])
async def examples() -> list[ExampleProfile]:
    """Well-known profiles to try the analyzer on."""
    return _EXAMPLES
