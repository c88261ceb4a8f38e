"""Learning report endpoints."""

import asyncio
import logging

from fastapi import APIRouter, Response

from web3journey.i18n import resolve_locale
from web3journey.progress.dependencies import CurrentProgressStore
from web3journey.stats.router import CurrentStats

from .pdf import render_learning_report
from .schemas import LearningReport
from .service import build_learning_report, report_filename


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


@router.get("/learning/summary")
async def get_learning_summary(
    store: CurrentProgressStore,
    stats: CurrentStats,
    locale: str | None = None,
    name: str | None = None,
) -> LearningReport:
    """The numbers and rows the PDF report is drawn from."""
    return build_learning_report(store, stats.to_response(), resolve_locale(locale), name)


@router.get("/learning")
async def download_learning_report(
    store: CurrentProgressStore,
    stats: CurrentStats,
    locale: str | None = None,
    name: str | None = None,
) -> Response:
    """Download the learning report as a PDF."""
    report = build_learning_report(store, stats.to_response(), resolve_locale(locale), name)
    # PyMuPDF is synchronous; keep it off the event loop
    content = await asyncio.to_thread(render_learning_report, report)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(report.generated_at)}"'},
    )
