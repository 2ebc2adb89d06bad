"""/v1/analyses - store, fetch and render cash flow analyses"""

import re
import time
import uuid
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.responses import Response

from cashflow_gateway.api.v1.schemas import (
    AnalysisCreateRequest,
    AnalysisCreatedResponse,
    AnalysisResponse,
    DebtSummaryResponse,
    RenderRequest,
)
from cashflow_gateway.api.dependencies import get_renderer_client, get_request_id
from cashflow_gateway.config import settings
from cashflow_gateway.domain.debts import calculate_debt_summary
from cashflow_gateway.domain.dscr import dscr_band
from cashflow_gateway.domain.exceptions import RenderServiceError
from cashflow_gateway.domain.models import CashFlowAnalysis
from cashflow_gateway.domain.reconstruction import reconstruct_analysis, resolve_debts
from cashflow_gateway.infrastructure.clients.renderer import RendererClient
from cashflow_gateway.infrastructure.database.session import get_db
from cashflow_gateway.infrastructure.database.repositories import AnalysisRepository
from cashflow_gateway.infrastructure.observability.metrics import (
    analysis_created_counter,
    record_dscr,
    record_lookup,
)
from cashflow_gateway.infrastructure.observability.logging import log_analysis_loaded, log_report_rendered

router = APIRouter()


def _parse_analysis_id(analysis_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(analysis_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid analysis ID format")


def _load_analysis(db: Session, analysis_id: str, request_id: str) -> CashFlowAnalysis:
    """Fetch and normalize, or 404"""
    start_time = time.time()
    analysis = AnalysisRepository(db).get_analysis(_parse_analysis_id(analysis_id))
    duration_ms = (time.time() - start_time) * 1000

    record_lookup(analysis is not None)
    if analysis is None:
        log_analysis_loaded(request_id, analysis_id, False, None, duration_ms)
        raise HTTPException(status_code=404, detail="Analysis not found")

    log_analysis_loaded(request_id, analysis_id, True, dscr_band(analysis.dscr), duration_ms)
    return analysis


def report_filename(report_type: str, business_name: str) -> str:
    """CashFlowAnalysis-Acme_Co.pdf / BusinessDebtSummary-Acme_Co.pdf"""
    name = re.sub(r"\s+", "_", business_name.strip()) or "Business"
    prefix = "CashFlowAnalysis" if report_type == "full" else "BusinessDebtSummary"
    return f"{prefix}-{name}.pdf"


@router.post("/analyses", response_model=AnalysisCreatedResponse, status_code=201)
def create_analysis(
    request_body: AnalysisCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Store a submitted analysis.

    The debt summary and DSCR are computed here when the submission does
    not carry them, so report pages can read them back as stored.
    """
    request_id = get_request_id(request)
    fields = request_body.model_dump()

    debts = resolve_debts(fields["debts"])
    if fields["debt_summary"] is None and isinstance(debts, list):
        fields["debt_summary"] = DebtSummaryResponse.from_domain(calculate_debt_summary(debts)).model_dump()

    if fields["dscr"] is None:
        fields["dscr"] = reconstruct_analysis(fields).dscr

    try:
        record = AnalysisRepository(db).create_analysis(fields)
        analysis_id = str(record.id)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Failed to store analysis: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    analysis_created_counter.inc()
    band = record_dscr(fields["dscr"])
    logging.info(
        "Analysis stored",
        extra={"request_id": request_id, "analysis_id": analysis_id, "step": "analysis_stored", "dscr_band": band},
    )

    return AnalysisCreatedResponse(analysis_id=analysis_id, dscr=fields["dscr"])


@router.get("/analyses/{analysis_id}", response_model=AnalysisResponse)
def get_analysis(analysis_id: str, request: Request, db: Session = Depends(get_db)):
    """
    Retrieve a stored analysis in normalized form.

    Returns:
        Loan info, year-keyed financials, DSCR, debts and the stored debt summary
    """
    analysis = _load_analysis(db, analysis_id, get_request_id(request))
    return AnalysisResponse.from_domain(analysis, dscr_band(analysis.dscr))


@router.get("/analyses/{analysis_id}/debt-summary", response_model=DebtSummaryResponse)
def get_debt_summary(
    analysis_id: str,
    request: Request,
    ytd_months: int = Query(0, ge=0, le=12, description="Months elapsed in the year-to-date period"),
    db: Session = Depends(get_db),
):
    """Recompute the debt summary from the stored debts"""
    analysis = _load_analysis(db, analysis_id, get_request_id(request))
    debts = analysis.debts if isinstance(analysis.debts, list) else []
    return DebtSummaryResponse.from_domain(calculate_debt_summary(debts, ytd_months=ytd_months))


@router.post("/analyses/{analysis_id}/pdf")
async def render_report(
    analysis_id: str,
    request_body: RenderRequest,
    request: Request,
    db: Session = Depends(get_db),
    renderer: RendererClient = Depends(get_renderer_client),
):
    """
    Render a report PDF through the external renderer.

    Flow:
    1. Confirm the analysis exists
    2. Point the renderer at the site's print page for this analysis
    3. Return the PDF as an attachment
    """
    start_time = time.time()
    request_id = get_request_id(request)
    analysis = _load_analysis(db, analysis_id, request_id)

    print_url = f"{settings.site_url.rstrip('/')}/report/print/{analysis_id}/{request_body.type}"

    try:
        pdf = await renderer.render_pdf(print_url)
    except RenderServiceError as e:
        logging.error(f"Renderer error: {e}", extra={"request_id": request_id, "analysis_id": analysis_id})
        raise HTTPException(status_code=503, detail="PDF rendering unavailable")

    duration_ms = (time.time() - start_time) * 1000
    log_report_rendered(request_id, analysis_id, request_body.type, len(pdf), duration_ms)

    filename = report_filename(request_body.type, analysis.loan_info.business_name)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
