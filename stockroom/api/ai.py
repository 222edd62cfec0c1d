"""AI assistant API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from stockroom.api.dependencies import get_assistant_service, get_current_user
from stockroom.database import get_db
from stockroom.models.user import User
from stockroom.schemas.ai import (
    DescriptionRequest,
    DescriptionResponse,
    ReportSummaryResponse,
    SupplierEmailRequest,
    SupplierEmailResponse,
)
from stockroom.schemas.dashboard import ReportStats
from stockroom.services.assistant import AssistantService
from stockroom.services.llm import LLMError, LLMNotConfiguredError
from stockroom.services.product_import import DEFAULT_CATEGORY
from stockroom.services.reports import list_products, report_summary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ai", tags=["ai"])


def _llm_failure(error: LLMError, what: str) -> HTTPException:
    if isinstance(error, LLMNotConfiguredError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI assistant is not configured",
        )
    logger.error(f"AI {what} error: {error}")
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Failed to generate {what}",
    )


@router.post("/generate-description", response_model=DescriptionResponse)
async def generate_description(
    request: DescriptionRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    assistant: Annotated[AssistantService, Depends(get_assistant_service)],
):
    """Generate a short internal note for a product."""
    try:
        description = await assistant.generate_product_description(
            request.name, request.category or DEFAULT_CATEGORY
        )
    except LLMError as e:
        raise _llm_failure(e, "description") from e
    return DescriptionResponse(description=description)


@router.post("/generate-email", response_model=SupplierEmailResponse)
async def generate_email(
    request: SupplierEmailRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    assistant: Annotated[AssistantService, Depends(get_assistant_service)],
):
    """Generate a purchase order email to a supplier."""
    try:
        email = await assistant.generate_supplier_email(
            product_name=request.product_name,
            quantity=request.quantity,
            unit=request.unit,
            current_stock=request.current_stock,
            supplier_name=request.supplier_name,
        )
    except LLMError as e:
        raise _llm_failure(e, "email") from e
    return SupplierEmailResponse(email=email)


@router.post("/summarize-report", response_model=ReportSummaryResponse)
async def summarize_report(
    current_user: Annotated[User, Depends(get_current_user)],
    assistant: Annotated[AssistantService, Depends(get_assistant_service)],
    db: Annotated[Session, Depends(get_db)],
    stats: Annotated[ReportStats | None, Body()] = None,
):
    """Summarize inventory figures. Without a body the current inventory is used."""
    if stats is None:
        stats = report_summary(list_products(db))
    try:
        summary = await assistant.summarize_report(stats)
    except LLMError as e:
        raise _llm_failure(e, "summary") from e
    return ReportSummaryResponse(summary=summary)
