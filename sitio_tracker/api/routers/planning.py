"""
sitio_tracker/api/routers/planning.py

Monthly target planning endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from planning.months import format_month, generate_month_range
from planning.progress import (
    adjust_monthly_breakdown,
    calculate_slippage,
    get_cumulative_progress,
    validate_cumulative_percentage,
)
from planning.strategies import UnknownStrategyError
from planning.templates import generate_cumulative_percentage_template, generate_monthly_template
from sitio_tracker.config import get_planning_settings
from sitio_tracker.schemas.planning import (
    AdjustBreakdownRequest,
    BreakdownResponse,
    CumulativeTemplateRequest,
    CumulativeValidationRequest,
    CumulativeValidationResponse,
    MonthlyTemplateRequest,
    MonthRangeRequest,
    MonthRangeResponse,
    SlippageRequest,
    SlippageResponse,
)

router = APIRouter(prefix="/planning", tags=["planning"])


def _strategy_or_default(strategy: str | None) -> str:
    return strategy or get_planning_settings().default_strategy


@router.post("/months", response_model=MonthRangeResponse)
def month_range(payload: MonthRangeRequest) -> MonthRangeResponse:
    months = generate_month_range(payload.start, payload.end)
    return MonthRangeResponse(months=months, labels=[format_month(month) for month in months])


@router.post("/monthly-template", response_model=BreakdownResponse)
def monthly_template(payload: MonthlyTemplateRequest) -> BreakdownResponse:
    """
    Spread an absolute target across the given months.
    """

    try:
        breakdown = generate_monthly_template(
            payload.total,
            payload.months,
            _strategy_or_default(payload.strategy),
        )
    except UnknownStrategyError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return BreakdownResponse(breakdown=breakdown)


@router.post("/cumulative-template", response_model=BreakdownResponse)
def cumulative_template(payload: CumulativeTemplateRequest) -> BreakdownResponse:
    try:
        breakdown = generate_cumulative_percentage_template(
            payload.months,
            _strategy_or_default(payload.strategy),
        )
    except UnknownStrategyError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return BreakdownResponse(breakdown=breakdown)


@router.post("/validate-cumulative", response_model=CumulativeValidationResponse)
def validate_cumulative(payload: CumulativeValidationRequest) -> CumulativeValidationResponse:
    result = validate_cumulative_percentage(
        payload.values,
        payload.months,
        tolerance=get_planning_settings().percentage_tolerance,
    )
    return CumulativeValidationResponse(is_valid=result.is_valid, message=result.message)


@router.post("/adjust", response_model=BreakdownResponse)
def adjust(payload: AdjustBreakdownRequest) -> BreakdownResponse:
    return BreakdownResponse(breakdown=adjust_monthly_breakdown(payload.current, payload.new_total))


@router.post("/slippage", response_model=SlippageResponse)
def slippage(payload: SlippageRequest) -> SlippageResponse:
    """
    Planned minus actual per month, with running totals for both series.
    """

    return SlippageResponse(
        slippage=calculate_slippage(payload.plan, payload.actual, payload.months),
        cumulative_plan=get_cumulative_progress(payload.plan, payload.months),
        cumulative_actual=get_cumulative_progress(payload.actual, payload.months),
    )
