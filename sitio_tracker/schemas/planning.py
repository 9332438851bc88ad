"""
sitio_tracker/schemas/planning.py

Request and response schemas for monthly planning endpoints.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, model_validator


class MonthRangeRequest(BaseModel):
    start: date
    end: date


class MonthRangeResponse(BaseModel):
    months: list[str] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)


class MonthlyTemplateRequest(BaseModel):
    """
    Target to spread across *months*; ``strategy`` defaults to the configured one.
    """

    total: float = Field(..., ge=0)
    months: list[str] = Field(default_factory=list)
    strategy: str | None = None


class CumulativeTemplateRequest(BaseModel):
    months: list[str] = Field(default_factory=list)
    strategy: str | None = None


class BreakdownResponse(BaseModel):
    breakdown: dict[str, float] = Field(default_factory=dict)


class CumulativeValidationRequest(BaseModel):
    values: dict[str, float] = Field(default_factory=dict)
    months: list[str] = Field(default_factory=list)


class CumulativeValidationResponse(BaseModel):
    is_valid: bool
    message: str | None = None


class AdjustBreakdownRequest(BaseModel):
    current: dict[str, float] = Field(default_factory=dict)
    new_total: float = Field(..., ge=0)


class SlippageRequest(BaseModel):
    plan: dict[str, float] = Field(default_factory=dict)
    actual: dict[str, float] = Field(default_factory=dict)
    months: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _default_months(self) -> "SlippageRequest":
        if not self.months:
            self.months = list(self.plan)
        return self


class SlippageResponse(BaseModel):
    slippage: dict[str, float] = Field(default_factory=dict)
    cumulative_plan: dict[str, float] = Field(default_factory=dict)
    cumulative_actual: dict[str, float] = Field(default_factory=dict)
