"""Data contracts for growth projections."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BONUS_MONTHS = (6, 12)

# keeps 50 years of 100% growth well inside float range
MAX_AMOUNT = 1e15


class CalculationType(str, Enum):
    SIMPLE = "simple"
    COMPOUND = "compound"


class CompoundFrequency(str, Enum):
    YEARLY = "yearly"
    MONTHLY = "monthly"


class CalculationParams(BaseModel):
    """Inputs for a single projection run.

    The engine trusts these values as given; range checks live on
    CalculationRequest, which is what the API accepts.
    """

    model_config = ConfigDict(frozen=True)

    initialAmount: float
    annualRate: float
    investmentPeriod: int
    monthlyDeposit: float
    bonusDeposit: Optional[float] = 0.0
    bonusMonths: Optional[Tuple[int, ...]] = DEFAULT_BONUS_MONTHS
    compoundFrequency: CompoundFrequency = CompoundFrequency.YEARLY
    calculationType: CalculationType = CalculationType.COMPOUND


class CalculationRequest(CalculationParams):
    """Validated form input. Numeric strings are coerced the way form fields arrive."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    initialAmount: float = Field(ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    annualRate: float = Field(ge=0, le=100, allow_inf_nan=False)
    investmentPeriod: int = Field(ge=1, le=50)
    monthlyDeposit: float = Field(ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    bonusDeposit: Optional[float] = Field(default=0.0, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)

    @field_validator("bonusMonths")
    @classmethod
    def _check_bonus_months(
        cls, months: Optional[Tuple[int, ...]]
    ) -> Optional[Tuple[int, ...]]:
        if months is None:
            return months
        out_of_range = [month for month in months if not 1 <= month <= 12]
        if out_of_range:
            raise ValueError(f"bonus months must be between 1 and 12, got {out_of_range}")
        if len(set(months)) != len(months):
            raise ValueError("bonus months must be unique")
        return tuple(sorted(months))


class YearlyData(BaseModel):
    """One row of the year-by-year breakdown."""

    model_config = ConfigDict(frozen=True)

    year: int
    principal: float
    profit: float
    total: float


class CalculationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    finalAmount: float
    totalPrincipal: float
    totalProfit: float
    profitRate: float
    yearlyBreakdown: List[YearlyData]
