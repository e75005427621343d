"""Data contracts for saved simulations, settings and stored form state."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from growth_sim.schemas.calculation import (
    CalculationParams,
    CalculationRequest,
    CalculationResult,
    YearlyData,
)

STORAGE_VERSION = 1


class Simulation(BaseModel):
    id: str
    name: str
    createdAt: datetime
    updatedAt: datetime
    parameters: CalculationParams
    results: CalculationResult


class SimulationCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    parameters: CalculationRequest


class SimulationUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    parameters: Optional[CalculationRequest] = None


class AppSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    theme: Literal["light", "dark"] = "light"
    locale: Literal["ja", "en", "zh-TW"] = "ja"
    currency: Literal["JPY", "USD", "TWD"] = "JPY"


class LastCalculation(BaseModel):
    params: CalculationParams
    result: CalculationResult
    savedAt: datetime


class StorageData(BaseModel):
    """Everything the store holds, for backup and future migrations."""

    version: int = STORAGE_VERSION
    simulations: List[Simulation] = Field(default_factory=list)
    settings: Optional[AppSettings] = None


class ComparisonRow(BaseModel):
    # entries[i] belongs to the i-th compared simulation; None past its horizon
    year: int
    entries: List[Optional[YearlyData]]


class DisplayRow(BaseModel):
    label: str
    principal: str
    profit: str
    total: str


class DisplayResult(BaseModel):
    finalAmount: str
    totalPrincipal: str
    totalProfit: str
    profitRate: str
    rows: List[DisplayRow]
