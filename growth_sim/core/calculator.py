"""Growth projection engine.

Turns a CalculationParams into a year-by-year breakdown of principal, profit
and total value, plus the summary derived from it. Three strategies exist:

  - simple interest: no compounding, interest accrues linearly on the initial
    lump sum and on each year's deposits from the year after they were made.
  - yearly compounding: growth applies to last year's balance, then the year's
    deposits are added (deposits earn nothing until the following year).
  - monthly compounding: each month's deposits are added first, then the
    month's growth applies to the whole balance.

The yearly and monthly strategies deliberately differ in deposit timing.

Everything here is pure: no validation, no I/O, no shared state. Inputs are
assumed to be range-checked by the caller (see CalculationRequest).
"""

from __future__ import annotations

import logging
from enum import Enum
from itertools import accumulate
from typing import Callable, Dict, List, NamedTuple, Sequence

from growth_sim.schemas.calculation import (
    DEFAULT_BONUS_MONTHS,
    CalculationParams,
    CalculationResult,
    CalculationType,
    CompoundFrequency,
    YearlyData,
)

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


class Strategy(str, Enum):
    SIMPLE = "simple"
    COMPOUND_YEARLY = "compound_yearly"
    COMPOUND_MONTHLY = "compound_monthly"


class Balance(NamedTuple):
    principal: float
    total: float


def _bonus_deposit(params: CalculationParams) -> float:
    return params.bonusDeposit or 0.0


def _bonus_months(params: CalculationParams) -> Sequence[int]:
    if params.bonusMonths is None:
        return DEFAULT_BONUS_MONTHS
    return params.bonusMonths


def yearly_addition(params: CalculationParams) -> float:
    """Total contributed per year: 12 monthly deposits plus one bonus per bonus month."""
    yearly_deposit = params.monthlyDeposit * MONTHS_PER_YEAR
    yearly_bonus = _bonus_deposit(params) * len(_bonus_months(params))
    return yearly_deposit + yearly_bonus


def _entry(year: int, balance: Balance) -> YearlyData:
    return YearlyData(
        year=year,
        principal=balance.principal,
        profit=balance.total - balance.principal,
        total=balance.total,
    )


def _summarize(
    final_amount: float,
    total_principal: float,
    total_profit: float,
    breakdown: List[YearlyData],
) -> CalculationResult:
    profit_rate = (total_profit / total_principal) * 100 if total_principal > 0 else 0.0
    return CalculationResult(
        finalAmount=final_amount,
        totalPrincipal=total_principal,
        totalProfit=total_profit,
        profitRate=profit_rate,
        yearlyBreakdown=breakdown,
    )


def _summarize_balance(final: Balance, breakdown: List[YearlyData]) -> CalculationResult:
    return _summarize(
        final_amount=final.total,
        total_principal=final.principal,
        total_profit=final.total - final.principal,
        breakdown=breakdown,
    )


def _starting_balance(params: CalculationParams) -> Balance:
    return Balance(principal=params.initialAmount, total=params.initialAmount)


def calculate_yearly_compound_interest(params: CalculationParams) -> CalculationResult:
    """Annual compounding; this year's deposits start growing next year."""
    growth = 1 + params.annualRate / 100
    addition = yearly_addition(params)

    def step(balance: Balance, _year: int) -> Balance:
        return Balance(
            principal=balance.principal + addition,
            total=balance.total * growth + addition,
        )

    start = _starting_balance(params)
    states = list(accumulate(range(1, params.investmentPeriod + 1), step, initial=start))
    breakdown = [_entry(year, state) for year, state in enumerate(states[1:], start=1)]
    return _summarize_balance(states[-1], breakdown)


def calculate_monthly_compound_interest(params: CalculationParams) -> CalculationResult:
    """Monthly compounding at annualRate / 12; a month's deposits grow that same month."""
    growth = 1 + params.annualRate / MONTHS_PER_YEAR / 100
    bonus = _bonus_deposit(params)
    bonus_months = frozenset(_bonus_months(params))

    def step(balance: Balance, month: int) -> Balance:
        principal = balance.principal + params.monthlyDeposit
        total = balance.total + params.monthlyDeposit

        month_in_year = (month - 1) % MONTHS_PER_YEAR + 1
        if month_in_year in bonus_months:
            principal += bonus
            total += bonus

        return Balance(principal=principal, total=total * growth)

    total_months = params.investmentPeriod * MONTHS_PER_YEAR
    start = _starting_balance(params)
    states = list(accumulate(range(1, total_months + 1), step, initial=start))

    # states[m] is the balance after month m; keep the year-end snapshots
    breakdown = [
        _entry(month // MONTHS_PER_YEAR, states[month])
        for month in range(MONTHS_PER_YEAR, total_months + 1, MONTHS_PER_YEAR)
    ]
    return _summarize_balance(states[-1], breakdown)


def calculate_compound_interest(params: CalculationParams) -> CalculationResult:
    if params.compoundFrequency == CompoundFrequency.MONTHLY:
        return calculate_monthly_compound_interest(params)
    return calculate_yearly_compound_interest(params)


def calculate_simple_interest(params: CalculationParams) -> CalculationResult:
    """
    Simple interest on the initial amount and on each year's deposits.

    The deposit made in year i earns interest for (y - i) years by the end of
    year y, so the current year's deposit has earned nothing yet.
    """
    rate = params.annualRate / 100
    addition = yearly_addition(params)

    years = range(1, params.investmentPeriod + 1)
    principals = accumulate(years, lambda principal, _year: principal + addition, initial=params.initialAmount)
    next(principals)  # drop year 0

    breakdown: List[YearlyData] = []
    for year, principal in zip(years, principals):
        simple_interest = params.initialAmount * rate * year
        deposit_interest = sum(addition * rate * (year - i) for i in range(1, year))
        profit = simple_interest + deposit_interest
        breakdown.append(
            YearlyData(year=year, principal=principal, profit=profit, total=principal + profit)
        )

    if not breakdown:
        return _summarize_balance(_starting_balance(params), breakdown)

    last = breakdown[-1]
    return _summarize(
        final_amount=last.total,
        total_principal=last.principal,
        total_profit=last.profit,
        breakdown=breakdown,
    )


_STRATEGIES: Dict[Strategy, Callable[[CalculationParams], CalculationResult]] = {
    Strategy.SIMPLE: calculate_simple_interest,
    Strategy.COMPOUND_YEARLY: calculate_yearly_compound_interest,
    Strategy.COMPOUND_MONTHLY: calculate_monthly_compound_interest,
}


def resolve_strategy(params: CalculationParams) -> Strategy:
    if params.calculationType == CalculationType.SIMPLE:
        return Strategy.SIMPLE
    if params.compoundFrequency == CompoundFrequency.MONTHLY:
        return Strategy.COMPOUND_MONTHLY
    return Strategy.COMPOUND_YEARLY


def calculate(params: CalculationParams) -> CalculationResult:
    """Run the projection strategy selected by calculationType / compoundFrequency."""
    strategy = resolve_strategy(params)
    logger.debug(
        "calculating %s projection over %s years", strategy.value, params.investmentPeriod
    )
    return _STRATEGIES[strategy](params)
