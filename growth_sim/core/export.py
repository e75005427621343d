"""CSV export of simulations and simulation comparisons."""

from __future__ import annotations

import csv
import io
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence

from growth_sim.core.formatting import format_percentage
from growth_sim.schemas.calculation import CalculationType, CompoundFrequency
from growth_sim.schemas.simulation import ComparisonRow, Simulation

# Excel needs the BOM to open UTF-8 CSV files correctly
CSV_BOM = "\ufeff"
CSV_MIMETYPE = "text/csv; charset=utf-8"

BREAKDOWN_HEADERS = ["Year", "Principal", "Profit", "Total"]


def _number(value: float) -> str:
    # whole numbers print without a trailing .0
    return str(int(value)) if float(value).is_integer() else repr(value)


def _single_line(text: str) -> str:
    return " ".join(text.splitlines())


def _write_lines(lines: Sequence[str], rows: Sequence[Sequence[object]]) -> str:
    buffer = io.StringIO()
    for line in lines:
        buffer.write(line + "\n")
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def simulation_to_csv(simulation: Simulation) -> str:
    params = simulation.parameters
    results = simulation.results

    calculation = "Compound" if params.calculationType == CalculationType.COMPOUND else "Simple"
    frequency = "Yearly" if params.compoundFrequency == CompoundFrequency.YEARLY else "Monthly"

    lines = [
        f"Investment simulation: {_single_line(simulation.name)}",
        f"Created: {simulation.createdAt.date().isoformat()}",
        "",
        "Settings:",
        f"Initial amount: {_number(params.initialAmount)}",
        f"Annual rate: {_number(params.annualRate)}%",
        f"Investment period: {params.investmentPeriod} years",
        f"Monthly deposit: {_number(params.monthlyDeposit)}",
        f"Bonus deposit: {_number(params.bonusDeposit or 0)}",
        f"Calculation type: {calculation}",
        f"Compound frequency: {frequency}",
        "",
        "Results:",
        f"Final amount: {_number(results.finalAmount)}",
        f"Total principal: {_number(results.totalPrincipal)}",
        f"Total profit: {_number(results.totalProfit)}",
        f"Profit rate: {format_percentage(results.profitRate)}",
        "",
    ]
    rows: List[List[object]] = [BREAKDOWN_HEADERS]
    rows.extend(
        [entry.year, _number(entry.principal), _number(entry.profit), _number(entry.total)]
        for entry in results.yearlyBreakdown
    )
    return _write_lines(lines, rows)


def build_comparison_rows(simulations: Sequence[Simulation]) -> List[ComparisonRow]:
    """Align breakdowns by year; a simulation past its horizon contributes None."""
    if not simulations:
        return []

    max_years = max(len(sim.results.yearlyBreakdown) for sim in simulations)
    by_year = [{entry.year: entry for entry in sim.results.yearlyBreakdown} for sim in simulations]
    return [
        ComparisonRow(year=year, entries=[entries.get(year) for entries in by_year])
        for year in range(1, max_years + 1)
    ]


def comparison_to_csv(simulations: Sequence[Simulation], created: Optional[date] = None) -> str:
    if not simulations:
        return ""

    created = created or datetime.now(timezone.utc).date()
    headers: List[object] = ["Year"]
    for sim in simulations:
        name = _single_line(sim.name)
        headers.extend([f"{name}_Principal", f"{name}_Profit", f"{name}_Total"])

    rows: List[List[object]] = [headers]
    for comparison in build_comparison_rows(simulations):
        row: List[object] = [comparison.year]
        for entry in comparison.entries:
            if entry is None:
                row.extend(["", "", ""])
            else:
                row.extend([_number(entry.principal), _number(entry.profit), _number(entry.total)])
        rows.append(row)

    lines = [
        "Investment simulation comparison",
        f"Created: {created.isoformat()}",
        "",
    ]
    return _write_lines(lines, rows)
