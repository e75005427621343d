from __future__ import annotations

import csv
import io
from datetime import date, datetime, timezone

from growth_sim.core.calculator import calculate
from growth_sim.core.export import (
    build_comparison_rows,
    comparison_to_csv,
    simulation_to_csv,
)
from growth_sim.schemas.calculation import CalculationParams
from growth_sim.schemas.simulation import Simulation


def make_simulation(name: str, period: int, **overrides) -> Simulation:
    values = {
        "initialAmount": 1_000_000,
        "annualRate": 5,
        "investmentPeriod": period,
        "monthlyDeposit": 10_000,
        "bonusDeposit": 0,
        "calculationType": "simple",
    }
    values.update(overrides)
    params = CalculationParams(**values)
    created = datetime(2024, 4, 1, 9, 30, tzinfo=timezone.utc)
    return Simulation(
        id=name.lower(),
        name=name,
        createdAt=created,
        updatedAt=created,
        parameters=params,
        results=calculate(params),
    )


def test_simulation_csv_has_settings_results_and_breakdown():
    text = simulation_to_csv(make_simulation("Plan A", 2))
    lines = text.splitlines()

    assert lines[0] == "Investment simulation: Plan A"
    assert lines[1] == "Created: 2024-04-01"
    assert "Initial amount: 1000000" in lines
    assert "Annual rate: 5%" in lines
    assert "Calculation type: Simple" in lines
    assert "Total principal: 1240000" in lines

    header_index = lines.index("Year,Principal,Profit,Total")
    rows = list(csv.reader(io.StringIO("\n".join(lines[header_index + 1:]))))
    assert rows == [
        ["1", "1120000", "50000", "1170000"],
        ["2", "1240000", "106000", "1346000"],
    ]


def test_comparison_rows_pad_shorter_simulations():
    short = make_simulation("Short", 1)
    long = make_simulation("Long", 3)

    rows = build_comparison_rows([short, long])

    assert [row.year for row in rows] == [1, 2, 3]
    assert rows[0].entries[0] == short.results.yearlyBreakdown[0]
    assert rows[2].entries[0] is None
    assert rows[2].entries[1] == long.results.yearlyBreakdown[2]


def test_comparison_csv_layout():
    text = comparison_to_csv(
        [make_simulation("Short", 1), make_simulation("Long", 2)],
        created=date(2024, 5, 6),
    )
    lines = text.splitlines()

    assert lines[:3] == ["Investment simulation comparison", "Created: 2024-05-06", ""]
    assert lines[3] == (
        "Year,Short_Principal,Short_Profit,Short_Total,Long_Principal,Long_Profit,Long_Total"
    )
    assert lines[5].startswith("2,,,,")
    assert len(lines) == 6


def test_comparison_csv_of_nothing_is_empty():
    assert comparison_to_csv([]) == ""
    assert build_comparison_rows([]) == []


def test_line_breaks_in_names_stay_on_one_line():
    text = simulation_to_csv(make_simulation("Plan\nA", 1))
    lines = text.splitlines()

    assert lines[0] == "Investment simulation: Plan A"
    assert lines[1] == "Created: 2024-04-01"

    comparison = comparison_to_csv([make_simulation("Two\r\nLines", 1)], created=date(2024, 5, 6))
    assert comparison.splitlines()[3] == "Year,Two Lines_Principal,Two Lines_Profit,Two Lines_Total"


def test_comparison_defaults_to_todays_utc_date():
    text = comparison_to_csv([make_simulation("Plan", 1)])
    assert text.splitlines()[1] == f"Created: {datetime.now(timezone.utc).date().isoformat()}"
