from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from growth_sim import database
from growth_sim.core.calculator import calculate
from growth_sim.database import DbPath
from growth_sim.schemas.calculation import CalculationParams, CalculationResult
from growth_sim.schemas.simulation import (
    AppSettings,
    LastCalculation,
    Simulation,
    StorageData,
)

logger = logging.getLogger(__name__)

FORM_DATA_KEY = "investment_form_data"
LAST_RESULT_KEY = "investment_last_result"
SETTINGS_KEY = "investment_settings"

OFFLINE_KEYS = [FORM_DATA_KEY, LAST_RESULT_KEY, SETTINGS_KEY]


class SimulationNotFoundError(LookupError):
    def __init__(self, simulation_id: str):
        super().__init__(f"simulation {simulation_id} not found")
        self.simulation_id = simulation_id


def current_time() -> datetime:
    return datetime.now(timezone.utc)


def _engine_params(params: CalculationParams) -> CalculationParams:
    # store the plain engine type, not a request subclass
    return CalculationParams.model_validate(params.model_dump())


def default_simulation_name(when: Optional[datetime] = None) -> str:
    when = when or current_time()
    return f"Simulation {when.date().isoformat()}"


def save_simulation(
    db_path: DbPath,
    parameters: CalculationParams,
    name: Optional[str] = None,
) -> Simulation:
    now = current_time()
    params = _engine_params(parameters)
    simulation = Simulation(
        id=str(uuid.uuid4()),
        name=name or default_simulation_name(now),
        createdAt=now,
        updatedAt=now,
        parameters=params,
        results=calculate(params),
    )
    database.insert_simulation(db_path, simulation.model_dump(mode="json"))
    logger.info("saved simulation %s (%s)", simulation.id, simulation.name)
    return simulation


def list_simulations(db_path: DbPath) -> List[Simulation]:
    return [Simulation.model_validate(record) for record in database.fetch_simulations(db_path)]


def get_simulation(db_path: DbPath, simulation_id: str) -> Simulation:
    record = database.fetch_simulation(db_path, simulation_id)
    if record is None:
        raise SimulationNotFoundError(simulation_id)
    return Simulation.model_validate(record)


def update_simulation(
    db_path: DbPath,
    simulation_id: str,
    name: Optional[str] = None,
    parameters: Optional[CalculationParams] = None,
) -> Simulation:
    """Rename and/or re-run a saved simulation. New parameters recompute its results."""
    current = get_simulation(db_path, simulation_id)
    changes: Dict[str, Any] = {"updatedAt": current_time()}
    if name is not None:
        changes["name"] = name
    if parameters is not None:
        params = _engine_params(parameters)
        changes["parameters"] = params
        changes["results"] = calculate(params)

    updated = current.model_copy(update=changes)
    if not database.update_simulation(db_path, updated.model_dump(mode="json")):
        raise SimulationNotFoundError(simulation_id)
    logger.info("updated simulation %s", simulation_id)
    return updated


def delete_simulation(db_path: DbPath, simulation_id: str) -> None:
    if not database.delete_simulation(db_path, simulation_id):
        raise SimulationNotFoundError(simulation_id)
    logger.info("deleted simulation %s", simulation_id)


def compare_simulations(db_path: DbPath, simulation_ids: Sequence[str]) -> List[Simulation]:
    """Fetch simulations in the order requested."""
    return [get_simulation(db_path, simulation_id) for simulation_id in simulation_ids]


def record_last_calculation(
    db_path: DbPath, params: CalculationParams, result: CalculationResult
) -> LastCalculation:
    last = LastCalculation(params=_engine_params(params), result=result, savedAt=current_time())
    database.put_value(db_path, LAST_RESULT_KEY, last.model_dump(mode="json"))
    return last


def fetch_last_calculation(db_path: DbPath) -> Optional[LastCalculation]:
    value = database.get_value(db_path, LAST_RESULT_KEY)
    if value is None:
        return None
    return LastCalculation.model_validate(value)


def save_form_data(db_path: DbPath, form_data: Dict[str, Any]) -> None:
    database.put_value(db_path, FORM_DATA_KEY, form_data)


def fetch_form_data(db_path: DbPath) -> Optional[Dict[str, Any]]:
    return database.get_value(db_path, FORM_DATA_KEY)


def save_settings(db_path: DbPath, settings: AppSettings) -> AppSettings:
    database.put_value(db_path, SETTINGS_KEY, settings.model_dump())
    return settings


def fetch_settings(db_path: DbPath, defaults: Optional[AppSettings] = None) -> AppSettings:
    value = database.get_value(db_path, SETTINGS_KEY)
    if value is None:
        return defaults or AppSettings()
    return AppSettings.model_validate(value)


def export_storage(db_path: DbPath) -> StorageData:
    value = database.get_value(db_path, SETTINGS_KEY)
    return StorageData(
        simulations=list_simulations(db_path),
        settings=AppSettings.model_validate(value) if value is not None else None,
    )


def clear_offline_data(db_path: DbPath) -> None:
    """Forget form input, the last result and settings. Saved simulations stay."""
    database.delete_values(db_path, OFFLINE_KEYS)
    logger.info("cleared offline data")
