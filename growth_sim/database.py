import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

DbPath = Union[str, Path]


def _connect(db_path: DbPath) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: DbPath) -> None:
    conn = _connect(db_path)
    try:
        conn.execute(
            """
            create table if not exists simulations (
                id text primary key,
                name text not null,
                parameters text not null,
                results text not null,
                created_at text not null,
                updated_at text not null
            )
            """
        )
        conn.execute(
            """
            create table if not exists kv_store (
                key text primary key,
                value text not null,
                updated_at text not null
            )
            """
        )
        conn.commit()
    finally:
        conn.close()


def _simulation_record(row: sqlite3.Row) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "name": row["name"],
        "parameters": json.loads(row["parameters"]),
        "results": json.loads(row["results"]),
        "createdAt": row["created_at"],
        "updatedAt": row["updated_at"],
    }


def insert_simulation(db_path: DbPath, record: Dict[str, Any]) -> None:
    conn = _connect(db_path)
    try:
        conn.execute(
            """
            insert into simulations (id, name, parameters, results, created_at, updated_at)
            values (?, ?, ?, ?, ?, ?)
            """,
            (
                record["id"],
                record["name"],
                json.dumps(record["parameters"]),
                json.dumps(record["results"]),
                record["createdAt"],
                record["updatedAt"],
            ),
        )
        conn.commit()
    finally:
        conn.close()


def update_simulation(db_path: DbPath, record: Dict[str, Any]) -> bool:
    conn = _connect(db_path)
    try:
        cursor = conn.execute(
            """
            update simulations
            set name = ?, parameters = ?, results = ?, updated_at = ?
            where id = ?
            """,
            (
                record["name"],
                json.dumps(record["parameters"]),
                json.dumps(record["results"]),
                record["updatedAt"],
                record["id"],
            ),
        )
        conn.commit()
        return cursor.rowcount > 0
    finally:
        conn.close()


def delete_simulation(db_path: DbPath, simulation_id: str) -> bool:
    conn = _connect(db_path)
    try:
        cursor = conn.execute("delete from simulations where id = ?", (simulation_id,))
        conn.commit()
        return cursor.rowcount > 0
    finally:
        conn.close()


def fetch_simulation(db_path: DbPath, simulation_id: str) -> Optional[Dict[str, Any]]:
    conn = _connect(db_path)
    try:
        row = conn.execute(
            """
            select id, name, parameters, results, created_at, updated_at
            from simulations
            where id = ?
            """,
            (simulation_id,),
        ).fetchone()
        if row is None:
            return None
        return _simulation_record(row)
    finally:
        conn.close()


def fetch_simulations(db_path: DbPath) -> List[Dict[str, Any]]:
    conn = _connect(db_path)
    try:
        rows = conn.execute(
            """
            select id, name, parameters, results, created_at, updated_at
            from simulations
            order by created_at, rowid
            """
        ).fetchall()
        return [_simulation_record(row) for row in rows]
    finally:
        conn.close()


def put_value(db_path: DbPath, key: str, value: Any) -> None:
    conn = _connect(db_path)
    try:
        conn.execute(
            """
            insert into kv_store (key, value, updated_at)
            values (?, ?, ?)
            on conflict(key) do update set value = excluded.value, updated_at = excluded.updated_at
            """,
            (key, json.dumps(value), datetime.now(timezone.utc).isoformat(timespec="seconds")),
        )
        conn.commit()
    finally:
        conn.close()


def get_value(db_path: DbPath, key: str) -> Optional[Any]:
    conn = _connect(db_path)
    try:
        row = conn.execute("select value from kv_store where key = ?", (key,)).fetchone()
        if row is None:
            return None
        return json.loads(row["value"])
    finally:
        conn.close()


def delete_values(db_path: DbPath, keys: List[str]) -> None:
    conn = _connect(db_path)
    try:
        conn.executemany("delete from kv_store where key = ?", [(key,) for key in keys])
        conn.commit()
    finally:
        conn.close()
