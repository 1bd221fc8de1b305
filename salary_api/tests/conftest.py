import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


SCHEMA = """
CREATE TABLE "{table}" (
  Division TEXT,
  Department TEXT,
  Title TEXT,
  Employee TEXT,
  Salary TEXT
);
"""

DEPARTMENTS = [
    "Computer Science",
    "Computer  Engineering",
    "Athletics",
    "Art History",
    "Mathematics",
]
TITLES = ["Professor", "Lecturer", "Coach", "Admin Assistant"]
SURNAMES = [
    "Smith", "Jones", "Goldsmith", "Brown", "Nguyen", "Garcia", "Smithers",
    "Lee", "Patel", "Kim", "Chen", "Lopez", "Walker",
]


def _salary(i: int) -> str:
    # spread over 4-6 digit values so text order differs from numeric order
    amount = [9500, 120000, 45250, 87000, 310000, 15000, 66600][i % 7] + i * 13
    return f"${amount:,.2f}"


def make_rows(n: int, seed: int = 0) -> list[tuple]:
    rows = []
    for i in range(n):
        k = i + seed
        rows.append((
            f"Division {k % 3}",
            DEPARTMENTS[k % len(DEPARTMENTS)],
            TITLES[k % len(TITLES)],
            f"{SURNAMES[k % len(SURNAMES)]}, Person{i:02d}",
            _salary(k),
        ))
    return rows


ROWS_2019 = make_rows(25)
ROWS_2020 = make_rows(4, seed=5)


def build_salary_db(path: str, tables: dict[str, list[tuple]]) -> str:
    conn = sqlite3.connect(path)
    try:
        for table, rows in tables.items():
            conn.executescript(SCHEMA.format(table=table))
            conn.executemany(f'INSERT INTO "{table}" VALUES (?,?,?,?,?)', rows)
        # decoy tables that must never be treated as years
        conn.execute("CREATE TABLE IF NOT EXISTS meta (k TEXT, v TEXT)")
        conn.execute("CREATE TABLE IF NOT EXISTS \"draftData\" (x TEXT)")
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    base = tmp_path_factory.mktemp("db")
    path = base / "salary_test.db"
    # Point the app at this temp DB and away from any local config.yaml
    os.environ["SALARY_DB_PATH"] = str(path)
    os.environ["SALARY_CONFIG"] = str(base / "missing-config.yaml")
    build_salary_db(str(path), {"2019Data": ROWS_2019, "2020Data": ROWS_2020})
    return str(path)


@pytest.fixture()
def write_config(tmp_path, monkeypatch, tmp_db_path):
    """Write a config.yaml for this test only and point SALARY_CONFIG at it."""
    def _write(text: str) -> str:
        p = tmp_path / "config.yaml"
        p.write_text(text, encoding="utf-8")
        monkeypatch.setenv("SALARY_CONFIG", str(p))
        return str(p)
    return _write


@pytest.fixture()
def client(tmp_db_path):
    # Import app after env is ready
    from salary_api.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture()
def rows_2019():
    return list(ROWS_2019)


@pytest.fixture()
def make_salary_db(tmp_path):
    def _make(name: str, tables: dict) -> str:
        return build_salary_db(str(tmp_path / name), tables)
    return _make
