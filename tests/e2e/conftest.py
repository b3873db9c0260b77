import os
from pathlib import Path
from typing import Iterator

import pytest
from alembic import command
from alembic.config import Config
from testcontainers.postgres import PostgresContainer

from vidhost.db.connection import Database


@pytest.fixture(scope="session")
def db_url() -> Iterator[str]:
    """Start a Postgres container, run migrations, and return the DB URL."""
    with PostgresContainer("postgres:16") as pg:
        raw_url = pg.get_connection_url()
        # Normalize to psycopg3-compatible URL if needed
        url = raw_url.replace("postgresql+psycopg2://", "postgresql://")
        os.environ["DATABASE_URL"] = url

        # Run Alembic migrations against this database
        root_dir = Path(__file__).resolve().parents[2]
        alembic_cfg = Config(str(root_dir / "alembic.ini"))
        command.upgrade(alembic_cfg, "head")

        yield url


@pytest.fixture
def db(db_url: str) -> Iterator[Database]:
    """A database handle with empty tables for each test."""
    database = Database(db_url)
    yield database
    with database.cursor() as cursor:
        cursor.execute("TRUNCATE videos, accounts")
