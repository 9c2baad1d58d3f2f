"""
Fixtures for integration tests against a real PostgreSQL database

Each test gets a connection inside one transaction with a private schema
seeded from schema.sql. The transaction is rolled back afterwards, so
nothing is left behind.
"""
import uuid
from pathlib import Path

import psycopg2
import pytest
from psycopg2.extras import RealDictCursor

SCHEMA_SQL = Path(__file__).parent / 'schema.sql'


@pytest.fixture(scope="function")
def seeded_connection(database_url):
    """
    RealDictCursor connection with the WebStore schema seeded

    Scope: function (fresh schema per test, rolled back on teardown)
    """
    conn = psycopg2.connect(database_url, cursor_factory=RealDictCursor)
    schema = f"webstore_test_{uuid.uuid4().hex[:12]}"

    cursor = conn.cursor()
    try:
        cursor.execute(f"CREATE SCHEMA {schema}")
        cursor.execute(f"SET LOCAL search_path TO {schema}")
        cursor.execute(SCHEMA_SQL.read_text())
    finally:
        cursor.close()

    yield conn

    conn.rollback()
    conn.close()
