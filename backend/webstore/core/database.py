"""
PostgreSQL connection helpers

Reports read through plain psycopg2 connections that return dict rows
(RealDictCursor). The report layer never opens connections itself: callers
(CLI, API dependency) acquire one here and inject it.
"""
import time
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2.extras import RealDictCursor

from .config import settings

logger = logging.getLogger(__name__)


def _resolve_database_url(database_url: Optional[str] = None) -> str:
    url = database_url or settings.DATABASE_URL
    if not url:
        raise Exception("DATABASE_URL not configured")
    return url


def get_db_connection_dict(database_url: Optional[str] = None):
    """
    Get a database connection with RealDictCursor (returns dictionaries)

    Args:
        database_url: Overrides settings.DATABASE_URL when given

    Returns:
        psycopg2 connection with RealDictCursor

    Raises:
        Exception if DATABASE_URL is not configured
    """
    return psycopg2.connect(_resolve_database_url(database_url), cursor_factory=RealDictCursor)


def get_db_connection_dict_with_retry(
    database_url: Optional[str] = None,
    max_retries: Optional[int] = None,
    retry_delay: Optional[float] = None
):
    """
    Get a psycopg2 connection with RealDictCursor and automatic retry

    Retries psycopg2.OperationalError with exponential backoff. Any other
    error fails immediately.

    Args:
        database_url: Overrides settings.DATABASE_URL when given
        max_retries: Maximum number of connection attempts (default: settings.DB_CONNECT_MAX_RETRIES)
        retry_delay: Initial delay between retries in seconds (default: settings.DB_CONNECT_RETRY_DELAY)

    Returns:
        psycopg2 connection with RealDictCursor

    Raises:
        psycopg2.OperationalError: If all retry attempts fail
    """
    url = _resolve_database_url(database_url)
    if max_retries is None:
        max_retries = settings.DB_CONNECT_MAX_RETRIES
    if retry_delay is None:
        retry_delay = settings.DB_CONNECT_RETRY_DELAY

    last_error = None

    for attempt in range(1, max_retries + 1):
        try:
            logger.debug(f"Database connection attempt {attempt}/{max_retries}")
            conn = psycopg2.connect(url, cursor_factory=RealDictCursor)

            # Test connection with a simple query
            cursor = conn.cursor()
            cursor.execute("SELECT 1")
            cursor.close()

            logger.debug(f"Database connection successful on attempt {attempt}")
            return conn

        except psycopg2.OperationalError as e:
            last_error = e
            logger.warning(f"Connection error on attempt {attempt}/{max_retries}: {e}")

            if attempt < max_retries:
                delay = retry_delay * (2 ** (attempt - 1))
                logger.info(f"Retrying in {delay:.2f} seconds...")
                time.sleep(delay)
            else:
                logger.error(f"All {max_retries} connection attempts failed")

    raise last_error if last_error else Exception("Connection failed after all retries")


@contextmanager
def db_connection(database_url: Optional[str] = None) -> Iterator:
    """
    Context manager yielding a retried read connection

    The connection is always closed on exit. Reports never write, so any
    open transaction is rolled back rather than committed.

    Usage:
        with db_connection() as conn:
            ReportGenerator(conn).task01_list_all_customers()
    """
    conn = get_db_connection_dict_with_retry(database_url)
    try:
        yield conn
    finally:
        try:
            conn.rollback()
        finally:
            conn.close()
