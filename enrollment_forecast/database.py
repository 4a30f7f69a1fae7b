"""
Database operations for Supabase.

Only a reachability check is performed; no pipeline data is read from or
written to the database.
"""

import logging
from typing import Optional

from supabase import Client, create_client

from enrollment_forecast.config import Config

logger = logging.getLogger(__name__)


def get_supabase_client() -> Client:
    """
    Initialize and return a Supabase client.

    Raises:
        ValueError: If Supabase credentials are not configured
    """
    if not Config.has_database():
        raise ValueError(
            "Missing required environment variables: SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY. "
            "Please create a .env file with these values (see .env.example)."
        )

    client = create_client(Config.SUPABASE_URL, Config.SUPABASE_SERVICE_ROLE_KEY)
    logger.info("Supabase client initialized successfully")
    return client


def check_database_connection(
    client: Optional[Client] = None,
    table_name: Optional[str] = None
) -> bool:
    """
    Check that the database answers a one-row query.

    Failures are logged and reported as False; they never stop the pipeline.

    Args:
        client: Optional Supabase client (created from Config if not provided)
        table_name: Table to probe (default: Config.SUPABASE_HEALTHCHECK_TABLE)

    Returns:
        True if the query succeeded
    """
    table_name = table_name or Config.SUPABASE_HEALTHCHECK_TABLE

    if client is None and not Config.has_database():
        logger.info("[DB] Supabase credentials not configured, skipping connection check")
        return False

    try:
        if client is None:
            client = get_supabase_client()
        response = client.table(table_name).select("*").limit(1).execute()
        logger.info(f"[DB OK] Connected, {table_name} returned {len(response.data)} row(s)")
        return True
    except Exception as e:
        logger.error(f"[DB ERROR] Could not connect: {e}")
        return False
