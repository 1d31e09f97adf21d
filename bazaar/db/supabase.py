import logging

from postgrest.exceptions import APIError
from supabase import create_client

from bazaar.core.config import SUPABASE_URL, SUPABASE_ANON_KEY

logger = logging.getLogger("bazaar.store")
logger.setLevel(logging.INFO)

supabase = None


class StoreError(Exception):
    """A read or write against Supabase failed; message is the store's own."""


def get_client():
    global supabase
    if supabase is None:
        if not SUPABASE_URL or not SUPABASE_ANON_KEY:
            raise RuntimeError("Supabase URL/Key not configured. See .env")
        supabase = create_client(SUPABASE_URL, SUPABASE_ANON_KEY)
    return supabase


def execute(query):
    """Run a PostgREST builder and return its rows."""
    try:
        res = query.execute()
    except APIError as e:
        message = e.message or str(e)
        logger.error(f"Supabase error: {message}")
        raise StoreError(message)
    return res.data or []
