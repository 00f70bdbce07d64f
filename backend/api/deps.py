from supabase import Client

from db.supabase_client import get_anon_client, get_service_role_client


async def get_db() -> Client:
    """Read-only catalog client for the current request."""
    return get_anon_client()


async def get_admin_db() -> Client:
    """Service-role client for catalog writes."""
    return get_service_role_client()
