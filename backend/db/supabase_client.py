from functools import lru_cache

from supabase import Client, create_client

from core.config import settings


@lru_cache(maxsize=1)
def get_anon_client() -> Client:
    """Get Supabase client using the anon key. Respects RLS policies.
    Use for the public read-only catalog endpoints."""
    return create_client(settings.supabase_url, settings.supabase_anon_key)


@lru_cache(maxsize=1)
def get_service_role_client() -> Client:
    """Get Supabase client using service role key (bypasses RLS).
    Use only for writes (applet toggles) and seeding."""
    return create_client(settings.supabase_url, settings.supabase_service_role_key)
