from supabase import create_client, Client
from app.config.settings import settings


class SupabaseClient:
    """Supabase clients for the auth gateway. Policy state never goes through Supabase."""

    _client: Client = None
    _admin_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_admin_client(cls) -> Client:
        """Client with service_role key; required to write app_metadata. None when not configured."""
        if cls._admin_client is None and settings.supabase_service_role_key:
            cls._admin_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._admin_client

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._admin_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()
