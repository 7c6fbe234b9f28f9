from supabase import create_client, Client
from app.config import settings


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Authorization is checked by the API itself."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    """Client for table access and database functions."""
    return SupabaseClient.get_service_client()


def get_auth_supabase() -> Client:
    """Client for Supabase Auth calls.

    Kept apart from the table client: a successful sign-in stores the user's
    session on the client and later table requests would run as that user.
    """
    return SupabaseClient.get_client()


def rpc_row(data):
    """Single record returned by a database function (object or one-element list)."""
    if isinstance(data, list):
        return data[0] if data else None
    return data
