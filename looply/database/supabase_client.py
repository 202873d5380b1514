from supabase import create_client, Client
from looply.config import settings
import logging

logger = logging.getLogger(__name__)


class SupabaseClient:
    """Lazily created, process-wide Supabase clients (anon key and service role)."""

    _client: Client = None
    _service_client: Client = None

    @staticmethod
    def _create(key: str, label: str) -> Client:
        if not settings.supabase_url or not key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be set to reach the marketplace database")
        logger.info(f"Creating {label} Supabase client for {settings.supabase_url}")
        return create_client(settings.supabase_url, key)

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = cls._create(settings.supabase_key, "anon")
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Service role client for writes RLS blocks for the anon key (profile rows at sign up).
        Falls back to the anon client when no service role key is configured."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = cls._create(settings.supabase_service_role_key, "service role")
        return cls._service_client or cls.get_client()


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()
