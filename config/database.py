"""
Database connection management.

The Supabase client is owned by a SupabaseConnection that the application
opens at startup and closes at shutdown. Services receive the client through
the RecordSource rather than reaching for a module-level singleton.
"""

from typing import Optional
from supabase import create_client, Client
import structlog

from config.settings import Settings, get_settings
from exceptions import RecordSourceError

logger = structlog.get_logger(__name__)


class SupabaseConnection:
    """
    Managed Supabase client with an explicit lifecycle.

    Usage:
        connection = SupabaseConnection(settings)
        connection.open()
        client = connection.client
        ...
        connection.close()

    Also usable as a context manager.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._client: Optional[Client] = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> Client:
        """
        Get the open client.

        Raises:
            RecordSourceError: If the connection has not been opened
        """
        if self._client is None:
            raise RecordSourceError("Database connection is not open")
        return self._client

    def open(self) -> Client:
        """
        Create the Supabase client.

        Returns:
            Client: Supabase client

        Raises:
            RecordSourceError: If the client cannot be created
        """
        if self._client is not None:
            return self._client

        if not self.settings.supabase_configured:
            raise RecordSourceError(
                "Supabase is not configured",
                details={"missing": ["SUPABASE_URL", "SUPABASE_KEY"]}
            )

        try:
            logger.info(
                "connecting_to_supabase",
                url=self.settings.supabase_url[:30] + "..."  # Log partial URL only
            )
            self._client = create_client(
                self.settings.supabase_url,
                self.settings.supabase_key
            )
            logger.info("supabase_connected", status="success")
            return self._client

        except Exception as e:
            logger.error(
                "supabase_connection_failed",
                error=str(e),
                error_type=type(e).__name__
            )
            raise RecordSourceError(f"Failed to connect to Supabase: {e}") from e

    def close(self) -> None:
        """Release the client. Safe to call more than once."""
        if self._client is None:
            return
        self._client = None
        logger.info("supabase_connection_closed")

    def check(self) -> dict:
        """
        Check database connection health.

        Returns:
            dict: Connection status with details
        """
        try:
            products = self.client.table("products").select("id", count="exact").limit(1).execute()
            return {
                "status": "healthy",
                "products_count": products.count
            }
        except Exception as e:
            return {
                "status": "unhealthy",
                "error": str(e)
            }

    def __enter__(self) -> Client:
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Don't suppress exceptions
