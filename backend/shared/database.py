"""
Database client factory for Supabase.

The user store is reached through a single service-role client, created
lazily on first use and shared by every request in the process.
"""

import logging
import threading
from typing import Optional
from supabase import create_client, Client

from .config import get_settings

logger = logging.getLogger(__name__)

# Module-level client cache
_service_client: Optional[Client] = None
_client_lock = threading.Lock()


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role.

    Connecting is idempotent: the first call creates the client, later calls
    return the same instance without reconnecting.

    Returns:
        Supabase client configured with service role key

    Raises:
        RuntimeError: If the Supabase URL or key is not configured
    """
    global _service_client

    if _service_client is not None:
        return _service_client

    with _client_lock:
        if _service_client is None:
            settings = get_settings()
            if not settings.supabase_url or not settings.supabase_service_role_key:
                raise RuntimeError(
                    "Supabase configuration missing. "
                    "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
                )
            _service_client = create_client(
                settings.supabase_url,
                settings.supabase_service_role_key,
            )
            logger.info("Connected to user store")

    return _service_client


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    with _client_lock:
        _service_client = None
