"""
Supabase client bootstrap.

The client is created lazily so that importing the service (and its tests)
does not require Supabase credentials.
"""

import logging
from functools import lru_cache

from supabase import Client, create_client

from moodjournal.core.config import settings
from moodjournal.shared.errors import ConfigurationError

logger = logging.getLogger("MoodJournal.Database")


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """
    Get the singleton Supabase client.

    Raises:
        ConfigurationError: If SUPABASE_URL or SUPABASE_KEY is not set
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise ConfigurationError(
            "SUPABASE_URL and SUPABASE_KEY must be set",
            details={"setting": "SUPABASE_URL/SUPABASE_KEY"},
        )

    client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    logger.info("Supabase client initialized")
    return client
