import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

_SUPABASE_URL = os.getenv('SUPABASE_URL')
_SUPABASE_KEY = os.getenv('SUPABASE_KEY')

_GEMINI_API_KEY = os.getenv('GEMINI_API_KEY') or os.getenv('GOOGLE_API_KEY')
_GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-2.5-flash')
_GEMINI_API_BASE = os.getenv('GEMINI_API_BASE', 'https://generativelanguage.googleapis.com/v1beta').rstrip('/')


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Config:
    """Central configuration for the mood journal service."""

    SERVICE_NAME = os.getenv('SERVICE_NAME', 'mood-journal-service')

    SUPABASE_URL = _SUPABASE_URL
    SUPABASE_KEY = _SUPABASE_KEY

    GEMINI_API_KEY = _GEMINI_API_KEY
    GEMINI_MODEL = _GEMINI_MODEL
    GEMINI_API_BASE = _GEMINI_API_BASE

    # Retries apply to transport errors, timeouts, 429 and 5xx only
    EXTRACTION_TIMEOUT_SECONDS = _float_env('EXTRACTION_TIMEOUT_SECONDS', 10.0)
    EXTRACTION_MAX_RETRIES = max(_int_env('EXTRACTION_MAX_RETRIES', 1), 0)
    EXTRACTION_BACKOFF_SECONDS = _float_env('EXTRACTION_BACKOFF_SECONDS', 0.5)
    EXTRACTION_BACKOFF_MULTIPLIER = _float_env('EXTRACTION_BACKOFF_MULTIPLIER', 2.0)

    SUPPORT_TIMEOUT_SECONDS = _float_env('SUPPORT_TIMEOUT_SECONDS', 30.0)

    RECONCILE_BATCH_LIMIT = max(_int_env('RECONCILE_BATCH_LIMIT', 50), 1)


settings = Config()
