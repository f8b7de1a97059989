from functools import lru_cache

import redis
from supabase import Client, create_client

from config import get_settings


@lru_cache
def get_supabase() -> Client:
    """Supabase client used for blob staging."""
    settings = get_settings()
    return create_client(settings.supabase_url, settings.supabase_key)


@lru_cache
def get_redis() -> redis.Redis:
    """Redis connection holding the durable project record."""
    settings = get_settings()
    if settings.is_production:
        return redis.from_url(settings.redis_url, ssl_cert_reqs=None)
    return redis.from_url(settings.redis_url)
