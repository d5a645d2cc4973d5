"""
Process-wide slowapi limiter, keyed by client address.

Routers decorate endpoints with ``@limiter.limit(...)``; main.py mounts it on
app.state.  Counters live wherever RATE_LIMIT_STORAGE_URI points.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import get_settings

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=get_settings().rate_limit_storage_uri,
    headers_enabled=False,
)
