"""
api/limiter.py -- Shared slowapi rate limiter instance.

Import this in both api/main.py (to mount as middleware) and
api/routes/v1/forms.py (to apply per-route limits with @limiter.limit()).

A single shared instance keeps all routes on the same in-memory counter
store; per-module instances would each count alone and never trigger.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")
