"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Read endpoints are not limited; only the
write-shaped ones (track, index) are.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

TRACK_LIMIT = "60/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"

limit_track = limiter.limit(TRACK_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
