from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from hospital.core.config import get_limiter_storage_uri, get_rate_limit_default

# Global Limiter instance; main.py calls init_app and switches it off when
# RATE_LIMIT_ENABLED is falsy (as in the test suite)
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[get_rate_limit_default()],
    storage_uri=get_limiter_storage_uri(),
    enabled=True,
)
