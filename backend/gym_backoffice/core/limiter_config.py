from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from gym_backoffice.core.config import get_limiter_storage_uri

LOGIN_RATE_LIMIT = "10 per minute"

# Shared instance imported by controllers; main.create_app enables or
# disables it from RATE_LIMIT_ENABLED
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per hour", "50 per minute"],
    storage_uri=get_limiter_storage_uri(),
    enabled=True,
)
