from .auth_controller import auth_bp
from .dashboard_controller import dashboard_bp
from .gym_session_controller import gym_session_bp
from .health_controller import health_bp
from .resource_controllers import RESOURCE_BLUEPRINTS

ALL_BLUEPRINTS = (
    health_bp,
    auth_bp,
    gym_session_bp,
    dashboard_bp,
    *RESOURCE_BLUEPRINTS,
)

__all__ = ["ALL_BLUEPRINTS"]
