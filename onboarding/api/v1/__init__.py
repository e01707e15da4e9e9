from .auth_controller import router as auth_router
from .health_check_controller import router as health_check_router


__all__ = ["auth_router", "health_check_router"]
