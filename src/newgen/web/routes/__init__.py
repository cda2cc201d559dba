"""Route handlers for Web API."""

from newgen.web.routes.auth import router as auth_router
from newgen.web.routes.careers import router as careers_router
from newgen.web.routes.chat import router as chat_router
from newgen.web.routes.health import router as health_router
from newgen.web.routes.profile import router as profile_router

__all__ = [
    "auth_router",
    "careers_router",
    "chat_router",
    "health_router",
    "profile_router",
]
