from .bazaar import router as bazaar_router
from .system import router as system_router

__all__ = [
    "bazaar_router",
    "system_router",
]
