from .uploads import router as upload_router
from .users import router as user_router
from .videos import router as video_router
from .webhooks import router as webhook_router

__all__ = [
    "upload_router",
    "user_router",
    "video_router",
    "webhook_router",
]
