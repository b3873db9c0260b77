from .account import Account, Role
from .video import Video, VideoSummary

__all__ = [
    "Account",
    "Role",
    "Video",
    "VideoSummary",
]
