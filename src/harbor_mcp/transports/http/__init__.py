from .app import build_sse_app
from .config import HttpConfig
from .sessions import SessionRegistry, SseSession

__all__ = ["HttpConfig", "SessionRegistry", "SseSession", "build_sse_app"]
