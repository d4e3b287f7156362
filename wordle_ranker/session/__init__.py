from .core import Session, SessionState, new_session

__all__ = ["Session", "SessionState", "new_session"]
