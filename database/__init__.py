"""Database package for the campus advisor."""
from .models import (
    Base,
    User,
    UserProfile,
    Message,
    AdviceLog,
    CampusResource,
)
from .connection import (
    get_db_session,
    init_db,
    get_db_path,
)

__all__ = [
    "Base",
    "User",
    "UserProfile",
    "Message",
    "AdviceLog",
    "CampusResource",
    "get_db_session",
    "init_db",
    "get_db_path",
]
