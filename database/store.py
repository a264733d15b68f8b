"""Persistence helpers for users, conversation turns, advice logs and resources.

Every helper opens its own session and returns plain dictionaries, so callers
never hold ORM objects past the session that loaded them. Storage errors
propagate as ``SQLAlchemyError``; deciding whether to swallow them is up to
the caller.
"""
from typing import Any, Dict, List, Optional

from .connection import get_db_session
from .models import AdviceLog, CampusResource, Message, User, UserProfile

_UNSET = object()


def _profile_to_dict(profile: Optional[UserProfile]) -> Dict[str, Any]:
    if profile is None:
        return {"major": None, "year": None, "interests": [], "stress_level": None, "goals": None}
    return {
        "major": profile.major,
        "year": profile.year,
        "interests": list(profile.interests or []),
        "stress_level": profile.stress_level,
        "goals": profile.goals,
    }


def _user_to_dict(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "created_at": user.created_at.isoformat() if user.created_at else None,
        "profile": _profile_to_dict(user.profile),
    }


def _message_to_dict(row: Message) -> Dict[str, Any]:
    return {
        "id": row.id,
        "role": row.role,
        "content": row.content,
        "intent": row.intent,
        "agent_type": row.agent_type,
        "metadata": row.meta or {},
        "created_at": row.created_at.isoformat() if row.created_at else None,
    }


def _advice_to_dict(row: AdviceLog) -> Dict[str, Any]:
    return {
        "id": row.id,
        "category": row.category,
        "title": row.title,
        "content": row.content,
        "agent_type": row.agent_type,
        "priority": row.priority,
        "metadata": row.meta or {},
        "created_at": row.created_at.isoformat() if row.created_at else None,
    }


def _resource_to_dict(row: CampusResource) -> Dict[str, Any]:
    return {
        "id": row.id,
        "category": row.category,
        "name": row.name,
        "description": row.description,
        "location": row.location,
        "contact_info": row.contact_info,
        "website": row.website,
        "hours": row.hours,
        "tags": list(row.tags or []),
    }


# --------------------------------------------------------------------------- #
# Users and profiles
# --------------------------------------------------------------------------- #


def create_user(name: str, email: Optional[str] = None, **profile_fields: Any) -> Dict[str, Any]:
    """Create a user together with its (possibly empty) profile."""
    with get_db_session() as db:
        user = User(name=name, email=email)
        user.profile = UserProfile(
            major=profile_fields.get("major"),
            year=profile_fields.get("year"),
            interests=list(profile_fields.get("interests") or []),
            stress_level=profile_fields.get("stress_level"),
            goals=profile_fields.get("goals"),
        )
        db.add(user)
        db.flush()
        return _user_to_dict(user)


def get_user(user_id: int) -> Optional[Dict[str, Any]]:
    """Return the user with its profile, or None."""
    with get_db_session() as db:
        user = db.query(User).filter_by(id=user_id).first()
        return _user_to_dict(user) if user else None


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    with get_db_session() as db:
        user = db.query(User).filter_by(email=email).first()
        return _user_to_dict(user) if user else None


def update_profile(
    user_id: int,
    *,
    name: Any = _UNSET,
    major: Any = _UNSET,
    year: Any = _UNSET,
    interests: Any = _UNSET,
    stress_level: Any = _UNSET,
    goals: Any = _UNSET,
) -> Optional[Dict[str, Any]]:
    """Update only the fields passed; latest write wins per field.

    Returns the updated user, or None when the user does not exist.
    """
    with get_db_session() as db:
        user = db.query(User).filter_by(id=user_id).first()
        if user is None:
            return None
        if name is not _UNSET and name:
            user.name = name
        if user.profile is None:
            user.profile = UserProfile(interests=[])
        profile = user.profile
        if major is not _UNSET:
            profile.major = major or None
        if year is not _UNSET:
            profile.year = year or None
        if interests is not _UNSET:
            profile.interests = list(interests or [])
        if stress_level is not _UNSET:
            profile.stress_level = str(stress_level) if stress_level not in (None, "") else None
        if goals is not _UNSET:
            profile.goals = goals or None
        db.flush()
        return _user_to_dict(user)


def update_stress_level(user_id: int, stress_level: int) -> bool:
    """Write a detected stress score back to the profile. False if no profile."""
    with get_db_session() as db:
        profile = db.query(UserProfile).filter_by(user_id=user_id).first()
        if profile is None:
            return False
        profile.stress_level = str(stress_level)
        return True


# --------------------------------------------------------------------------- #
# Conversation turns
# --------------------------------------------------------------------------- #


def save_message(
    user_id: int,
    role: str,
    content: str,
    intent: Optional[str] = None,
    agent_type: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> int:
    """Persist one turn and return its id."""
    with get_db_session() as db:
        row = Message(
            user_id=user_id,
            role=role,
            content=content,
            intent=intent,
            agent_type=agent_type,
            meta=metadata,
        )
        db.add(row)
        db.flush()
        return row.id


def get_conversation_history(user_id: int, limit: int = 20) -> List[Dict[str, Any]]:
    """Return the latest ``limit`` turns, oldest first."""
    with get_db_session() as db:
        rows = (
            db.query(Message)
            .filter(Message.user_id == user_id)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(limit)
            .all()
        )
        return [_message_to_dict(row) for row in reversed(rows)]


def clear_conversation(user_id: int) -> int:
    """Delete every turn of the user; returns how many were removed."""
    with get_db_session() as db:
        return db.query(Message).filter(Message.user_id == user_id).delete(synchronize_session=False)


# --------------------------------------------------------------------------- #
# Advice logs
# --------------------------------------------------------------------------- #


def save_advice_log(
    user_id: int,
    category: str,
    title: str,
    content: str,
    agent_type: Optional[str],
    priority: str,
    metadata: Optional[Dict[str, Any]] = None,
) -> int:
    with get_db_session() as db:
        row = AdviceLog(
            user_id=user_id,
            category=category,
            title=title,
            content=content,
            agent_type=agent_type,
            priority=priority,
            meta=metadata,
        )
        db.add(row)
        db.flush()
        return row.id


def list_advice_logs(user_id: int, category: Optional[str] = None, limit: int = 50) -> List[Dict[str, Any]]:
    """Most recent advice first, optionally filtered by category."""
    with get_db_session() as db:
        query = db.query(AdviceLog).filter(AdviceLog.user_id == user_id)
        if category:
            query = query.filter(AdviceLog.category == category)
        rows = query.order_by(AdviceLog.created_at.desc(), AdviceLog.id.desc()).limit(limit).all()
        return [_advice_to_dict(row) for row in rows]


# --------------------------------------------------------------------------- #
# Campus resources
# --------------------------------------------------------------------------- #


def list_campus_resources(category: Optional[str] = None) -> List[Dict[str, Any]]:
    with get_db_session() as db:
        query = db.query(CampusResource)
        if category:
            query = query.filter(CampusResource.category == category)
        return [_resource_to_dict(row) for row in query.order_by(CampusResource.name.asc()).all()]
