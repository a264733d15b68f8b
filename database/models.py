"""Database models for the campus advisor."""
from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, DateTime, JSON, ForeignKey, Text
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class User(Base):
    """Student account. Credentials live with the auth provider, not here."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    profile = relationship("UserProfile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    messages = relationship("Message", back_populates="user", cascade="all, delete-orphan")
    advice_logs = relationship("AdviceLog", back_populates="user", cascade="all, delete-orphan")


class UserProfile(Base):
    """Academic and wellbeing profile woven into handler prompts."""
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    major = Column(String, nullable=True)
    year = Column(String, nullable=True)  # Freshman .. Graduate
    interests = Column(JSON, default=list)
    stress_level = Column(String, nullable=True)  # "0".."10" or low/medium/high
    goals = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="profile")


class Message(Base):
    """One conversation turn. Ordering is by creation time, then id."""
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    role = Column(String, nullable=False)  # 'user' | 'assistant'
    content = Column(Text, nullable=False)
    intent = Column(String, nullable=True)
    agent_type = Column(String, nullable=True)  # handler name for assistant turns
    # "metadata" is reserved on declarative classes
    meta = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    user = relationship("User", back_populates="messages")


class AdviceLog(Base):
    """Durable record of advice worth revisiting."""
    __tablename__ = "advice_logs"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category = Column(String, nullable=False)  # study_plan, wellness_check, ...
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    agent_type = Column(String, nullable=True)
    priority = Column(String, nullable=False, default="medium")  # low, medium, high, urgent
    meta = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="advice_logs")


class CampusResource(Base):
    """Club, service or facility students can be pointed to."""
    __tablename__ = "campus_resources"

    id = Column(Integer, primary_key=True)
    category = Column(String, nullable=False, index=True)  # club, service, wellness, facility
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    contact_info = Column(String, nullable=True)
    website = Column(String, nullable=True)
    hours = Column(String, nullable=True)
    tags = Column(JSON, default=list)
