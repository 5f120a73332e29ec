# contact_tracing/models/user.py
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from contact_tracing.models.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="member")  # 'admin' | 'member'

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
