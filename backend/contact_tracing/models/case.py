# contact_tracing/models/case.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.sql import func

from contact_tracing.models.base import Base


class Case(Base):
    __tablename__ = "cases"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    reported_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    reported_at = Column(DateTime(timezone=True), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
