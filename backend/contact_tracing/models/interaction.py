# contact_tracing/models/interaction.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.sql import func

from contact_tracing.models.base import Base


class Interaction(Base):
    __tablename__ = "interactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # whoever logged the contact; the pair itself is symmetric
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    contact_user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    when_ts = Column(DateTime(timezone=True), index=True, nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
