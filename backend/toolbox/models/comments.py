from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String, Text

from toolbox.db.base import Base, new_id, utcnow
from toolbox.db.types import TextBoolean


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=new_id)
    author_name = Column(Text, nullable=False)
    author_email = Column(Text, nullable=True)
    content = Column(Text, nullable=False)
    tool_id = Column(Text, nullable=True, index=True)  # loose reference to the tool catalog
    rating = Column(Integer, nullable=True, default=5)  # 1-5 stars
    is_published = Column(TextBoolean, nullable=False, default=True, server_default="true")
    created_at = Column(DateTime(timezone=True), default=utcnow)
