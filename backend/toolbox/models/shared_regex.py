from __future__ import annotations

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from toolbox.db.base import Base, new_id, utcnow
from toolbox.db.types import TextBoolean


class SharedRegex(Base):
    """
    Community-contributed regex snippet.

    `pattern` is stored as typed by the author (browser regex syntax) and is not
    changed after creation. usage_count/likes only ever go up.
    """

    __tablename__ = "shared_regex_patterns"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    pattern = Column(Text, nullable=False)
    flags = Column(Text, nullable=True, default="g")
    category = Column(Text, nullable=True, default="general", index=True)
    author_name = Column(Text, nullable=False)
    author_email = Column(Text, nullable=True)
    example_text = Column(Text, nullable=True)
    usage_count = Column(Integer, nullable=True, default=0)
    likes = Column(Integer, nullable=True, default=0)
    is_public = Column(TextBoolean, nullable=False, default=True, server_default="true")
    tags = Column(JSON, nullable=True, default=list, info={"schema_type": list[str]})
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)
