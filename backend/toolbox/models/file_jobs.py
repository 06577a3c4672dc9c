from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from toolbox.db.base import Base, new_id, utcnow


FILE_JOB_STATUSES = ("pending", "processing", "completed", "failed")
TERMINAL_STATUSES = frozenset({"completed", "failed"})


class FileJob(Base):
    """
    One file-conversion request (pdf/docx -> text, ...).

    Created by the upload handler, then moved through
    pending -> processing -> completed|failed by whoever runs the conversion.
    `result_data` is filled on success, `error_message` on failure.
    """

    __tablename__ = "file_jobs"

    id = Column(String(36), primary_key=True, default=new_id)
    filename = Column(Text, nullable=False)
    file_type = Column(Text, nullable=False)  # pdf, docx, ...
    conversion_type = Column(Text, nullable=False)  # to_text, to_images, ...
    status = Column(Text, nullable=False, default="pending", server_default="pending")
    original_size = Column(Integer, nullable=True, default=0)
    result_data = Column(JSON, nullable=True, info={"schema_type": Any})
    error_message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES
