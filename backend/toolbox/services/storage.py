"""
Storage operations for the toolbox tables.

Every write goes through the insert schemas first (see toolbox.schemas), so a
rejected payload never reaches the database. Each call opens its own session
and closes it before returning; rows come back detached with their columns
loaded.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Callable, Mapping, Union

from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.orm import Session

from toolbox.core.config import Settings, get_settings
from toolbox.db.session import get_sessionmaker
from toolbox.models.comments import Comment
from toolbox.models.crypto_rates import CryptoRate
from toolbox.models.file_jobs import FILE_JOB_STATUSES, TERMINAL_STATUSES, FileJob
from toolbox.models.shared_regex import SharedRegex
from toolbox.schemas.comments import CommentCreateRequest, StrictCommentCreateRequest
from toolbox.schemas.crypto import CryptoRateCreateRequest
from toolbox.schemas.derive import InsertValidationError, validate_insert
from toolbox.schemas.file_jobs import FileJobCreateRequest
from toolbox.schemas.regex import SharedRegexCreateRequest, StrictSharedRegexCreateRequest


Payload = Union[Mapping[str, Any], BaseModel]

FILE_JOB_UPDATABLE = frozenset({"status", "original_size", "result_data", "error_message", "completed_at"})

# pending -> processing -> completed|failed
_STATUS_RANK = {"pending": 0, "processing": 1, "completed": 2, "failed": 2}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; they were written as UTC.
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Storage:
    """CRUD helpers for file jobs, crypto rates, comments and shared regexes."""

    def __init__(
        self,
        session_factory: Callable[[], Session] | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._session_factory = session_factory
        self.settings = settings or get_settings()
        self.file_job_schema: type[BaseModel] = FileJobCreateRequest
        self.crypto_rate_schema: type[BaseModel] = CryptoRateCreateRequest
        self.comment_schema: type[BaseModel] = (
            StrictCommentCreateRequest if self.settings.strict_comment_rating else CommentCreateRequest
        )
        self.regex_schema: type[BaseModel] = (
            StrictSharedRegexCreateRequest if self.settings.strict_regex_patterns else SharedRegexCreateRequest
        )

    # -------------------------- plumbing --------------------------
    def _session(self) -> Session:
        if self._session_factory is None:
            self._session_factory = get_sessionmaker()
        return self._session_factory()

    def _log(self, msg: str) -> None:
        if self.settings.storage_debug:
            print(msg)

    def _validated(self, schema: type[BaseModel], payload: Payload) -> dict[str, Any]:
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(exclude_unset=True)
        result = validate_insert(schema, payload)
        if not result.ok:
            self._log(f"[STORAGE] Rejected {schema.__name__}: {[(e.field, e.code) for e in result.errors]}")
            raise InsertValidationError(schema.__name__, result.errors)
        # None falls back to the column default
        return result.value.model_dump(exclude_none=True)

    def _add(self, row):
        db = self._session()
        try:
            db.add(row)
            db.commit()
            db.refresh(row)
            return row
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _get(self, model: type, row_id: str):
        db = self._session()
        try:
            return db.get(model, str(row_id))
        finally:
            db.close()

    # -------------------------- file jobs --------------------------
    def create_file_job(self, payload: Payload) -> FileJob:
        data = self._validated(self.file_job_schema, payload)
        job = self._add(FileJob(**data))
        self._log(f"[STORAGE] File job {job.id} created ({job.file_type} -> {job.conversion_type})")
        return job

    def get_file_job(self, job_id: str) -> FileJob | None:
        return self._get(FileJob, job_id)

    def update_file_job(self, job_id: str, **updates: Any) -> FileJob | None:
        """
        Merge `updates` into a job. Moving to a terminal status stamps
        completed_at unless the caller passes one. Returns None if the job
        does not exist.
        """
        unknown = sorted(set(updates) - FILE_JOB_UPDATABLE)
        if unknown:
            raise ValueError(f"Cannot update file job field(s): {unknown}")

        db = self._session()
        try:
            job = db.get(FileJob, str(job_id))
            if job is None:
                return None
            new_status = updates.get("status")
            if new_status is not None:
                self._check_transition(job.id, job.status, new_status)
            for key, value in updates.items():
                setattr(job, key, value)
            if new_status in TERMINAL_STATUSES and "completed_at" not in updates:
                job.completed_at = _utcnow()
            db.commit()
            db.refresh(job)
            return job
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _check_transition(self, job_id: str, old: str | None, new: str) -> None:
        if new not in FILE_JOB_STATUSES:
            print(f"[STORAGE] WARNING: file job {job_id} set to unknown status {new!r}")
            return
        if old not in _STATUS_RANK or old == new:
            return
        if old in TERMINAL_STATUSES or _STATUS_RANK[new] < _STATUS_RANK[old]:
            print(f"[STORAGE] WARNING: file job {job_id} moved backwards {old} -> {new}")

    # -------------------------- crypto rates --------------------------
    @staticmethod
    def _latest_rate(db: Session, from_currency: str, to_currency: str) -> CryptoRate | None:
        return (
            db.query(CryptoRate)
            .filter(CryptoRate.from_currency == from_currency, CryptoRate.to_currency == to_currency)
            .order_by(CryptoRate.last_updated.desc().nulls_last())
            .first()
        )

    def get_crypto_rate(self, from_currency: str, to_currency: str) -> CryptoRate | None:
        """Freshest cached row for the pair, whatever its age."""
        db = self._session()
        try:
            return self._latest_rate(db, from_currency, to_currency)
        finally:
            db.close()

    def get_fresh_crypto_rate(
        self,
        from_currency: str,
        to_currency: str,
        max_age_seconds: int | None = None,
        now: datetime | None = None,
    ) -> CryptoRate | None:
        """Like get_crypto_rate, but None once the row is older than the cache TTL."""
        rate = self.get_crypto_rate(from_currency, to_currency)
        if rate is None:
            return None
        ttl = self.settings.crypto_rate_ttl_seconds if max_age_seconds is None else max_age_seconds
        updated = _as_utc(rate.last_updated)
        cutoff = _as_utc(now or _utcnow()) - timedelta(seconds=ttl)
        if updated is None or updated <= cutoff:
            self._log(f"[STORAGE] Cached rate {from_currency}->{to_currency} is stale")
            return None
        return rate

    def upsert_crypto_rate(self, payload: Payload) -> CryptoRate:
        """
        Store a fetched rate. In "upsert" mode the freshest row for the pair is
        overwritten (keeping its id); in "append" mode every call adds a row.
        """
        data = self._validated(self.crypto_rate_schema, payload)
        now = _utcnow()

        if self.settings.crypto_rates_mode == "append":
            return self._add(CryptoRate(**data, last_updated=now))

        db = self._session()
        try:
            row = self._latest_rate(db, data["from_currency"], data["to_currency"])
            if row is None:
                row = CryptoRate(**data, last_updated=now)
                db.add(row)
            else:
                row.rate = data["rate"]
                row.market_data = data.get("market_data") or {}
                row.last_updated = now
            db.commit()
            db.refresh(row)
            return row
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # -------------------------- comments --------------------------
    def create_comment(self, payload: Payload) -> Comment:
        data = self._validated(self.comment_schema, payload)
        return self._add(Comment(**data))

    def get_comment(self, comment_id: str) -> Comment | None:
        return self._get(Comment, comment_id)

    def get_comments(self, tool_id: str | None = None, include_unpublished: bool = False) -> list[Comment]:
        """Newest first; only published comments unless asked otherwise."""
        db = self._session()
        try:
            q = db.query(Comment)
            if tool_id:
                q = q.filter(Comment.tool_id == tool_id)
            if not include_unpublished:
                q = q.filter(Comment.is_published == True)  # noqa: E712
            return q.order_by(Comment.created_at.desc()).all()
        finally:
            db.close()

    def set_comment_published(self, comment_id: str, published: bool) -> Comment | None:
        db = self._session()
        try:
            comment = db.get(Comment, str(comment_id))
            if comment is None:
                return None
            comment.is_published = bool(published)
            db.commit()
            db.refresh(comment)
            return comment
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # -------------------------- shared regex --------------------------
    def create_shared_regex(self, payload: Payload) -> SharedRegex:
        data = self._validated(self.regex_schema, payload)
        return self._add(SharedRegex(**data))

    def get_shared_regex(self, regex_id: str) -> SharedRegex | None:
        return self._get(SharedRegex, regex_id)

    def list_shared_regex(
        self,
        category: str | None = None,
        include_private: bool = False,
        limit: int = 50,
    ) -> list[SharedRegex]:
        """Most used first, then most liked."""
        lim = max(1, min(int(limit or 50), 500))
        db = self._session()
        try:
            q = db.query(SharedRegex)
            if category:
                q = q.filter(SharedRegex.category == category)
            if not include_private:
                q = q.filter(SharedRegex.is_public == True)  # noqa: E712
            return q.order_by(SharedRegex.usage_count.desc(), SharedRegex.likes.desc()).limit(lim).all()
        finally:
            db.close()

    def record_regex_usage(self, regex_id: str) -> SharedRegex | None:
        return self._increment(regex_id, SharedRegex.usage_count)

    def like_shared_regex(self, regex_id: str) -> SharedRegex | None:
        return self._increment(regex_id, SharedRegex.likes)

    def _increment(self, regex_id: str, counter) -> SharedRegex | None:
        # Single UPDATE so concurrent increments are not lost.
        db = self._session()
        try:
            touched = (
                db.query(SharedRegex)
                .filter(SharedRegex.id == str(regex_id))
                .update(
                    {counter: func.coalesce(counter, 0) + 1, SharedRegex.updated_at: _utcnow()},
                    synchronize_session=False,
                )
            )
            db.commit()
            if not touched:
                return None
            return db.get(SharedRegex, str(regex_id))
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


@lru_cache
def get_storage() -> Storage:
    """Process-wide Storage bound to the configured database."""
    return Storage()
