from __future__ import annotations

from pydantic import field_validator

from toolbox.models.comments import Comment
from toolbox.schemas.derive import insert_model, record_model


COMMENT_INSERT_FIELDS = ("author_name", "author_email", "content", "tool_id", "rating")

MIN_RATING = 1
MAX_RATING = 5


class CommentCreateRequest(insert_model(Comment, COMMENT_INSERT_FIELDS)):
    """
    User feedback, optionally about one tool.

    Ratings are meant to be 1-5 but are not range-checked here; see
    StrictCommentCreateRequest.
    """


class StrictCommentCreateRequest(CommentCreateRequest):
    """CommentCreateRequest that also rejects ratings outside 1-5."""

    @field_validator("rating")
    @classmethod
    def _rating_in_range(cls, v: int | None):
        if v is not None and not (MIN_RATING <= v <= MAX_RATING):
            raise ValueError(f"rating must be between {MIN_RATING} and {MAX_RATING}")
        return v


CommentResponse = record_model(Comment, name="CommentResponse")
