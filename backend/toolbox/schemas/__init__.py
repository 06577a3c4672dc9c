from toolbox.schemas.comments import CommentCreateRequest, CommentResponse, StrictCommentCreateRequest
from toolbox.schemas.crypto import CryptoRateCreateRequest, CryptoRateResponse
from toolbox.schemas.derive import (
    FieldError,
    InsertValidation,
    InsertValidationError,
    SchemaDefinitionError,
    insert_model,
    record_model,
    validate_insert,
)
from toolbox.schemas.file_jobs import FileJobCreateRequest, FileJobResponse
from toolbox.schemas.regex import SharedRegexCreateRequest, SharedRegexResponse, StrictSharedRegexCreateRequest

__all__ = [
    "CommentCreateRequest",
    "CommentResponse",
    "CryptoRateCreateRequest",
    "CryptoRateResponse",
    "FieldError",
    "FileJobCreateRequest",
    "FileJobResponse",
    "InsertValidation",
    "InsertValidationError",
    "SchemaDefinitionError",
    "SharedRegexCreateRequest",
    "SharedRegexResponse",
    "StrictCommentCreateRequest",
    "StrictSharedRegexCreateRequest",
    "insert_model",
    "record_model",
    "validate_insert",
]
