from __future__ import annotations

from toolbox.models.file_jobs import FileJob
from toolbox.schemas.derive import insert_model, record_model


FILE_JOB_INSERT_FIELDS = ("filename", "file_type", "conversion_type", "original_size")


class FileJobCreateRequest(insert_model(FileJob, FILE_JOB_INSERT_FIELDS)):
    """
    What an upload handler supplies when it registers a conversion job.

    status/result_data/error_message/timestamps are managed by the job runner.
    """


FileJobResponse = record_model(FileJob, name="FileJobResponse")
