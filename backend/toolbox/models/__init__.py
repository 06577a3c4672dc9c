from toolbox.models.comments import Comment
from toolbox.models.crypto_rates import CryptoRate
from toolbox.models.file_jobs import FILE_JOB_STATUSES, TERMINAL_STATUSES, FileJob
from toolbox.models.shared_regex import SharedRegex

__all__ = ["Comment", "CryptoRate", "FileJob", "SharedRegex", "FILE_JOB_STATUSES", "TERMINAL_STATUSES"]
