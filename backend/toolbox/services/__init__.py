from toolbox.services.storage import Storage, get_storage

__all__ = ["Storage", "get_storage"]
