from jobtracker.models.application import ApplicationRow

__all__ = ["ApplicationRow"]
