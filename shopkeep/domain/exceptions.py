"""Errors raised while recording or reading shop activity."""


class ActivityWriteError(Exception):
    """An activity could not be recorded."""


class ActivityQueryError(Exception):
    """Activity could not be read back from the store."""


__all__ = ["ActivityQueryError", "ActivityWriteError"]
