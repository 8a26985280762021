import os

# Settings read from the environment once at import time.


def _as_int(val: str | None, default: int) -> int:
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


def _as_float(val: str | None, default: float) -> float:
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default


class Settings:
    def __init__(self) -> None:
        self.LOG_LEVEL: str = os.getenv("PNGMASK_LOG_LEVEL", "INFO").upper()
        self.HTTP_TIMEOUT: float = _as_float(os.getenv("PNGMASK_HTTP_TIMEOUT"), 10.0)
        self.LOAD_WORKERS: int = max(1, _as_int(os.getenv("PNGMASK_LOAD_WORKERS"), 4))
        self.APPEARANCE: str = os.getenv("PNGMASK_APPEARANCE", "system")


settings = Settings()
