import time
from datetime import datetime, timezone


def epoch_seconds() -> int:
    return int(time.time())


def to_iso(seconds: int) -> str:
    return datetime.fromtimestamp(seconds, timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
