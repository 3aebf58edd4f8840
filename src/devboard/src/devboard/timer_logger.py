import json
import time
import uuid
from typing import Any, Dict, Optional

from loguru import logger


class FetchTimer:
    """Log start/end events around one provider fetch."""

    def __init__(self, kind: str, metadata: Optional[Dict[str, Any]] = None):
        self.kind = kind
        self.metadata = metadata or {}
        self.enter_time: Optional[float] = None
        self.exit_time: Optional[float] = None
        self.event_id: str = str(uuid.uuid4())

    @property
    def duration(self) -> Optional[float]:
        if self.enter_time is None or self.exit_time is None:
            return None
        return self.exit_time - self.enter_time

    def __enter__(self):
        self.enter_time = time.time()

        start_event = {
            "id": self.event_id,
            "kind": self.kind,
            "type": "start",
            "time": self.enter_time,
            "metadata": self.metadata,
        }
        logger.debug(f"Fetch Timer: {json.dumps(start_event)}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.exit_time = time.time()
        end_event = {
            "id": self.event_id,
            "kind": self.kind,
            "type": "end" if exc_type is None else "error",
            "time": self.exit_time,
            "metadata": self.metadata,
            "duration": self.duration,
        }

        logger.debug(f"Fetch Timer: {json.dumps(end_event)}")
        return False
