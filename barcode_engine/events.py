import logging
import threading
from enum import Enum
from typing import Any, Callable, Dict, List

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    VALIDATED = "validated"
    ENCODED = "encoded"
    FAILED = "failed"
    BATCH_COMPLETED = "batchCompleted"


class BarcodeEvent(BaseModel):
    """A discrete notification raised by the engine or the batch processor."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: EventType
    payload: Any = None


EventCallback = Callable[[BarcodeEvent], None]


class EventEmitter:
    """
    Synchronous publish/subscribe hub.

    Callbacks run on the emitting thread in subscription order. A callback
    that raises is logged and skipped; the remaining callbacks still run and
    the emitter never propagates the failure.
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[EventCallback]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: EventType, callback: EventCallback) -> Callable[[], None]:
        with self._lock:
            self._listeners.setdefault(event_type, []).append(callback)

        def unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(event_type, [])
                if callback in listeners:
                    listeners.remove(callback)

        return unsubscribe

    def emit(self, event: BarcodeEvent) -> None:
        with self._lock:
            listeners = list(self._listeners.get(event.type, []))
        for callback in listeners:
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Listener for {event.type.value} event failed: {str(e)}", exc_info=True)

    def listener_count(self, event_type: EventType) -> int:
        with self._lock:
            return len(self._listeners.get(event_type, []))
