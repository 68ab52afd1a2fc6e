import logging
import threading
from typing import Dict, Iterable, Iterator, List, Optional

from barcode_engine.schemas import BarcodeResult

logger = logging.getLogger(__name__)


class BarcodeStore:
    """
    Caller-owned collection of generated results.

    Results are kept newest first with an id index next to the ordered list.
    All mutations happen under a single lock, so request handlers running in
    different threads can share one store.
    """

    def __init__(self):
        self._results: List[BarcodeResult] = []
        self._index: Dict[str, BarcodeResult] = {}
        self._lock = threading.Lock()

    def add(self, result: BarcodeResult) -> BarcodeResult:
        with self._lock:
            self._insert([result])
        return result

    def extend(self, results: Iterable[BarcodeResult]) -> None:
        """Add several results; the first of ``results`` ends up first in the store."""
        with self._lock:
            self._insert(list(results))

    def _insert(self, results: List[BarcodeResult]) -> None:
        # a repeated id keeps its last occurrence
        latest = {result.id: result for result in results}
        incoming = [result for result in results if latest[result.id] is result]
        self._results = incoming + [r for r in self._results if r.id not in latest]
        self._index.update(latest)

    def get(self, result_id: str) -> Optional[BarcodeResult]:
        with self._lock:
            return self._index.get(result_id)

    def remove(self, result_id: str) -> bool:
        with self._lock:
            result = self._index.pop(result_id, None)
            if result is None:
                return False
            self._results.remove(result)
        logger.debug(f"Removed barcode {result_id} from store")
        return True

    def clear(self) -> int:
        with self._lock:
            count = len(self._results)
            self._results.clear()
            self._index.clear()
        logger.debug(f"Cleared {count} barcodes from store")
        return count

    def all(self) -> List[BarcodeResult]:
        with self._lock:
            return list(self._results)

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def __iter__(self) -> Iterator[BarcodeResult]:
        return iter(self.all())
