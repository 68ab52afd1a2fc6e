# barcode_engine/batch_processor.py

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Dict, Iterator, List, Optional

from barcode_engine.engine import BarcodeEngine
from barcode_engine.events import BarcodeEvent, EventType
from barcode_engine.schemas import (
    BarcodeBatch,
    BarcodeResult,
    BarcodeSettings,
    BatchProgress,
    BatchSettings,
    BatchStatistics,
    BatchStatusEnum,
    ItemStatusEnum,
)

logger = logging.getLogger(__name__)

DEFAULT_BATCH_NAME = "Barcode Batch"
SIZE_BUCKET = 100

ProgressCallback = Optional[Callable[[BatchProgress], None]]


def size_bucket(width: float) -> str:
    low = int(width // SIZE_BUCKET) * SIZE_BUCKET
    return f"{low}-{low + SIZE_BUCKET - 1}"


def calculate_statistics(results: List[BarcodeResult], total_processing_time: float) -> BatchStatistics:
    """
    Fold per-item results into batch statistics.

    Averages and both distributions only consider successful items; every
    average is 0 when there is nothing to average over.
    """
    successful = [r for r in results if r.is_valid and r.metadata is not None]
    size_distribution: Dict[str, int] = {}
    format_distribution: Dict[str, int] = {}

    for result in successful:
        bucket = size_bucket(result.metadata.actual_size.width)
        size_distribution[bucket] = size_distribution.get(bucket, 0) + 1
        fmt = result.format.value
        format_distribution[fmt] = format_distribution.get(fmt, 0) + 1

    count = len(successful)
    return BatchStatistics(
        total_generated=len(results),
        successful_generated=count,
        failed_generated=len(results) - count,
        average_size=sum(r.metadata.actual_size.width for r in successful) / count if count else 0,
        average_quality=sum(r.metadata.quality_score for r in successful) / count if count else 0,
        total_processing_time=total_processing_time,
        average_processing_time=total_processing_time / len(results) if results else 0,
        size_distribution=size_distribution,
        format_distribution=format_distribution,
    )


class BatchProcessor:
    """
    Runs the engine over every item of a batch.

    With ``max_workers <= 1`` items are processed one after another;
    otherwise they are fanned out over a thread pool. Either way progress is
    reported and results are collected in input order. Cancellation is
    cooperative: ``cancel_event`` is checked before each item starts.
    """

    def __init__(self, engine: BarcodeEngine, max_workers: int = 1):
        self.engine = engine
        self.max_workers = max_workers

    @staticmethod
    def item_settings(batch_settings: BatchSettings, content: str) -> BarcodeSettings:
        return batch_settings.base_settings.model_copy(update={"content": content})

    def _step(self, index: int, total: int, result: BarcodeResult) -> BatchProgress:
        return BatchProgress(
            index=index,
            total=total,
            status=ItemStatusEnum.COMPLETED if result.is_valid else ItemStatusEnum.ERROR,
            progress=(index + 1) / total * 100,
            result=result,
        )

    def iter_progress(
        self,
        batch_settings: BatchSettings,
        cancel_event: Optional[threading.Event] = None,
    ) -> Iterator[BatchProgress]:
        """
        Yield one ``processing`` step and one terminal step per item.

        The terminal step is ``completed`` or ``error`` and carries the item's
        result. Iteration stops early once ``cancel_event`` is set.
        """
        contents = batch_settings.content_list
        total = len(contents)

        def cancelled() -> bool:
            return cancel_event is not None and cancel_event.is_set()

        if self.max_workers <= 1:
            for index, content in enumerate(contents):
                if cancelled():
                    logger.info(f"Batch cancelled before item {index + 1}/{total}")
                    return
                yield BatchProgress(index=index, total=total, status=ItemStatusEnum.PROCESSING, progress=index / total * 100)
                result = self.engine.generate(self.item_settings(batch_settings, content))
                yield self._step(index, total, result)
            return

        def work(content: str) -> Optional[BarcodeResult]:
            if cancelled():
                return None
            return self.engine.generate(self.item_settings(batch_settings, content))

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures: List[Future] = [executor.submit(work, content) for content in contents]
            for index, future in enumerate(futures):
                yield BatchProgress(index=index, total=total, status=ItemStatusEnum.PROCESSING, progress=index / total * 100)
                result = future.result()
                if result is None:
                    logger.info(f"Batch cancelled before item {index + 1}/{total}")
                    for pending in futures[index + 1:]:
                        pending.cancel()
                    return
                yield self._step(index, total, result)

    def run(
        self,
        batch_settings: BatchSettings,
        cancel_event: Optional[threading.Event] = None,
        on_progress: ProgressCallback = None,
    ) -> BarcodeBatch:
        """
        Process a whole batch and return it with its statistics.

        Per-item failures never abort the run; they are recorded as invalid
        results and counted in ``failed_generated``.

        Args:
            batch_settings: Content items plus the shared base settings.
            cancel_event: Optional flag checked before each item starts.
            on_progress: Optional callback receiving every progress step.

        Returns:
            BarcodeBatch: ``completed``, or ``cancelled`` when the run was
            stopped before every item was processed.
        """
        total = len(batch_settings.content_list)
        batch = BarcodeBatch(
            id=self.engine.id_generator(),
            name=batch_settings.naming_pattern or DEFAULT_BATCH_NAME,
            settings=batch_settings,
            status=BatchStatusEnum.PROCESSING,
            created_at=self.engine.clock(),
        )
        logger.info(f"Starting batch {batch.id} with {total} items ({self.max_workers} workers)")

        results: List[BarcodeResult] = []
        start_time = time.perf_counter()
        for step in self.iter_progress(batch_settings, cancel_event):
            if on_progress:
                on_progress(step)
            if step.result is not None:
                results.append(step.result)
                batch.progress = step.progress
        total_processing_time = (time.perf_counter() - start_time) * 1000

        batch.results = results
        batch.statistics = calculate_statistics(results, total_processing_time)
        if len(results) < total:
            batch.status = BatchStatusEnum.CANCELLED
        else:
            batch.status = BatchStatusEnum.COMPLETED
            batch.progress = 100
        batch.completed_at = self.engine.clock()

        logger.info(
            f"Batch {batch.id} {batch.status.value}: {batch.statistics.successful_generated} succeeded, "
            f"{batch.statistics.failed_generated} failed in {total_processing_time:.2f}ms"
        )
        self.engine.notifier.emit(BarcodeEvent(type=EventType.BATCH_COMPLETED, payload=batch))
        return batch
