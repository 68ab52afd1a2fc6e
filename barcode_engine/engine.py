# barcode_engine/engine.py

import logging
from datetime import datetime
from typing import Callable, Optional

import pytz
from fastnanoid import generate as generate_nanoid

from barcode_engine.analyzer import analyze_barcode
from barcode_engine.encoder import encode
from barcode_engine.events import BarcodeEvent, EventEmitter, EventType
from barcode_engine.metadata import calculate_metadata
from barcode_engine.renderer import BarcodeRenderer
from barcode_engine.schemas import (
    BarcodeGenerationError,
    BarcodeResult,
    BarcodeSettings,
    BarcodeValidation,
    ErrorTypeEnum,
    IssueTypeEnum,
)
from barcode_engine.validator import validate_barcode_settings

logger = logging.getLogger(__name__)

ISSUE_ERROR_TYPES = {
    IssueTypeEnum.CONTENT: ErrorTypeEnum.CONTENT,
    IssueTypeEnum.FORMAT: ErrorTypeEnum.CONTENT,
    IssueTypeEnum.SIZE: ErrorTypeEnum.SIZE,
    IssueTypeEnum.SETTINGS: ErrorTypeEnum.SETTINGS,
    IssueTypeEnum.COMPATIBILITY: ErrorTypeEnum.SETTINGS,
}


def utc_now() -> datetime:
    return datetime.now(pytz.utc)


class BarcodeEngine:
    """
    Stateless encoding service.

    ``generate`` runs validation, encoding, checksum and metadata calculation,
    analysis and, when a renderer is configured, rendering. It never raises:
    every failure becomes an invalid ``BarcodeResult`` carrying the error
    message and its ``error_type``.

    Identifiers and timestamps come from the injected ``id_generator`` and
    ``clock`` so tests can make results fully deterministic.
    """

    def __init__(
        self,
        id_generator: Callable[[], str] = generate_nanoid,
        clock: Callable[[], datetime] = utc_now,
        renderer: Optional[BarcodeRenderer] = None,
        notifier: Optional[EventEmitter] = None,
    ):
        self.id_generator = id_generator
        self.clock = clock
        self.renderer = renderer
        self.notifier = notifier or EventEmitter()

    def _emit(self, event_type: EventType, payload) -> None:
        self.notifier.emit(BarcodeEvent(type=event_type, payload=payload))

    def validate(self, settings: BarcodeSettings) -> BarcodeValidation:
        validation = validate_barcode_settings(settings)
        self._emit(EventType.VALIDATED, validation)
        return validation

    def _failed(self, settings: BarcodeSettings, message: str, error_type: ErrorTypeEnum) -> BarcodeResult:
        result = BarcodeResult(
            id=self.id_generator(),
            settings=settings,
            is_valid=False,
            error=message,
            error_type=error_type,
            created_at=self.clock(),
        )
        self._emit(EventType.FAILED, result)
        return result

    def generate(self, settings: BarcodeSettings) -> BarcodeResult:
        """
        Generate one barcode result.

        Args:
            settings: The encoding request.

        Returns:
            BarcodeResult: A valid result with pattern, metadata and analysis,
            or an invalid one with ``error`` and ``error_type`` set.
        """
        validation = self.validate(settings)
        if not validation.is_valid:
            message = "; ".join(issue.message for issue in validation.errors)
            error_type = ISSUE_ERROR_TYPES[validation.errors[0].type]
            return self._failed(settings, message, error_type)

        try:
            pattern = encode(settings)
            metadata = calculate_metadata(settings, pattern)
            analysis = analyze_barcode(settings, metadata)
            rendered = self.renderer.render(pattern, settings) if self.renderer else None
        except BarcodeGenerationError as e:
            logger.error(f"Barcode generation error for {settings.format.value}: {e.message}", exc_info=True)
            return self._failed(settings, e.message, ErrorTypeEnum.ENCODING)
        except Exception as e:
            logger.error(f"Unexpected error generating {settings.format.value} barcode: {str(e)}", exc_info=True)
            return self._failed(settings, f"An unexpected error occurred: {str(e)}", ErrorTypeEnum.ENCODING)

        result = BarcodeResult(
            id=self.id_generator(),
            settings=settings,
            pattern=pattern,
            is_valid=True,
            metadata=metadata,
            analysis=analysis,
            data_url=rendered.data_url if rendered else None,
            svg_string=rendered.svg if rendered else None,
            created_at=self.clock(),
        )
        logger.debug(f"Generated {settings.format.value} barcode {result.id} ({metadata.module_count} modules)")
        self._emit(EventType.ENCODED, result)
        return result
