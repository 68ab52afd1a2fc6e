from barcode_engine.checksum import calculate_checksum
from barcode_engine.colors import contrast_ratio
from barcode_engine.formats import get_capacity
from barcode_engine.schemas import BarcodeCapacity, BarcodeMetadata, BarcodeSettings
from barcode_engine.validator import estimate_size


def _clamp_score(score: float) -> float:
    return max(0.0, min(100.0, float(score)))


def aspect_ratio(settings: BarcodeSettings) -> float:
    """Bar height over bar module width; 0 when the width is not positive."""
    if settings.width <= 0:
        return 0.0
    return settings.height / settings.width


def calculate_quality_score(settings: BarcodeSettings, content_length: int, capacity: BarcodeCapacity) -> float:
    score = 100

    contrast = contrast_ratio(settings.line_color, settings.background_color)
    if contrast < 3:
        score -= 30
    elif contrast < 7:
        score -= 10

    if settings.width < 1:
        score -= 20
    if settings.width > 5:
        score -= 10

    if settings.height < 30:
        score -= 15
    if settings.height > 200:
        score -= 10

    if content_length > capacity.max_length:
        score -= 25
    if content_length < capacity.min_length:
        score -= 15

    if settings.margin >= 10:
        score += 5

    return _clamp_score(score)


def calculate_readability_score(settings: BarcodeSettings) -> float:
    score = 100

    if contrast_ratio(settings.line_color, settings.background_color) < 4.5:
        score -= 25

    ratio = aspect_ratio(settings)
    if ratio < 10:
        score -= 15
    if ratio > 100:
        score -= 10

    if settings.margin < 5:
        score -= 10

    if settings.display_value and settings.font_size < 8:
        score -= 10

    return _clamp_score(score)


def calculate_metadata(settings: BarcodeSettings, pattern: str) -> BarcodeMetadata:
    """
    Derive size, capacity and score metadata for an encoded barcode.

    ``actual_size`` uses one module width per content character plus the
    margins, the same estimate the validator reports.
    """
    content_length = len(settings.content)
    capacity = get_capacity(settings.format)
    actual_size = estimate_size(settings)
    area = actual_size.width * actual_size.height

    return BarcodeMetadata(
        format=settings.format,
        capacity=capacity,
        actual_size=actual_size,
        data_length=content_length,
        module_count=len(pattern),
        checksum=calculate_checksum(settings.content, settings.format),
        encoding="ASCII",
        compression_ratio=content_length / area if area else 0.0,
        quality_score=calculate_quality_score(settings, content_length, capacity),
        readability_score=calculate_readability_score(settings),
    )
