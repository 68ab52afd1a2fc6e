import logging
from typing import List

from barcode_engine.colors import contrast_ratio, is_valid_color
from barcode_engine.formats import get_capacity, matches_charset
from barcode_engine.schemas import (
    BarcodeSettings,
    BarcodeValidation,
    IssueTypeEnum,
    SeverityEnum,
    Size,
    ValidationIssue,
)

logger = logging.getLogger(__name__)

MIN_BAR_WIDTH = 0.5
MAX_BAR_WIDTH = 10
MIN_HEIGHT = 20
MAX_HEIGHT = 500
MIN_CONTRAST = 3
RECOMMENDED_CONTRAST = 4.5
MIN_MARGIN = 5
MIN_FONT_SIZE = 6


def estimate_size(settings: BarcodeSettings) -> Size:
    """Physical size of the symbol including margins and, when shown, the text line."""
    text_height = settings.font_size + settings.text_margin if settings.display_value else 0
    return Size(
        width=settings.width * len(settings.content) + settings.margin * 2,
        height=settings.height + settings.margin * 2 + text_height,
    )


def recommend_settings(settings: BarcodeSettings) -> BarcodeSettings:
    """Return a copy of ``settings`` clamped into the ranges that scan reliably."""
    return settings.model_copy(update={
        "width": max(1.5, min(3, settings.width)),
        "height": max(50, min(100, settings.height)),
        "margin": max(10, settings.margin),
        "font_size": max(8, settings.font_size) if settings.display_value else settings.font_size,
    })


def validate_barcode_settings(settings: BarcodeSettings) -> BarcodeValidation:
    """
    Check content and rendering settings before encoding.

    Blocking problems are returned as ``errors`` and make the validation
    invalid; risky but usable settings only add ``warnings`` and
    ``suggestions``. The estimated size and a recommended settings candidate
    are always computed.

    Args:
        settings: The settings to check.

    Returns:
        BarcodeValidation: The collected issues.
    """
    errors: List[ValidationIssue] = []
    warnings: List[str] = []
    suggestions: List[str] = []
    fmt = settings.format.value
    content = settings.content

    def error(message: str, issue_type: IssueTypeEnum) -> None:
        errors.append(ValidationIssue(message=message, type=issue_type, severity=SeverityEnum.ERROR))

    if not content or not content.strip():
        error("Content cannot be empty", IssueTypeEnum.CONTENT)

    capacity = get_capacity(settings.format)
    if len(content) > capacity.max_length:
        error(f"Content exceeds maximum length of {capacity.max_length} for {fmt}", IssueTypeEnum.CONTENT)
    if len(content) < capacity.min_length:
        error(f"Content must be at least {capacity.min_length} characters for {fmt}", IssueTypeEnum.CONTENT)

    if content and not matches_charset(content, settings.format):
        error(f"Content contains invalid characters for {fmt} format", IssueTypeEnum.CONTENT)

    if settings.width < MIN_BAR_WIDTH:
        error(f"Bar width must be at least {MIN_BAR_WIDTH}", IssueTypeEnum.SIZE)
    if settings.width > MAX_BAR_WIDTH:
        warnings.append("Very wide bars may cause scanning issues")
        suggestions.append("Consider reducing bar width for better compatibility")

    if settings.height < MIN_HEIGHT:
        error(f"Height must be at least {MIN_HEIGHT} pixels", IssueTypeEnum.SIZE)
    if settings.height > MAX_HEIGHT:
        warnings.append("Very tall barcodes may have printing issues")
        suggestions.append("Consider reducing height for better printability")

    invalid_colors = [c for c in (settings.line_color, settings.background_color) if not is_valid_color(c)]
    if invalid_colors:
        for color in invalid_colors:
            error(f"Invalid color value: {color!r}", IssueTypeEnum.SETTINGS)
    else:
        contrast = contrast_ratio(settings.line_color, settings.background_color)
        if contrast < MIN_CONTRAST:
            error("Insufficient contrast between bars and background", IssueTypeEnum.SETTINGS)
        elif contrast < RECOMMENDED_CONTRAST:
            warnings.append("Low contrast may affect scanning reliability")
            suggestions.append("Increase contrast for better readability")

    if settings.margin < MIN_MARGIN:
        warnings.append("Small quiet zone may affect scanning")
        suggestions.append("Increase margin to at least 10 pixels")

    if settings.display_value and settings.font_size < MIN_FONT_SIZE:
        warnings.append("Very small font may be difficult to read")
        suggestions.append("Increase font size for better readability")

    validation = BarcodeValidation(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        suggestions=suggestions,
        estimated_size=estimate_size(settings),
        recommended_settings=recommend_settings(settings),
    )
    if errors:
        logger.warning(f"Validation failed for {fmt} content {content!r}: {[e.message for e in errors]}")
    return validation
