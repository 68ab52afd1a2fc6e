"""
Readability, optimization, compatibility and security analysis of an encoded barcode.

All functions are pure: the same settings and metadata always produce the
same analysis.
"""

import re
from typing import List

from barcode_engine.colors import contrast_ratio
from barcode_engine.formats import get_industry_standards
from barcode_engine.metadata import aspect_ratio
from barcode_engine.schemas import (
    BarcodeAnalysis,
    BarcodeCompatibility,
    BarcodeMetadata,
    BarcodeOptimization,
    BarcodeReadability,
    BarcodeSecurity,
    BarcodeSettings,
    LevelEnum,
)

SCANNER_COMPATIBILITY = ["Laser scanners", "CCD scanners", "Image scanners"]
PRINT_COMPATIBILITY = ["Thermal printers", "Inkjet printers", "Laser printers"]
SOFTWARE_COMPATIBILITY = ["POS systems", "Inventory management", "Mobile apps"]

SENSITIVE_KEYWORDS = ("password", "secret")
CARD_NUMBER_PATTERN = re.compile(r"\d{13,19}", re.ASCII)
LONG_CONTENT_LENGTH = 20

SECURITY_SCORES = {
    LevelEnum.LOW: 60,
    LevelEnum.MEDIUM: 40,
    LevelEnum.HIGH: 20,
}


def analyze_readability(settings: BarcodeSettings, metadata: BarcodeMetadata) -> BarcodeReadability:
    contrast = contrast_ratio(settings.line_color, settings.background_color)
    bar_width = settings.width
    quiet_zone = settings.margin
    ratio = aspect_ratio(settings)

    score = 100
    if contrast < 4.5:
        score -= 30
    if bar_width < 2:
        score -= 20
    if quiet_zone < 10:
        score -= 15
    if ratio < 15:
        score -= 10

    if bar_width >= 3:
        scan_distance = "Close (< 15cm)"
    elif bar_width >= 2:
        scan_distance = "Medium (15-30cm)"
    else:
        scan_distance = "Far (> 30cm)"

    if contrast >= 7 and bar_width >= 2:
        print_quality = LevelEnum.HIGH
    elif contrast >= 4.5 and bar_width >= 1.5:
        print_quality = LevelEnum.MEDIUM
    else:
        print_quality = LevelEnum.LOW

    return BarcodeReadability(
        contrast_ratio=contrast,
        bar_width=bar_width,
        quiet_zone=quiet_zone,
        aspect_ratio=ratio,
        readability_score=max(0, min(100, score)),
        scan_distance=scan_distance,
        lighting_conditions=["Bright", "Normal", "Dim"] if contrast > 7 else ["Bright", "Normal"],
        print_quality=print_quality,
    )


def analyze_optimization(settings: BarcodeSettings, metadata: BarcodeMetadata) -> BarcodeOptimization:
    max_length = metadata.capacity.max_length
    data_efficiency = min(100.0, metadata.data_length / max_length * 100) if max_length else 0.0

    size_penalty = max(0.0, settings.width - 3) * 10 + max(0.0, settings.height - 100) * 0.5
    size_optimization = max(0.0, 100 - size_penalty)

    print_penalty = (20 if settings.width < 2 else 0) + (15 if settings.height < 50 else 0)
    print_optimization = max(0.0, 100.0 - print_penalty)

    scan_optimization = metadata.readability_score
    overall = (data_efficiency + size_optimization + print_optimization + scan_optimization) / 4

    return BarcodeOptimization(
        data_efficiency=data_efficiency,
        size_optimization=size_optimization,
        print_optimization=print_optimization,
        scan_optimization=scan_optimization,
        overall_optimization=overall,
    )


def analyze_compatibility(settings: BarcodeSettings) -> BarcodeCompatibility:
    limitations: List[str] = []
    if settings.width < 2:
        limitations.append("May not scan well with older laser scanners")
    if settings.height < 30:
        limitations.append("May have issues with handheld scanners")
    if contrast_ratio(settings.line_color, settings.background_color) < 3:
        limitations.append("Poor contrast may cause scanning failures")

    return BarcodeCompatibility(
        scanner_compatibility=list(SCANNER_COMPATIBILITY),
        industry_standards=get_industry_standards(settings.format),
        print_compatibility=list(PRINT_COMPATIBILITY),
        software_compatibility=list(SOFTWARE_COMPATIBILITY),
        limitations=limitations,
    )


def analyze_security(settings: BarcodeSettings) -> BarcodeSecurity:
    """
    Classify how much the content exposes if the label is read by anyone.

    Exposure only ever escalates: long content is ``medium``, sensitive
    keywords or card-number-like digit runs are ``high``.
    """
    content = settings.content
    exposure = LevelEnum.LOW
    vulnerabilities: List[str] = []
    recommendations: List[str] = []

    if len(content) > LONG_CONTENT_LENGTH:
        exposure = LevelEnum.MEDIUM
        vulnerabilities.append("Long content may contain sensitive information")

    lowered = content.lower()
    if any(keyword in lowered for keyword in SENSITIVE_KEYWORDS):
        exposure = LevelEnum.HIGH
        vulnerabilities.append("Contains potentially sensitive information")
        recommendations.append("Avoid including passwords or secrets in barcodes")

    if CARD_NUMBER_PATTERN.search(content):
        exposure = LevelEnum.HIGH
        vulnerabilities.append("May contain credit card or sensitive numeric data")

    vulnerabilities.append("Barcode data is easily readable by anyone with a scanner")
    recommendations.append("Use encryption or encoding for sensitive data")
    recommendations.append("Consider using 2D codes like QR codes for better data capacity")

    return BarcodeSecurity(
        data_exposure=exposure,
        tampering_resistance=LevelEnum.LOW,
        privacy_level=LevelEnum.LOW,
        security_score=SECURITY_SCORES[exposure],
        vulnerabilities=vulnerabilities,
        recommendations=recommendations,
    )


def analyze_barcode(settings: BarcodeSettings, metadata: BarcodeMetadata) -> BarcodeAnalysis:
    """
    Build the full analysis and pool actionable recommendations and warnings.

    Args:
        settings: Settings the barcode was generated with.
        metadata: Metadata computed for the generated pattern.

    Returns:
        BarcodeAnalysis: Readability, optimization, compatibility and security reports.
    """
    readability = analyze_readability(settings, metadata)
    optimization = analyze_optimization(settings, metadata)
    compatibility = analyze_compatibility(settings)
    security = analyze_security(settings)

    recommendations: List[str] = []
    warnings: List[str] = []

    if readability.contrast_ratio < 4.5:
        recommendations.append("Increase contrast between bars and background")
    if settings.width < 2:
        recommendations.append("Consider increasing bar width for better scanning")
    if settings.height < 50:
        recommendations.append("Increase barcode height for better readability")
    if metadata.data_length > metadata.capacity.max_length:
        warnings.append("Content exceeds maximum length for this format")
    if settings.margin < 10:
        warnings.append("Small quiet zone may affect scanning reliability")

    return BarcodeAnalysis(
        readability=readability,
        optimization=optimization,
        compatibility=compatibility,
        security=security,
        recommendations=recommendations,
        warnings=warnings,
    )
