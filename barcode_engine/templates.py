from typing import Dict, List, Optional

from barcode_engine.schemas import (
    BarcodeCustomization,
    BarcodeFormatEnum,
    BarcodeGenerationError,
    BarcodeSettings,
    BarcodeTemplate,
    FontWeightEnum,
    TextCaseEnum,
)


def _template(id: str, name: str, description: str, category: str, settings: BarcodeSettings,
              use_case: List[str], examples: List[str], preview: str) -> BarcodeTemplate:
    return BarcodeTemplate(
        id=id,
        name=name,
        description=description,
        category=category,
        format=settings.format,
        settings=settings,
        use_case=use_case,
        examples=examples,
        preview=preview,
    )


BARCODE_TEMPLATES: Dict[str, BarcodeTemplate] = {t.id: t for t in [
    _template(
        "product-code128", "Product Code (CODE128)", "Standard product barcode with CODE128 format", "Retail",
        BarcodeSettings(content="PROD123456789", format=BarcodeFormatEnum.CODE128),
        ["Product identification", "Inventory management", "Point of sale", "Warehouse tracking"],
        ["SKU codes", "Product IDs", "Serial numbers", "Batch numbers"],
        "Standard black and white barcode with text below",
    ),
    _template(
        "ean13-retail", "EAN-13 Retail", "International retail barcode standard", "Retail",
        BarcodeSettings(
            content="1234567890123", format=BarcodeFormatEnum.EAN13, width=1.5, height=60,
            font_size=10, text_margin=3, margin=10,
            customization=BarcodeCustomization(quiet_zone_size=8),
        ),
        ["Retail products", "Grocery items", "Consumer goods", "International trade"],
        ["Product barcodes", "ISBN numbers", "GTIN codes", "UPC codes"],
        "Compact retail barcode with standard dimensions",
    ),
    _template(
        "shipping-code39", "Shipping Label (CODE39)", "Alphanumeric shipping and logistics barcode", "Logistics",
        BarcodeSettings(
            content="SHIP123ABC", format=BarcodeFormatEnum.CODE39, width=2.5, height=100,
            font_size=14, text_margin=8, margin=20,
            customization=BarcodeCustomization(
                show_border=True, border_width=2, quiet_zone_size=15,
                font_weight=FontWeightEnum.BOLD, text_case=TextCaseEnum.UPPERCASE,
            ),
        ),
        ["Shipping labels", "Package tracking", "Logistics", "Warehouse management"],
        ["Tracking numbers", "Package IDs", "Route codes", "Delivery references"],
        "Bold barcode with border for shipping applications",
    ),
    _template(
        "pharmaceutical", "Pharmaceutical Code", "Specialized barcode for pharmaceutical products", "Healthcare",
        BarcodeSettings(
            content="12345", format=BarcodeFormatEnum.PHARMACODE, width=1, height=40,
            font_size=8, text_margin=3, margin=5,
            customization=BarcodeCustomization(quiet_zone_size=5),
        ),
        ["Pharmaceutical packaging", "Drug identification", "Medical supplies", "Healthcare tracking"],
        ["Drug codes", "Batch numbers", "Expiry tracking", "Medical device IDs"],
        "Compact pharmaceutical barcode for small packages",
    ),
    _template(
        "library-codabar", "Library Book (Codabar)", "Traditional library and blood bank barcode", "Library",
        BarcodeSettings(
            content="A123456B", format=BarcodeFormatEnum.CODABAR, width=2, height=70,
            font_size=11, margin=12,
            customization=BarcodeCustomization(text_case=TextCaseEnum.UPPERCASE),
        ),
        ["Library books", "Blood banks", "Photo labs", "Membership cards"],
        ["Book IDs", "Member numbers", "Blood bag tracking", "Photo order numbers"],
        "Classic library-style barcode with start/stop characters",
    ),
    _template(
        "high-density", "High Density (CODE93)", "Compact barcode for space-constrained applications", "Industrial",
        BarcodeSettings(
            content="HD123ABC", format=BarcodeFormatEnum.CODE93, width=1, height=50,
            font_size=9, text_margin=3, margin=8,
            customization=BarcodeCustomization(quiet_zone_size=6, text_case=TextCaseEnum.UPPERCASE),
        ),
        ["Small labels", "Component marking", "Industrial tracking", "Space-limited applications"],
        ["Component IDs", "Small part numbers", "Circuit board labels", "Tool tracking"],
        "Compact high-density barcode for small spaces",
    ),
]}


def list_templates(category: Optional[str] = None) -> List[BarcodeTemplate]:
    """Catalog templates in declaration order, optionally filtered by category (case-insensitive)."""
    templates = list(BARCODE_TEMPLATES.values())
    if category:
        templates = [t for t in templates if t.category.lower() == category.lower()]
    return templates


def get_template(template_id: str) -> BarcodeTemplate:
    template = BARCODE_TEMPLATES.get(template_id)
    if template is None:
        raise BarcodeGenerationError(f"Unknown template: {template_id}", "TemplateNotFound")
    return template


def settings_from_template(template_id: str, content: Optional[str] = None) -> BarcodeSettings:
    """Preset settings of a template, with ``content`` replacing the sample content when given."""
    settings = get_template(template_id).settings
    if content is not None:
        settings = settings.model_copy(update={"content": content})
    return settings
