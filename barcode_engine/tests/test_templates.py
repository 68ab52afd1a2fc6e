import pytest

from barcode_engine.engine import BarcodeEngine
from barcode_engine.schemas import BarcodeFormatEnum, BarcodeGenerationError, TextCaseEnum
from barcode_engine.templates import BARCODE_TEMPLATES, get_template, list_templates, settings_from_template

TEMPLATE_IDS = [
    "product-code128",
    "ean13-retail",
    "shipping-code39",
    "pharmaceutical",
    "library-codabar",
    "high-density",
]


def test_catalog_ids_in_order():
    assert [t.id for t in list_templates()] == TEMPLATE_IDS


@pytest.mark.parametrize("template_id", TEMPLATE_IDS)
def test_every_template_generates_a_valid_barcode(template_id):
    template = get_template(template_id)
    assert template.format == template.settings.format
    result = BarcodeEngine().generate(template.settings)
    assert result.is_valid, result.error


def test_filter_by_category():
    retail = list_templates("retail")
    assert {t.id for t in retail} == {"product-code128", "ean13-retail"}
    assert list_templates("Unknown") == []


def test_preset_values():
    shipping = BARCODE_TEMPLATES["shipping-code39"].settings
    assert shipping.width == 2.5
    assert shipping.customization.show_border
    assert shipping.customization.border_width == 2
    assert shipping.customization.text_case == TextCaseEnum.UPPERCASE
    assert BARCODE_TEMPLATES["pharmaceutical"].format == BarcodeFormatEnum.PHARMACODE


def test_settings_from_template_replaces_content():
    settings = settings_from_template("ean13-retail", "4006381333931")
    assert settings.content == "4006381333931"
    assert settings.width == 1.5
    assert settings_from_template("ean13-retail").content == "1234567890123"


def test_unknown_template():
    with pytest.raises(BarcodeGenerationError) as exc_info:
        get_template("missing")
    assert exc_info.value.error_type == "TemplateNotFound"
