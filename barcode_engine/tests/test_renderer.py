import base64
from io import BytesIO

import pytest
from PIL import Image

from barcode_engine.encoder import encode
from barcode_engine.renderer import BarcodeRenderer
from barcode_engine.schemas import (
    BarcodeCustomization,
    BarcodeFormatEnum,
    BarcodeSettings,
    EncodingError,
    TextCaseEnum,
)


@pytest.fixture
def renderer() -> BarcodeRenderer:
    return BarcodeRenderer(dpi=96)


@pytest.fixture
def hello_settings() -> BarcodeSettings:
    return BarcodeSettings(content="HELLO", format=BarcodeFormatEnum.CODE128, display_value=False)


def test_writer_options_convert_pixels(renderer, hello_settings):
    options = renderer.writer_options(hello_settings)
    assert options["module_width"] == pytest.approx(2 * 25.4 / 96)
    assert options["module_height"] == pytest.approx(80 * 25.4 / 96)
    assert options["quiet_zone"] == pytest.approx(15 * 25.4 / 96)
    assert options["background"] == "#ffffff"
    assert options["foreground"] == "#000000"
    assert options["text"] == ""
    assert options["font_size"] == 0


def test_writer_options_apply_text_case(renderer):
    settings = BarcodeSettings(
        content="abc", customization=BarcodeCustomization(text_case=TextCaseEnum.UPPERCASE, show_quiet_zone=False)
    )
    options = renderer.writer_options(settings)
    assert options["text"] == "ABC"
    assert options["font_size"] == 9
    assert options["quiet_zone"] == 0


def test_render_produces_png_data_url_and_svg(renderer, hello_settings):
    rendered = renderer.render(encode(hello_settings), hello_settings)
    assert rendered.data_url.startswith("data:image/png;base64,")
    png = base64.b64decode(rendered.data_url.split(",", 1)[1])
    assert png.startswith(b"\x89PNG")
    assert "<svg" in rendered.svg


def test_png_width_follows_module_count(renderer, hello_settings):
    pattern = encode(hello_settings)
    with Image.open(BytesIO(renderer.render_png(pattern, hello_settings))) as image:
        # 90 modules of 2px plus 15px quiet zones, give or take rounding
        assert abs(image.width - (len(pattern) * 2 + 30)) <= 2


def test_border_is_drawn(renderer, hello_settings):
    settings = hello_settings.model_copy(update={
        "customization": BarcodeCustomization(show_border=True, border_width=2, border_color="#ff0000"),
    })
    image = renderer.render_image(encode(settings), settings)
    assert image.convert("RGB").getpixel((0, 0)) == (255, 0, 0)


def test_empty_pattern_is_an_encoding_error(renderer, hello_settings):
    with pytest.raises(EncodingError):
        renderer.render("", hello_settings)
