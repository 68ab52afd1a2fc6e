import base64
import logging
from io import BytesIO
from typing import Any, Dict

from barcode.writer import ImageWriter, SVGWriter
from PIL import Image, ImageDraw

from barcode_engine.colors import parse_color
from barcode_engine.schemas import BarcodeSettings, EncodingError, RenderedBarcode

logger = logging.getLogger(__name__)

MM_PER_INCH = 25.4
POINTS_PER_INCH = 72


def _hex(color: str) -> str:
    return "#%02x%02x%02x" % parse_color(color)


class BarcodeRenderer:
    """
    Draws an encoded bar/space pattern with python-barcode's writers.

    Settings are expressed in pixels; the writers work in millimetres and
    points, so every length is converted with the configured ``dpi``.
    """

    def __init__(self, dpi: int = 96):
        self.dpi = dpi

    def _px_to_mm(self, px: float) -> float:
        return px * MM_PER_INCH / self.dpi

    def writer_options(self, settings: BarcodeSettings) -> Dict[str, Any]:
        customization = settings.customization
        quiet_zone = self._px_to_mm(settings.margin) if customization.show_quiet_zone else 0
        options = {
            "module_width": self._px_to_mm(settings.width),
            "module_height": self._px_to_mm(settings.height),
            "quiet_zone": quiet_zone,
            "background": _hex(settings.background_color),
            "foreground": _hex(settings.line_color),
            "center_text": settings.text_align.value == "center",
        }
        if settings.display_value:
            options["text"] = settings.display_text
            options["font_size"] = int(round(settings.font_size * POINTS_PER_INCH / self.dpi))
            options["text_distance"] = self._px_to_mm(settings.text_margin)
        else:
            # Hide the human readable line completely
            options["text"] = ""
            options["font_size"] = 0
            options["text_distance"] = 0
        return options

    def _draw_border(self, image: Image.Image, settings: BarcodeSettings) -> None:
        customization = settings.customization
        stroke = max(1, int(round(customization.border_width)))
        draw = ImageDraw.Draw(image)
        draw.rectangle(
            [0, 0, image.width - 1, image.height - 1],
            outline=parse_color(customization.border_color),
            width=stroke,
        )

    def render_image(self, pattern: str, settings: BarcodeSettings) -> Image.Image:
        writer = ImageWriter()
        writer.set_options({**self.writer_options(settings), "dpi": self.dpi})
        image = writer.render([pattern])
        if settings.customization.show_border:
            self._draw_border(image, settings)
        return image

    def render_png(self, pattern: str, settings: BarcodeSettings) -> bytes:
        """Render ``pattern`` to PNG bytes."""
        try:
            image = self.render_image(pattern, settings)
            try:
                with BytesIO() as buffer:
                    image.save(buffer, format="PNG", optimize=True)
                    return buffer.getvalue()
            finally:
                image.close()
        except Exception as e:
            logger.error(f"PNG rendering failed for {settings.format.value}: {str(e)}")
            raise EncodingError(f"Failed to render barcode image: {str(e)}")

    def render_svg(self, pattern: str, settings: BarcodeSettings) -> str:
        """Render ``pattern`` to SVG markup."""
        try:
            writer = SVGWriter()
            writer.set_options(self.writer_options(settings))
            markup = writer.render([pattern])
            return markup.decode("utf-8") if isinstance(markup, bytes) else markup
        except Exception as e:
            logger.error(f"SVG rendering failed for {settings.format.value}: {str(e)}")
            raise EncodingError(f"Failed to render barcode markup: {str(e)}")

    def render(self, pattern: str, settings: BarcodeSettings) -> RenderedBarcode:
        if not pattern:
            raise EncodingError("Cannot render an empty pattern")
        png = self.render_png(pattern, settings)
        data_url = "data:image/png;base64," + base64.b64encode(png).decode("utf-8")
        return RenderedBarcode(data_url=data_url, svg=self.render_svg(pattern, settings))
