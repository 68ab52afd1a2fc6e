import re
from typing import Dict, List

from barcode_engine.schemas import BarcodeCapacity, BarcodeFormatEnum, FormatInfo

# Codabar content carries its own A-D start/stop characters.
CHARSET_PATTERNS: Dict[BarcodeFormatEnum, str] = {
    BarcodeFormatEnum.CODE128: r"^[\x20-\x7E]+$",
    BarcodeFormatEnum.EAN13: r"^\d+$",
    BarcodeFormatEnum.EAN8: r"^\d+$",
    BarcodeFormatEnum.UPC: r"^\d+$",
    BarcodeFormatEnum.CODE39: r"^[A-Z0-9\-. $/+%]+$",
    BarcodeFormatEnum.ITF14: r"^\d+$",
    BarcodeFormatEnum.MSI: r"^\d+$",
    BarcodeFormatEnum.PHARMACODE: r"^\d+$",
    BarcodeFormatEnum.CODABAR: r"^[A-D][0-9\-$:/.+]+[A-D]$",
    BarcodeFormatEnum.CODE93: r"^[\x20-\x7E]+$",
}

_COMPILED_PATTERNS = {fmt: re.compile(pattern, re.ASCII) for fmt, pattern in CHARSET_PATTERNS.items()}

BARCODE_FORMATS: Dict[BarcodeFormatEnum, FormatInfo] = {
    BarcodeFormatEnum.CODE128: FormatInfo(
        name="Code 128",
        code=BarcodeFormatEnum.CODE128,
        description="Variable-length linear barcode supporting the printable ASCII character set",
        capacity=BarcodeCapacity(numeric=20, alphanumeric=20, binary=20, min_length=1, max_length=80),
        charset_pattern=CHARSET_PATTERNS[BarcodeFormatEnum.CODE128],
        industry_standards=["GS1-128", "ISBT 128", "USS Code 128"],
    ),
    BarcodeFormatEnum.EAN13: FormatInfo(
        name="EAN-13",
        code=BarcodeFormatEnum.EAN13,
        description="European Article Number, 13 digits including the check digit",
        capacity=BarcodeCapacity(numeric=13, alphanumeric=0, binary=0, min_length=13, max_length=13),
        charset_pattern=CHARSET_PATTERNS[BarcodeFormatEnum.EAN13],
        industry_standards=["GS1", "ISO/IEC 15420"],
    ),
    BarcodeFormatEnum.EAN8: FormatInfo(
        name="EAN-8",
        code=BarcodeFormatEnum.EAN8,
        description="European Article Number, 8 digits for small packages",
        capacity=BarcodeCapacity(numeric=8, alphanumeric=0, binary=0, min_length=8, max_length=8),
        charset_pattern=CHARSET_PATTERNS[BarcodeFormatEnum.EAN8],
        industry_standards=["GS1", "ISO/IEC 15420"],
    ),
    BarcodeFormatEnum.UPC: FormatInfo(
        name="UPC-A",
        code=BarcodeFormatEnum.UPC,
        description="Universal Product Code, 12 digits",
        capacity=BarcodeCapacity(numeric=12, alphanumeric=0, binary=0, min_length=12, max_length=12),
        charset_pattern=CHARSET_PATTERNS[BarcodeFormatEnum.UPC],
        industry_standards=["GS1", "UCC-12"],
    ),
    BarcodeFormatEnum.CODE39: FormatInfo(
        name="Code 39",
        code=BarcodeFormatEnum.CODE39,
        description="Alphanumeric barcode with upper-case letters, digits and - . $ / + % space",
        capacity=BarcodeCapacity(numeric=43, alphanumeric=43, binary=0, min_length=1, max_length=80),
        charset_pattern=CHARSET_PATTERNS[BarcodeFormatEnum.CODE39],
        industry_standards=["ANSI MH10.8M", "ISO/IEC 16388"],
    ),
    BarcodeFormatEnum.ITF14: FormatInfo(
        name="ITF-14",
        code=BarcodeFormatEnum.ITF14,
        description="Interleaved 2 of 5 carrying a 14 digit GTIN on shipping cartons",
        capacity=BarcodeCapacity(numeric=14, alphanumeric=0, binary=0, min_length=14, max_length=14),
        charset_pattern=CHARSET_PATTERNS[BarcodeFormatEnum.ITF14],
        industry_standards=["GS1", "ITF-14"],
    ),
    BarcodeFormatEnum.MSI: FormatInfo(
        name="MSI Plessey",
        code=BarcodeFormatEnum.MSI,
        description="Numeric barcode used for inventory and shelf labelling",
        capacity=BarcodeCapacity(numeric=15, alphanumeric=0, binary=0, min_length=1, max_length=15),
        charset_pattern=CHARSET_PATTERNS[BarcodeFormatEnum.MSI],
        industry_standards=["MSI Plessey"],
    ),
    BarcodeFormatEnum.PHARMACODE: FormatInfo(
        name="Pharmacode",
        code=BarcodeFormatEnum.PHARMACODE,
        description="Binary bar code for pharmaceutical packaging control, values 3 to 131070",
        capacity=BarcodeCapacity(numeric=6, alphanumeric=0, binary=0, min_length=1, max_length=6),
        charset_pattern=CHARSET_PATTERNS[BarcodeFormatEnum.PHARMACODE],
        industry_standards=["Pharmaceutical Binary Code"],
    ),
    BarcodeFormatEnum.CODABAR: FormatInfo(
        name="Codabar",
        code=BarcodeFormatEnum.CODABAR,
        description="Numeric barcode framed by A-D start/stop characters, used by libraries and blood banks",
        capacity=BarcodeCapacity(numeric=16, alphanumeric=4, binary=0, min_length=1, max_length=16),
        charset_pattern=CHARSET_PATTERNS[BarcodeFormatEnum.CODABAR],
        industry_standards=["NW-7", "USD-4"],
    ),
    BarcodeFormatEnum.CODE93: FormatInfo(
        name="Code 93",
        code=BarcodeFormatEnum.CODE93,
        description="Compact full-ASCII barcode with two mandatory check characters",
        capacity=BarcodeCapacity(numeric=47, alphanumeric=47, binary=47, min_length=1, max_length=80),
        charset_pattern=CHARSET_PATTERNS[BarcodeFormatEnum.CODE93],
        industry_standards=["USS-93"],
    ),
}


def get_capacity(barcode_format: BarcodeFormatEnum) -> BarcodeCapacity:
    return BARCODE_FORMATS[barcode_format].capacity


def get_industry_standards(barcode_format: BarcodeFormatEnum) -> List[str]:
    return list(BARCODE_FORMATS[barcode_format].industry_standards)


def matches_charset(content: str, barcode_format: BarcodeFormatEnum) -> bool:
    """Return True when ``content`` only uses characters the symbology can carry."""
    return _COMPILED_PATTERNS[barcode_format].fullmatch(content) is not None
