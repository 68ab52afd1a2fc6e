"""
Bar/space pattern generation for the supported linear symbologies.

Every encoder returns a string of ``'1'`` (bar module) and ``'0'`` (space
module). Tables are stored as element widths, starting with a bar, and
expanded to modules once at import time.
"""

import logging
from typing import Callable, Dict, List

from barcode_engine.checksum import code128_checksum
from barcode_engine.schemas import BarcodeFormatEnum, BarcodeSettings, EncodingError

logger = logging.getLogger(__name__)


def _widths_to_modules(widths: str) -> str:
    """Expand alternating bar/space widths ("2122") into modules ("110100")."""
    return "".join(("1" if i % 2 == 0 else "0") * int(w) for i, w in enumerate(widths))


def _wide_narrow_to_modules(elements: str, wide: int) -> str:
    return _widths_to_modules("".join(str(wide) if e == "w" else "1" for e in elements))


# Code 128: symbol values 0-106, 103-105 are the start codes, 106 the stop.
CODE128_WIDTHS = (
    "212222", "222122", "222221", "121223", "121322", "131222", "122213", "122312", "132212", "221213",
    "221312", "231212", "112232", "122132", "122231", "113222", "123122", "123221", "223211", "221132",
    "221231", "213212", "223112", "312131", "311222", "321122", "321221", "312212", "322112", "322211",
    "212123", "212321", "232121", "111323", "131123", "131321", "112313", "132113", "132311", "211313",
    "231113", "231311", "112133", "112331", "132131", "113123", "113321", "133121", "313121", "211331",
    "231131", "213113", "213311", "213131", "311123", "311321", "331121", "312113", "312311", "332111",
    "314111", "221411", "431111", "111224", "111422", "121124", "121421", "141122", "141221", "112214",
    "112412", "122114", "122411", "142112", "142211", "241211", "221114", "413111", "241112", "134111",
    "111242", "121142", "121241", "114212", "124112", "124211", "411212", "421112", "421211", "212141",
    "214121", "412121", "111143", "111341", "131141", "114113", "114311", "411113", "411311", "113141",
    "114131", "311141", "411131", "211412", "211214", "211232", "2331112",
)
CODE128_PATTERNS = tuple(_widths_to_modules(w) for w in CODE128_WIDTHS)
CODE128_START_B = 104
CODE128_STOP = 106

# EAN/UPC digit codes: L (odd parity), G (even parity), R (right half).
EAN_L_CODES = (
    "0001101", "0011001", "0010011", "0111101", "0100011",
    "0110001", "0101111", "0111011", "0110111", "0001011",
)
EAN_G_CODES = (
    "0100111", "0110011", "0011011", "0100001", "0011101",
    "0111001", "0000101", "0010001", "0001001", "0010111",
)
EAN_R_CODES = (
    "1110010", "1100110", "1101100", "1000010", "1011100",
    "1001110", "1010000", "1000100", "1001000", "1110100",
)
# The first EAN-13 digit is carried by the L/G parity of digits 2-7.
EAN13_PARITY = (
    "LLLLLL", "LLGLGG", "LLGGLG", "LLGGGL", "LGLLGG",
    "LGGLLG", "LGGGLL", "LGLGLG", "LGLGGL", "LGGLGL",
)
EAN_GUARD = "101"
EAN_CENTER = "01010"

# Code 39: five bars and four spaces, three of them wide.
CODE39_ELEMENTS = {
    "0": "nnnwwnwnn", "1": "wnnwnnnnw", "2": "nnwwnnnnw", "3": "wnwwnnnnn",
    "4": "nnnwwnnnw", "5": "wnnwwnnnn", "6": "nnwwwnnnn", "7": "nnnwnnwnw",
    "8": "wnnwnnwnn", "9": "nnwwnnwnn", "A": "wnnnnwnnw", "B": "nnwnnwnnw",
    "C": "wnwnnwnnn", "D": "nnnnwwnnw", "E": "wnnnwwnnn", "F": "nnwnwwnnn",
    "G": "nnnnnwwnw", "H": "wnnnnwwnn", "I": "nnwnnwwnn", "J": "nnnnwwwnn",
    "K": "wnnnnnnww", "L": "nnwnnnnww", "M": "wnwnnnnwn", "N": "nnnnwnnww",
    "O": "wnnnwnnwn", "P": "nnwnwnnwn", "Q": "nnnnnnwww", "R": "wnnnnnwwn",
    "S": "nnwnnnwwn", "T": "nnnnwnwwn", "U": "wwnnnnnnw", "V": "nwwnnnnnw",
    "W": "wwwnnnnnn", "X": "nwnnwnnnw", "Y": "wwnnwnnnn", "Z": "nwwnwnnnn",
    "-": "nwnnnnwnw", ".": "wwnnnnwnn", " ": "nwwnnnwnn", "$": "nwnwnwnnn",
    "/": "nwnwnnnwn", "+": "nwnnnwnwn", "%": "nnnwnwnwn", "*": "nwnnwnwnn",
}
CODE39_PATTERNS = {char: _wide_narrow_to_modules(e, wide=2) for char, e in CODE39_ELEMENTS.items()}

# Interleaved 2 of 5: five elements per digit, two of them wide.
ITF_ELEMENTS = (
    "nnwwn", "wnnnw", "nwnnw", "wwnnn", "nnwnw",
    "wnwnn", "nwwnn", "nnnww", "wnnwn", "nwnwn",
)
ITF_WIDE = 3
ITF_START = "1010"
ITF_STOP = "11101"

MSI_START = "110"
MSI_STOP = "1001"
MSI_BITS = {"0": "100", "1": "110"}

PHARMACODE_MIN = 3
PHARMACODE_MAX = 131070
PHARMACODE_NARROW = "1"
PHARMACODE_WIDE = "111"
PHARMACODE_SPACE = "00"

CODABAR_PATTERNS = {
    "0": "101010011", "1": "101011001", "2": "101001011", "3": "110010101",
    "4": "101101001", "5": "110101001", "6": "100101011", "7": "100101101",
    "8": "100110101", "9": "110100101", "-": "101001101", "$": "101100101",
    ":": "1101011011", "/": "1101101011", ".": "1101101101", "+": "1011011011",
    "A": "1011001001", "B": "1001001011", "C": "1010010011", "D": "1010011001",
}

# Code 93: values 0-42 share the Code 39 alphabet, 43-46 are the ($) (%) (/) (+) shifts.
CODE93_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ-. $/+%"
CODE93_PATTERNS = (
    "100010100", "101001000", "101000100", "101000010", "100101000",
    "100100100", "100100010", "101010000", "100010010", "100001010",
    "110101000", "110100100", "110100010", "110010100", "110010010",
    "110001010", "101101000", "101100100", "101100010", "100110100",
    "100011010", "101011000", "101001100", "101000110", "100101100",
    "100010110", "110110100", "110110010", "110101100", "110100110",
    "110010110", "110011010", "101101100", "101100110", "100110110",
    "100111010", "100101110", "111010100", "111010010", "111001010",
    "101101110", "101110110", "110101110", "100100110", "111011010",
    "111010110", "100110010",
)
CODE93_SHIFT_DOLLAR = 43
CODE93_SHIFT_PERCENT = 44
CODE93_SHIFT_SLASH = 45
CODE93_SHIFT_PLUS = 46
CODE93_START_STOP = "101011110"
CODE93_TERMINATION_BAR = "1"

_CODE93_SLASH_SHIFTED = {
    "!": "A", '"': "B", "#": "C", "&": "F", "'": "G", "(": "H",
    ")": "I", "*": "J", ",": "L", ":": "Z",
}
_CODE93_PERCENT_SHIFTED = {
    ";": "F", "<": "G", "=": "H", ">": "I", "?": "J", "[": "K", "\\": "L",
    "]": "M", "^": "N", "_": "O", "{": "P", "|": "Q", "}": "R", "~": "S",
    "@": "V", "`": "W",
}


def _require_digits(content: str, length: int, label: str) -> str:
    if len(content) != length or not content.isascii() or not content.isdigit():
        raise EncodingError(f"{label} requires exactly {length} digits, got {content!r}")
    return content


def _unmappable(char: str, label: str) -> EncodingError:
    return EncodingError(f"Character {char!r} cannot be encoded in {label}")


def encode_code128(content: str) -> str:
    values = []
    for char in content:
        value = ord(char) - 32
        if not 0 <= value <= 95:
            raise _unmappable(char, "CODE128")
        values.append(value)
    symbols = [CODE128_START_B, *values, code128_checksum(content), CODE128_STOP]
    return "".join(CODE128_PATTERNS[symbol] for symbol in symbols)


def encode_ean13(content: str) -> str:
    digits = _require_digits(content, 13, "EAN13")
    parity = EAN13_PARITY[int(digits[0])]
    left = "".join(
        (EAN_L_CODES if side == "L" else EAN_G_CODES)[int(digit)]
        for side, digit in zip(parity, digits[1:7])
    )
    right = "".join(EAN_R_CODES[int(digit)] for digit in digits[7:])
    return EAN_GUARD + left + EAN_CENTER + right + EAN_GUARD


def _encode_ean_halves(digits: str) -> str:
    half = len(digits) // 2
    left = "".join(EAN_L_CODES[int(digit)] for digit in digits[:half])
    right = "".join(EAN_R_CODES[int(digit)] for digit in digits[half:])
    return EAN_GUARD + left + EAN_CENTER + right + EAN_GUARD


def encode_ean8(content: str) -> str:
    return _encode_ean_halves(_require_digits(content, 8, "EAN8"))


def encode_upc(content: str) -> str:
    return _encode_ean_halves(_require_digits(content, 12, "UPC"))


def encode_code39(content: str) -> str:
    symbols = [CODE39_PATTERNS["*"]]
    for char in content:
        # '*' is reserved for start/stop
        if char == "*" or char not in CODE39_PATTERNS:
            raise _unmappable(char, "CODE39")
        symbols.append(CODE39_PATTERNS[char])
    symbols.append(CODE39_PATTERNS["*"])
    return "0".join(symbols)


def encode_itf14(content: str) -> str:
    digits = _require_digits(content, 14, "ITF14")
    pairs = []
    for i in range(0, len(digits), 2):
        bars = ITF_ELEMENTS[int(digits[i])]
        spaces = ITF_ELEMENTS[int(digits[i + 1])]
        widths = "".join(
            str(ITF_WIDE if b == "w" else 1) + str(ITF_WIDE if s == "w" else 1)
            for b, s in zip(bars, spaces)
        )
        pairs.append(_widths_to_modules(widths))
    return ITF_START + "".join(pairs) + ITF_STOP


def encode_msi(content: str) -> str:
    body = []
    for char in content:
        if char not in "0123456789":
            raise _unmappable(char, "MSI")
        body.extend(MSI_BITS[bit] for bit in format(int(char), "04b"))
    return MSI_START + "".join(body) + MSI_STOP


def encode_pharmacode(content: str) -> str:
    if not content.isascii() or not content.isdigit():
        raise EncodingError(f"Pharmacode requires a decimal value, got {content!r}")
    value = int(content)
    if not PHARMACODE_MIN <= value <= PHARMACODE_MAX:
        raise EncodingError(
            f"Pharmacode value {value} is outside the encodable range {PHARMACODE_MIN}-{PHARMACODE_MAX}"
        )
    bars: List[str] = []
    while value > 0:
        if value % 2 == 0:
            bars.append(PHARMACODE_WIDE)
            value = (value - 2) // 2
        else:
            bars.append(PHARMACODE_NARROW)
            value = (value - 1) // 2
    return PHARMACODE_SPACE.join(reversed(bars))


def encode_codabar(content: str) -> str:
    symbols = []
    for char in content:
        pattern = CODABAR_PATTERNS.get(char)
        if pattern is None:
            raise _unmappable(char, "codabar")
        symbols.append(pattern)
    return "0".join(symbols)


def code93_values(content: str) -> List[int]:
    """Translate content into Code 93 symbol values, using shift pairs for full ASCII."""
    values: List[int] = []
    for char in content:
        if char in CODE93_ALPHABET:
            values.append(CODE93_ALPHABET.index(char))
        elif "a" <= char <= "z":
            values.extend([CODE93_SHIFT_PLUS, CODE93_ALPHABET.index(char.upper())])
        elif char in _CODE93_SLASH_SHIFTED:
            values.extend([CODE93_SHIFT_SLASH, CODE93_ALPHABET.index(_CODE93_SLASH_SHIFTED[char])])
        elif char in _CODE93_PERCENT_SHIFTED:
            values.extend([CODE93_SHIFT_PERCENT, CODE93_ALPHABET.index(_CODE93_PERCENT_SHIFTED[char])])
        else:
            raise _unmappable(char, "CODE93")
    return values


def code93_check_value(values: List[int], max_weight: int) -> int:
    """Modulo-47 check value with weights 1..max_weight cycling from the rightmost symbol."""
    total = sum(value * (i % max_weight + 1) for i, value in enumerate(reversed(values)))
    return total % 47


def encode_code93(content: str) -> str:
    values = code93_values(content)
    values.append(code93_check_value(values, 20))
    values.append(code93_check_value(values, 15))
    body = "".join(CODE93_PATTERNS[value] for value in values)
    return CODE93_START_STOP + body + CODE93_START_STOP + CODE93_TERMINATION_BAR


ENCODERS: Dict[BarcodeFormatEnum, Callable[[str], str]] = {
    BarcodeFormatEnum.CODE128: encode_code128,
    BarcodeFormatEnum.EAN13: encode_ean13,
    BarcodeFormatEnum.EAN8: encode_ean8,
    BarcodeFormatEnum.UPC: encode_upc,
    BarcodeFormatEnum.CODE39: encode_code39,
    BarcodeFormatEnum.ITF14: encode_itf14,
    BarcodeFormatEnum.MSI: encode_msi,
    BarcodeFormatEnum.PHARMACODE: encode_pharmacode,
    BarcodeFormatEnum.CODABAR: encode_codabar,
    BarcodeFormatEnum.CODE93: encode_code93,
}


def encode_pattern(content: str, barcode_format: BarcodeFormatEnum) -> str:
    """
    Produce the bar/space pattern for ``content`` in ``barcode_format``.

    Raises:
        EncodingError: if the content cannot be expressed in the symbology.
    """
    if not content:
        raise EncodingError("Cannot encode empty content")
    pattern = ENCODERS[barcode_format](content)
    logger.debug(f"Encoded {len(content)} characters as {barcode_format.value} ({len(pattern)} modules)")
    return pattern


def encode(settings: BarcodeSettings) -> str:
    return encode_pattern(settings.content, settings.format)
