from barcode_engine.schemas import BarcodeFormatEnum

CODE128_START_B = 104
CODE128_MODULUS = 103

_EAN_FAMILY = (BarcodeFormatEnum.EAN13, BarcodeFormatEnum.EAN8, BarcodeFormatEnum.UPC)


def calculate_checksum(content: str, barcode_format: BarcodeFormatEnum) -> str:
    """
    Compute the format-specific check value of ``content``.

    Only the EAN family (EAN13, EAN8, UPC) and CODE128 define a checksum here;
    every other symbology returns an empty string. The function is pure and
    never raises.
    """
    if barcode_format in _EAN_FAMILY:
        return str(ean_checksum(content))
    if barcode_format == BarcodeFormatEnum.CODE128:
        return str(code128_checksum(content))
    return ""


def ean_checksum(content: str) -> int:
    """Weighted modulo-10 check digit: weight 1 on even indices, 3 on odd ones, non-digits dropped."""
    digits = [int(ch) for ch in content if ch in "0123456789"]
    total = sum(digit if i % 2 == 0 else digit * 3 for i, digit in enumerate(digits))
    return (10 - total % 10) % 10


def code128_checksum(content: str) -> int:
    """Code set B symbol check value: start value plus position-weighted character values, modulo 103."""
    total = CODE128_START_B
    for position, char in enumerate(content, start=1):
        total += (ord(char) - 32) * position
    return total % CODE128_MODULUS
