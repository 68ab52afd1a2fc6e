import pytest

from barcode_engine.encoder import (
    CODE128_PATTERNS,
    CODE39_PATTERNS,
    EAN_G_CODES,
    EAN_L_CODES,
    EAN_R_CODES,
    code93_check_value,
    code93_values,
    encode,
    encode_code128,
    encode_code39,
    encode_code93,
    encode_codabar,
    encode_ean13,
    encode_ean8,
    encode_itf14,
    encode_msi,
    encode_pattern,
    encode_pharmacode,
    encode_upc,
)
from barcode_engine.schemas import BarcodeFormatEnum, BarcodeSettings, EncodingError

# barcode_engine/tests/test_encoder.py


def test_code128_tables_are_well_formed():
    assert len(CODE128_PATTERNS) == 107
    assert all(len(p) == 11 for p in CODE128_PATTERNS[:106])
    assert len(CODE128_PATTERNS[106]) == 13
    assert len(set(CODE128_PATTERNS)) == 107


def test_code128_hello():
    pattern = encode_code128("HELLO")
    # start B, 5 symbols, check symbol, 13-module stop
    assert len(pattern) == 11 * 7 + 13
    assert pattern.startswith(CODE128_PATTERNS[104])
    assert pattern.endswith(CODE128_PATTERNS[106])
    # check symbol value equals the CODE128 checksum (40)
    assert pattern[66:77] == CODE128_PATTERNS[40]


def test_code128_rejects_non_ascii():
    with pytest.raises(EncodingError):
        encode_code128("café")


def test_ean_tables_relationships():
    for digit in range(10):
        complement = "".join("1" if m == "0" else "0" for m in EAN_L_CODES[digit])
        assert EAN_R_CODES[digit] == complement
        assert EAN_G_CODES[digit] == EAN_R_CODES[digit][::-1]


def test_ean13_structure():
    pattern = encode_ean13("4006381333931")
    assert len(pattern) == 95
    assert pattern.startswith("101")
    assert pattern.endswith("101")
    assert pattern[45:50] == "01010"
    # first digit 4 selects L G L L G G for the left half
    assert pattern[3:10] == EAN_L_CODES[0]
    assert pattern[10:17] == EAN_G_CODES[0]


def test_ean8_and_upc_lengths():
    assert len(encode_ean8("96385074")) == 67
    assert len(encode_upc("036000291452")) == 95


@pytest.mark.parametrize("encoder,content", [
    (encode_ean13, "123456789012"),
    (encode_ean8, "1234567A"),
    (encode_upc, "12345"),
    (encode_itf14, "1234567890123"),
])
def test_fixed_length_digit_formats_reject_bad_content(encoder, content):
    with pytest.raises(EncodingError):
        encoder(content)


def test_code39_single_character():
    pattern = encode_code39("A")
    # three 12-module symbols separated by two narrow gaps
    assert len(pattern) == 38
    assert pattern.startswith(CODE39_PATTERNS["*"])
    assert pattern.endswith(CODE39_PATTERNS["*"])


def test_code39_rejects_reserved_and_lowercase():
    with pytest.raises(EncodingError):
        encode_code39("A*B")
    with pytest.raises(EncodingError):
        encode_code39("abc")


def test_itf14_length():
    pattern = encode_itf14("15400141288763")
    assert pattern.startswith("1010")
    assert pattern.endswith("11101")
    assert len(pattern) == 4 + 7 * 18 + 5


def test_msi():
    assert encode_msi("1") == "110" + "100100100110" + "1001"
    with pytest.raises(EncodingError):
        encode_msi("12A")


def test_pharmacode():
    assert encode_pharmacode("3") == "1001"
    assert encode_pharmacode("4") == "100111"
    for value in ("1", "2", "131071"):
        with pytest.raises(EncodingError):
            encode_pharmacode(value)


def test_codabar():
    pattern = encode_codabar("A1B")
    assert len(pattern) == 10 + 9 + 10 + 2
    with pytest.raises(EncodingError):
        encode_codabar("A1E")


def test_code93_check_characters():
    values = code93_values("AB")
    assert values == [10, 11]
    c = code93_check_value(values, 20)
    assert c == 31
    assert code93_check_value(values + [c], 15) == 36


def test_code93_structure_and_full_ascii():
    pattern = encode_code93("AB")
    assert len(pattern) == (1 + 2 + 2 + 1) * 9 + 1
    assert pattern.startswith("101011110")
    assert pattern.endswith("1010111101")
    # lowercase letters use a shift pair
    assert code93_values("a") == [46, 10]


def test_encode_pattern_rejects_empty_content():
    with pytest.raises(EncodingError):
        encode_pattern("", BarcodeFormatEnum.CODE128)


def test_encode_uses_settings_format():
    settings = BarcodeSettings(content="96385074", format=BarcodeFormatEnum.EAN8)
    assert encode(settings) == encode_ean8("96385074")


def test_patterns_are_binary_strings():
    samples = {
        BarcodeFormatEnum.CODE128: "Hello, World!",
        BarcodeFormatEnum.EAN13: "1234567890128",
        BarcodeFormatEnum.EAN8: "12345670",
        BarcodeFormatEnum.UPC: "123456789012",
        BarcodeFormatEnum.CODE39: "CODE-39 $/+%",
        BarcodeFormatEnum.ITF14: "12345678901231",
        BarcodeFormatEnum.MSI: "1234567",
        BarcodeFormatEnum.PHARMACODE: "131070",
        BarcodeFormatEnum.CODABAR: "C12-34$56D",
        BarcodeFormatEnum.CODE93: "Code 93!",
    }
    for barcode_format, content in samples.items():
        pattern = encode_pattern(content, barcode_format)
        assert pattern
        assert set(pattern) <= {"0", "1"}
        assert pattern[0] == "1"
