import pytest

from rxquant.matching.ndc import (
    NdcLayout,
    format_in_layout,
    format_ndc,
    is_valid_ndc,
    parse_ndc,
    to_billing_ndc,
)


class TestParseNdc:
    @pytest.mark.parametrize(
        ("value", "layout"),
        [
            ("123456-789-0", NdcLayout.SIX_THREE_ONE),
            ("12345-6789-0", NdcLayout.FIVE_FOUR_ONE),
            ("12345-678-90", NdcLayout.FIVE_THREE_TWO),
            ("1234-5678-90", NdcLayout.FOUR_FOUR_TWO),
        ],
    )
    def test_ten_digit_layouts(self, value: str, layout: NdcLayout) -> None:
        code = parse_ndc(value)
        assert code is not None
        assert code.layout == layout
        assert code.digits == value.replace("-", "")
        assert code.padded == "0" + code.digits

    def test_eleven_digit_hyphenated(self) -> None:
        code = parse_ndc("00143-9835-01")
        assert code is not None
        assert code.padded == "00143983501"
        assert code.ten_digit == "0143983501"

    def test_unhyphenated_has_no_layout(self) -> None:
        code = parse_ndc("0009005430")
        assert code is not None
        assert code.layout is None
        assert code.padded == "00009005430"

    def test_surrounding_whitespace(self) -> None:
        assert parse_ndc("  0009-0054-30 ") is not None

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "abc",
            "123",
            "12-34-567890",
            "1234-5678-9O",
            "0009-0054",
            "0009-0054-30-1",
            "12345678901",
            "12345-6789-01",
            "123456789012",
            None,
        ],
    )
    def test_invalid(self, value: str | None) -> None:
        assert parse_ndc(value) is None
        assert is_valid_ndc(value) is False


class TestFormatNdc:
    def test_keeps_detected_layout(self) -> None:
        assert format_ndc("12345-678-90") == "12345-678-90"

    def test_unhyphenated_renders_eleven_digit_form(self) -> None:
        assert format_ndc("1234567890") == "01234-5678-90"

    def test_invalid(self) -> None:
        assert format_ndc("nope") is None


class TestFormatInLayout:
    @pytest.mark.parametrize(
        ("layout", "expected"),
        [
            (NdcLayout.SIX_THREE_ONE, "000900-543-0"),
            (NdcLayout.FIVE_FOUR_ONE, "00090-0543-0"),
            (NdcLayout.FIVE_THREE_TWO, "00090-054-30"),
            (NdcLayout.FOUR_FOUR_TWO, "0009-0054-30"),
        ],
    )
    def test_bare_digits(self, layout: NdcLayout, expected: str) -> None:
        code = parse_ndc("0009005430")
        assert code is not None
        assert format_in_layout(code, layout) == expected

    def test_eleven_digit_input_drops_pad(self) -> None:
        code = parse_ndc("00009005430")
        assert code is not None
        assert format_in_layout(code, NdcLayout.FOUR_FOUR_TWO) == "0009-0054-30"


class TestToBillingNdc:
    def test_pads_ten_digit_code(self) -> None:
        assert to_billing_ndc("0009-0054-30") == "00009005430"

    def test_eleven_digit_code_unchanged(self) -> None:
        assert to_billing_ndc("00143-9835-01") == "00143983501"

    def test_invalid(self) -> None:
        assert to_billing_ndc("12-34") is None


class TestNdcLayout:
    def test_segments(self) -> None:
        assert NdcLayout.FIVE_THREE_TWO.segments == (5, 3, 2)
        assert NdcLayout.FIVE_THREE_TWO.padded_segments == (6, 3, 2)
