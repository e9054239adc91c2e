import pytest

from rxquant.vocabulary.folding import fold_text, parse_dose_token


class TestFoldText:
    def test_lowercases_and_collapses_whitespace(self) -> None:
        assert fold_text("  Take   1 TABLET\tdaily ") == "take 1 tablet daily"

    def test_strips_dotted_abbreviations(self) -> None:
        assert fold_text("1 tab p.o. b.i.d.") == "1 tab po bid"

    def test_keeps_decimal_points(self) -> None:
        assert fold_text("Take 0.5 mL q.d.") == "take 0.5 ml qd"

    def test_transliterates_accents(self) -> None:
        assert fold_text("Tómese 1 cápsula") == "tomese 1 capsula"

    def test_non_breaking_space(self) -> None:
        assert fold_text("Take\u00a01\u00a0tablet") == "take 1 tablet"

    def test_vulgar_fraction(self) -> None:
        assert fold_text("Take ½ tablet daily") == "take 1/2 tablet daily"

    def test_mixed_fraction_becomes_decimal(self) -> None:
        assert fold_text("Take 1 1/2 tablets daily") == "take 1.5 tablets daily"

    def test_empty_text(self) -> None:
        assert fold_text("   ") == ""


class TestParseDoseToken:
    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("2", 2.0),
            ("0.5", 0.5),
            (".5", 0.5),
            ("1/2", 0.5),
            ("3/4", 0.75),
            ("one", 1.0),
            ("Two", 2.0),
            ("half", 0.5),
            ("ten", 10.0),
        ],
    )
    def test_accepted_forms(self, token: str, expected: float) -> None:
        assert parse_dose_token(token) == pytest.approx(expected)

    @pytest.mark.parametrize("token", ["0", "0.0", "-1", "1/0", "tablet", "", "  ", "eleven"])
    def test_rejected_forms(self, token: str) -> None:
        assert parse_dose_token(token) is None
