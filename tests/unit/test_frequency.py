import pytest

from rxquant.sig.frequency import resolve_frequency


class TestExactLookup:
    def test_table_phrase(self) -> None:
        match = resolve_frequency("three times daily")
        assert match is not None
        assert match.times_per_day == 3.0

    def test_case_and_spacing_ignored(self) -> None:
        match = resolve_frequency("  Twice   DAILY ")
        assert match is not None
        assert match.times_per_day == 2.0

    def test_empty_text(self) -> None:
        assert resolve_frequency("") is None
        assert resolve_frequency(None) is None


class TestContainment:
    def test_phrase_inside_longer_text(self) -> None:
        match = resolve_frequency("twice daily with food")
        assert match is not None
        assert match.times_per_day == 2.0
        assert match.phrase == "twice daily"

    def test_longest_phrase_wins(self) -> None:
        match = resolve_frequency("once daily in the morning")
        assert match is not None
        assert match.phrase == "once daily"

    def test_whole_words_only(self) -> None:
        # "bid" inside "forbidden" is not a frequency.
        assert resolve_frequency("forbidden") is None

    def test_explicit_frequency_beats_as_needed(self) -> None:
        match = resolve_frequency("every 6 hours as needed for pain")
        assert match is not None
        assert match.times_per_day == 4.0

    def test_as_needed_alone(self) -> None:
        match = resolve_frequency("as needed for pain")
        assert match is not None
        assert match.is_as_needed

    def test_counted_daily_is_not_bare_daily(self) -> None:
        match = resolve_frequency("3 times daily")
        assert match is not None
        assert match.times_per_day == 3.0


class TestNumericPatterns:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("3 times a day", 3.0),
            ("2x per day", 2.0),
            ("5 times daily", 5.0),
            ("every 5 hours", 24 / 5),
            ("q 6 h", 4.0),
            ("q8hrs", 3.0),
            ("2 times a week", 2 / 7),
            ("4 times weekly", 4 / 7),
            ("every 3 days", 1 / 3),
        ],
    )
    def test_rates(self, text: str, expected: float) -> None:
        match = resolve_frequency(text)
        assert match is not None
        assert match.times_per_day == pytest.approx(expected)

    def test_as_needed_falls_back_when_numeric_found(self) -> None:
        match = resolve_frequency("prn, up to 3 times a day")
        assert match is not None
        assert match.times_per_day == 3.0

    def test_zero_count_is_ignored(self) -> None:
        assert resolve_frequency("every 0 hours") is None

    def test_unrecognised_text(self) -> None:
        assert resolve_frequency("with meals") is None
