"""Independent parsing strategies for folded directions text.

Each strategy reads one shape of directions and returns either a
``ParsedDirective`` or a ``ParseFailure`` explaining why the shape did not
fit. Strategies expect text that has already been through ``fold_text``.
"""

import re
from abc import ABC, abstractmethod
from typing import ClassVar

from rxquant.sig.frequency import resolve_frequency
from rxquant.sig.models import ParsedDirective, ParseFailure, ParseOutcome, ParseStrategyName
from rxquant.vocabulary.folding import parse_dose_token
from rxquant.vocabulary.models import FrequencyMatch
from rxquant.vocabulary.normalizer import normalize_unit
from rxquant.vocabulary.tables import SKIPPABLE_ROUTE_TOKENS


class ParseStrategy(ABC):
    """Contract for a single directions shape."""

    name: ClassVar[ParseStrategyName]

    @abstractmethod
    def parse(self, text: str) -> ParseOutcome:
        """Parse folded directions text.

        Returns:
            ParsedDirective on success, ParseFailure otherwise. Never raises
            for unreadable text.
        """

    def _fail(self, reason: str) -> ParseFailure:
        return ParseFailure(strategy=self.name, reason=reason)

    def _build(
        self,
        text: str,
        dose: float,
        unit: str,
        frequency: FrequencyMatch,
    ) -> ParsedDirective:
        return ParsedDirective(
            dose=dose,
            frequency=frequency.times_per_day,
            unit=unit,
            original_text=text,
            parse_success=True,
            strategy=self.name,
        )


def _canonical_unit(token: str) -> str:
    return normalize_unit(token) or token


class _LeadingDoseStrategy(ParseStrategy):
    """Shared reader for "<dose> <unit> <frequency phrase>" shapes."""

    _pattern: ClassVar[re.Pattern[str]]
    _shape: ClassVar[str]

    def parse(self, text: str) -> ParseOutcome:
        match = self._pattern.match(text)
        if match is None:
            return self._fail(f"Text does not match '{self._shape}'")
        dose_token, unit_token, frequency_text = match.groups()
        dose = parse_dose_token(dose_token)
        if dose is None:
            return self._fail(f"'{dose_token}' is not a positive dose")
        frequency = resolve_frequency(frequency_text)
        if frequency is None:
            return self._fail(f"Unable to resolve frequency from '{frequency_text}'")
        return self._build(text, dose, _canonical_unit(unit_token), frequency)


class StructuredStrategy(_LeadingDoseStrategy):
    """Reads "take <dose> <unit> <frequency phrase>"."""

    name = ParseStrategyName.STRUCTURED
    _pattern = re.compile(r"^take\s+(\S+)\s+(\S+)\s+(.+)$")
    _shape = "take <dose> <unit> <frequency>"


class AbbreviatedStrategy(ParseStrategy):
    """Reads token-style directions such as "1 tab po bid".

    The first numeric token is the dose. Route tokens (po, oral, im, iv)
    around the unit are skipped; every token after the unit is the
    frequency phrase.
    """

    name = ParseStrategyName.ABBREVIATED
    _MIN_TOKENS: ClassVar[int] = 3

    def parse(self, text: str) -> ParseOutcome:
        tokens = text.split()
        if len(tokens) < self._MIN_TOKENS:
            return self._fail("Too few tokens for abbreviated directions")

        dose_index, dose = self._find_dose(tokens)
        if dose is None:
            return self._fail("No numeric dose token found")

        unit_index = self._skip_routes(tokens, dose_index + 1)
        if unit_index >= len(tokens):
            return self._fail("No unit token after the dose")

        frequency_start = self._skip_routes(tokens, unit_index + 1)
        frequency_text = " ".join(tokens[frequency_start:])
        frequency = resolve_frequency(frequency_text)
        if frequency is None:
            return self._fail(f"Unable to resolve frequency from '{frequency_text}'")
        return self._build(text, dose, _canonical_unit(tokens[unit_index]), frequency)

    @staticmethod
    def _find_dose(tokens: list[str]) -> tuple[int, float | None]:
        for index, token in enumerate(tokens):
            dose = parse_dose_token(token)
            if dose is not None:
                return index, dose
        return -1, None

    @staticmethod
    def _skip_routes(tokens: list[str], start: int) -> int:
        index = start
        while index < len(tokens) and tokens[index] in SKIPPABLE_ROUTE_TOKENS:
            index += 1
        return index


class SimpleStrategy(_LeadingDoseStrategy):
    """Reads "<dose> <unit> <frequency phrase>" without a leading verb."""

    name = ParseStrategyName.SIMPLE
    _pattern = re.compile(r"^(\S+)\s+(\S+)\s+(.+)$")
    _shape = "<dose> <unit> <frequency>"


class ComplexFallbackStrategy(ParseStrategy):
    """Best-effort reader for directions no other strategy understands.

    The first number in the text is the dose, the unit is inferred from
    keywords anywhere in the text, and the frequency is resolved from the
    whole text.
    """

    name = ParseStrategyName.COMPLEX_FALLBACK

    _NUMBER_RE: ClassVar[re.Pattern[str]] = re.compile(r"\d+(?:\.\d+)?(?:/\d+)?")
    _UNIT_KEYWORDS: ClassVar[tuple[tuple[re.Pattern[str], str], ...]] = (
        (re.compile(r"(?<![a-z])tab"), "tablet"),
        (re.compile(r"(?<![a-z])cap"), "capsule"),
        (re.compile(r"(?<![a-z])(?:ml|milliliters?)\b"), "ml"),
        (re.compile(r"(?<![a-z])(?:mg|milligrams?)\b"), "mg"),
    )

    def parse(self, text: str) -> ParseOutcome:
        number = self._NUMBER_RE.search(text)
        if number is None:
            return self._fail("No number found in directions")
        dose = parse_dose_token(number.group(0))
        if dose is None:
            return self._fail(f"'{number.group(0)}' is not a positive dose")

        unit = self._infer_unit(text)
        frequency = resolve_frequency(text)
        if unit is None or frequency is None:
            missing = [
                label
                for label, value in (("unit", unit), ("frequency", frequency))
                if value is None
            ]
            return self._fail(f"Incomplete directions: missing {' and '.join(missing)}")
        return self._build(text, dose, unit, frequency)

    def _infer_unit(self, text: str) -> str | None:
        for pattern, unit in self._UNIT_KEYWORDS:
            if pattern.search(text):
                return unit
        return None


DEFAULT_STRATEGIES: tuple[ParseStrategy, ...] = (
    StructuredStrategy(),
    AbbreviatedStrategy(),
    SimpleStrategy(),
    ComplexFallbackStrategy(),
)
