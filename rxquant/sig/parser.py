"""Directive parser: an ordered chain of strategies over folded text."""

import math
from collections.abc import Sequence
from dataclasses import replace
from typing import Final

from rxquant.logging.logger import Log
from rxquant.sig.models import ParsedDirective, ParseFailure
from rxquant.sig.strategies import DEFAULT_STRATEGIES, ParseStrategy
from rxquant.vocabulary.folding import fold_text
from rxquant.vocabulary.normalizer import normalize_unit
from rxquant.vocabulary.tables import CANONICAL_FREQUENCY_PHRASES, FREQUENCY_PHRASES

SIG_EXAMPLES: Final = (
    "Take 1 tablet twice daily",
    "Take 2 tablets every 6 hours",
    "1 tablet daily",
    "2 capsules three times daily",
    "Take 0.5 ml every 8 hours",
    "1 tab PO BID",
    "2 caps TID",
    "Take 1 tablet every morning",
    "Take 2 tablets twice weekly",
    "Take 1 tablet as needed",
)

_BASE_CONFIDENCE: Final = 0.5
_MAX_CONFIDENCE: Final = 0.9
_KNOWN_FREQUENCIES: Final = frozenset(
    value for value in FREQUENCY_PHRASES.values() if value is not None
)


class DirectiveParser:
    """Tries each strategy in order until one reads the directions."""

    def __init__(self, strategies: Sequence[ParseStrategy] = DEFAULT_STRATEGIES) -> None:
        self._strategies = tuple(strategies)

    def parse(self, text: str | None) -> ParsedDirective:
        """Parse free-text directions.

        Total failure is returned as ``parse_success=False`` with a
        ``parse_error`` listing why each strategy gave up; it is never raised.
        """
        if not isinstance(text, str) or not text.strip():
            return _failed("", "Directions must be a non-empty string")

        original = text.strip()
        folded = fold_text(original)
        failures: list[ParseFailure] = []
        for strategy in self._strategies:
            outcome = strategy.parse(folded)
            if isinstance(outcome, ParsedDirective):
                Log.debug(
                    "Directions parsed",
                    strategy=strategy.name.value,
                    dose=outcome.dose,
                    frequency=outcome.frequency,
                    unit=outcome.unit,
                )
                return replace(outcome, original_text=original)
            failures.append(outcome)

        reasons = "; ".join(f"{f.strategy.value}: {f.reason}" for f in failures)
        Log.debug(f"Directions could not be parsed: {reasons}")
        return _failed(original, f"Unable to parse directions ({reasons})")


_DEFAULT_PARSER: Final = DirectiveParser()


def parse_directions(text: str | None) -> ParsedDirective:
    """Parse directions with the default strategy chain."""
    return _DEFAULT_PARSER.parse(text)


def validate_parsed_directive(directive: ParsedDirective) -> list[str]:
    """Return the invariant violations of a parsed directive (empty when valid)."""
    errors: list[str] = []
    if directive.dose is None or directive.dose <= 0:
        errors.append("Dose must be a positive number")
    if directive.frequency is not None and directive.frequency <= 0:
        errors.append("Frequency must be a positive number or as needed")
    if not directive.unit:
        errors.append("Unit must be a non-empty string")
    return errors


def parsing_confidence(directive: ParsedDirective) -> float:
    """Heuristic confidence in a parse, from 0 (failed) up to 0.9."""
    if not directive.parse_success:
        return 0.0
    confidence = _BASE_CONFIDENCE
    if directive.original_text.strip().lower().startswith("take"):
        confidence += 0.2
    if directive.unit and normalize_unit(directive.unit):
        confidence += 0.1
    if directive.frequency is not None and directive.frequency in _KNOWN_FREQUENCIES:
        confidence += 0.1
    return round(min(confidence, _MAX_CONFIDENCE), 2)


def format_directive(directive: ParsedDirective) -> str:
    """Render a parsed directive as "Take <dose> <unit> <frequency phrase>".

    Parsing the rendered text yields the same dose, unit and frequency.
    """
    if not directive.parse_success or directive.dose is None or not directive.unit:
        raise ValueError("Only successfully parsed directives can be formatted")
    return (
        f"Take {_format_number(directive.dose)} {directive.unit} "
        f"{_frequency_phrase(directive.frequency)}"
    )


def _failed(original: str, reason: str) -> ParsedDirective:
    return ParsedDirective(
        dose=None,
        frequency=None,
        unit=None,
        original_text=original,
        parse_success=False,
        parse_error=reason,
    )


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _frequency_phrase(frequency: float | None) -> str:
    if frequency is None:
        return "as needed"
    canonical = CANONICAL_FREQUENCY_PHRASES.get(frequency)
    if canonical is not None:
        return canonical

    per_week = frequency * 7
    if frequency < 1 and per_week >= 1 and math.isclose(per_week, round(per_week)):
        count = round(per_week)
        if count == 1:
            return "once weekly"
        if count == 2:
            return "twice weekly"
        return f"{count} times weekly"

    hours = 24 / frequency
    if math.isclose(hours, round(hours)) and round(hours) > 0:
        return f"every {round(hours)} hours"

    if float(frequency).is_integer():
        return f"{int(frequency)} times daily"
    return f"every {_format_number(hours)} hours"
