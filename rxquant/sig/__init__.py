from rxquant.sig.frequency import resolve_frequency
from rxquant.sig.models import ParsedDirective, ParseFailure, ParseOutcome, ParseStrategyName
from rxquant.sig.parser import (
    SIG_EXAMPLES,
    DirectiveParser,
    format_directive,
    parse_directions,
    parsing_confidence,
    validate_parsed_directive,
)
from rxquant.sig.strategies import (
    AbbreviatedStrategy,
    ComplexFallbackStrategy,
    ParseStrategy,
    SimpleStrategy,
    StructuredStrategy,
)

__all__ = [
    "SIG_EXAMPLES",
    "AbbreviatedStrategy",
    "ComplexFallbackStrategy",
    "DirectiveParser",
    "ParseFailure",
    "ParseOutcome",
    "ParseStrategy",
    "ParseStrategyName",
    "ParsedDirective",
    "SimpleStrategy",
    "StructuredStrategy",
    "format_directive",
    "parse_directions",
    "parsing_confidence",
    "resolve_frequency",
    "validate_parsed_directive",
]
