from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from rxquant.calculation.models import CalculationInput, QuantitySource
from rxquant.common.models import CalculationWarning
from rxquant.directory.models import NormalizationResult, PackageLookupResult
from rxquant.matching.models import MatchResult
from rxquant.quantity.models import QuantityResult
from rxquant.sig.models import ParsedDirective


@dataclass(slots=True)
class CalculationContext:
    inputs: CalculationInput
    normalization: NormalizationResult | None = None
    quantity_source: QuantitySource = QuantitySource.CALCULATED
    parsed_directive: ParsedDirective | None = None
    quantity_result: QuantityResult | None = None
    target_quantity: int | float | None = None
    packages: PackageLookupResult | None = None
    match_result: MatchResult | None = None
    warnings: list[CalculationWarning] = field(default_factory=list)


class CalculationStep(ABC):
    @abstractmethod
    async def run(self, context: CalculationContext) -> CalculationContext:
        raise NotImplementedError
