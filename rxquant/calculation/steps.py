import math
from dataclasses import asdict

from rxquant.calculation.exceptions import StageFailure
from rxquant.calculation.models import ErrorType, QuantitySource
from rxquant.calculation.pipeline import CalculationContext, CalculationStep
from rxquant.common.models import CalculationWarning, Severity, WarningType
from rxquant.directory.base import BaseDrugNormalizer, BasePackageDirectory
from rxquant.directory.enrichment import build_normalization_result, direct_ndc_result
from rxquant.directory.exceptions import DirectoryError
from rxquant.directory.models import NormalizationSource
from rxquant.logging.logger import Log
from rxquant.matching.matcher import match_packages
from rxquant.matching.models import MatcherConfig
from rxquant.matching.ndc import is_valid_ndc
from rxquant.quantity.calculator import (
    MAX_DAYS_SUPPLY,
    MIN_DAYS_SUPPLY,
    calculate,
    check_reasonableness,
    is_valid_days_supply,
)
from rxquant.sig.parser import DirectiveParser


class ValidateInputStep(CalculationStep):
    async def run(self, context: CalculationContext) -> CalculationContext:
        inputs = context.inputs
        problems: list[str] = []
        if not _is_filled(inputs.drug_name) and not _is_filled(inputs.ndc):
            problems.append("Either drug name or NDC must be provided")
        if _is_filled(inputs.ndc) and not is_valid_ndc(inputs.ndc):
            problems.append(f"NDC '{inputs.ndc}' is not a valid 10 or 11 digit code")
        if inputs.days_supply is not None and not is_valid_days_supply(inputs.days_supply):
            problems.append(
                f"Days supply must be a whole number between {MIN_DAYS_SUPPLY} "
                f"and {MAX_DAYS_SUPPLY}"
            )
        if inputs.quantity is not None and not _is_positive(inputs.quantity):
            problems.append("Quantity must be a positive number")
        if inputs.quantity is None and not _is_filled(inputs.directions):
            problems.append("Directions are required when no quantity is given")
        if problems:
            raise StageFailure(ErrorType.INVALID_INPUT, "; ".join(problems), asdict(inputs))
        return context


class NormalizeDrugStep(CalculationStep):
    def __init__(self, normalizer: BaseDrugNormalizer) -> None:
        self._normalizer = normalizer

    async def run(self, context: CalculationContext) -> CalculationContext:
        inputs = context.inputs
        if _is_filled(inputs.ndc):
            context.normalization = direct_ndc_result((inputs.ndc or "").strip())
            Log.info(f"Using NDC {inputs.ndc} directly, skipping drug lookup")
            return context

        drug_name = (inputs.drug_name or "").strip()
        try:
            drug = await self._normalizer.resolve(drug_name)
        except DirectoryError as exc:
            raise StageFailure(
                ErrorType.NORMALIZATION_FAILED,
                f"Drug lookup failed: {exc}",
                {"drug_name": drug_name},
            ) from exc
        if drug is None:
            raise StageFailure(
                ErrorType.NORMALIZATION_FAILED,
                f'Drug "{drug_name}" not found. Try a different spelling or enter NDC directly.',
                {"drug_name": drug_name},
            )
        context.normalization = build_normalization_result(drug)
        Log.info(f"Resolved drug '{drug_name}' to RxCUI {drug.rxcui} ({drug.name})")
        return context


class SelectQuantitySourceStep(CalculationStep):
    async def run(self, context: CalculationContext) -> CalculationContext:
        quantity = context.inputs.quantity
        if quantity is None:
            context.quantity_source = QuantitySource.CALCULATED
            return context
        context.quantity_source = QuantitySource.EXPLICIT
        context.target_quantity = quantity
        Log.info(f"Using explicit quantity {quantity}, skipping directions and quantity stages")
        return context


class ParseDirectionsStep(CalculationStep):
    def __init__(self, parser: DirectiveParser | None = None) -> None:
        self._parser = parser or DirectiveParser()

    async def run(self, context: CalculationContext) -> CalculationContext:
        if context.quantity_source == QuantitySource.EXPLICIT:
            return context
        directions = context.inputs.directions or ""
        directive = self._parser.parse(directions)
        context.parsed_directive = directive
        if not directive.parse_success:
            context.warnings.append(CalculationWarning(
                id="sig_parse_error",
                type=WarningType.SIG_PARSE_ERROR,
                severity=Severity.ERROR,
                message="Could not automatically parse directions. Manual entry recommended.",
                data={"directions": directions, "reason": directive.parse_error},
            ))
            raise StageFailure(
                ErrorType.SIG_PARSING_FAILED,
                directive.parse_error or "Unable to parse directions",
                {"directions": directions},
            )
        Log.info(
            f"Parsed directions: dose={directive.dose} unit={directive.unit} "
            f"frequency={directive.frequency} strategy={directive.strategy}"
        )
        return context


class CalculateQuantityStep(CalculationStep):
    async def run(self, context: CalculationContext) -> CalculationContext:
        if context.quantity_source == QuantitySource.EXPLICIT:
            return context
        days_supply = context.inputs.days_supply
        if days_supply is None:
            Log.info("No days supply given, skipping quantity calculation")
            return context
        if context.parsed_directive is None:
            raise ValueError("CalculationContext.parsed_directive must be set before quantity")

        result = calculate(context.parsed_directive, days_supply)
        context.quantity_result = result
        if not result.success or result.quantity is None or result.unit is None:
            raise StageFailure(
                ErrorType.QUANTITY_CALCULATION_FAILED,
                result.error or "Quantity calculation failed",
                {
                    "directions": context.inputs.directions,
                    "days_supply": days_supply,
                    "failure": result.failure,
                },
            )
        context.target_quantity = result.quantity
        context.warnings.extend(check_reasonableness(result.quantity, result.unit, days_supply).issues)
        Log.info(f"Calculated quantity {result.quantity} {result.unit} ({result.breakdown})")
        return context


class FetchPackagesStep(CalculationStep):
    def __init__(self, directory: BasePackageDirectory) -> None:
        self._directory = directory

    async def run(self, context: CalculationContext) -> CalculationContext:
        normalization = context.normalization
        if normalization is None or normalization.identifier is None:
            raise ValueError("CalculationContext.normalization must be set before package lookup")

        try:
            if normalization.source == NormalizationSource.DIRECT_NDC:
                packages = await self._directory.packages_by_ndc(normalization.identifier)
            else:
                packages = await self._directory.packages_by_identifier(normalization.identifier)
        except DirectoryError as exc:
            raise StageFailure(
                ErrorType.PACKAGE_FETCH_FAILED,
                f"NDC lookup failed: {exc}",
                {"source": normalization.source, "identifier": normalization.identifier},
            ) from exc

        context.packages = packages
        if packages.is_empty:
            Log.warning(f"No packages found for {normalization.source} {normalization.identifier}")
            context.warnings.append(CalculationWarning(
                id="no_packages_found",
                type=WarningType.NO_PACKAGES_FOUND,
                severity=Severity.WARNING,
                message="No NDCs found for this drug. Manual NDC entry may be required.",
                data={"identifier": normalization.identifier},
            ))
            return context
        Log.info(
            f"Fetched {len(packages.active)} active and {len(packages.inactive)} "
            f"inactive packages for {normalization.identifier}"
        )
        return context


class MatchPackagesStep(CalculationStep):
    def __init__(self, config: MatcherConfig | None = None) -> None:
        self._config = config or MatcherConfig()

    async def run(self, context: CalculationContext) -> CalculationContext:
        if context.target_quantity is None:
            context.warnings.append(CalculationWarning(
                id="no_quantity",
                type=WarningType.NO_QUANTITY,
                severity=Severity.INFO,
                message="No quantity calculated, NDC matching skipped",
            ))
            return context
        if context.packages is None or context.packages.is_empty:
            return context

        result = match_packages(context.target_quantity, context.packages.all_packages, self._config)
        context.match_result = result
        context.warnings.extend(result.warnings)
        if not result.success:
            Log.warning(f"Package matching failed: {result.error}")
            context.warnings.append(CalculationWarning(
                id="matching_failed",
                type=WarningType.MATCHING_FAILED,
                severity=Severity.WARNING,
                message=result.error or "Package matching failed",
                data={"target_quantity": context.target_quantity},
            ))
            return context
        if result.recommendation is not None:
            Log.info(f"Recommended {result.recommendation.breakdown}")
        return context


def _is_filled(value: str | None) -> bool:
    return value is not None and bool(value.strip())


def _is_positive(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value > 0
    )
