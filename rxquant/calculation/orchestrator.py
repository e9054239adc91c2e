from collections.abc import Sequence

from rxquant.calculation.exceptions import StageFailure
from rxquant.calculation.models import CalculationInput, CalculationResult, ErrorType
from rxquant.calculation.pipeline import CalculationContext, CalculationStep
from rxquant.calculation.result_builder import build_error_result, build_result
from rxquant.calculation.steps import (
    CalculateQuantityStep,
    FetchPackagesStep,
    MatchPackagesStep,
    NormalizeDrugStep,
    ParseDirectionsStep,
    SelectQuantitySourceStep,
    ValidateInputStep,
)
from rxquant.config.settings import Settings
from rxquant.directory.base import BaseDrugNormalizer, BasePackageDirectory
from rxquant.directory.factory import DirectoryFactory
from rxquant.logging.logger import Log
from rxquant.matching.models import MatcherConfig


class CalculationOrchestrator:
    """Runs the calculation pipeline for one request at a time.

    Pipeline: validate -> normalize -> quantity source -> parse -> quantity
    -> package lookup -> match. Steps run strictly in order; a
    ``StageFailure`` aborts with an Error result and any other exception is
    reported as ``UnexpectedError``. The orchestrator keeps no per-request
    state, so one instance may serve concurrent calculations.
    """

    def __init__(
        self,
        steps: Sequence[CalculationStep],
        normalizer: BaseDrugNormalizer | None = None,
        directory: BasePackageDirectory | None = None,
    ) -> None:
        self._steps = tuple(steps)
        self._normalizer = normalizer
        self._directory = directory

    async def calculate(self, inputs: CalculationInput) -> CalculationResult:
        """Run every step and assemble the result; never raises."""
        Log.info(
            f"Starting calculation for drug={inputs.drug_name!r} ndc={inputs.ndc!r} "
            f"days_supply={inputs.days_supply}"
        )
        context = CalculationContext(inputs=inputs)
        step_name = ""
        try:
            for step in self._steps:
                step_name = type(step).__name__
                context = await step.run(context)
        except StageFailure as failure:
            Log.error(f"Calculation aborted in {step_name} ({failure.error_type}): {failure.message}")
            return build_error_result(context, failure)
        except Exception as exc:
            Log.error(f"Unexpected failure in {step_name}: {exc}")
            return build_error_result(
                context,
                StageFailure(
                    ErrorType.UNEXPECTED_ERROR,
                    f"Calculation failed: {exc}",
                    {"step": step_name, "exception": type(exc).__name__},
                ),
            )

        result = build_result(context)
        Log.info(f"Calculation {result.id} finished with status {result.status}")
        return result

    async def aclose(self) -> None:
        """Release the directory adapters' connections."""
        if self._normalizer is not None:
            await self._normalizer.aclose()
        if self._directory is not None:
            await self._directory.aclose()


def build_orchestrator(
    settings: Settings,
    normalizer: BaseDrugNormalizer | None = None,
    directory: BasePackageDirectory | None = None,
) -> CalculationOrchestrator:
    """Build a CalculationOrchestrator with the configured directory adapters."""
    if normalizer is None or directory is None:
        default_normalizer, default_directory = DirectoryFactory.create(settings)
        normalizer = normalizer or default_normalizer
        directory = directory or default_directory
    config = MatcherConfig(
        max_alternatives=settings.max_alternatives,
        allow_multiple_packages=settings.allow_multiple_packages,
        relax_tolerance_when_unmatched=settings.relax_tolerance_when_unmatched,
    )
    steps: list[CalculationStep] = [
        ValidateInputStep(),
        NormalizeDrugStep(normalizer),
        SelectQuantitySourceStep(),
        ParseDirectionsStep(),
        CalculateQuantityStep(),
        FetchPackagesStep(directory),
        MatchPackagesStep(config),
    ]
    return CalculationOrchestrator(steps, normalizer=normalizer, directory=directory)
