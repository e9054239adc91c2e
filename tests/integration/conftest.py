import asyncio
from collections.abc import Callable, Generator
from datetime import date

import pytest

from rxquant.calculation.models import CalculationInput, CalculationResult
from rxquant.calculation.orchestrator import CalculationOrchestrator, build_orchestrator
from rxquant.config.settings import Settings
from rxquant.directory.example_adapter import ExampleDrugNormalizer, ExamplePackageDirectory

Calculate = Callable[..., CalculationResult]


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return Settings(directory_provider="example")


@pytest.fixture
def example_orchestrator(test_settings: Settings) -> Generator[CalculationOrchestrator, None, None]:
    orchestrator = build_orchestrator(
        test_settings,
        normalizer=ExampleDrugNormalizer(),
        directory=ExamplePackageDirectory(as_of=date(2025, 1, 1)),
    )
    try:
        yield orchestrator
    finally:
        asyncio.run(orchestrator.aclose())


@pytest.fixture
def calculate(example_orchestrator: CalculationOrchestrator) -> Calculate:
    def run(**inputs: object) -> CalculationResult:
        return asyncio.run(example_orchestrator.calculate(CalculationInput(**inputs)))  # type: ignore[arg-type]

    return run
