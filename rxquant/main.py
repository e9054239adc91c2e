import argparse
import asyncio
import json
from collections.abc import Sequence

from rxquant.calculation.models import CalculationInput, CalculationResult, CalculationStatus
from rxquant.calculation.orchestrator import build_orchestrator
from rxquant.calculation.result_builder import result_payload
from rxquant.config.settings import Settings
from rxquant.logging.logger import Log


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Calculate a dispense quantity and recommend NDC packages"
    )
    parser.add_argument("--drug", help="Drug name to resolve, e.g. 'lisinopril 10 mg'")
    parser.add_argument("--ndc", help="NDC to use directly instead of a drug name")
    parser.add_argument("--sig", help="Prescription directions, e.g. 'Take 1 tablet twice daily'")
    parser.add_argument("--days-supply", type=int, help="Days the prescription must cover")
    parser.add_argument("--quantity", type=float, help="Explicit quantity; skips direction parsing")
    return parser


async def run(inputs: CalculationInput, settings: Settings) -> CalculationResult:
    orchestrator = build_orchestrator(settings)
    try:
        return await orchestrator.calculate(inputs)
    finally:
        await orchestrator.aclose()


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: parse arguments -> run one calculation -> print JSON."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    inputs = CalculationInput(
        drug_name=args.drug,
        ndc=args.ndc,
        directions=args.sig,
        days_supply=args.days_supply,
        quantity=args.quantity,
    )
    result = asyncio.run(run(inputs, settings))
    print(json.dumps(result_payload(result), indent=2, ensure_ascii=False))
    return 1 if result.status == CalculationStatus.ERROR else 0


if __name__ == "__main__":
    raise SystemExit(main())
