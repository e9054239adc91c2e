import json
from pathlib import Path
from typing import Any

from rxquant.directory.exceptions import DirectoryError, DirectoryValidationError

_DEFAULT_FIXTURE_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str, path: Path | None = None) -> dict[str, Any]:
    """Load a bundled directory fixture.

    Args:
        name: File name inside the bundled fixtures directory.
        path: Explicit file path; overrides ``name`` when given.

    Returns:
        The decoded JSON object.

    Raises:
        DirectoryError: if the file cannot be read.
        DirectoryValidationError: if the file is not a JSON object.
    """
    if path is None:
        path = _DEFAULT_FIXTURE_DIR / name
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DirectoryError(f"Failed to load fixture {path.name}: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DirectoryValidationError(f"Invalid JSON in fixture {path.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise DirectoryValidationError(f"Fixture {path.name} must be a JSON object")
    return data
