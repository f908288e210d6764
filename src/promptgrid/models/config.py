"""Suite config file discovery and loading.

Reads promptgrid.yaml (or .yml/.json) into a validated
EvaluateTestSuite, with relative test paths anchored to the config
file's directory.
"""

from __future__ import annotations

from pathlib import Path

from promptgrid.models.suite import EvaluateTestSuite

DEFAULT_CONFIG_NAMES = ("promptgrid.yaml", "promptgrid.yml", "promptgrid.json")


def find_config_file(start: Path | None = None) -> Path | None:
    """Look for a default suite config file in start (default: cwd).

    Args:
        start: Directory to search. Defaults to cwd.

    Returns:
        Path to the first matching config file, or None.
    """
    directory = (start or Path.cwd()).resolve()
    for name in DEFAULT_CONFIG_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_suite_config(config_path: Path) -> EvaluateTestSuite:
    """Load and validate a suite config file (YAML or JSON).

    Args:
        config_path: Path to the suite config file.

    Returns:
        Validated EvaluateTestSuite.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is empty or not a mapping.
        pydantic.ValidationError: If fields fail validation.
    """
    import yaml

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if raw is None:
        raise ValueError(f"Config file '{config_path}' is empty.")
    if not isinstance(raw, dict):
        raise ValueError(
            f"Config file '{config_path}' must contain a mapping, "
            f"got {type(raw).__name__}."
        )

    base_dir = config_path.parent
    tests = raw.get("tests")
    if isinstance(tests, str):
        raw["tests"] = _anchor(tests, base_dir)
    elif isinstance(tests, list):
        raw["tests"] = [
            _anchor(t, base_dir) if isinstance(t, str) else t for t in tests
        ]
    return EvaluateTestSuite.model_validate(raw)


def _anchor(path: str, base_dir: Path) -> str:
    """Resolve a relative test file path against the config directory."""
    if Path(path).is_absolute():
        return path
    return str(base_dir / path)
