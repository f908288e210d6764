"""Output writers for evaluation summaries.

Writes an EvaluateSummary to JSON, YAML, or CSV (chosen by file
extension) and maintains the "latest results" file under the promptgrid
config directory. Uses atomic writes to prevent partial files.
"""

from __future__ import annotations

import csv
import io
import json
import os
from collections.abc import Sequence
from pathlib import Path

import yaml

from promptgrid.models.result import EvaluateSummary
from promptgrid.models.suite import EvaluateTestSuite

CSV_COLUMNS = [
    "provider",
    "prompt",
    "vars",
    "output",
    "error",
    "success",
    "cached",
    "latency_ms",
    "total_tokens",
]


def get_config_dir() -> Path:
    """Return the promptgrid config directory (PROMPTGRID_CONFIG_DIR or ~/.promptgrid)."""
    override = os.environ.get("PROMPTGRID_CONFIG_DIR")
    if override:
        return Path(override)
    return Path.home() / ".promptgrid"


def _atomic_write(path: Path, content: str) -> None:
    """Write content to a .tmp sibling, then rename over the target."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f"{path.name}.tmp")
    tmp_path.write_text(content, encoding="utf-8")
    os.replace(tmp_path, path)


def _payload(summary: EvaluateSummary, suite: EvaluateTestSuite | None) -> dict:
    data: dict = {"results": summary.model_dump(mode="json")}
    if suite is not None:
        data["config"] = {
            "description": suite.description,
            "prompts": suite.prompts,
            "providers": _describe_providers(suite.providers),
        }
    return data


def _describe_providers(providers: object) -> list[str]:
    items = providers if isinstance(providers, list) else [providers]
    described: list[str] = []
    for item in items:
        if isinstance(item, str):
            described.append(item)
        elif isinstance(item, dict):
            described.append(str(item.get("id", "")))
        elif hasattr(item, "id") and callable(item.id):
            described.append(item.id())
        else:
            described.append(str(getattr(item, "id", item)))
    return described


def _to_csv(summary: EvaluateSummary) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    for r in summary.results:
        writer.writerow(
            {
                "provider": r.provider_id,
                "prompt": r.prompt.display,
                "vars": json.dumps(r.vars, ensure_ascii=False),
                "output": r.output or "",
                "error": r.error or "",
                "success": r.success,
                "cached": r.cached,
                "latency_ms": r.latency_ms,
                "total_tokens": r.token_usage.total,
            }
        )
    return buffer.getvalue()


def write_output(
    output_path: str | Path,
    summary: EvaluateSummary,
    suite: EvaluateTestSuite | None = None,
) -> None:
    """Write a summary to output_path in the format implied by its extension.

    Raises:
        ValueError: For an unsupported extension.
    """
    path = Path(output_path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        content = json.dumps(_payload(summary, suite), indent=2, ensure_ascii=False)
    elif suffix in (".yaml", ".yml"):
        content = yaml.safe_dump(_payload(summary, suite), sort_keys=False, allow_unicode=True)
    elif suffix == ".csv":
        content = _to_csv(summary)
    else:
        raise ValueError(
            f"Unsupported output file format '{suffix or path.name}'. "
            f"Use .json, .yaml, .yml, or .csv."
        )
    _atomic_write(path, content)


def write_multiple_outputs(
    output_paths: Sequence[str | Path],
    summary: EvaluateSummary,
    suite: EvaluateTestSuite | None = None,
) -> None:
    """Write the same summary to each path in turn."""
    for output_path in output_paths:
        write_output(output_path, summary, suite)


def latest_results_path() -> Path:
    return get_config_dir() / "output" / "latest.json"


def write_latest_results(
    summary: EvaluateSummary,
    suite: EvaluateTestSuite | None = None,
) -> Path:
    """Persist a summary as the latest results and return its path."""
    path = latest_results_path()
    content = json.dumps(_payload(summary, suite), indent=2, ensure_ascii=False)
    _atomic_write(path, content)
    return path

