"""
The scenario compilation pipeline.

Raw records are parsed, filtered by the exclusion list, checked for
identifier collisions and rendered into one module. Compilation is pure:
the same records and configuration always produce the same text.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from scenariogen.config import GeneratorConfig
from scenariogen.scenarios.model import Scenario, parse_batch
from scenariogen.templates.emitter import emit_module

logger = logging.getLogger(__name__)


def select_scenarios(
    scenarios: list[Scenario], exclude: Iterable[str]
) -> list[Scenario]:
    """
    Drop excluded scenarios, keeping batch order.

    Exclusions that match no scenario are reported as warnings.
    """
    excluded = set(exclude)
    if not excluded:
        return scenarios

    selected = [scenario for scenario in scenarios if scenario.name not in excluded]
    unknown = excluded - {scenario.name for scenario in scenarios}
    if unknown:
        logger.warning("Excluded scenarios not found in batch: %s", sorted(unknown))
    logger.info("Excluded %d scenarios", len(scenarios) - len(selected))
    return selected


def compile_scenarios(
    records: Iterable[Mapping[str, Any]],
    config: GeneratorConfig | None = None,
    source: str = "<records>",
) -> str:
    """
    Compile raw scenario records into a generated test module.

    Params:
        records: Raw fixture records in batch order
        config: Generator settings, defaults when omitted
        source: Label of the fixture source, written into the banner

    Returns:
        Complete module text

    Raises:
        MalformedScenarioError: For the first malformed record (aborts the batch)
        DuplicateIdentifierError: If two scenarios share a test function name
        EmptyBatchError: If nothing is left to render and scenarios are required
    """
    config = config or GeneratorConfig()
    scenarios = select_scenarios(parse_batch(records), config.exclude)
    return emit_module(scenarios, config, source)


def check_output(path: str | Path, text: str) -> bool:
    """
    Report whether a previously generated file matches freshly compiled text.

    Returns:
        True when the file exists with exactly `text`, False when missing or stale
    """
    path = Path(path)
    if not path.is_file():
        return False
    return path.read_text(encoding="utf-8") == text


def write_output(path: str | Path, text: str) -> None:
    """Write generated text, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.info("Wrote %s", path)
