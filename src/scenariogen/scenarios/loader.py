"""
Loading raw scenario records from fixture files.

Fixture files may be JSON, YAML or TOML. Each file holds one record, a list
of records, or a mapping with a "scenarios" list.
"""

import json
import logging
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from scenariogen.exceptions import ScenarioSourceError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".toml", ".yaml", ".yml")


def _decode(path: Path) -> Any:
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ScenarioSourceError(path, e.strerror or str(e)) from e

    try:
        if suffix == ".json":
            return json.loads(text)
        if suffix == ".toml":
            return tomllib.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ScenarioSourceError(path, f"invalid {suffix[1:]}: {e}") from e


def _records_in(data: Any, path: Path) -> list[dict[str, Any]]:
    if isinstance(data, dict) and "scenarios" in data:
        data = data["scenarios"]
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise ScenarioSourceError(
                    path, f"record {index} is a {type(item).__name__}, not a mapping"
                )
        return data
    if data is None:
        return []
    raise ScenarioSourceError(
        path, f"expected a record or a list of records, got {type(data).__name__}"
    )


def expand_sources(paths: Iterable[str | Path]) -> list[Path]:
    """
    Expand fixture paths into the ordered list of files to read.

    Directories contribute their supported files (non-recursive) in sorted
    order; files keep argument order.

    Raises:
        ScenarioSourceError: If a path does not exist or a file has an
            unsupported extension
    """
    files = []
    for raw_path in paths:
        path = Path(raw_path)
        if path.is_dir():
            files.extend(
                sorted(
                    child
                    for child in path.iterdir()
                    if child.is_file() and child.suffix.lower() in SUPPORTED_SUFFIXES
                )
            )
        elif path.is_file():
            if path.suffix.lower() not in SUPPORTED_SUFFIXES:
                raise ScenarioSourceError(
                    path,
                    f"unsupported extension, expected one of {', '.join(SUPPORTED_SUFFIXES)}",
                )
            files.append(path)
        else:
            raise ScenarioSourceError(path, "no such file or directory")
    return files


def load_scenario_records(paths: Iterable[str | Path]) -> list[dict[str, Any]]:
    """
    Read every raw scenario record from the given fixture paths.

    Params:
        paths: Fixture files or directories, in batch order

    Returns:
        Raw records in batch order (file order, then order within each file)

    Raises:
        ScenarioSourceError: If a file cannot be read or decoded
    """
    records = []
    for path in expand_sources(paths):
        file_records = _records_in(_decode(path), path)
        logger.debug("Loaded %d scenario records from %s", len(file_records), path)
        records.extend(file_records)
    return records
