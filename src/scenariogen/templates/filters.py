"""
Output filters for generated scenario tests.

Resolver output contains volatile text (timings, colors, and the scenario's
own name prefixed to every synthetic package). Filters normalize it before
any assertion looks at it.
"""

import re
from collections.abc import Iterable

from attrs import frozen

from scenariogen.scenarios.model import Scenario

SCENARIO_PACKAGE_TOKEN = "package-"


@frozen
class OutputFilter:
    """A regex pattern and its replacement, applied with `re.sub`."""

    pattern: str
    replacement: str


def scenario_filter(scenario: Scenario) -> OutputFilter:
    """
    Build the filter rewriting "<name>-" package prefixes to "package-".

    Params:
        scenario: Scenario whose name prefixes its synthetic packages

    Returns:
        Filter matching the literal scenario name followed by a hyphen
    """
    return OutputFilter(
        pattern=re.escape(f"{scenario.name}-"), replacement=SCENARIO_PACKAGE_TOKEN
    )


def build_filters(
    scenario: Scenario, standard_filters: Iterable[tuple[str, str]]
) -> list[OutputFilter]:
    """
    Build the ordered filter list for one scenario.

    The scenario rule comes last so it applies on top of the standard rules.

    Params:
        scenario: Scenario being rendered
        standard_filters: Batch-wide (pattern, replacement) pairs

    Returns:
        Standard filters in their given order followed by the scenario filter
    """
    filters = [
        OutputFilter(pattern=pattern, replacement=replacement)
        for pattern, replacement in standard_filters
    ]
    filters.append(scenario_filter(scenario))
    return filters


def apply_filters(text: str, filters: Iterable[OutputFilter]) -> str:
    """
    Apply filters in order, each one seeing the result of the previous ones.

    This mirrors the helper emitted into generated modules.
    """
    for output_filter in filters:
        text = re.sub(output_filter.pattern, output_filter.replacement, text)
    return text
