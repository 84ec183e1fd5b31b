"""
Identifier derivation for scenario names.

Scenario names are free-form strings (usually kebab-case). Generated test
functions need valid, stable Python identifiers derived from them.
"""

import re

from inflection import underscore

# Runs of characters that cannot appear in an identifier
_INVALID_IDENTIFIER_CHARS = re.compile(r"[^0-9A-Za-z_]+")

TEST_FUNCTION_PREFIX = "test_"


def module_name_for(name: str) -> str:
    """
    Convert a scenario name into its module name.

    Params:
        name: Scenario name, e.g. "prerelease-case" or "ExcludedVersions"

    Returns:
        Lowercase identifier fragment ("prerelease_case", "excluded_versions"),
        empty when the name has no identifier characters at all
    """
    return _INVALID_IDENTIFIER_CHARS.sub("_", underscore(name)).strip("_")


def function_name_for(name: str) -> str:
    """Return the generated test function name for a scenario name."""
    return TEST_FUNCTION_PREFIX + module_name_for(name)
