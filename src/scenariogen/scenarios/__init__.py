"""
Scenario model and fixture loading.

This package turns raw fixture records into validated, immutable Scenario
objects and derives their generated identifiers.
"""

from scenariogen.scenarios.loader import expand_sources, load_scenario_records
from scenariogen.scenarios.model import (
    Environment,
    Expected,
    ExpectedPackage,
    Requirement,
    ResolverOptions,
    RootPackage,
    Scenario,
    parse_batch,
    parse_scenario,
)
from scenariogen.scenarios.naming import function_name_for, module_name_for

__all__ = [
    # Model
    "Scenario",
    "Environment",
    "Requirement",
    "RootPackage",
    "ResolverOptions",
    "Expected",
    "ExpectedPackage",
    "parse_scenario",
    "parse_batch",
    # Naming
    "module_name_for",
    "function_name_for",
    # Loading
    "expand_sources",
    "load_scenario_records",
]
