"""
Scenario compiler exception classes.

This package provides all exception types raised while compiling scenario
batches into test modules.
"""

from scenariogen.exceptions.core import (
    ConfigurationError,
    DuplicateIdentifierError,
    EmptyBatchError,
    ErrorContext,
    MalformedScenarioError,
    ScenarioGenError,
    ScenarioSourceError,
)

__all__ = [
    "ScenarioGenError",
    "ErrorContext",
    "MalformedScenarioError",
    "DuplicateIdentifierError",
    "EmptyBatchError",
    "ScenarioSourceError",
    "ConfigurationError",
]
