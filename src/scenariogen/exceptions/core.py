"""
Exception classes for scenario compilation.

This module defines specific exception types for the error conditions that
can occur while loading, validating and rendering resolution scenarios.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class ErrorContext:
    """
    Location of a defect inside the scenario batch.

    Params:
        scenario_name: Name of the offending scenario, if known
        field: Dotted path of the offending field (e.g., "expected.packages")
    """

    scenario_name: str | None = None
    field: str | None = None

    def format_location(self) -> str:
        """
        Format the location as indented lines for an error message.

        Returns:
            Location lines joined by newlines, empty when nothing is known
        """
        lines = []
        if self.scenario_name is not None:
            lines.append(f"  in scenario '{self.scenario_name}'")
        if self.field:
            lines.append(f"  at field '{self.field}'")
        return "\n".join(lines)


class ScenarioGenError(Exception):
    """Base exception for all scenario compilation errors."""

    pass


class MalformedScenarioError(ScenarioGenError):
    """Raised when a scenario record is missing a field or is inconsistent."""

    def __init__(self, scenario_name: str | None, field: str, reason: str):
        """
        Initialize the exception.

        Params:
            scenario_name: Name of the scenario, None when the name itself is missing
            field: Dotted path of the offending field
            reason: Why the field is invalid
        """
        self.scenario_name = scenario_name
        self.field = field
        self.reason = reason
        self.context = ErrorContext(scenario_name=scenario_name, field=field)
        label = scenario_name if scenario_name is not None else "<unnamed>"
        super().__init__(
            f"Malformed scenario '{label}': {reason}\n{self.context.format_location()}"
        )


class DuplicateIdentifierError(ScenarioGenError):
    """Raised when several scenarios sanitize to the same test function name."""

    def __init__(self, identifier: str, scenario_names: list[str]):
        """
        Initialize the exception.

        Params:
            identifier: The generated identifier that collides
            scenario_names: Every scenario name that maps to the identifier, in batch order
        """
        self.identifier = identifier
        self.scenario_names = list(scenario_names)
        names = ", ".join(f"'{name}'" for name in self.scenario_names)
        super().__init__(f"Scenarios {names} all generate the test function '{identifier}'")


class EmptyBatchError(ScenarioGenError):
    """Raised when no scenarios are supplied and at least one is required."""

    def __init__(self, source: str):
        self.source = source
        super().__init__(f"No scenarios found in {source}")


class ScenarioSourceError(ScenarioGenError):
    """Raised when a fixture file cannot be read or decoded."""

    def __init__(self, path: str | Path, reason: str):
        """
        Initialize the exception.

        Params:
            path: The fixture file or directory
            reason: Why it could not be loaded
        """
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot load scenarios from '{self.path}': {reason}")


class ConfigurationError(ScenarioGenError):
    """Raised when the generator configuration is invalid."""

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        self.reason = reason
        super().__init__(f"Invalid configuration for '{setting}': {reason}")
