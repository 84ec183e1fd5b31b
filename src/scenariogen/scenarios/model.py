"""
In-memory representation of resolution scenarios.

This module defines the validated, immutable scenario structure consumed by
the filter builder, manifest directive, assertion synthesizer and renderer,
and the functions turning raw fixture records into it.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from scenariogen.exceptions import MalformedScenarioError
from scenariogen.scenarios.naming import function_name_for, module_name_for

logger = logging.getLogger(__name__)


class ScenarioPart(BaseModel):
    """Base for every scenario component: immutable, unknown keys ignored."""

    model_config = ConfigDict(frozen=True)


class Requirement(ScenarioPart):
    """One line of the root manifest, e.g. "a>=1.0"."""

    requirement: str

    @field_validator("requirement")
    @classmethod
    def _single_line(cls, value: str) -> str:
        if "\n" in value or "\r" in value:
            raise ValueError("requirement must fit on one manifest line")
        return value


class RootPackage(ScenarioPart):
    """The synthetic root whose requirements seed the resolution."""

    requires: tuple[Requirement, ...] = ()


class Environment(ScenarioPart):
    """
    Interpreters provisioned for the scenario.

    Params:
        python: Primary interpreter version
        additional_python: Extra interpreter versions, in provisioning order
    """

    python: str
    additional_python: tuple[str, ...] = ()


class ResolverOptions(ScenarioPart):
    """
    Optional resolver flags, each independently present or absent.

    Params:
        prereleases: Allow pre-release versions
        no_build: Package spec that must come from wheels only
        no_binary: Package spec that must come from source only
        python: Target interpreter version constraint
    """

    prereleases: bool = Field(default=False, strict=True)
    no_build: str | None = None
    no_binary: str | None = None
    python: str | None = None


class ExpectedPackage(ScenarioPart):
    name: str
    version: str

    @property
    def pin(self) -> str:
        """The `name==version` text the resolver prints for this package."""
        return f"{self.name}=={self.version}"


class Expected(ScenarioPart):
    """
    The expected resolution outcome.

    `packages` is only meaningful when `satisfiable` is true. It stays None
    when the record omits it, and is discarded unvalidated for unsatisfiable
    scenarios.
    """

    explanation_lines: tuple[str, ...] = ()
    satisfiable: bool = Field(strict=True)
    packages: tuple[ExpectedPackage, ...] | None = None

    @model_validator(mode="before")
    @classmethod
    def _discard_unsatisfiable_packages(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and data.get("satisfiable") is False:
            data = {key: value for key, value in data.items() if key != "packages"}
        return data


class Scenario(ScenarioPart):
    """One declarative dependency-resolution test case."""

    name: str
    description_lines: tuple[str, ...] = ()
    tree: tuple[str, ...] = ()
    environment: Environment
    root_package: RootPackage = Field(default_factory=RootPackage, alias="root")
    resolver_options: ResolverOptions = Field(default_factory=ResolverOptions)
    expected: Expected

    @field_validator("name")
    @classmethod
    def _name_has_identifier(cls, value: str) -> str:
        if not module_name_for(value):
            raise ValueError("name does not contain any identifier characters")
        return value

    @property
    def module_name(self) -> str:
        return module_name_for(self.name)

    @property
    def function_name(self) -> str:
        return function_name_for(self.name)

    @property
    def requirements(self) -> tuple[str, ...]:
        """Root requirement lines in manifest order."""
        return tuple(item.requirement for item in self.root_package.requires)

    @property
    def expected_packages(self) -> tuple[ExpectedPackage, ...]:
        """Packages asserted present; empty for unsatisfiable scenarios."""
        if not self.expected.satisfiable:
            return ()
        return self.expected.packages or ()


def _raw_name(record: Mapping[str, Any]) -> str | None:
    name = record.get("name")
    return name if isinstance(name, str) else None


def _field_path(location: tuple) -> str:
    return ".".join(str(part) for part in location) or "<record>"


def parse_scenario(record: Mapping[str, Any]) -> Scenario:
    """
    Validate and normalize one raw scenario record.

    Duplicate `additional_python` entries are dropped (first occurrence wins)
    with a warning; they would only provision redundant interpreters.

    Params:
        record: Raw fixture mapping (name, environment, root, expected, ...)

    Returns:
        Immutable Scenario

    Raises:
        MalformedScenarioError: If a required field is missing, has the wrong
            type, or the expected outcome is inconsistent
    """
    if not isinstance(record, Mapping):
        raise MalformedScenarioError(
            None, "<record>", f"expected a mapping, got {type(record).__name__}"
        )

    try:
        scenario = Scenario.model_validate(dict(record))
    except ValidationError as e:
        first = e.errors()[0]
        raise MalformedScenarioError(
            _raw_name(record), _field_path(first["loc"]), first["msg"]
        ) from e

    expected = scenario.expected
    if expected.satisfiable:
        if expected.packages is None:
            raise MalformedScenarioError(
                scenario.name,
                "expected.packages",
                "satisfiable scenarios must list the expected packages",
            )
        for index, package in enumerate(expected.packages):
            for attribute in ("name", "version"):
                if not getattr(package, attribute).strip():
                    raise MalformedScenarioError(
                        scenario.name,
                        f"expected.packages.{index}.{attribute}",
                        f"expected package {attribute} must not be empty",
                    )

    additional = scenario.environment.additional_python
    distinct = tuple(dict.fromkeys(additional))
    if len(distinct) != len(additional):
        logger.warning(
            "Scenario '%s' lists duplicate additional interpreters %s; provisioning %s",
            scenario.name,
            list(additional),
            list(distinct),
        )
        environment = scenario.environment.model_copy(
            update={"additional_python": distinct}
        )
        scenario = scenario.model_copy(update={"environment": environment})

    return scenario


def parse_batch(records: Iterable[Mapping[str, Any]]) -> list[Scenario]:
    """
    Parse a batch of raw records, preserving batch order.

    The first malformed record aborts the whole batch.

    Raises:
        MalformedScenarioError: For the first malformed record
    """
    scenarios = [parse_scenario(record) for record in records]
    logger.debug("Parsed %d scenarios", len(scenarios))
    return scenarios
