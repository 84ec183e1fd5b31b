"""
Assertion plans for generated scenario tests.

The plan is gated on satisfiability: satisfiable scenarios check for success
and for every expected `name==version` pin, unsatisfiable ones only check
for failure.
"""

from attrs import frozen

from scenariogen.scenarios.model import Scenario


@frozen
class ExitStatusCheck:
    """Assert the resolver exited successfully (or, with success=False, not)."""

    success: bool

    @property
    def expectation(self) -> str:
        return "resolution to succeed" if self.success else "resolution to fail"


@frozen
class PackagePresenceCheck:
    """Assert the filtered standard output contains `name==version`."""

    name: str
    version: str

    @property
    def expected_text(self) -> str:
        return f"{self.name}=={self.version}"

    @property
    def expectation(self) -> str:
        return f"`{self.expected_text}` in the resolution"


Assertion = ExitStatusCheck | PackagePresenceCheck


def synthesize_assertions(scenario: Scenario) -> list[Assertion]:
    """
    Build the postconditions a generated test checks.

    Params:
        scenario: Scenario whose expected outcome is asserted

    Returns:
        Exit status check first, then one presence check per expected package
        in input order (none for unsatisfiable scenarios)
    """
    if not scenario.expected.satisfiable:
        return [ExitStatusCheck(success=False)]

    plan: list[Assertion] = [ExitStatusCheck(success=True)]
    plan.extend(
        PackagePresenceCheck(name=package.name, version=package.version)
        for package in scenario.expected_packages
    )
    return plan
