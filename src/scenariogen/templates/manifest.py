"""
Manifest write directives.

The generated test writes the scenario's root requirements to a manifest
file before invoking the resolver. This module describes those writes; the
test environment performs them.
"""

from attrs import frozen

from scenariogen.scenarios.model import Scenario


@frozen
class CreateManifest:
    """Create (or truncate) the manifest file in the test's temp directory."""

    filename: str


@frozen
class AppendLine:
    """Append one requirement line to the manifest."""

    text: str


WriteOperation = CreateManifest | AppendLine


@frozen
class ManifestDirective:
    filename: str
    operations: tuple[WriteOperation, ...]

    @property
    def lines(self) -> tuple[str, ...]:
        """Manifest lines in write order."""
        return tuple(
            operation.text
            for operation in self.operations
            if isinstance(operation, AppendLine)
        )

    @property
    def content(self) -> str:
        """Text the manifest holds once every operation has run."""
        return "".join(f"{line}\n" for line in self.lines)


def build_manifest_directive(scenario: Scenario, filename: str) -> ManifestDirective:
    """
    Translate root requirements into manifest write operations.

    Params:
        scenario: Scenario whose `root.requires` seeds the resolution
        filename: Manifest file name inside the test's temp directory

    Returns:
        Directive creating the manifest, then appending each requirement in
        input order; only the create operation when there are none
    """
    operations: list[WriteOperation] = [CreateManifest(filename=filename)]
    operations.extend(AppendLine(text=line) for line in scenario.requirements)
    return ManifestDirective(filename=filename, operations=tuple(operations))
