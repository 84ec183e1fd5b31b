"""
Tests for manifest write directives.
"""

from scenariogen.templates.manifest import (
    AppendLine,
    CreateManifest,
    build_manifest_directive,
)


class TestBuildManifestDirective:
    """Test translating root requirements into write operations."""

    def test_create_then_append_in_order(self, make_scenario):
        """Test the manifest is created, then each requirement appended in order."""
        scenario = make_scenario(
            root={"requires": [{"requirement": "b>1"}, {"requirement": "a"}]}
        )

        directive = build_manifest_directive(scenario, "requirements.in")

        assert directive.operations == (
            CreateManifest("requirements.in"),
            AppendLine("b>1"),
            AppendLine("a"),
        )
        assert directive.lines == ("b>1", "a")
        assert directive.content == "b>1\na\n"

    def test_empty_requirements(self, make_scenario):
        """Test an empty root still creates an empty manifest."""
        directive = build_manifest_directive(
            make_scenario(root={"requires": []}), "requirements.in"
        )

        assert directive.operations == (CreateManifest("requirements.in"),)
        assert directive.content == ""

    def test_custom_filename(self, make_scenario):
        """Test the manifest name comes from the caller."""
        directive = build_manifest_directive(make_scenario(), "pyproject-deps.txt")
        assert directive.filename == "pyproject-deps.txt"
