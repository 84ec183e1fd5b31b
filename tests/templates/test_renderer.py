"""
Tests for rendering scenarios into test functions.
"""

import ast

import pytest

from scenariogen.config import GeneratorConfig
from scenariogen.exceptions import DuplicateIdentifierError
from scenariogen.templates.renderer import (
    check_unique_identifiers,
    documentation_lines,
    render_batch,
    render_scenario,
)

SIMPLE_SOURCE = "\n".join(
    [
        "def test_simple(context_factory):",
        '    """',
        "    A single requirement with one available version.",
        "",
        "    ```",
        "    simple",
        "    └── root",
        "        └── requires a",
        "    ```",
        '    """',
        '    context = context_factory("3.12", [])',
        "    filters = [",
        "        *context.filters(),",
        '        ("simple\\\\-", "package-"),',
        "    ]",
        "",
        '    manifest = context.temp_dir / "requirements.in"',
        '    manifest.write_text("")',
        '    with manifest.open("a") as f:',
        '        f.write("a\\n")',
        "",
        "    # The only version of a is selected.",
        "    args = command(context, manifest)",
        "    output = run_resolver(context, args, filters)",
        "",
        '    assert output.returncode == 0, output.describe("resolution to succeed")',
        '    assert "a==1.0.0" in output.stdout, output.describe("`a==1.0.0` in the resolution")',
    ]
)


def _function(source):
    tree = ast.parse(source)
    assert len(tree.body) == 1
    return tree.body[0]


class TestRenderScenario:
    """Test the rendered text of single scenarios."""

    def test_simple_scenario(self, make_scenario, plain_config):
        """Test the complete rendering of a simple satisfiable scenario."""
        scenario = make_scenario(
            expected={
                "explanation_lines": ["The only version of a is selected."],
                "satisfiable": True,
                "packages": [{"name": "a", "version": "1.0.0"}],
            }
        )

        assert render_scenario(scenario, plain_config) == SIMPLE_SOURCE

    def test_renders_valid_function(self, make_scenario):
        """Test the rendered unit parses as one function named after the scenario."""
        function = _function(render_scenario(make_scenario("prerelease-case"), GeneratorConfig()))

        assert isinstance(function, ast.FunctionDef)
        assert function.name == "test_prerelease_case"
        assert [arg.arg for arg in function.args.args] == ["context_factory"]

    def test_deterministic(self, make_scenario):
        """Test rendering twice yields identical text."""
        config = GeneratorConfig()
        assert render_scenario(make_scenario(), config) == render_scenario(
            make_scenario(), config
        )

    def test_no_optional_flags(self, make_scenario):
        """Test a scenario without options adds no resolver flags."""
        source = render_scenario(make_scenario(resolver_options={}), GeneratorConfig())

        for flag in ("--prerelease", "--only-binary", "--no-binary", "--python-version"):
            assert flag not in source

    def test_all_flags_in_order(self, make_scenario, plain_config):
        """Test all four options render in the fixed order."""
        scenario = make_scenario(
            resolver_options={
                "python": "3.8",
                "no_binary": "b",
                "no_build": "a",
                "prereleases": True,
            }
        )

        lines = render_scenario(scenario, plain_config).split("\n")
        start = lines.index("    args = command(context, manifest)")

        assert lines[start + 1 : start + 6] == [
            '    args.append("--prerelease=allow")',
            '    args.extend(["--only-binary", "a"])',
            '    args.extend(["--no-binary", "b"])',
            '    args.append("--python-version=3.8")',
            "    output = run_resolver(context, args, filters)",
        ]

    def test_prerelease_scenario(self, make_scenario):
        """Test prereleases allow flag and pre-release pin assertion."""
        scenario = make_scenario(
            "prerelease-case",
            root={"requires": [{"requirement": "b"}]},
            resolver_options={"prereleases": True},
            expected={"satisfiable": True, "packages": [{"name": "b", "version": "2.0.0b1"}]},
        )

        source = render_scenario(scenario, GeneratorConfig())

        assert 'args.append("--prerelease=allow")' in source
        assert 'assert "b==2.0.0b1" in output.stdout' in source

    def test_unsatisfiable_asserts_failure_only(self, make_scenario):
        """Test unsatisfiable scenarios emit no presence assertions."""
        scenario = make_scenario(
            "conflict",
            expected={"satisfiable": False, "packages": [{"name": "a", "version": "1.0.0"}]},
        )

        source = render_scenario(scenario, GeneratorConfig())
        asserts = [line.strip() for line in source.split("\n") if line.strip().startswith("assert")]

        assert asserts == [
            'assert output.returncode != 0, output.describe("resolution to fail")'
        ]

    def test_trivial_resolution_asserts_success_only(self, make_scenario):
        """Test an empty package list yields a single success assertion."""
        scenario = make_scenario(expected={"satisfiable": True, "packages": []})

        source = render_scenario(scenario, GeneratorConfig())

        assert source.count("assert ") == 1
        assert "output.returncode == 0" in source

    def test_requirement_and_package_order(self, make_scenario, plain_config):
        """Test manifest lines and assertions keep input order."""
        scenario = make_scenario(
            root={"requires": [{"requirement": "c"}, {"requirement": "a"}, {"requirement": "b"}]},
            expected={
                "satisfiable": True,
                "packages": [
                    {"name": "c", "version": "3"},
                    {"name": "a", "version": "1"},
                    {"name": "b", "version": "2"},
                ],
            },
        )

        source = render_scenario(scenario, plain_config)

        writes = [line.strip() for line in source.split("\n") if "f.write(" in line]
        assert writes == ['f.write("c\\n")', 'f.write("a\\n")', 'f.write("b\\n")']
        pins = [source.index(f'"{pin}" in output.stdout') for pin in ("c==3", "a==1", "b==2")]
        assert pins == sorted(pins)

    def test_empty_manifest(self, make_scenario, plain_config):
        """Test an empty root writes the manifest without appending."""
        source = render_scenario(make_scenario(root={"requires": []}), plain_config)

        assert 'manifest.write_text("")' in source
        assert "manifest.open" not in source

    def test_additional_interpreters(self, make_scenario, plain_config):
        """Test extra interpreters are passed to the context fixture in order."""
        scenario = make_scenario(
            environment={"python": "3.8", "additional_python": ["3.11", "3.9"]}
        )

        source = render_scenario(scenario, plain_config)

        assert 'context = context_factory("3.8", ["3.11", "3.9"])' in source

    def test_standard_filters_precede_scenario_filter(self, make_scenario):
        """Test the scenario filter is the last entry of the filter list."""
        config = GeneratorConfig(standard_filters=[("x", "y")])
        lines = render_scenario(make_scenario("foo"), config).split("\n")
        start = lines.index("    filters = [")

        assert lines[start + 1 : start + 5] == [
            "        *context.filters(),",
            '        ("x", "y"),',
            '        ("foo\\\\-", "package-"),',
            "    ]",
        ]

    def test_docstring_documents_scenario(self, make_scenario):
        """Test the docstring holds the description and the fenced tree."""
        scenario = make_scenario(
            description_lines=["First line.", 'Has """ quotes.'],
            tree=["└── root"],
        )

        function = _function(render_scenario(scenario, GeneratorConfig()))
        docstring = ast.get_docstring(function)

        assert docstring == 'First line.\nHas """ quotes.\n\n```\nsimple\n└── root\n```'

    def test_explanation_lines_are_comments(self, make_scenario, plain_config):
        """Test explanations precede the invocation as comments."""
        scenario = make_scenario(
            expected={
                "explanation_lines": ["First reason.", "Second reason."],
                "satisfiable": True,
                "packages": [],
            }
        )

        lines = render_scenario(scenario, plain_config).split("\n")
        start = lines.index("    args = command(context, manifest)")

        assert lines[start - 2 : start] == ["    # First reason.", "    # Second reason."]

    def test_custom_fixture_and_manifest(self, make_scenario):
        """Test the fixture and manifest names come from configuration."""
        config = GeneratorConfig(context_fixture="uv_context", manifest_name="reqs.txt")

        source = render_scenario(make_scenario(), config)

        assert source.startswith("def test_simple(uv_context):")
        assert 'context = uv_context("3.12", [])' in source
        assert 'manifest = context.temp_dir / "reqs.txt"' in source


class TestDocumentationLines:
    """Test docstring line assembly."""

    def test_layout(self, make_scenario):
        """Test description, blank line, then the fenced name and tree."""
        scenario = make_scenario(description_lines=["Desc."], tree=["a", "b"])

        assert documentation_lines(scenario) == ["Desc.", "", "```", "simple", "a", "b", "```"]


class TestIdentifierUniqueness:
    """Test identifier collisions across a batch."""

    def test_unique_batch(self, make_scenario):
        """Test distinct identifiers pass."""
        check_unique_identifiers([make_scenario("a"), make_scenario("b")])

    def test_duplicate_identifier(self, make_scenario):
        """Test two names sanitizing to test_1 abort the batch, naming both."""
        with pytest.raises(DuplicateIdentifierError) as exc_info:
            render_batch(
                [make_scenario("1"), make_scenario("ok"), make_scenario("1.")],
                GeneratorConfig(),
            )

        assert exc_info.value.identifier == "test_1"
        assert exc_info.value.scenario_names == ["1", "1."]
        assert "'1'" in str(exc_info.value) and "'1.'" in str(exc_info.value)

    def test_render_batch_order(self, make_scenario):
        """Test rendered units follow batch order."""
        units = render_batch(
            [make_scenario("zeta"), make_scenario("alpha")], GeneratorConfig()
        )

        assert units[0].startswith("def test_zeta(")
        assert units[1].startswith("def test_alpha(")
