"""
Rendering scenarios into test functions.

Each scenario becomes one self-contained pytest function: documentation,
environment provisioning, output filters, manifest writes, the resolver
invocation and the assertion plan, in that order.
"""

import logging
from collections.abc import Sequence

from scenariogen.config import GeneratorConfig
from scenariogen.exceptions import DuplicateIdentifierError
from scenariogen.scenarios.model import Scenario
from scenariogen.templates.assertions import (
    Assertion,
    ExitStatusCheck,
    PackagePresenceCheck,
    synthesize_assertions,
)
from scenariogen.templates.code_serializer import (
    elements_to_source,
    python_string,
    python_string_list,
)
from scenariogen.templates.code_structure import (
    BlankLine,
    CodeElement,
    CodeLine,
    CommentLine,
    DocstringBlock,
)
from scenariogen.templates.filters import OutputFilter, build_filters
from scenariogen.templates.invocation import ResolverFlag, resolver_flags
from scenariogen.templates.manifest import (
    AppendLine,
    CreateManifest,
    ManifestDirective,
    build_manifest_directive,
)

logger = logging.getLogger(__name__)


def check_unique_identifiers(scenarios: Sequence[Scenario]) -> None:
    """
    Ensure no two scenarios generate the same test function.

    Raises:
        DuplicateIdentifierError: For the first identifier shared by several
            scenarios, naming all of them in batch order
    """
    owners: dict[str, list[str]] = {}
    for scenario in scenarios:
        owners.setdefault(scenario.function_name, []).append(scenario.name)

    for identifier, names in owners.items():
        if len(names) > 1:
            raise DuplicateIdentifierError(identifier, names)


def documentation_lines(scenario: Scenario) -> list[str]:
    """Docstring lines: description, a blank line, then the fenced tree."""
    lines = list(scenario.description_lines)
    lines.append("")
    lines.append("```")
    lines.append(scenario.name)
    lines.extend(scenario.tree)
    lines.append("```")
    return lines


def _context_elements(scenario: Scenario, config: GeneratorConfig) -> list[CodeElement]:
    environment = scenario.environment
    return [
        CodeLine(
            f"context = {config.context_fixture}("
            f"{python_string(environment.python)}, "
            f"{python_string_list(environment.additional_python)})",
            indent=1,
        )
    ]


def _filter_elements(filters: list[OutputFilter]) -> list[CodeElement]:
    elements: list[CodeElement] = [
        CodeLine("filters = [", indent=1),
        CodeLine("*context.filters(),", indent=2),
    ]
    for output_filter in filters:
        elements.append(
            CodeLine(
                f"({python_string(output_filter.pattern)}, "
                f"{python_string(output_filter.replacement)}),",
                indent=2,
            )
        )
    elements.append(CodeLine("]", indent=1))
    return elements


def _manifest_elements(directive: ManifestDirective) -> list[CodeElement]:
    elements: list[CodeElement] = []
    appends: list[AppendLine] = []

    for operation in directive.operations:
        if isinstance(operation, CreateManifest):
            elements.append(
                CodeLine(
                    f"manifest = context.temp_dir / {python_string(operation.filename)}",
                    indent=1,
                )
            )
            elements.append(CodeLine('manifest.write_text("")', indent=1))
        elif isinstance(operation, AppendLine):
            appends.append(operation)

    if len(appends) > 0:
        elements.append(CodeLine('with manifest.open("a") as f:', indent=1))
        for append in appends:
            line = append.text + "\n"
            elements.append(CodeLine(f"f.write({python_string(line)})", indent=2))
    return elements


def _invocation_elements(
    scenario: Scenario, flags: list[ResolverFlag]
) -> list[CodeElement]:
    elements: list[CodeElement] = [
        CommentLine(line, indent=1) for line in scenario.expected.explanation_lines
    ]
    elements.append(CodeLine("args = command(context, manifest)", indent=1))
    for flag in flags:
        if len(flag.args) == 1:
            elements.append(
                CodeLine(f"args.append({python_string(flag.args[0])})", indent=1)
            )
        else:
            elements.append(
                CodeLine(f"args.extend({python_string_list(flag.args)})", indent=1)
            )
    elements.append(CodeLine("output = run_resolver(context, args, filters)", indent=1))
    return elements


def _assertion_elements(plan: list[Assertion]) -> list[CodeElement]:
    elements: list[CodeElement] = []
    for assertion in plan:
        message = f"output.describe({python_string(assertion.expectation)})"
        if isinstance(assertion, ExitStatusCheck):
            operator = "==" if assertion.success else "!="
            condition = f"output.returncode {operator} 0"
        elif isinstance(assertion, PackagePresenceCheck):
            condition = f"{python_string(assertion.expected_text)} in output.stdout"
        else:
            raise TypeError(f"Unknown assertion type: {type(assertion).__name__}")
        elements.append(CodeLine(f"assert {condition}, {message}", indent=1))
    return elements


def build_scenario_elements(
    scenario: Scenario, config: GeneratorConfig
) -> list[CodeElement]:
    """
    Build the source elements of one scenario's test function.

    Params:
        scenario: Scenario to render
        config: Generator settings (fixture name, manifest name, filters)

    Returns:
        Elements of the complete function definition, in output order
    """
    elements: list[CodeElement] = [
        CodeLine(f"def {scenario.function_name}({config.context_fixture}):"),
        DocstringBlock(lines=documentation_lines(scenario), indent=1),
    ]
    elements.extend(_context_elements(scenario, config))
    elements.extend(
        _filter_elements(build_filters(scenario, config.standard_filters))
    )
    elements.append(BlankLine())
    elements.extend(
        _manifest_elements(build_manifest_directive(scenario, config.manifest_name))
    )
    elements.append(BlankLine())
    elements.extend(
        _invocation_elements(scenario, resolver_flags(scenario.resolver_options))
    )
    elements.append(BlankLine())
    elements.extend(_assertion_elements(synthesize_assertions(scenario)))
    return elements


def render_scenario(scenario: Scenario, config: GeneratorConfig) -> str:
    """
    Render one scenario as the source text of a test function.

    Rendering is a pure function of the scenario and the configuration.

    Returns:
        Function source without a trailing newline
    """
    source = elements_to_source(build_scenario_elements(scenario, config))
    logger.debug("Rendered scenario '%s' as %s", scenario.name, scenario.function_name)
    return source


def render_batch(scenarios: Sequence[Scenario], config: GeneratorConfig) -> list[str]:
    """
    Render every scenario in batch order.

    Raises:
        DuplicateIdentifierError: If two scenarios share a test function name
    """
    check_unique_identifiers(scenarios)
    return [render_scenario(scenario, config) for scenario in scenarios]
