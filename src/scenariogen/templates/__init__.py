"""
Test module rendering components.

This package turns parsed scenarios into source text: output filters,
manifest directives, assertion plans and resolver flags are derived from
each scenario, rendered into a test function, and emitted as one module.
"""

from scenariogen.templates.assertions import (
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
from scenariogen.templates.emitter import emit_module, render_preamble
from scenariogen.templates.filters import OutputFilter, apply_filters, build_filters
from scenariogen.templates.invocation import ResolverFlag, resolver_flags
from scenariogen.templates.manifest import (
    AppendLine,
    CreateManifest,
    ManifestDirective,
    build_manifest_directive,
)
from scenariogen.templates.renderer import (
    build_scenario_elements,
    check_unique_identifiers,
    render_batch,
    render_scenario,
)

__all__ = [
    # Source structure types
    "CodeElement",
    "CodeLine",
    "CommentLine",
    "BlankLine",
    "DocstringBlock",
    # Serialization
    "elements_to_source",
    "python_string",
    "python_string_list",
    # Filters
    "OutputFilter",
    "build_filters",
    "apply_filters",
    # Manifest directives
    "CreateManifest",
    "AppendLine",
    "ManifestDirective",
    "build_manifest_directive",
    # Assertions
    "ExitStatusCheck",
    "PackagePresenceCheck",
    "synthesize_assertions",
    # Resolver flags
    "ResolverFlag",
    "resolver_flags",
    # Rendering and emission
    "build_scenario_elements",
    "check_unique_identifiers",
    "render_scenario",
    "render_batch",
    "render_preamble",
    "emit_module",
]
