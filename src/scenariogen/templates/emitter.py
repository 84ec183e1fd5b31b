"""
Emission of complete generated test modules.

A module is the "do not edit" banner, the shared helpers every rendered test
calls, and the rendered tests in batch order.
"""

import logging
from collections.abc import Sequence
from string import Template

from scenariogen.config import GeneratorConfig
from scenariogen.exceptions import EmptyBatchError
from scenariogen.scenarios.model import Scenario
from scenariogen.templates.code_serializer import (
    elements_to_source,
    python_string,
    python_string_list,
)
from scenariogen.templates.code_structure import CommentLine
from scenariogen.templates.renderer import render_batch

logger = logging.getLogger(__name__)

# Separates top-level definitions: two blank lines
UNIT_SEPARATOR = "\n\n\n"

HELPERS_TEMPLATE = Template('''\
"""Dependency resolution scenario tests."""

import os
import re
import subprocess
from dataclasses import dataclass

RESOLVER = $resolver
SUBCOMMAND = $subcommand
INDEX_URL = $index_url
FIND_LINKS = $find_links


@dataclass
class ResolverOutput:
    """Filtered result of one resolver run."""

    args: list
    returncode: int
    stdout: str
    stderr: str

    def describe(self, expectation):
        return (
            f"expected {expectation}\\n"
            f"$$ {' '.join(self.args)}\\n"
            f"exit status: {self.returncode}\\n"
            f"--- stdout ---\\n{self.stdout}\\n"
            f"--- stderr ---\\n{self.stderr}"
        )


def command(context, manifest):
    """Build the resolver invocation shared by every scenario."""
    return [
        RESOLVER,
        *SUBCOMMAND,
        str(manifest),
        "--index-url",
        INDEX_URL,
        "--find-links",
        FIND_LINKS,
        "--cache-dir",
        str(context.cache_dir),
    ]


def apply_filters(text, filters):
    """Normalize volatile output; later filters see earlier replacements."""
    for pattern, replacement in filters:
        text = re.sub(pattern, replacement, text)
    return text


def run_resolver(context, args, filters):
    """Run the resolver inside the context's isolated environment."""
    env = dict(os.environ)
    env[$venv_env_var] = str(context.venv)
    env[$no_wrap_env_var] = "1"
    env[$python_path_env_var] = str(context.python_dir)
    completed = subprocess.run(
        args,
        cwd=context.temp_dir,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )
    return ResolverOutput(
        args=[str(arg) for arg in args],
        returncode=completed.returncode,
        stdout=apply_filters(completed.stdout, filters),
        stderr=apply_filters(completed.stderr, filters),
    )''')


def render_banner(tool_name: str, source: str) -> str:
    """Render the comment banner marking the module as generated."""
    return elements_to_source(
        [
            CommentLine("DO NOT EDIT"),
            CommentLine(""),
            CommentLine(f"Generated with `{tool_name}` from scenarios in {source}."),
            CommentLine(f"Regenerate with `{tool_name} generate` instead of editing by hand."),
        ]
    )


def render_preamble(config: GeneratorConfig, source: str) -> str:
    """
    Render the banner and shared helpers of a generated module.

    Params:
        config: Generator settings (resolver, index, environment variables)
        source: Label of the fixture source, written into the banner

    Returns:
        Preamble text without a trailing newline
    """
    helpers = HELPERS_TEMPLATE.substitute(
        resolver=python_string(config.resolver),
        subcommand=python_string_list(config.subcommand),
        index_url=python_string(config.index_url),
        find_links=python_string(config.find_links),
        venv_env_var=python_string(config.venv_env_var),
        no_wrap_env_var=python_string(config.no_wrap_env_var),
        python_path_env_var=python_string(config.python_path_env_var),
    )
    return render_banner(config.tool_name, source) + "\n\n" + helpers


def emit_module(
    scenarios: Sequence[Scenario], config: GeneratorConfig, source: str
) -> str:
    """
    Emit the complete generated module for a batch.

    Params:
        scenarios: Parsed scenarios in batch order
        config: Generator settings
        source: Label of the fixture source, written into the banner

    Returns:
        Module text ending with a single newline

    Raises:
        EmptyBatchError: If the batch is empty and `config.require_scenarios` is set
        DuplicateIdentifierError: If two scenarios share a test function name
    """
    if config.require_scenarios and len(scenarios) == 0:
        raise EmptyBatchError(source)

    units = render_batch(scenarios, config)
    logger.debug("Emitting %d test functions", len(units))
    return UNIT_SEPARATOR.join([render_preamble(config, source), *units]) + "\n"
