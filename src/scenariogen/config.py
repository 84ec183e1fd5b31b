"""
Generator configuration for scenariogen.

This module provides the settings that shape the generated test module: the
resolver invocation, the package index the scenarios are published to, the
environment variables of the isolated run, and the standard output filters.
"""

from __future__ import annotations

import keyword
import re
from dataclasses import dataclass, field
from dataclasses import fields as dataclass_fields
from pathlib import Path
from typing import Any

from scenariogen.exceptions import ConfigurationError

PACKSE_VERSION = "0.3.12"

# Module-level names of the generated test module a fixture parameter would shadow
RESERVED_FIXTURE_NAMES = frozenset(
    {
        "FIND_LINKS",
        "INDEX_URL",
        "RESOLVER",
        "ResolverOutput",
        "SUBCOMMAND",
        "apply_filters",
        "command",
        "dataclass",
        "os",
        "re",
        "run_resolver",
        "subprocess",
    }
)


def _default_standard_filters() -> list[tuple[str, str]]:
    return [
        (r"\x1b\[[0-9;]*m", ""),
        (
            r"Resolved (\d+) packages? in \d+(?:\.\d+)?m?s",
            r"Resolved \1 packages in [TIME]",
        ),
    ]


def _string_list(setting: str, value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)) or not all(
        isinstance(item, str) for item in value
    ):
        raise ConfigurationError(setting, "must be a list of strings")
    return list(value)


@dataclass
class GeneratorConfig:
    """Settings for generating a scenario test module.

    Can be created from dict or YAML with partial overrides.
    Only specified values override defaults.

    Examples:
        # All defaults
        config = GeneratorConfig()

        # Partial override from dict
        config = GeneratorConfig.from_dict({"resolver": "/usr/local/bin/uv"})

        # From YAML file
        config = GeneratorConfig.from_yaml("scenariogen.yaml")
    """

    # Name written into the "do not edit" banner
    tool_name: str = "scenariogen"

    # Resolver executable and the subcommand resolving a manifest
    resolver: str = "uv"
    subcommand: list[str] = field(default_factory=lambda: ["pip", "compile"])

    # Where the scenario packages are published
    index_url: str = (
        f"https://astral-sh.github.io/packse/{PACKSE_VERSION}/simple-html/"
    )
    find_links: str = (
        f"https://raw.githubusercontent.com/astral-sh/packse/{PACKSE_VERSION}"
        "/vendor/links.html"
    )

    manifest_name: str = "requirements.in"

    # pytest fixture provisioning the isolated environment of each test
    context_fixture: str = "context_factory"

    venv_env_var: str = "VIRTUAL_ENV"
    no_wrap_env_var: str = "UV_NO_WRAP"
    python_path_env_var: str = "UV_TEST_PYTHON_PATH"

    # Applied after the context's runtime path filters, before the scenario rule
    standard_filters: list[tuple[str, str]] = field(
        default_factory=_default_standard_filters
    )

    # Raise EmptyBatchError instead of emitting a module without tests
    require_scenarios: bool = False

    # Scenario names left out of the generated module
    exclude: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.resolver:
            raise ConfigurationError("resolver", "must name an executable")
        self._check_context_fixture()

        if not isinstance(self.standard_filters, (list, tuple)):
            raise ConfigurationError("standard_filters", "must be a list of pairs")
        pairs = []
        for index, pair in enumerate(self.standard_filters):
            if (
                not isinstance(pair, (list, tuple))
                or len(pair) != 2
                or not all(isinstance(part, str) for part in pair)
            ):
                raise ConfigurationError(
                    "standard_filters",
                    f"entry {index} must be a [pattern, replacement] pair of strings",
                )
            try:
                re.compile(pair[0])
            except re.error as e:
                raise ConfigurationError(
                    "standard_filters", f"entry {index} is not a valid regex: {e}"
                ) from e
            pairs.append((pair[0], pair[1]))
        self.standard_filters = pairs
        self.subcommand = _string_list("subcommand", self.subcommand)
        self.exclude = _string_list("exclude", self.exclude)

    def _check_context_fixture(self) -> None:
        name = self.context_fixture
        if not isinstance(name, str) or not name.isidentifier():
            raise ConfigurationError("context_fixture", f"'{name}' is not an identifier")
        if keyword.iskeyword(name):
            raise ConfigurationError("context_fixture", f"'{name}' is a Python keyword")
        if name in RESERVED_FIXTURE_NAMES:
            raise ConfigurationError(
                "context_fixture",
                f"'{name}' is already defined by the generated module",
            )

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> GeneratorConfig:
        """Create from dict, only overriding specified values.

        Args:
            config: Dictionary with partial overrides. Only keys matching
                   dataclass fields will be used.

        Returns:
            GeneratorConfig instance with specified overrides
        """
        valid_fields = {f.name for f in dataclass_fields(cls)}
        filtered = {k: v for k, v in config.items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> GeneratorConfig:
        """Create from YAML file with partial overrides.

        Args:
            yaml_path: Path to YAML file containing configuration

        Returns:
            GeneratorConfig instance with YAML overrides

        Example YAML:
            resolver: /opt/uv/bin/uv
            exclude:
              - requires-python-wheels
            require_scenarios: true
        """
        import yaml

        path = Path(yaml_path)
        try:
            with path.open() as f:
                config = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigurationError(str(path), e.strerror or str(e)) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(str(path), f"invalid YAML: {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError(str(path), "expected a mapping of settings")
        return cls.from_dict(config)
