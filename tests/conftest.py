"""
Shared test fixtures and utilities for the scenariogen test suite.
"""

import re
from pathlib import Path

import pytest

from scenariogen.config import GeneratorConfig
from scenariogen.scenarios import parse_scenario


def build_record(name: str = "simple", **overrides) -> dict:
    """Build a raw scenario record; keyword arguments replace top-level keys."""
    record = {
        "name": name,
        "description_lines": ["A single requirement with one available version."],
        "tree": ["└── root", "    └── requires a"],
        "environment": {"python": "3.12", "additional_python": []},
        "root": {"requires": [{"requirement": "a"}]},
        "resolver_options": {},
        "expected": {
            "explanation_lines": [],
            "satisfiable": True,
            "packages": [{"name": "a", "version": "1.0.0"}],
        },
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_record():
    """Factory for raw scenario records.

    Usage:
        def test_something(make_record):
            record = make_record("conflict", expected={"satisfiable": False})
    """
    return build_record


@pytest.fixture
def make_scenario():
    """Factory for parsed scenarios, taking the same arguments as make_record."""

    def _make(name: str = "simple", **overrides):
        return parse_scenario(build_record(name, **overrides))

    return _make


@pytest.fixture
def plain_config():
    """Configuration without standard filters, keeping rendered output short."""
    return GeneratorConfig(standard_filters=[])


class FakeContext:
    """Stand-in for the test environment a generated test receives."""

    def __init__(self, root: Path, python: str, additional_python: list[str]):
        self.python = python
        self.additional_python = additional_python
        self.temp_dir = root / "temp"
        self.cache_dir = root / "cache"
        self.venv = root / ".venv"
        self.python_dir = root / "python"
        self.temp_dir.mkdir(parents=True)

    def filters(self):
        return [(re.escape(str(self.temp_dir)), "[TEMP_DIR]")]


@pytest.fixture
def fake_context_factory(tmp_path):
    """Fixture-compatible factory recording every context it creates."""
    created = []

    def _factory(python, additional_python):
        context = FakeContext(tmp_path / f"context{len(created)}", python, additional_python)
        created.append(context)
        return context

    _factory.created = created
    return _factory
