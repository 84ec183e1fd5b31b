"""
scenariogen - compile dependency-resolution scenarios into pytest modules

Scenarios describe root requirements, provisioned interpreters, resolver
options and the expected outcome. scenariogen renders each one into a test
function that drives the resolver CLI and asserts on its output.
"""

from importlib.metadata import version

from scenariogen.compiler import compile_scenarios
from scenariogen.config import GeneratorConfig
from scenariogen.scenarios import Scenario, parse_scenario

__version__ = version("scenariogen")

__all__ = [
    "__version__",
    "compile_scenarios",
    "GeneratorConfig",
    "Scenario",
    "parse_scenario",
]
