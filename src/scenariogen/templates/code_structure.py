"""
Structured source representation data classes.

This module defines the elements a rendered test function is made of. The
renderer builds an ordered list of elements and the serializer turns it into
source text, so conditional and repeated segments stay explicit instead of
hiding inside a template language.
"""

from abc import ABC
from dataclasses import dataclass, field


@dataclass
class CodeElement(ABC):
    """
    Base class for all source elements.

    Params:
        indent: Indentation depth in blocks of four spaces (keyword only, so
            subclasses take their content as the first positional argument)
    """

    indent: int = field(default=0, kw_only=True)


@dataclass
class CodeLine(CodeElement):
    """
    One line of code, emitted as-is after its indentation.

    Params:
        content: The statement text, without indentation
    """

    content: str = ""


@dataclass
class CommentLine(CodeElement):
    """
    Documentation comment. Embedded newlines become separate comment lines.

    Params:
        content: Comment text without the leading "#"
    """

    content: str = ""


@dataclass
class BlankLine(CodeElement):
    """Empty separator line."""


@dataclass
class DocstringBlock(CodeElement):
    """
    Triple-quoted docstring with one entry per line.

    Params:
        lines: Docstring lines, emitted verbatim apart from quote escaping
    """

    lines: list[str] = field(default_factory=list)
