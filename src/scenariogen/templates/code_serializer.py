"""
Serialization of source element lists.

This module converts structured element lists into source text and renders
Python literals for the values interpolated into them.
"""

from collections.abc import Iterable

from scenariogen.templates.code_structure import (
    BlankLine,
    CodeElement,
    CodeLine,
    CommentLine,
    DocstringBlock,
)

INDENT = "    "


def python_string(text: str) -> str:
    """
    Render a string as a Python literal, preferring double quotes.

    Params:
        text: Value to render

    Returns:
        Literal that evaluates back to `text`
    """
    literal = repr(text)
    if literal.startswith("'") and '"' not in text:
        # repr only picks single quotes here when the text has no quotes at all
        literal = '"' + literal[1:-1] + '"'
    return literal


def python_string_list(values: Iterable[str]) -> str:
    """Render strings as a one-line Python list literal."""
    return "[" + ", ".join(python_string(value) for value in values) + "]"


def escape_control_characters(text: str) -> str:
    """Replace control characters (other than tab) with \\x escapes."""
    return "".join(
        f"\\x{ord(char):02x}" if ord(char) < 32 and char != "\t" else char
        for char in text
    )


def escape_docstring_line(line: str) -> str:
    """Escape a line so it cannot end the docstring or start an escape sequence."""
    escaped = line.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    return escape_control_characters(escaped)


def elements_to_source(elements: list[CodeElement]) -> str:
    """
    Serialize a source element list to text.

    Params:
        elements: Elements in output order

    Returns:
        Source text, one line per element (docstrings and multi-line comments
        expand to several lines), without a trailing newline
    """
    lines = []

    for elem in elements:
        prefix = INDENT * elem.indent

        if isinstance(elem, CodeLine):
            lines.append(prefix + elem.content)

        elif isinstance(elem, CommentLine):
            for comment in elem.content.splitlines() or [""]:
                comment = escape_control_characters(comment)
                lines.append(f"{prefix}# {comment}".rstrip())

        elif isinstance(elem, BlankLine):
            lines.append("")

        elif isinstance(elem, DocstringBlock):
            lines.append(prefix + '"""')
            for doc_line in elem.lines:
                for physical in doc_line.splitlines() or [""]:
                    if physical:
                        lines.append(prefix + escape_docstring_line(physical))
                    else:
                        lines.append("")
            lines.append(prefix + '"""')

    return "\n".join(lines)
