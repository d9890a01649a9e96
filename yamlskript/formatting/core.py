"""Post-emission source cleanup for generated JavaScript."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class FormattingOptions:
    """Configuration options for output cleanup."""

    insert_final_newline: bool = True
    trim_trailing_whitespace: bool = True
    max_empty_lines: int = 1


@dataclass
class FormattedResult:
    """Result of a formatting pass."""

    formatted_text: str
    is_changed: bool


def template_line_breaks(text: str) -> List[bool]:
    """
    Report, for every newline in ``text``, whether it sits inside a template literal.

    The scan follows string quotes, comments and ``${...}`` substitutions
    (nested to any depth).  Quoted strings end at the line break, so stray
    apostrophes in JSX text cannot leak into the following lines.
    """
    breaks: List[bool] = []
    mode = "code"
    depth = 0
    # Brace depth to restore when each open substitution closes
    substitutions: List[int] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        following = text[index + 1] if index + 1 < length else ""
        if char == "\n":
            breaks.append(mode == "template")
            if mode in ("single", "double", "line_comment"):
                mode = "code"
        elif mode == "code":
            if char == "'":
                mode = "single"
            elif char == '"':
                mode = "double"
            elif char == "`":
                mode = "template"
            elif char == "/" and following == "/":
                mode = "line_comment"
                index += 1
            elif char == "/" and following == "*":
                mode = "block_comment"
                index += 1
            elif char == "{":
                depth += 1
            elif char == "}":
                if depth == 0 and substitutions:
                    depth = substitutions.pop()
                    mode = "template"
                else:
                    depth = max(depth - 1, 0)
        elif mode in ("single", "double", "template"):
            if char == "\\" and following != "\n":
                index += 1
            elif (mode, char) in (("single", "'"), ("double", '"'), ("template", "`")):
                mode = "code"
            elif mode == "template" and char == "$" and following == "{":
                substitutions.append(depth)
                depth = 0
                mode = "code"
                index += 1
        elif mode == "block_comment" and char == "*" and following == "/":
            mode = "code"
            index += 1
        index += 1
    return breaks


class SourceFormatter:
    """
    Whitespace normalizer applied to emitted source.

    It never re-indents or reflows code: indentation belongs to the
    emitters, canonical style to whatever external printer runs after the
    build.  Lines inside template literals are string contents and are left
    exactly as emitted.
    """

    def __init__(self, options: Optional[FormattingOptions] = None):
        self.options = options or FormattingOptions()

    def format(self, source_text: str) -> FormattedResult:
        formatted_text = self._apply_text_cleanup(source_text)
        return FormattedResult(formatted_text=formatted_text, is_changed=formatted_text != source_text)

    def _apply_text_cleanup(self, text: str) -> str:
        """Apply final text cleanup rules."""
        lines = text.split("\n")
        breaks = template_line_breaks(text)
        # A line is literal text when it starts or ends inside a template
        ends_inside = breaks + [False]
        starts_inside = [False] + breaks

        if self.options.trim_trailing_whitespace:
            lines = [line if ends_inside[number] else line.rstrip() for number, line in enumerate(lines)]

        # Remove excessive empty lines
        cleaned_lines = []
        consecutive_empty = 0
        for number, line in enumerate(lines):
            if not line.strip() and not starts_inside[number]:
                consecutive_empty += 1
                if consecutive_empty <= self.options.max_empty_lines:
                    cleaned_lines.append(line)
            else:
                consecutive_empty = 0
                cleaned_lines.append(line)

        while cleaned_lines and not cleaned_lines[0].strip():
            cleaned_lines.pop(0)
        while cleaned_lines and not cleaned_lines[-1].strip():
            cleaned_lines.pop()

        if not cleaned_lines:
            return ""
        result = "\n".join(cleaned_lines)
        if self.options.insert_final_newline:
            result += "\n"
        return result
