"""Formatting of emitted source before it is written out."""

from __future__ import annotations

__all__ = ["SourceFormatter", "FormattingOptions", "FormattedResult", "template_line_breaks"]

from .core import FormattedResult, FormattingOptions, SourceFormatter, template_line_breaks
