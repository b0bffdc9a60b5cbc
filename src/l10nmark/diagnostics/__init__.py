"""Diagnostic system for l10nmark errors.

Provides structured error diagnostics with codes, hints and context
(resource names, template text, dictionary paths).

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import ArgError, CompileError, CyclicPointerError, L10nError
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ArgError",
    "CompileError",
    "CyclicPointerError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "L10nError",
    "OutputFormat",
]
