"""
Code generation context for the TypeScript code generator.

This module provides the run-wide settings, the ordered output buffer
and the context object that ties them together, so that no generator
depends on process-wide state.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .attributes import DEFAULT_EXPORT_MARKER
from .comments import render_comments
from .diagnostics import TranspilerDiagnostics


# First line of every generated file; the writer refuses to overwrite a
# file that does not start with it.
GENERATED_MARKER = '/* This file is generated and managed by rs2ts */'


@dataclass
class BuildSettings:
    """Run-wide settings for a translation."""

    # Ambient (.d.ts) output: no export keywords, consts are declared only
    uses_type_interface: bool = False
    # Unit-only enums become `const enum` instead of string-literal unions
    enable_const_enums: bool = False
    # Print progress for every declaration encountered
    debug: bool = False
    # Attribute that marks a declaration for export
    export_marker: str = DEFAULT_EXPORT_MARKER

    @property
    def export_keyword(self) -> str:
        """The prefix for top-level declarations ('' in ambient mode)."""
        return '' if self.uses_type_interface else 'export '


@dataclass
class BuildState:
    """
    Append-only output buffer plus the items that could not be translated.

    Text is accumulated in order; unprocessed holds file paths that failed
    to read or parse and '<kind> <name>' entries for skipped declarations.
    """

    chunks: List[str] = field(default_factory=list)
    unprocessed: List[str] = field(default_factory=list)

    @property
    def types(self) -> str:
        """The generated text so far."""
        return ''.join(self.chunks)

    def push(self, text: str) -> None:
        """Append text to the buffer."""
        self.chunks.append(text)

    def write_comments(self, comments: List[str], indentation_amount: int) -> None:
        """Append a doc comment block (nothing for an empty list)."""
        rendered = render_comments(comments, indentation_amount)
        if rendered:
            self.chunks.append(rendered)

    def add_unprocessed(self, item: str) -> None:
        """Record a file or declaration that could not be translated."""
        self.unprocessed.append(item)


@dataclass
class CodeGenerationContext:
    """
    Holds all state needed during TypeScript code generation.

    The settings are read-only for the duration of a run; the state and
    diagnostics are appended to as declarations are emitted.
    """

    settings: BuildSettings = field(default_factory=BuildSettings)
    state: BuildState = field(default_factory=BuildState)
    indent_str: str = '  '

    # Name of the declaration being emitted, for diagnostics
    current_declaration: str = ''

    # Diagnostics collector
    _diagnostics: Optional[TranspilerDiagnostics] = None

    @property
    def diagnostics(self) -> TranspilerDiagnostics:
        """Get the diagnostics collector, creating one if needed."""
        if self._diagnostics is None:
            self._diagnostics = TranspilerDiagnostics()
        return self._diagnostics

    def indent(self, level: int = 1) -> str:
        """Return the indentation string for a nesting level."""
        return self.indent_str * level

    def log(self, message: str) -> None:
        """Print a debug message when debug output is enabled."""
        if self.settings.debug:
            print(message)
