"""
Diagnostic/warning system for the translator.

Collects and reports warnings about inputs that could not be translated
faithfully: files that failed to parse, types with no TypeScript mapping
and declarations that had to be left out. None of these stop a run; they
are summarised at the end so the generated file can be reviewed.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for translator diagnostics."""
    WARNING = 'warning'
    INFO = 'info'


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    severity: DiagnosticSeverity
    code: str
    message: str
    file_path: str = ''
    line: Optional[int] = None
    construct: str = ''  # e.g., 'parse', 'type', 'const'

    def __str__(self) -> str:
        location = self.file_path
        if self.line:
            location = f'{location}:{self.line}'
        if location:
            return f'[{self.severity.value}] {location}: {self.message} ({self.code})'
        return f'[{self.severity.value}] {self.message} ({self.code})'


class TranspilerDiagnostics:
    """
    Collects translator warnings/diagnostics during a run.

    Usage:
        diag = TranspilerDiagnostics()
        diag.warn_unmappable_type("fn(u32) -> u32", declaration="Handler")
        # ... after translation ...
        diag.print_summary()
    """

    def __init__(self, verbose: bool = False):
        self._diagnostics: List[Diagnostic] = []
        self._verbose = verbose
        self.current_file = ''

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Get all collected diagnostics."""
        return list(self._diagnostics)

    @property
    def warnings(self) -> List[Diagnostic]:
        """Get only warning-level diagnostics."""
        return [d for d in self._diagnostics if d.severity == DiagnosticSeverity.WARNING]

    @property
    def count(self) -> int:
        """Get total diagnostic count."""
        return len(self._diagnostics)

    def clear(self) -> None:
        """Clear all diagnostics."""
        self._diagnostics.clear()

    # =========================================================================
    # SPECIFIC WARNING METHODS
    # =========================================================================

    def warn_parse_failure(self, file_path: str, error: str) -> None:
        """Warn that an input file could not be read or parsed."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W001',
            message=f'Could not parse file: {error}. No declarations were taken from it.',
            file_path=file_path,
            construct='parse',
        ))

    def warn_unmappable_type(self, type_text: str, declaration: str = '') -> None:
        """Warn that a type had no TypeScript mapping and was passed through."""
        where = f' in {declaration}' if declaration else ''
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W002',
            message=f'No TypeScript mapping for type "{type_text}"{where}; emitted as written.',
            file_path=self.current_file,
            construct='type',
        ))

    def warn_untranslatable_const(self, name: str, value: str) -> None:
        """Warn that a const value is not a literal and the const was skipped."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W003',
            message=f'Const "{name}" has a non-literal value ({value}); it was not emitted.',
            file_path=self.current_file,
            construct='const',
        ))

    def warn_missing_path(self, file_path: str) -> None:
        """Warn that an input path does not exist."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W004',
            message='Input path does not exist.',
            file_path=file_path,
            construct='input',
        ))

    def info_variant_skipped(self, enum_name: str, variant_name: str) -> None:
        """Info that a variant marked #[serde(skip)] was left out of a union."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.INFO,
            code='I001',
            message=f'Variant {enum_name}::{variant_name} is skipped by serde and was omitted.',
            file_path=self.current_file,
            construct='variant',
        ))

    # =========================================================================
    # REPORTING
    # =========================================================================

    def print_summary(self, file=None) -> None:
        """Print a summary of all diagnostics to stderr (or specified file)."""
        if file is None:
            file = sys.stderr

        if not self._diagnostics:
            return

        warnings = self.warnings
        infos = [d for d in self._diagnostics if d.severity == DiagnosticSeverity.INFO]

        if warnings:
            print(f'\nTranslator warnings ({len(warnings)}):', file=file)
            # Group by construct type
            by_construct: dict = {}
            for w in warnings:
                key = w.construct or 'other'
                if key not in by_construct:
                    by_construct[key] = []
                by_construct[key].append(w)

            for construct, diags in sorted(by_construct.items()):
                print(f'  {construct}: {len(diags)} occurrence(s)', file=file)
                if self._verbose:
                    for d in diags:
                        print(f'    {d}', file=file)

        if infos and self._verbose:
            print(f'\nTranslator info ({len(infos)}):', file=file)
            for d in infos:
                print(f'  {d}', file=file)

    def get_summary(self) -> str:
        """Get a summary string of all diagnostics."""
        if not self.warnings:
            return 'No translator warnings.'

        by_construct: dict = {}
        for w in self.warnings:
            key = w.construct or 'other'
            by_construct[key] = by_construct.get(key, 0) + 1

        parts = [f'{count} {construct}' for construct, count in sorted(by_construct.items())]
        return f'Translator warnings: {", ".join(parts)}'
