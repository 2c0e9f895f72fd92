"""
Type conversion utilities for code generation.

This module provides the TypeConverter class that wraps the pure type
mapper for use during code generation, reporting types without a
TypeScript mapping to the diagnostics collector.
"""

from typing import List

from .base import BaseGenerator
from ..parser.ast_nodes import TypeName
from ..type_system.mappings import TsType, convert_type, render_generics


class TypeConverter(BaseGenerator):
    """
    Handles Rust to TypeScript type conversions.

    This class provides context-aware type conversion that:
    - Converts type expressions to TypeScript types
    - Flags unmappable types for review
    - Renders generic parameter lists
    """

    def convert(self, type_name: TypeName) -> TsType:
        """Convert a type expression, keeping the optionality flag separate."""
        return convert_type(type_name, on_unmapped=self._report_unmapped)

    def convert_standalone(self, type_name: TypeName) -> str:
        """Convert a type in a position without a field marker (alias targets, tuple members).

        An optional type renders as 'T | null' here.
        """
        converted = self.convert(type_name)
        if converted.is_optional:
            return f'{converted.ts_type} | null'
        return converted.ts_type

    def generics(self, generics: List[str]) -> str:
        """Render a declaration's generic parameters."""
        return render_generics(generics)

    def _report_unmapped(self, type_text: str) -> None:
        self._ctx.diagnostics.warn_unmappable_type(type_text, self._ctx.current_declaration)
