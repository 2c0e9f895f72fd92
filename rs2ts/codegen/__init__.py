"""
Code generation module for the Rust to TypeScript translator.

This module provides TypeScript declaration generation from Rust AST nodes.
"""

from .casing import Casing, parse_serde_case, to_case
from .attributes import (
    DeclarationAttributes,
    FieldAttributes,
    VariantAttributes,
    interpret_declaration,
    interpret_field,
    interpret_variant,
)
from .comments import render_comments
from .context import BuildSettings, BuildState, CodeGenerationContext, GENERATED_MARKER
from .base import BaseGenerator
from .type_converter import TypeConverter
from .structs import StructGenerator
from .enums import EnumGenerator
from .definition import DefinitionGenerator
from .generator import TypeScriptCodeGenerator, translate
from .diagnostics import TranspilerDiagnostics, Diagnostic, DiagnosticSeverity

__all__ = [
    'Casing',
    'parse_serde_case',
    'to_case',
    'DeclarationAttributes',
    'FieldAttributes',
    'VariantAttributes',
    'interpret_declaration',
    'interpret_field',
    'interpret_variant',
    'render_comments',
    'BuildSettings',
    'BuildState',
    'CodeGenerationContext',
    'GENERATED_MARKER',
    'BaseGenerator',
    'TypeConverter',
    'StructGenerator',
    'EnumGenerator',
    'DefinitionGenerator',
    'TypeScriptCodeGenerator',
    'translate',
    'TranspilerDiagnostics',
    'Diagnostic',
    'DiagnosticSeverity',
]
