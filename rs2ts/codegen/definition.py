"""
Const and type alias generation.

Consts become `export const NAME: Type = value;` (or an ambient
`declare const NAME: Type;` in .d.ts output). Only literal values can be
translated; a const whose value is any other expression is left out and
recorded as unprocessed.
"""

import re
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext
    from .type_converter import TypeConverter

from .base import BaseGenerator
from ..parser.ast_nodes import (
    ArrayLiteral,
    ConstDefinition,
    Expression,
    Literal,
    RawExpression,
    TupleExpression,
    TypeAliasDefinition,
    UnaryOperation,
)


_INTEGER_SUFFIX = re.compile(r'_*[iu](?:8|16|32|64|128|size)$')
_FLOAT_SUFFIX = re.compile(r'_*f(?:32|64)$')
_RADIX_PREFIXES = ('0x', '0o', '0b')

# Option::None serializes as null
NONE_PATHS = {'None', 'Option::None', 'std::option::Option::None', 'core::option::Option::None'}


class DefinitionGenerator(BaseGenerator):
    """
    Generates TypeScript code for consts and type aliases.
    """

    def __init__(self, ctx: 'CodeGenerationContext', type_converter: 'TypeConverter'):
        super().__init__(ctx)
        self._types = type_converter

    def generate_constant(self, const: ConstDefinition) -> None:
        """Emit a const, or record it as unprocessed when its value is not a literal."""
        ts_type = self._types.convert_standalone(const.type_name)

        if self.settings.uses_type_interface:
            self.state.push('\n')
            self.state.write_comments(const.doc_comments, 0)
            self.state.push(f'declare const {const.name}: {ts_type};\n')
            return

        value = self.render_value(const.value)
        if value is None:
            self._ctx.log(f'Could not translate value of const {const.name}')
            self._ctx.diagnostics.warn_untranslatable_const(const.name, _describe(const.value))
            self.state.add_unprocessed(f'const {const.name}')
            return

        self.state.push('\n')
        self.state.write_comments(const.doc_comments, 0)
        self.state.push(f'export const {const.name}: {ts_type} = {value};\n')

    def generate_type_alias(self, alias: TypeAliasDefinition) -> None:
        """Emit `type Name<G> = Target;`."""
        target = self._types.convert_standalone(alias.type_name)
        self.state.push('\n')
        self.state.write_comments(alias.doc_comments, 0)
        self.state.push(f'{self.export}type {alias.name}{self._types.generics(alias.generics)} = {target};\n')

    # =========================================================================
    # VALUES
    # =========================================================================

    def render_value(self, expr: Optional[Expression]) -> Optional[str]:
        """Render a literal const value as TypeScript, or None if it is not a literal."""
        if isinstance(expr, Literal):
            if expr.kind in ('string', 'char'):
                return self.string_literal(expr.value)
            if expr.kind == 'number':
                return format_number(expr.value)
            return expr.value

        if isinstance(expr, UnaryOperation):
            if expr.operator == '-' and isinstance(expr.operand, Literal) and expr.operand.kind == 'number':
                return f'-{format_number(expr.operand.value)}'
            return None

        if isinstance(expr, RawExpression) and expr.text in NONE_PATHS:
            return 'null'

        if isinstance(expr, (ArrayLiteral, TupleExpression)):
            if isinstance(expr, TupleExpression) and not expr.elements:
                return 'null'
            elements = [self.render_value(e) for e in expr.elements]
            if any(e is None for e in elements):
                return None
            return f'[{", ".join(elements)}]'

        return None


def format_number(text: str) -> str:
    """Strip the type suffix and digit separators from a Rust numeric literal."""
    if text.lower().startswith(_RADIX_PREFIXES):
        # Hex digits include 'f', so only integer suffixes can follow a radix prefix
        text = _INTEGER_SUFFIX.sub('', text)
    else:
        text = _FLOAT_SUFFIX.sub('', _INTEGER_SUFFIX.sub('', text))
    text = text.replace('_', '')
    if text.endswith('.'):
        text = text[:-1]
    return text


def _describe(expr: Optional[Expression]) -> str:
    if expr is None:
        return 'no value'
    text = getattr(expr, 'text', None)
    if text:
        return text
    return type(expr).__name__
