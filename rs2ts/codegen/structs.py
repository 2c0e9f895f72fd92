"""
Struct generation for Rust to TypeScript translation.

Named structs become interfaces, or intersection type aliases when some
of their fields are flattened. Tuple and unit structs become type
aliases of their serialized shape.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext
    from .type_converter import TypeConverter

from .attributes import DeclarationAttributes, interpret_field
from .base import BaseGenerator
from .casing import Casing
from ..parser.ast_nodes import StructDefinition, FieldDeclaration


class StructGenerator(BaseGenerator):
    """
    Generates TypeScript code from Rust struct definitions.

    This class handles:
    - Named structs (interfaces / flattened intersections)
    - Tuple and newtype structs
    - Unit structs
    - Field rendering shared with struct-like enum variants
    """

    def __init__(self, ctx: 'CodeGenerationContext', type_converter: 'TypeConverter'):
        super().__init__(ctx)
        self._types = type_converter

    def generate_struct(self, struct: StructDefinition, attrs: DeclarationAttributes) -> None:
        """Emit a struct declaration, preceded by its separator line and doc comment."""
        if struct.kind != 'named':
            self._generate_tuple_struct(struct)
            return

        self.state.push('\n')
        self.state.write_comments(struct.doc_comments, 0)

        generics = self._types.generics(struct.generics)
        intersections = self.get_intersections(struct.fields)
        if intersections:
            self.state.push(
                f'{self.export}type {struct.name}{generics} = {" & ".join(intersections)} & '
            )
        else:
            self.state.push(f'{self.export}interface {struct.name}{generics} ')

        self.write_object(struct.fields, attrs.casing, 0)
        self.state.push('\n')

    def _generate_tuple_struct(self, struct: StructDefinition) -> None:
        """Newtype structs alias their inner type; wider tuples become TS tuples."""
        fields = [f for f in struct.fields if not interpret_field(f.attributes).skip]
        if not fields:
            target = 'null'
        elif len(fields) == 1:
            target = self._types.convert_standalone(fields[0].type_name)
        else:
            target = f'[{", ".join(self._types.convert_standalone(f.type_name) for f in fields)}]'

        self.state.push('\n')
        self.state.write_comments(struct.doc_comments, 0)
        self.state.push(
            f'{self.export}type {struct.name}{self._types.generics(struct.generics)} = {target};\n'
        )

    # =========================================================================
    # FIELDS
    # =========================================================================

    def write_object(
        self,
        fields: List[FieldDeclaration],
        casing: Optional[Casing],
        level: int,
        leading: Optional[List[str]] = None,
    ) -> None:
        """Write an object type body for the plain fields of a struct or variant.

        Args:
            fields: All fields; flattened and skipped ones are left out
            casing: The rename_all policy for the field names
            level: Indentation level of the closing brace
            leading: Pre-rendered property lines written before the fields
        """
        leading = leading or []
        if not leading and not self._plain_fields(fields):
            self.state.push('{}')
            return

        self.state.push('{\n')
        for line in leading:
            self.state.push(f'{self.indent(level + 1)}{line}\n')
        self.write_fields(fields, casing, level + 1)
        self.state.push(f'{self.indent(level)}}}')

    def write_fields(self, fields: List[FieldDeclaration], casing: Optional[Casing], level: int) -> None:
        """Write one `name?: Type;` line per plain field, each after its doc comment."""
        space = self.indent(level)
        for field in fields:
            field_attrs = interpret_field(field.attributes)
            if field_attrs.flatten or field_attrs.skip:
                continue

            self.state.write_comments(field.doc_comments, len(space))
            field_name = self.property_key(self.member_name(field.name or '', casing, field_attrs.rename))
            field_type = self._types.convert(field.type_name)
            optional_parameter_token = '?' if field_type.is_optional or field_attrs.optional else ''
            self.state.push(f'{space}{field_name}{optional_parameter_token}: {field_type.ts_type};\n')

    def get_intersections(self, fields: List[FieldDeclaration]) -> List[str]:
        """The types of flattened fields, in declaration order."""
        types = []
        for field in fields:
            field_attrs = interpret_field(field.attributes)
            if not field_attrs.flatten or field_attrs.skip:
                continue
            field_type = self._types.convert(field.type_name)
            # A flattened Option contributes its fields only when present
            types.append(f'Partial<{field_type.ts_type}>' if field_type.is_optional else field_type.ts_type)
        return types

    @staticmethod
    def _plain_fields(fields: List[FieldDeclaration]) -> List[FieldDeclaration]:
        result = []
        for field in fields:
            field_attrs = interpret_field(field.attributes)
            if not field_attrs.flatten and not field_attrs.skip:
                result.append(field)
        return result
