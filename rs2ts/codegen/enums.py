"""
Enum generation for Rust to TypeScript translation.

An enum becomes a union of the JSON shapes serde produces for each of its
variants. The shape depends on the enum's tagging mode:

    internally tagged   #[serde(tag = "type")]
    adjacently tagged   #[serde(tag = "t", content = "c")]
    untagged            #[serde(untagged)]
    no directive        unit variants as string literals, tuple variants
                        as fixed-length tuples

Unit-only enums may instead become a `const enum` when enabled.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext
    from .structs import StructGenerator
    from .type_converter import TypeConverter

from .attributes import DeclarationAttributes, interpret_variant
from .base import BaseGenerator
from .casing import Casing
from ..parser.ast_nodes import EnumDefinition, EnumVariant


# Union members open after '  | ', so object bodies close at this level
MEMBER_LEVEL = 2


class EnumGenerator(BaseGenerator):
    """
    Generates TypeScript code from Rust enum definitions.

    This class handles:
    - Unit-only enums (string literal unions or const enums)
    - Internally, adjacently and un-tagged enums
    - Per-variant rename, rename_all and skip
    """

    def __init__(
        self,
        ctx: 'CodeGenerationContext',
        type_converter: 'TypeConverter',
        struct_generator: 'StructGenerator',
    ):
        super().__init__(ctx)
        self._types = type_converter
        self._structs = struct_generator

    def generate_enum(self, enum: EnumDefinition, attrs: DeclarationAttributes) -> None:
        """Emit an enum declaration, preceded by its separator line and doc comment."""
        variants = self._serialized_variants(enum)

        self.state.push('\n')
        self.state.write_comments(enum.doc_comments, 0)

        is_unit_only = all(v.kind == 'unit' for v in variants)
        is_plain = attrs.tag is None and not attrs.untagged
        if variants and is_unit_only and is_plain and self.settings.enable_const_enums:
            self._generate_const_enum(enum, variants, attrs)
        else:
            self._generate_union(enum, variants, attrs)

    def _serialized_variants(self, enum: EnumDefinition) -> List[EnumVariant]:
        variants = []
        for variant in enum.variants:
            if interpret_variant(variant.attributes).skip:
                self._ctx.diagnostics.info_variant_skipped(enum.name, variant.name)
                continue
            variants.append(variant)
        return variants

    def _label(self, variant: EnumVariant, casing: Optional[Casing]) -> str:
        return self.member_name(variant.name, casing, interpret_variant(variant.attributes).rename)

    # =========================================================================
    # CONST ENUMS
    # =========================================================================

    def _generate_const_enum(
        self,
        enum: EnumDefinition,
        variants: List[EnumVariant],
        attrs: DeclarationAttributes,
    ) -> None:
        prefix = 'declare ' if self.settings.uses_type_interface else 'export '
        self.state.push(f'{prefix}const enum {enum.name} {{\n')
        for variant in variants:
            self.state.write_comments(variant.doc_comments, len(self.indent(1)))
            if variant.discriminant is not None:
                value = variant.discriminant
            else:
                value = self.string_literal(self._label(variant, attrs.casing))
            self.state.push(f'{self.indent(1)}{variant.name} = {value},\n')
        self.state.push('}\n')

    # =========================================================================
    # UNIONS
    # =========================================================================

    def _generate_union(
        self,
        enum: EnumDefinition,
        variants: List[EnumVariant],
        attrs: DeclarationAttributes,
    ) -> None:
        header = f'{self.export}type {enum.name}{self._types.generics(enum.generics)} ='
        if not variants:
            self.state.push(f'{header} never;\n')
            return

        self.state.push(f'{header}\n')
        for index, variant in enumerate(variants):
            self.state.write_comments(variant.doc_comments, len(self.indent(1)))
            self.state.push(f'{self.indent(1)}| ')
            self._write_member(variant, attrs)
            self.state.push(';\n' if index == len(variants) - 1 else '\n')

    def _write_member(self, variant: EnumVariant, attrs: DeclarationAttributes) -> None:
        if attrs.untagged:
            self._write_payload(variant)
        elif attrs.tag is not None and attrs.content is not None:
            self._write_adjacent(variant, attrs)
        elif attrs.tag is not None:
            self._write_internal(variant, attrs)
        else:
            self._write_external(variant, attrs)

    def _write_internal(self, variant: EnumVariant, attrs: DeclarationAttributes) -> None:
        """{ tag: "label"; ...fields } with the tag merged into the variant's object."""
        tag_line = f'{self.property_key(attrs.tag)}: {self.string_literal(self._label(variant, attrs.casing))};'
        if variant.kind == 'struct':
            self._write_struct_variant(variant, MEMBER_LEVEL, [tag_line])
            return

        self.state.push(f'{{ {tag_line[:-1]} }}')
        if variant.kind == 'tuple':
            self.state.push(f' & {self._tuple_payload(variant)}')

    def _write_adjacent(self, variant: EnumVariant, attrs: DeclarationAttributes) -> None:
        """{ tag: "label"; content: payload } with the payload under its own key."""
        tag_line = f'{self.property_key(attrs.tag)}: {self.string_literal(self._label(variant, attrs.casing))};'
        if variant.kind == 'unit':
            self.state.push(f'{{ {tag_line[:-1]} }}')
            return
        if variant.kind == 'tuple':
            self.state.push(
                f'{{ {tag_line} {self.property_key(attrs.content)}: {self._tuple_payload(variant)} }}'
            )
            return

        self._write_keyed_struct(variant, attrs.content, [tag_line])

    def _write_external(self, variant: EnumVariant, attrs: DeclarationAttributes) -> None:
        """Unit variants as their label, tuple variants as fixed-length tuples."""
        if variant.kind == 'unit':
            self.state.push(self.string_literal(self._label(variant, attrs.casing)))
        elif variant.kind == 'tuple':
            self.state.push(self._tuple_type(variant))
        else:
            self._write_keyed_struct(variant, self._label(variant, attrs.casing), [])

    def _write_payload(self, variant: EnumVariant) -> None:
        """The bare payload of an untagged variant."""
        if variant.kind == 'unit':
            self.state.push('null')
        elif variant.kind == 'tuple':
            self.state.push(self._tuple_payload(variant))
        else:
            self._write_struct_variant(variant, MEMBER_LEVEL, [])

    # =========================================================================
    # PAYLOADS
    # =========================================================================

    def _tuple_payload(self, variant: EnumVariant) -> str:
        """A newtype variant's inner type, or a tuple of a wider variant's types."""
        types = [self._types.convert_standalone(f.type_name) for f in variant.fields]
        if len(types) == 1:
            return types[0]
        return f'[{", ".join(types)}]'

    def _tuple_type(self, variant: EnumVariant) -> str:
        """The variant's field types as a tuple, even for a single field."""
        types = [self._types.convert_standalone(f.type_name) for f in variant.fields]
        return f'[{", ".join(types)}]'

    def _write_struct_variant(self, variant: EnumVariant, level: int, leading: List[str]) -> None:
        casing = interpret_variant(variant.attributes).casing
        self._structs.write_object(variant.fields, casing, level, leading)
        intersections = self._structs.get_intersections(variant.fields)
        if intersections:
            self.state.push(f' & {" & ".join(intersections)}')

    def _write_keyed_struct(self, variant: EnumVariant, key: str, leading: List[str]) -> None:
        """An object holding the struct-like variant's fields under a single key."""
        self.state.push('{\n')
        for line in leading:
            self.state.push(f'{self.indent(MEMBER_LEVEL + 1)}{line}\n')
        self.state.push(f'{self.indent(MEMBER_LEVEL + 1)}{self.property_key(key)}: ')
        self._write_struct_variant(variant, MEMBER_LEVEL + 1, [])
        self.state.push(f';\n{self.indent(MEMBER_LEVEL)}}}')
