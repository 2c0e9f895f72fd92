"""
Main TypeScript code generator.

Selects the declarations marked for export and dispatches each one to the
specialized generator for its kind, producing the text of a single
generated file.
"""

from typing import Iterable, List, Optional, Tuple

from .attributes import DeclarationAttributes, interpret_declaration
from .context import BuildSettings, CodeGenerationContext, GENERATED_MARKER
from .definition import DefinitionGenerator
from .diagnostics import TranspilerDiagnostics
from .enums import EnumGenerator
from .structs import StructGenerator
from .type_converter import TypeConverter
from ..parser.ast_nodes import (
    ConstDefinition,
    Definition,
    EnumDefinition,
    StructDefinition,
    TypeAliasDefinition,
)


DECLARATION_KINDS = {
    StructDefinition: 'struct',
    EnumDefinition: 'enum',
    ConstDefinition: 'const',
    TypeAliasDefinition: 'type',
}


def declaration_kind(item: Definition) -> str:
    """The Rust keyword of a declaration."""
    return DECLARATION_KINDS.get(type(item), 'item')


class TypeScriptCodeGenerator:
    """
    Generates TypeScript declarations from parsed Rust items.

    Each generator owns one output buffer: declarations are appended in
    the order they are generated, so processing files in a stable order
    gives a stable output.
    """

    def __init__(
        self,
        settings: Optional[BuildSettings] = None,
        diagnostics: Optional[TranspilerDiagnostics] = None,
    ):
        self._ctx = CodeGenerationContext(
            settings=settings or BuildSettings(),
            _diagnostics=diagnostics,
        )

        self._type_converter = TypeConverter(self._ctx)
        self._struct_gen = StructGenerator(self._ctx, self._type_converter)
        self._enum_gen = EnumGenerator(self._ctx, self._type_converter, self._struct_gen)
        self._definition_gen = DefinitionGenerator(self._ctx, self._type_converter)

    @property
    def settings(self) -> BuildSettings:
        return self._ctx.settings

    @property
    def diagnostics(self) -> TranspilerDiagnostics:
        return self._ctx.diagnostics

    @property
    def unprocessed(self) -> List[str]:
        """Files and declarations that could not be translated so far."""
        return self._ctx.state.unprocessed

    @property
    def output(self) -> str:
        """The generated text so far."""
        return self._ctx.state.types

    def write_header(self) -> None:
        """Start the output with the generated-file marker."""
        self._ctx.state.push(f'{GENERATED_MARKER}\n')

    def add_unprocessed(self, item: str) -> None:
        self._ctx.state.add_unprocessed(item)

    def filter_exported(self, items: Iterable[Definition]) -> List[Tuple[Definition, DeclarationAttributes]]:
        """Keep the declarations carrying the export marker, in source order."""
        exported = []
        for item in items:
            attrs = interpret_declaration(item.attributes, self.settings.export_marker)
            kind = declaration_kind(item)
            if attrs.is_exported:
                self._ctx.log(f'Encountered #[{self.settings.export_marker}] {kind}: {item.name}')
                exported.append((item, attrs))
            else:
                self._ctx.log(f'Encountered non-{self.settings.export_marker} {kind}: {item.name}')
        return exported

    def generate(self, items: Iterable[Definition]) -> str:
        """Append every exported declaration among items and return the full text."""
        for item, attrs in self.filter_exported(items):
            self.generate_declaration(item, attrs)
        return self.output

    def generate_declaration(self, item: Definition, attrs: DeclarationAttributes) -> None:
        """Dispatch one exported declaration to the generator for its kind."""
        self._ctx.current_declaration = item.name
        if isinstance(item, StructDefinition):
            self._struct_gen.generate_struct(item, attrs)
        elif isinstance(item, EnumDefinition):
            self._enum_gen.generate_enum(item, attrs)
        elif isinstance(item, ConstDefinition):
            self._definition_gen.generate_constant(item)
        elif isinstance(item, TypeAliasDefinition):
            self._definition_gen.generate_type_alias(item)
        self._ctx.current_declaration = ''


def translate(
    declarations: Iterable[Definition],
    settings: Optional[BuildSettings] = None,
    diagnostics: Optional[TranspilerDiagnostics] = None,
) -> Tuple[str, List[str]]:
    """
    Translate declarations into the text of one generated TypeScript file.

    Returns the text, starting with the generated-file marker, and the
    names of declarations that could not be translated.
    """
    generator = TypeScriptCodeGenerator(settings, diagnostics)
    generator.write_header()
    text = generator.generate(declarations)
    return text, list(generator.unprocessed)
