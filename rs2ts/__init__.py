"""
Rust to TypeScript Translator

This package generates TypeScript declarations from the Rust structs,
enums, consts and type aliases marked with #[tsync], following the JSON
shapes serde produces for them.

Module Structure:
- lexer/: Tokenization (TokenType, Token, Lexer)
- parser/: AST nodes and parsing (Parser, all AST node types)
- type_system/: Rust to TypeScript type mapping (convert_type, TsType)
- codegen/: Declaration generators (TypeScriptCodeGenerator, translate)
- translator.py: File discovery, output writing and the command line

Usage:
    from rs2ts import Lexer, Parser, translate

    unit = Parser(Lexer(source).tokenize()).parse()
    text, unprocessed = translate(unit.items)
"""

# The parser must be imported before the type system, which refers back to its AST nodes
from .lexer import Lexer
from .parser import Parser
from .type_system import TsType, convert_type
from .codegen import BuildSettings, TypeScriptCodeGenerator, translate
from .translator import (
    RustToTypeScriptTranslator,
    OutputConflictError,
    generate_typescript_defs,
)

__all__ = [
    'Lexer',
    'Parser',
    'TsType',
    'convert_type',
    'BuildSettings',
    'TypeScriptCodeGenerator',
    'translate',
    'RustToTypeScriptTranslator',
    'OutputConflictError',
    'generate_typescript_defs',
]
