"""
Parser module for the Rust to TypeScript translator.

This module provides AST node definitions and the declaration parser.
"""

from .ast_nodes import (
    # Base
    ASTNode,
    # Top-level
    SourceUnit,
    # Attributes
    Attribute,
    AttributeArg,
    # Definitions
    Definition,
    StructDefinition,
    EnumDefinition,
    EnumVariant,
    ConstDefinition,
    TypeAliasDefinition,
    FieldDeclaration,
    # Types
    TypeName,
    PathType,
    PrimitiveType,
    OptionalType,
    ArrayType,
    SetType,
    MapType,
    TupleType,
    OpaqueType,
    # Expressions
    Expression,
    Literal,
    UnaryOperation,
    ArrayLiteral,
    TupleExpression,
    RawExpression,
)
from .parser import Parser

__all__ = [
    # Base
    'ASTNode',
    # Top-level
    'SourceUnit',
    # Attributes
    'Attribute',
    'AttributeArg',
    # Definitions
    'Definition',
    'StructDefinition',
    'EnumDefinition',
    'EnumVariant',
    'ConstDefinition',
    'TypeAliasDefinition',
    'FieldDeclaration',
    # Types
    'TypeName',
    'PathType',
    'PrimitiveType',
    'OptionalType',
    'ArrayType',
    'SetType',
    'MapType',
    'TupleType',
    'OpaqueType',
    # Expressions
    'Expression',
    'Literal',
    'UnaryOperation',
    'ArrayLiteral',
    'TupleExpression',
    'RawExpression',
    # Parser
    'Parser',
]
