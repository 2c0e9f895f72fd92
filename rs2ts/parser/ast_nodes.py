"""
AST node definitions for Rust declaration parsing.

This module contains all the dataclasses representing nodes in the
Abstract Syntax Tree (AST) produced by the declaration parser: the
top-level declarations, their fields and variants, the raw attributes
attached to them, type expressions and literal const values.
"""

from dataclasses import dataclass, field
from typing import Optional, List


# =============================================================================
# BASE NODE
# =============================================================================

@dataclass
class ASTNode:
    """Base class for all AST nodes."""
    pass


# =============================================================================
# ATTRIBUTES
# =============================================================================

@dataclass
class AttributeArg(ASTNode):
    """A single argument inside an attribute (e.g. rename_all = "camelCase", flatten)."""
    key: str
    value: Optional[str] = None  # None for bare flags


@dataclass
class Attribute(ASTNode):
    """Represents an outer attribute such as #[serde(tag = "type")] or #[tsync]."""
    name: str
    args: List[AttributeArg] = field(default_factory=list)


# =============================================================================
# TYPE EXPRESSIONS
# =============================================================================

@dataclass
class TypeName(ASTNode):
    """Base class for type expressions."""
    pass


@dataclass
class PathType(TypeName):
    """A named type, optionally with generic arguments (User, Page<T>)."""
    name: str
    args: List[TypeName] = field(default_factory=list)


@dataclass
class PrimitiveType(TypeName):
    """A built-in scalar type (u32, bool, String, ())."""
    name: str


@dataclass
class OptionalType(TypeName):
    """Option<T>."""
    inner: TypeName


@dataclass
class ArrayType(TypeName):
    """An ordered collection (Vec<T>, VecDeque<T>, [T; N], &[T])."""
    element: TypeName


@dataclass
class SetType(TypeName):
    """A set collection (HashSet<T>, BTreeSet<T>)."""
    element: TypeName


@dataclass
class MapType(TypeName):
    """A key/value collection (HashMap<K, V>, BTreeMap<K, V>)."""
    key: TypeName
    value: TypeName


@dataclass
class TupleType(TypeName):
    """A fixed-length tuple (A, B, C)."""
    elements: List[TypeName] = field(default_factory=list)


@dataclass
class OpaqueType(TypeName):
    """A type with no structural translation (fn pointers, dyn Trait); keeps the source text."""
    text: str


# =============================================================================
# EXPRESSIONS (const values)
# =============================================================================

@dataclass
class Expression(ASTNode):
    """Base class for const value expressions."""
    pass


@dataclass
class Literal(Expression):
    """A literal value. kind is one of 'string', 'char', 'number', 'bool'."""
    value: str
    kind: str = 'number'


@dataclass
class UnaryOperation(Expression):
    """A prefix operation on an expression (-1)."""
    operator: str
    operand: Expression


@dataclass
class ArrayLiteral(Expression):
    """An array literal ([1, 2, 3])."""
    elements: List[Expression] = field(default_factory=list)


@dataclass
class TupleExpression(Expression):
    """A tuple literal ((1, "a"))."""
    elements: List[Expression] = field(default_factory=list)


@dataclass
class RawExpression(Expression):
    """Any expression the parser does not model; keeps the source text."""
    text: str


# =============================================================================
# MEMBERS
# =============================================================================

@dataclass
class FieldDeclaration(ASTNode):
    """A struct or variant field. name is None for tuple fields."""
    name: Optional[str]
    type_name: TypeName
    doc_comments: List[str] = field(default_factory=list)
    attributes: List[Attribute] = field(default_factory=list)


@dataclass
class EnumVariant(ASTNode):
    """An enum variant. kind is 'unit', 'tuple' or 'struct'."""
    name: str
    kind: str = 'unit'
    fields: List[FieldDeclaration] = field(default_factory=list)
    discriminant: Optional[str] = None
    doc_comments: List[str] = field(default_factory=list)
    attributes: List[Attribute] = field(default_factory=list)


# =============================================================================
# DECLARATIONS
# =============================================================================

@dataclass
class Definition(ASTNode):
    """Common shape of every top-level declaration."""
    name: str
    generics: List[str] = field(default_factory=list)
    doc_comments: List[str] = field(default_factory=list)
    attributes: List[Attribute] = field(default_factory=list)


@dataclass
class StructDefinition(Definition):
    """A struct. kind is 'named', 'tuple' or 'unit'."""
    fields: List[FieldDeclaration] = field(default_factory=list)
    kind: str = 'named'


@dataclass
class EnumDefinition(Definition):
    """An enum with its variants in declaration order."""
    variants: List[EnumVariant] = field(default_factory=list)


@dataclass
class ConstDefinition(Definition):
    """A const item."""
    type_name: Optional[TypeName] = None
    value: Optional[Expression] = None


@dataclass
class TypeAliasDefinition(Definition):
    """A type alias (type Name<T> = Target<T>;)."""
    type_name: Optional[TypeName] = None


@dataclass
class SourceUnit(ASTNode):
    """Root node representing an entire Rust source file; items keep source order."""
    items: List[Definition] = field(default_factory=list)
