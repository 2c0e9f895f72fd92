"""
Type mappings and conversion utilities for Rust to TypeScript.

This module contains the tables that classify Rust type paths (wrappers,
collections, primitives) and the recursive mapper that renders a type
expression as a TypeScript type plus an optionality flag.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from ..parser.ast_nodes import (
    TypeName,
    PathType,
    PrimitiveType,
    OptionalType,
    ArrayType,
    SetType,
    MapType,
    TupleType,
    OpaqueType,
)


# =============================================================================
# TYPE MAPPING CONSTANTS
# =============================================================================

# Base Rust to TypeScript type mapping
RUST_TO_TS_MAP = {
    # Integer and float types -> number
    'i8': 'number',
    'i16': 'number',
    'i32': 'number',
    'i64': 'number',
    'i128': 'number',
    'isize': 'number',
    'u8': 'number',
    'u16': 'number',
    'u32': 'number',
    'u64': 'number',
    'u128': 'number',
    'usize': 'number',
    'f32': 'number',
    'f64': 'number',
    # Boolean
    'bool': 'boolean',
    # Strings and string-serialized types
    'String': 'string',
    'str': 'string',
    'char': 'string',
    'Path': 'string',
    'PathBuf': 'string',
    'Uuid': 'string',
    'NaiveDate': 'string',
    'NaiveTime': 'string',
    'NaiveDateTime': 'string',
    'DateTime': 'string',
    # Special types
    '()': 'null',
    '!': 'never',
    'serde_json::Value': 'unknown',
}

OPTION_TYPES = {'Option'}

# Serialized as JSON arrays
SEQUENCE_TYPES = {'Vec', 'VecDeque', 'LinkedList', 'BinaryHeap', 'SmallVec'}

SET_TYPES = {'HashSet', 'BTreeSet', 'IndexSet', 'FxHashSet'}

MAP_TYPES = {'HashMap', 'BTreeMap', 'IndexMap', 'FxHashMap'}

# Smart pointers and cells serialize as their contents
TRANSPARENT_TYPES = {'Box', 'Rc', 'Arc', 'Cow', 'Cell', 'RefCell', 'Mutex', 'RwLock'}

# Generic over a time zone or offset but serialized as a string whatever the argument
STRING_TYPES = {'DateTime'}

# Paths that are only recognised when written fully qualified
QUALIFIED_PRIMITIVES = {'serde_json::Value'}


# =============================================================================
# PATH CLASSIFICATION
# =============================================================================

def classify_path(path: str, args: List[TypeName]) -> TypeName:
    """
    Turn a parsed type path into a type expression node.

    Wrapper and collection types are recognised by the last path segment,
    so std::collections::HashMap and HashMap classify the same way.

    Args:
        path: The full path as written (e.g. 'std::vec::Vec')
        args: The parsed generic type arguments of the last segment

    Returns:
        The classified TypeName node
    """
    if path in QUALIFIED_PRIMITIVES:
        return PrimitiveType(path)

    name = path.split('::')[-1]

    if name in OPTION_TYPES and len(args) == 1:
        return OptionalType(args[0])
    if name in SEQUENCE_TYPES and args:
        return ArrayType(args[0])
    if name in SET_TYPES and args:
        return SetType(args[0])
    if name in MAP_TYPES and len(args) >= 2:
        return MapType(args[0], args[1])
    if name in TRANSPARENT_TYPES and args:
        # Cow<'a, str>: lifetimes are already dropped, the payload is last
        return args[-1]
    if name in STRING_TYPES:
        return PrimitiveType(name)
    if name in RUST_TO_TS_MAP and not args:
        return PrimitiveType(name)

    return PathType(name, list(args))


# =============================================================================
# TYPE CONVERSION FUNCTIONS
# =============================================================================

@dataclass
class TsType:
    """A rendered TypeScript type and whether the value may be absent."""
    ts_type: str
    is_optional: bool = False


def convert_type(
    type_name: TypeName,
    on_unmapped: Optional[Callable[[str], None]] = None,
) -> TsType:
    """
    Convert a Rust type expression to its TypeScript equivalent.

    Option<T> is never rendered at the top level; it only sets
    is_optional. Nested optionals (inside collections, tuples or generic
    arguments) have no field to carry a marker and render as 'T | null'.
    Anything without a known mapping is passed through unchanged and
    reported to on_unmapped.

    Args:
        type_name: The type expression to convert
        on_unmapped: Optional callback receiving the text of unmapped types

    Returns:
        The TsType with the rendered type and optionality flag
    """
    if isinstance(type_name, OptionalType):
        inner = convert_type(type_name.inner, on_unmapped)
        return TsType(inner.ts_type, True)

    if isinstance(type_name, ArrayType):
        element = _convert_nested(type_name.element, on_unmapped)
        if ' | ' in element or ' & ' in element:
            element = f'({element})'
        return TsType(f'{element}[]')

    if isinstance(type_name, SetType):
        return TsType(f'Set<{_convert_nested(type_name.element, on_unmapped)}>')

    if isinstance(type_name, MapType):
        key = _convert_nested(type_name.key, on_unmapped)
        value = _convert_nested(type_name.value, on_unmapped)
        return TsType(f'Record<{key}, {value}>')

    if isinstance(type_name, TupleType):
        elements = [_convert_nested(e, on_unmapped) for e in type_name.elements]
        return TsType(f'[{", ".join(elements)}]')

    if isinstance(type_name, PrimitiveType):
        ts_type = RUST_TO_TS_MAP.get(type_name.name)
        if ts_type is None:
            if on_unmapped:
                on_unmapped(type_name.name)
            return TsType(type_name.name)
        return TsType(ts_type)

    if isinstance(type_name, PathType):
        if not type_name.args:
            return TsType(type_name.name)
        args = [_convert_nested(a, on_unmapped) for a in type_name.args]
        return TsType(f'{type_name.name}<{", ".join(args)}>')

    if isinstance(type_name, OpaqueType):
        if on_unmapped:
            on_unmapped(type_name.text)
        return TsType(type_name.text)

    # Unknown node type - best effort
    if on_unmapped:
        on_unmapped(type(type_name).__name__)
    return TsType('unknown')


def _convert_nested(type_name: TypeName, on_unmapped: Optional[Callable[[str], None]]) -> str:
    """Render a type in a position that cannot carry a '?' marker."""
    converted = convert_type(type_name, on_unmapped)
    if converted.is_optional:
        return f'{converted.ts_type} | null'
    return converted.ts_type


def render_generics(generics: List[str]) -> str:
    """Render a generic parameter list ('<T, U>'), or '' when there are none."""
    if not generics:
        return ''
    return f'<{", ".join(generics)}>'
