"""
Attribute interpretation for declarations, fields and variants.

Reads the raw attributes the parser attached to a node and extracts the
facts the emitters need: whether a declaration is marked for export, the
serde casing policy, flatten/rename/skip flags and enum tagging. All
functions here are pure; they never mutate the attributes they read.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from ..parser.ast_nodes import Attribute, AttributeArg
from .casing import Casing, parse_serde_case


SERDE = 'serde'

DEFAULT_EXPORT_MARKER = 'tsync'

# rename(serialize = "a", deserialize = "b")
_SERIALIZE_NAME = re.compile(r'(?<![A-Za-z_])serialize\s*=\s*"((?:[^"\\]|\\.)*)"')


@dataclass(frozen=True)
class DeclarationAttributes:
    """Facts about a top-level declaration."""
    is_exported: bool = False
    casing: Optional[Casing] = None
    tag: Optional[str] = None
    content: Optional[str] = None
    untagged: bool = False


@dataclass(frozen=True)
class FieldAttributes:
    """Facts about a struct or variant field."""
    flatten: bool = False
    rename: Optional[str] = None
    skip: bool = False
    optional: bool = False  # skip_serializing_if: the key may be absent


@dataclass(frozen=True)
class VariantAttributes:
    """Facts about an enum variant."""
    rename: Optional[str] = None
    casing: Optional[Casing] = None  # applies to the variant's own fields
    skip: bool = False


# =============================================================================
# RAW ATTRIBUTE ACCESS
# =============================================================================

def _matches(attribute: Attribute, name: str) -> bool:
    """True for #[name] as well as the path form #[crate::name]."""
    return attribute.name == name or attribute.name.split('::')[-1] == name


def has_attribute(name: str, attributes: List[Attribute]) -> bool:
    """Check whether an attribute such as #[tsync] is present."""
    return any(_matches(a, name) for a in attributes)


def get_attribute_arg(name: str, key: str, attributes: List[Attribute]) -> Optional[AttributeArg]:
    """Find the argument `key` inside any #[name(...)] attribute.

    Returns the argument itself so that bare flags (flatten) can be told
    apart from missing ones.
    """
    for attribute in attributes:
        if not _matches(attribute, name):
            continue
        for arg in attribute.args:
            if arg.key == key:
                return arg
    return None


def get_attribute_value(name: str, key: str, attributes: List[Attribute]) -> Optional[str]:
    """Get the serialized value of #[name(key = "value")], if any."""
    arg = get_attribute_arg(name, key, attributes)
    if arg is None or arg.value is None:
        return None
    value = arg.value
    if value.lstrip().startswith(('serialize', 'deserialize')):
        match = _SERIALIZE_NAME.search(value)
        return match.group(1) if match else None
    return value


def _has_serde_flag(key: str, attributes: List[Attribute]) -> bool:
    return get_attribute_arg(SERDE, key, attributes) is not None


# =============================================================================
# INTERPRETERS
# =============================================================================

def interpret_declaration(
    attributes: List[Attribute],
    export_marker: str = DEFAULT_EXPORT_MARKER,
) -> DeclarationAttributes:
    """Extract export marker, casing and enum tagging from a declaration's attributes."""
    return DeclarationAttributes(
        is_exported=has_attribute(export_marker, attributes),
        casing=parse_serde_case(get_attribute_value(SERDE, 'rename_all', attributes)),
        tag=get_attribute_value(SERDE, 'tag', attributes),
        content=get_attribute_value(SERDE, 'content', attributes),
        untagged=_has_serde_flag('untagged', attributes),
    )


def interpret_field(attributes: List[Attribute]) -> FieldAttributes:
    """Extract flatten/rename/skip facts from a field's attributes."""
    return FieldAttributes(
        flatten=_has_serde_flag('flatten', attributes),
        rename=get_attribute_value(SERDE, 'rename', attributes),
        skip=_has_serde_flag('skip', attributes) or _has_serde_flag('skip_serializing', attributes),
        optional=_has_serde_flag('skip_serializing_if', attributes),
    )


def interpret_variant(attributes: List[Attribute]) -> VariantAttributes:
    """Extract rename/casing/skip facts from a variant's attributes."""
    return VariantAttributes(
        rename=get_attribute_value(SERDE, 'rename', attributes),
        casing=parse_serde_case(get_attribute_value(SERDE, 'rename_all', attributes)),
        skip=_has_serde_flag('skip', attributes) or _has_serde_flag('skip_serializing', attributes),
    )
