"""
Type system module for the Rust to TypeScript translator.

This module provides the wrapper/collection tables used to classify Rust
type paths and the recursive Rust to TypeScript type mapper.
"""

from .mappings import (
    TsType,
    convert_type,
    classify_path,
    render_generics,
    RUST_TO_TS_MAP,
)

__all__ = [
    'TsType',
    'convert_type',
    'classify_path',
    'render_generics',
    'RUST_TO_TS_MAP',
]
