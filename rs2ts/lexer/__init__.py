"""
Lexer module for the Rust to TypeScript translator.

This module provides tokenization of Rust source code.
"""

from .tokens import TokenType, Token, KEYWORDS, TWO_CHAR_OPS, SINGLE_CHAR_OPS
from .lexer import Lexer

__all__ = [
    'TokenType',
    'Token',
    'KEYWORDS',
    'TWO_CHAR_OPS',
    'SINGLE_CHAR_OPS',
    'Lexer',
]
