"""
Base generator class with shared utilities.

This module provides the BaseGenerator class that contains common utilities
used across all specialized generator classes in the code generation pipeline.
"""

import json
import re
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext, BuildSettings, BuildState

from .casing import Casing, to_case


_PLAIN_PROPERTY = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')


class BaseGenerator:
    """
    Base class for all code generators.

    Provides shared utilities for:
    - Indentation management
    - Access to the settings and output buffer
    - Property name formatting
    """

    def __init__(self, ctx: 'CodeGenerationContext'):
        """
        Initialize the base generator.

        Args:
            ctx: The code generation context containing all state
        """
        self._ctx = ctx

    # =========================================================================
    # CONTEXT ACCESS
    # =========================================================================

    @property
    def settings(self) -> 'BuildSettings':
        """The run-wide settings."""
        return self._ctx.settings

    @property
    def state(self) -> 'BuildState':
        """The output buffer."""
        return self._ctx.state

    @property
    def export(self) -> str:
        """The export prefix for top-level declarations."""
        return self._ctx.settings.export_keyword

    # =========================================================================
    # INDENTATION
    # =========================================================================

    def indent(self, level: int = 1) -> str:
        """Return the indentation string for a nesting level."""
        return self._ctx.indent(level)

    # =========================================================================
    # NAME FORMATTING
    # =========================================================================

    def member_name(self, name: str, casing: Optional[Casing], rename: Optional[str] = None) -> str:
        """The serialized name of a field or variant: rename wins over casing."""
        if rename is not None:
            return rename
        return to_case(name, casing)

    def property_key(self, name: str) -> str:
        """Format a name as an object-type key, quoting it when it is not an identifier."""
        if _PLAIN_PROPERTY.match(name):
            return name
        return json.dumps(name)

    def string_literal(self, value: str) -> str:
        """Format a value as a TypeScript string literal."""
        return json.dumps(value, ensure_ascii=False)
