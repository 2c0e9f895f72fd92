"""
Rust declaration parser implementation.

The Parser converts a stream of tokens from the Lexer into an Abstract
Syntax Tree (AST) of the top-level type declarations in a Rust source
file. Structs, enums, consts and type aliases are parsed in full; every
other item is skipped with balanced-delimiter skipping.
"""

from typing import List, Optional, Tuple

from ..lexer import Token, TokenType
from ..type_system.mappings import classify_path
from .ast_nodes import (
    # Top-level
    SourceUnit,
    # Attributes
    Attribute,
    AttributeArg,
    # Definitions
    StructDefinition,
    EnumDefinition,
    EnumVariant,
    ConstDefinition,
    TypeAliasDefinition,
    FieldDeclaration,
    # Types
    TypeName,
    PrimitiveType,
    ArrayType,
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


OPENERS = {TokenType.LPAREN: TokenType.RPAREN, TokenType.LBRACE: TokenType.RBRACE,
           TokenType.LBRACKET: TokenType.RBRACKET}
CLOSERS = {TokenType.RPAREN, TokenType.RBRACE, TokenType.RBRACKET}

NO_SPACE_BEFORE = {',', ')', ']', '>', ';', '::', '(', '<', '!', '.'}
NO_SPACE_AFTER = ('(', '[', '<', '::', '&', '*', '.', '!')

RUST_ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', '0': '\0', '\\': '\\', '"': '"', "'": "'"}


class Parser:
    """
    Recursive descent parser for Rust type declarations.

    Parses a stream of tokens into a SourceUnit whose items keep their
    source order.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self, offset: int = 0) -> Token:
        """Look ahead in the token stream without consuming."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def current(self) -> Token:
        """Return the current token."""
        return self.peek()

    def advance(self) -> Token:
        """Consume and return the current token."""
        token = self.current()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current().type in types

    def expect(self, token_type: TokenType, message: str = '') -> Token:
        """Consume the current token if it matches, otherwise raise an error."""
        if self.current().type != token_type:
            raise SyntaxError(
                f"Expected {token_type.name} but got {self.current().type.name} "
                f"at line {self.current().line}, column {self.current().column}: {message}"
            )
        return self.advance()

    # =========================================================================
    # TOP-LEVEL PARSING
    # =========================================================================

    def parse(self) -> SourceUnit:
        """Parse the entire source file into a SourceUnit AST."""
        unit = SourceUnit()

        while not self.match(TokenType.EOF):
            # Inner attributes (#![...]) apply to the file, not to an item
            if self.match(TokenType.HASH) and self.peek(1).type == TokenType.BANG:
                self.advance()
                self.advance()
                self.skip_balanced()
                continue

            docs, attributes = self.parse_outer_attributes()
            self.skip_visibility()

            if self.match(TokenType.STRUCT):
                item = self.parse_struct()
            elif self.match(TokenType.ENUM):
                item = self.parse_enum()
            elif self.match(TokenType.CONST) and self.peek(1).type in (TokenType.IDENTIFIER,):
                item = self.parse_const()
            elif self.match(TokenType.TYPE):
                item = self.parse_type_alias()
            else:
                if not self.match(TokenType.EOF):
                    self.skip_item()
                continue

            item.doc_comments = docs
            item.attributes = attributes
            unit.items.append(item)

        return unit

    def skip_item(self) -> None:
        """Skip an item the translator does not handle (fn, impl, use, mod ...).

        Consumes tokens up to a ';' at depth zero or through the first
        top-level brace block.
        """
        while not self.match(TokenType.EOF):
            if self.match(TokenType.SEMICOLON):
                self.advance()
                return
            if self.match(TokenType.LBRACE):
                self.skip_balanced()
                if self.match(TokenType.SEMICOLON):
                    self.advance()
                return
            if self.match(TokenType.LPAREN, TokenType.LBRACKET):
                self.skip_balanced()
                continue
            if self.match(*CLOSERS):
                # Stray closer; drop it so the loop always progresses
                self.advance()
                return
            self.advance()

    def skip_balanced(self) -> None:
        """Skip a delimited group starting at the current opening token."""
        if self.current().type not in OPENERS:
            self.advance()
            return
        depth = 0
        while not self.match(TokenType.EOF):
            token = self.advance()
            if token.type in OPENERS:
                depth += 1
            elif token.type in CLOSERS:
                depth -= 1
                if depth == 0:
                    return

    def skip_visibility(self) -> None:
        """Skip pub, pub(crate), pub(super), pub(in path)."""
        if self.match(TokenType.PUB):
            self.advance()
            if self.match(TokenType.LPAREN):
                self.skip_balanced()

    # =========================================================================
    # ATTRIBUTES AND DOC COMMENTS
    # =========================================================================

    def parse_outer_attributes(self) -> Tuple[List[str], List[Attribute]]:
        """Collect the doc lines and attributes preceding an item or member."""
        docs: List[str] = []
        attributes: List[Attribute] = []
        while True:
            if self.match(TokenType.DOC_COMMENT):
                docs.append(self._strip_doc(self.advance().value))
            elif self.match(TokenType.HASH) and self.peek(1).type == TokenType.LBRACKET:
                attribute = self.parse_attribute()
                if attribute.name == 'doc' and attribute.args and attribute.args[0].key == '':
                    docs.append(self._strip_doc(attribute.args[0].value or ''))
                else:
                    attributes.append(attribute)
            else:
                return docs, attributes

    @staticmethod
    def _strip_doc(text: str) -> str:
        """Remove the single space conventionally written after ///."""
        if text.startswith(' '):
            return text[1:]
        return text

    def parse_attribute(self) -> Attribute:
        """Parse #[name], #[name(args)] or #[name = "value"]."""
        self.expect(TokenType.HASH)
        self.expect(TokenType.LBRACKET)
        name = self.parse_path()
        args: List[AttributeArg] = []

        if self.match(TokenType.EQ):
            # #[doc = "..."] style; stored as a keyless argument
            self.advance()
            args.append(AttributeArg('', self._unquote(self.advance().value)))
        elif self.match(TokenType.LPAREN):
            self.advance()
            while not self.match(TokenType.RPAREN, TokenType.EOF):
                args.append(self.parse_attribute_arg())
                if self.match(TokenType.COMMA):
                    self.advance()
            self.expect(TokenType.RPAREN, 'closing attribute arguments')

        # Tolerate anything else up to the closing bracket
        while not self.match(TokenType.RBRACKET, TokenType.EOF):
            if self.current().type in OPENERS:
                self.skip_balanced()
            else:
                self.advance()
        self.expect(TokenType.RBRACKET, f'closing attribute #{name}')
        return Attribute(name=name, args=args)

    def parse_attribute_arg(self) -> AttributeArg:
        """Parse one attribute argument: key, key = "value" or key(...)."""
        if self.match(TokenType.STRING_LITERAL):
            return AttributeArg('', self._unquote(self.advance().value))
        key = self.parse_path()
        if self.match(TokenType.EQ):
            self.advance()
            value_token = self.advance()
            if value_token.type == TokenType.STRING_LITERAL:
                return AttributeArg(key, self._unquote(value_token.value))
            return AttributeArg(key, value_token.value)
        if self.match(TokenType.LPAREN):
            # rename(serialize = "a") and similar nested forms
            start = self.pos
            self.skip_balanced()
            inner = ' '.join(t.value for t in self.tokens[start + 1:self.pos - 1])
            return AttributeArg(key, inner)
        if not key:
            # Unexpected token; consume it so the argument loop progresses
            self.advance()
        return AttributeArg(key)

    @staticmethod
    def _unquote(value: str) -> str:
        """Strip the quotes from a string or char literal token and resolve its escapes."""
        if len(value) >= 2 and value[0] == value[-1] and value[0] in '"\'':
            value = value[1:-1]
        result = ''
        i = 0
        while i < len(value):
            ch = value[i]
            if ch != '\\' or i + 1 >= len(value):
                result += ch
                i += 1
                continue
            escape = value[i + 1]
            if escape in RUST_ESCAPES:
                result += RUST_ESCAPES[escape]
                i += 2
            elif escape == 'u' and value[i + 2:i + 3] == '{':
                end = value.find('}', i)
                result += chr(int(value[i + 3:end].replace('_', ''), 16))
                i = end + 1
            elif escape == 'x':
                result += chr(int(value[i + 2:i + 4], 16))
                i += 4
            elif escape == '\n':
                # Line continuation: skip the newline and leading whitespace
                i += 2
                while i < len(value) and value[i] in ' \t\r\n':
                    i += 1
            else:
                result += escape
                i += 2
        return result

    def parse_path(self) -> str:
        """Parse a path such as serde, tsync::tsync or std::collections::HashMap."""
        parts = []
        if self.match(TokenType.COLON_COLON):
            self.advance()
        while self.match(TokenType.IDENTIFIER, TokenType.TYPE, TokenType.CONST, TokenType.ENUM,
                         TokenType.STRUCT, TokenType.IMPL, TokenType.FN, TokenType.DYN):
            parts.append(self.advance().value)
            if self.match(TokenType.COLON_COLON) and self.peek(1).type != TokenType.LT:
                self.advance()
            else:
                break
        return '::'.join(parts)

    # =========================================================================
    # GENERICS
    # =========================================================================

    def parse_generic_params(self) -> List[str]:
        """Parse <'a, T: Bound, const N: usize> keeping only type parameter names."""
        if not self.match(TokenType.LT):
            return []
        self.advance()
        names: List[str] = []
        while not self.match(TokenType.GT, TokenType.EOF):
            if self.match(TokenType.LIFETIME):
                self.advance()
            elif self.match(TokenType.CONST):
                self.advance()
            elif self.match(TokenType.IDENTIFIER):
                names.append(self.advance().value)
            self._skip_until_generic_separator()
            if self.match(TokenType.COMMA):
                self.advance()
        self.expect(TokenType.GT, 'closing generic parameters')
        return names

    def _skip_until_generic_separator(self) -> None:
        """Skip bounds and defaults up to the next ',' or closing '>' at depth zero."""
        depth = 0
        while not self.match(TokenType.EOF):
            if depth == 0 and self.match(TokenType.COMMA, TokenType.GT):
                return
            if self.match(TokenType.LT):
                depth += 1
            elif self.match(TokenType.GT):
                depth -= 1
            elif self.current().type in OPENERS:
                self.skip_balanced()
                continue
            self.advance()

    def skip_where_clause(self) -> None:
        """Skip a where clause up to the item body or terminating ';'."""
        if not self.match(TokenType.WHERE):
            return
        while not self.match(TokenType.LBRACE, TokenType.SEMICOLON, TokenType.EQ, TokenType.EOF):
            if self.match(TokenType.LPAREN, TokenType.LBRACKET):
                self.skip_balanced()
            else:
                self.advance()

    # =========================================================================
    # DEFINITION PARSING
    # =========================================================================

    def parse_struct(self) -> StructDefinition:
        """Parse a named, tuple or unit struct."""
        self.expect(TokenType.STRUCT)
        name = self.expect(TokenType.IDENTIFIER, 'struct name').value
        struct = StructDefinition(name=name, generics=self.parse_generic_params())
        self.skip_where_clause()

        if self.match(TokenType.LBRACE):
            struct.kind = 'named'
            struct.fields = self.parse_named_fields()
        elif self.match(TokenType.LPAREN):
            struct.kind = 'tuple'
            struct.fields = self.parse_tuple_fields()
            self.skip_where_clause()
            self.expect(TokenType.SEMICOLON, f'after tuple struct {name}')
        else:
            struct.kind = 'unit'
            self.expect(TokenType.SEMICOLON, f'after unit struct {name}')
        return struct

    def parse_named_fields(self) -> List[FieldDeclaration]:
        """Parse { a: T, b: U } into field declarations."""
        self.expect(TokenType.LBRACE)
        fields = []
        while not self.match(TokenType.RBRACE, TokenType.EOF):
            docs, attributes = self.parse_outer_attributes()
            if self.match(TokenType.RBRACE):
                break
            self.skip_visibility()
            name = self.expect(TokenType.IDENTIFIER, 'field name').value
            self.expect(TokenType.COLON, f'after field {name}')
            type_name = self.parse_type()
            fields.append(FieldDeclaration(name=name, type_name=type_name,
                                           doc_comments=docs, attributes=attributes))
            if self.match(TokenType.COMMA):
                self.advance()
            elif not self.match(TokenType.RBRACE):
                self.expect(TokenType.COMMA, f'after field {name}')
        self.expect(TokenType.RBRACE)
        return fields

    def parse_tuple_fields(self) -> List[FieldDeclaration]:
        """Parse (T, U) into unnamed field declarations."""
        self.expect(TokenType.LPAREN)
        fields = []
        while not self.match(TokenType.RPAREN, TokenType.EOF):
            docs, attributes = self.parse_outer_attributes()
            if self.match(TokenType.RPAREN):
                break
            self.skip_visibility()
            fields.append(FieldDeclaration(name=None, type_name=self.parse_type(),
                                           doc_comments=docs, attributes=attributes))
            if self.match(TokenType.COMMA):
                self.advance()
            elif not self.match(TokenType.RPAREN):
                self.expect(TokenType.COMMA, 'between tuple fields')
        self.expect(TokenType.RPAREN)
        return fields

    def parse_enum(self) -> EnumDefinition:
        """Parse an enum definition."""
        self.expect(TokenType.ENUM)
        name = self.expect(TokenType.IDENTIFIER, 'enum name').value
        enum = EnumDefinition(name=name, generics=self.parse_generic_params())
        self.skip_where_clause()
        self.expect(TokenType.LBRACE, f'opening enum {name}')

        while not self.match(TokenType.RBRACE, TokenType.EOF):
            docs, attributes = self.parse_outer_attributes()
            if self.match(TokenType.RBRACE):
                break
            variant = EnumVariant(
                name=self.expect(TokenType.IDENTIFIER, f'variant of {name}').value,
                doc_comments=docs,
                attributes=attributes,
            )
            if self.match(TokenType.LBRACE):
                variant.kind = 'struct'
                variant.fields = self.parse_named_fields()
            elif self.match(TokenType.LPAREN):
                variant.kind = 'tuple'
                variant.fields = self.parse_tuple_fields()
            if self.match(TokenType.EQ):
                self.advance()
                variant.discriminant = self._collect_raw_text({TokenType.COMMA, TokenType.RBRACE})
            enum.variants.append(variant)
            if self.match(TokenType.COMMA):
                self.advance()
            elif not self.match(TokenType.RBRACE):
                self.expect(TokenType.COMMA, f'after variant {variant.name}')

        self.expect(TokenType.RBRACE)
        return enum

    def parse_const(self) -> ConstDefinition:
        """Parse const NAME: Type = value;"""
        self.expect(TokenType.CONST)
        name = self.expect(TokenType.IDENTIFIER, 'const name').value
        self.expect(TokenType.COLON, f'after const {name}')
        const = ConstDefinition(name=name, type_name=self.parse_type())
        if self.match(TokenType.EQ):
            self.advance()
            start = self.pos
            const.value = self.parse_expression()
            if not self.match(TokenType.SEMICOLON):
                # Trailing operators etc.: keep the whole initializer as raw text
                self.pos = start
                const.value = RawExpression(self._collect_raw_text({TokenType.SEMICOLON}))
        self.expect(TokenType.SEMICOLON, f'after const {name}')
        return const

    def parse_type_alias(self) -> TypeAliasDefinition:
        """Parse type Name<T> = Target;"""
        self.expect(TokenType.TYPE)
        name = self.expect(TokenType.IDENTIFIER, 'type alias name').value
        alias = TypeAliasDefinition(name=name, generics=self.parse_generic_params())
        self.skip_where_clause()
        self.expect(TokenType.EQ, f'in type alias {name}')
        alias.type_name = self.parse_type()
        self.expect(TokenType.SEMICOLON, f'after type alias {name}')
        return alias

    # =========================================================================
    # TYPE PARSING
    # =========================================================================

    def parse_type(self) -> TypeName:
        """Parse a type expression."""
        # References are transparent: &'a mut T -> T
        if self.match(TokenType.AMPERSAND):
            self.advance()
            if self.match(TokenType.LIFETIME):
                self.advance()
            if self.match(TokenType.MUT):
                self.advance()
            return self.parse_type()

        if self.match(TokenType.LPAREN):
            return self.parse_tuple_type()

        if self.match(TokenType.LBRACKET):
            # [T] slices and [T; N] arrays
            self.advance()
            element = self.parse_type()
            if self.match(TokenType.SEMICOLON):
                self.advance()
                self._collect_raw_text({TokenType.RBRACKET})
            self.expect(TokenType.RBRACKET, 'closing array type')
            return ArrayType(element)

        if self.match(TokenType.BANG):
            self.advance()
            return PrimitiveType('!')

        if self.match(TokenType.STAR, TokenType.FN, TokenType.DYN, TokenType.IMPL, TokenType.LT) or (
            self.match(TokenType.IDENTIFIER) and self.current().value in ('unsafe', 'extern', 'for', '_')
        ):
            return OpaqueType(self._collect_type_text())

        path = self.parse_path()
        if not path:
            raise SyntaxError(
                f"Expected a type but got {self.current().type.name} "
                f"at line {self.current().line}, column {self.current().column}"
            )
        args: List[TypeName] = []
        if self.match(TokenType.COLON_COLON) and self.peek(1).type == TokenType.LT:
            self.advance()  # turbofish
        if self.match(TokenType.LT):
            args = self.parse_generic_args()
        return classify_path(path, args)

    def parse_tuple_type(self) -> TypeName:
        """Parse (), (T) or (A, B, ...)."""
        self.expect(TokenType.LPAREN)
        elements: List[TypeName] = []
        trailing_comma = False
        while not self.match(TokenType.RPAREN, TokenType.EOF):
            elements.append(self.parse_type())
            trailing_comma = False
            if self.match(TokenType.COMMA):
                self.advance()
                trailing_comma = True
            elif not self.match(TokenType.RPAREN):
                self.expect(TokenType.COMMA, 'between tuple elements')
        self.expect(TokenType.RPAREN, 'closing tuple type')
        if not elements:
            return PrimitiveType('()')
        if len(elements) == 1 and not trailing_comma:
            return elements[0]
        return TupleType(elements)

    def parse_generic_args(self) -> List[TypeName]:
        """Parse <A, B> generic arguments, dropping lifetimes, consts and bindings."""
        self.expect(TokenType.LT)
        args: List[TypeName] = []
        while not self.match(TokenType.GT, TokenType.EOF):
            if self.match(TokenType.LIFETIME):
                self.advance()
            elif self.match(TokenType.NUMBER, TokenType.LBRACE, TokenType.MINUS, TokenType.TRUE,
                            TokenType.FALSE, TokenType.CHAR_LITERAL, TokenType.STRING_LITERAL):
                self._skip_until_generic_separator()
            elif self.match(TokenType.IDENTIFIER) and self.peek(1).type in (TokenType.EQ, TokenType.COLON):
                # Associated type binding (Item = T) or bound (Item: Trait)
                self._skip_until_generic_separator()
            else:
                args.append(self.parse_type())
            if self.match(TokenType.COMMA):
                self.advance()
            elif not self.match(TokenType.GT):
                self.expect(TokenType.GT, 'closing generic arguments')
        self.expect(TokenType.GT, 'closing generic arguments')
        return args

    def _collect_type_text(self) -> str:
        """Collect the source text of a type with no structural translation."""
        parts = []
        depth = 0
        while not self.match(TokenType.EOF):
            if depth == 0 and self.match(TokenType.COMMA, TokenType.SEMICOLON, TokenType.EQ,
                                         TokenType.LBRACE, TokenType.RBRACE):
                break
            if depth == 0 and self.match(TokenType.GT, TokenType.RPAREN, TokenType.RBRACKET):
                break
            if self.match(TokenType.LT, TokenType.LPAREN, TokenType.LBRACKET):
                depth += 1
            elif self.match(TokenType.GT, TokenType.RPAREN, TokenType.RBRACKET):
                depth -= 1
            parts.append(self.advance().value)
        return self._join_tokens(parts)

    # =========================================================================
    # EXPRESSION PARSING (const values)
    # =========================================================================

    def parse_expression(self) -> Expression:
        """Parse a const value; unmodelled expressions are kept as raw text."""
        if self.match(TokenType.AMPERSAND):
            self.advance()
            return self.parse_expression()

        if self.match(TokenType.MINUS):
            self.advance()
            return UnaryOperation('-', self.parse_expression())

        if self.match(TokenType.STRING_LITERAL):
            return Literal(self._unquote(self.advance().value), 'string')
        if self.match(TokenType.CHAR_LITERAL):
            return Literal(self._unquote(self.advance().value), 'char')
        if self.match(TokenType.NUMBER):
            return Literal(self.advance().value, 'number')
        if self.match(TokenType.TRUE, TokenType.FALSE):
            return Literal(self.advance().value, 'bool')

        if self.match(TokenType.LBRACKET):
            start = self.pos
            elements = self._parse_expression_list(TokenType.RBRACKET)
            if elements is None:
                self.pos = start
                return RawExpression(self._collect_raw_text({TokenType.SEMICOLON, TokenType.COMMA}))
            return ArrayLiteral(elements)

        if self.match(TokenType.LPAREN):
            start = self.pos
            elements = self._parse_expression_list(TokenType.RPAREN)
            if elements is None:
                self.pos = start
                return RawExpression(self._collect_raw_text({TokenType.SEMICOLON, TokenType.COMMA}))
            if len(elements) == 1:
                return elements[0]
            return TupleExpression(elements)

        return RawExpression(self._collect_raw_text({TokenType.SEMICOLON, TokenType.COMMA}))

    def _parse_expression_list(self, closer: TokenType) -> Optional[List[Expression]]:
        """Parse a delimited, comma separated list; None if it is not a plain list."""
        self.advance()
        elements: List[Expression] = []
        while not self.match(closer, TokenType.EOF):
            elements.append(self.parse_expression())
            if self.match(TokenType.COMMA):
                self.advance()
            elif not self.match(closer):
                # [0; 4] repeat syntax or an operator we do not model
                return None
        self.expect(closer)
        return elements

    def _collect_raw_text(self, terminators: set) -> str:
        """Collect tokens as text up to a terminator at depth zero."""
        parts = []
        depth = 0
        while not self.match(TokenType.EOF):
            if depth == 0 and self.current().type in terminators:
                break
            if depth == 0 and self.current().type in CLOSERS:
                break
            if self.current().type in OPENERS:
                depth += 1
            elif self.current().type in CLOSERS:
                depth -= 1
            parts.append(self.advance().value)
        return self._join_tokens(parts)

    @staticmethod
    def _join_tokens(parts: List[str]) -> str:
        """Join token values back into readable source text."""
        text = ''
        for part in parts:
            if text and text != '-' and part not in NO_SPACE_BEFORE and not text.endswith(NO_SPACE_AFTER):
                text += ' '
            text += part
        return text
