"""
Lexer implementation for Rust source code.

The Lexer tokenizes Rust source code into a stream of tokens that can be
consumed by the declaration parser. Only the lexical structure needed to
read type declarations is modelled; anything else is still tokenized so
that the parser can skip over it with balanced delimiters.
"""

from typing import List, Tuple

from .tokens import Token, TokenType, KEYWORDS, TWO_CHAR_OPS, SINGLE_CHAR_OPS


class Lexer:
    """
    Lexer for Rust source code.

    Converts source text into a list of tokens for parsing. Outer doc
    comments are kept as DOC_COMMENT tokens (one per line); every other
    comment is dropped.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def peek(self, offset: int = 0) -> str:
        """Look ahead in the source without consuming."""
        pos = self.pos + offset
        if pos >= len(self.source):
            return ''
        return self.source[pos]

    def advance(self) -> str:
        """Consume and return the current character."""
        ch = self.peek()
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def skip_whitespace(self) -> None:
        """Skip over whitespace characters."""
        ch = self.peek()
        while ch and ch in ' \t\r\n':
            self.advance()
            ch = self.peek()

    # =========================================================================
    # COMMENTS
    # =========================================================================

    def read_line_comment(self) -> None:
        """Read a // comment, emitting a DOC_COMMENT token for /// lines."""
        start_line = self.line
        start_col = self.column
        # //// and longer are ordinary comments
        is_doc = self.peek(2) == '/' and self.peek(3) != '/'
        self.advance()
        self.advance()
        if is_doc:
            self.advance()
        text = ''
        while self.peek() and self.peek() != '\n':
            text += self.advance()
        if is_doc:
            self.tokens.append(Token(TokenType.DOC_COMMENT, text.rstrip('\r'), start_line, start_col))

    def read_block_comment(self) -> None:
        """Read a (possibly nested) block comment.

        /** ... */ blocks are outer doc comments; each inner line becomes a
        DOC_COMMENT token with its leading ' * ' decoration removed.
        """
        start_line = self.line
        start_col = self.column
        is_doc = self.peek(2) == '*' and self.peek(3) not in ('*', '/')
        self.advance()  # skip /
        self.advance()  # skip *
        if is_doc:
            self.advance()

        depth = 1
        text = ''
        while self.peek() and depth > 0:
            if self.peek() == '/' and self.peek(1) == '*':
                depth += 1
                text += self.advance() + self.advance()
            elif self.peek() == '*' and self.peek(1) == '/':
                depth -= 1
                self.advance()
                self.advance()
                if depth > 0:
                    text += '*/'
            else:
                text += self.advance()

        if not is_doc:
            return

        lines = text.split('\n')
        # Drop the blank opening/closing lines of a multi-line block
        if len(lines) > 1 and not lines[0].strip():
            lines = lines[1:]
        if len(lines) > 1 and not lines[-1].strip():
            lines = lines[:-1]
        for offset, raw in enumerate(lines):
            stripped = raw.strip()
            if stripped.startswith('*'):
                stripped = stripped[1:]
            elif raw.startswith(' '):
                stripped = ' ' + stripped
            self.tokens.append(Token(TokenType.DOC_COMMENT, stripped.rstrip(), start_line + offset, start_col))

    # =========================================================================
    # LITERALS
    # =========================================================================

    def read_string(self) -> str:
        """Read a string literal including its quotes."""
        quote = self.advance()
        result = quote
        while self.peek() and self.peek() != quote:
            if self.peek() == '\\':
                result += self.advance()
            result += self.advance()
        if self.peek() == quote:
            result += self.advance()
        return result

    def read_raw_string(self) -> str:
        """Read a raw string literal (r"..." or r#"..."#), returning it as a quoted string."""
        self.advance()  # skip r
        hashes = 0
        while self.peek() == '#':
            hashes += 1
            self.advance()
        self.advance()  # opening quote
        terminator = '"' + '#' * hashes
        body = ''
        while self.peek():
            if self.source.startswith(terminator, self.pos):
                for _ in terminator:
                    self.advance()
                break
            body += self.advance()
        escaped = body.replace('\\', '\\\\').replace('"', '\\"')
        return f'"{escaped}"'

    def read_char_or_lifetime(self) -> Tuple[str, TokenType]:
        """Read either a char literal ('a', '\\n') or a lifetime ('a, 'static)."""
        if self.peek(1) == '\\' or (self.peek(1) and self.peek(2) == "'"):
            return self.read_string(), TokenType.CHAR_LITERAL
        result = self.advance()
        result += self.read_identifier()
        return result, TokenType.LIFETIME

    def read_number(self) -> str:
        """Read a numeric literal, keeping any type suffix (10u32, 1.5f64)."""
        result = ''
        if self.peek() == '0' and self.peek(1) in ('x', 'o', 'b'):
            result += self.advance()
            result += self.advance()
            while self.peek() and (self.peek().isalnum() or self.peek() == '_'):
                result += self.advance()
            return result

        while self.peek() and self.peek() in '0123456789_':
            result += self.advance()
        # Handle decimal point (but not ranges or method calls)
        if self.peek() == '.' and self.peek(1) in '0123456789' and self.peek(1):
            result += self.advance()
            while self.peek() and self.peek() in '0123456789_':
                result += self.advance()
        # Handle exponent
        if self.peek() in ('e', 'E') and self.peek() and (
            self.peek(1).isdigit() or (self.peek(1) in ('+', '-') and self.peek(1) and self.peek(2).isdigit())
        ):
            result += self.advance()
            if self.peek() in ('+', '-'):
                result += self.advance()
            while self.peek() and self.peek() in '0123456789_':
                result += self.advance()
        # Type suffix
        while self.peek() and (self.peek().isalnum() or self.peek() == '_'):
            result += self.advance()
        return result

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        result = ''
        while self.peek() and (self.peek().isalnum() or self.peek() == '_'):
            result += self.advance()
        return result

    # =========================================================================
    # MAIN LOOP
    # =========================================================================

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source and return a list of tokens.

        Returns:
            List of Token objects, ending with an EOF token.
        """
        while self.pos < len(self.source):
            self.skip_whitespace()

            if self.pos >= len(self.source):
                break

            if self.peek() == '/' and self.peek(1) == '/':
                self.read_line_comment()
                continue
            if self.peek() == '/' and self.peek(1) == '*':
                self.read_block_comment()
                continue

            start_line = self.line
            start_col = self.column
            ch = self.peek()

            # Raw strings, byte strings and raw identifiers
            if ch == 'r' and (self.peek(1) == '"' or (self.peek(1) == '#' and self.peek(2) in ('"', '#'))):
                value = self.read_raw_string()
                self.tokens.append(Token(TokenType.STRING_LITERAL, value, start_line, start_col))
                continue
            if ch == 'b' and self.peek(1) == 'r' and self.peek(2) in ('"', '#') and self.peek(2):
                self.advance()  # skip b
                value = self.read_raw_string()
                self.tokens.append(Token(TokenType.STRING_LITERAL, value, start_line, start_col))
                continue
            if ch == 'b' and self.peek(1) in ('"', "'") and self.peek(1):
                self.advance()  # skip b
                token_type = TokenType.STRING_LITERAL if self.peek() == '"' else TokenType.CHAR_LITERAL
                value = self.read_string()
                self.tokens.append(Token(token_type, value, start_line, start_col))
                continue
            if ch == 'r' and self.peek(1) == '#' and (self.peek(2).isalpha() or self.peek(2) == '_'):
                self.advance()
                self.advance()
                value = self.read_identifier()
                self.tokens.append(Token(TokenType.IDENTIFIER, value, start_line, start_col))
                continue

            # String literals
            if ch == '"':
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING_LITERAL, value, start_line, start_col))
                continue

            # Char literals and lifetimes
            if ch == "'":
                value, token_type = self.read_char_or_lifetime()
                self.tokens.append(Token(token_type, value, start_line, start_col))
                continue

            # Numbers
            if ch.isdigit():
                value = self.read_number()
                self.tokens.append(Token(TokenType.NUMBER, value, start_line, start_col))
                continue

            # Identifiers and keywords
            if ch.isalpha() or ch == '_':
                value = self.read_identifier()
                token_type = KEYWORDS.get(value, TokenType.IDENTIFIER)
                self.tokens.append(Token(token_type, value, start_line, start_col))
                continue

            # Two-character punctuation
            two_char = self.peek() + self.peek(1)
            if two_char in TWO_CHAR_OPS:
                self.advance()
                self.advance()
                self.tokens.append(Token(TWO_CHAR_OPS[two_char], two_char, start_line, start_col))
                continue

            # Single-character punctuation and delimiters
            if ch in SINGLE_CHAR_OPS:
                self.advance()
                self.tokens.append(Token(SINGLE_CHAR_OPS[ch], ch, start_line, start_col))
                continue

            # Anything else is kept so skipped items stay balanced
            self.advance()
            self.tokens.append(Token(TokenType.OTHER, ch, start_line, start_col))

        self.tokens.append(Token(TokenType.EOF, '', self.line, self.column))
        return self.tokens
