"""
Doc comment rendering.

Turns the ordered doc lines of a declaration, field or variant into a
TypeScript block comment at a given indentation.
"""

from typing import List


def build_indentation(amount: int) -> str:
    """Return `amount` spaces."""
    return ' ' * max(amount, 0)


def render_comments(comments: List[str], indentation_amount: int = 0) -> str:
    """
    Render doc lines as a JSDoc block.

    No lines render nothing, a single line renders on one line, and
    several lines render as a multi-line block with a ' * ' prefix per line.

    Args:
        comments: The doc lines, in source order
        indentation_amount: Number of spaces to indent the block by

    Returns:
        The comment text, newline terminated, or '' when there are no lines
    """
    indentation = build_indentation(indentation_amount)
    if not comments:
        return ''
    if len(comments) == 1:
        return f'{indentation}/** {_escape(comments[0])} */\n'

    lines = [f'{indentation}/**\n']
    for comment in comments:
        line = _escape(comment)
        lines.append(f'{indentation} * {line}\n' if line else f'{indentation} *\n')
    lines.append(f'{indentation} */\n')
    return ''.join(lines)


def _escape(line: str) -> str:
    """Keep a doc line from closing the surrounding block comment."""
    return line.replace('*/', '*\\/')
