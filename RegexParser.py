from enum import Enum
from typing import Optional

from RegexAST import ExprNode, SPECIAL_CHARS, Char, Plus, Star, Question, Or, Seq


QUANTIFIERS = {'+': Plus, '*': Star, '?': Question}

# None means groups may nest without limit
DEFAULT_MAX_DEPTH = None


class ParserError(Exception):
    """Base class of every error raised while parsing a pattern.

    pos is the 0-based character offset at which the problem was detected (None
    when the problem is only visible at the end of input), char is the offending
    character where one exists. _ctor_args holds what the concrete class was
    built with, so copies and pickles rebuild the same error.
    """
    pos: Optional[int]
    char: Optional[str]

    def __init__(self, pos: Optional[int] = None, char: Optional[str] = None):
        self.pos = pos
        self.char = char
        self._ctor_args = (pos, char)
        super().__init__(self.message())

    def __reduce__(self):
        return (type(self), self._ctor_args)

    def message(self) -> str:
        return "ParseError: invalid pattern"

    def __str__(self):
        return self.message()

    def __eq__(self, other):
        return (type(self) is type(other)
                and self.pos == other.pos
                and self.char == other.char)

    def __hash__(self):
        return hash((type(self), self.pos, self.char))

    def __repr__(self):
        args = [repr(a) for a in (self.pos, self.char) if a is not None]
        return f"{type(self).__name__}({', '.join(args)})"


class InvalidEscape(ParserError):
    def __init__(self, pos: int, char: str):
        super().__init__(pos, char)

    def message(self):
        return f"ParseError: invalid escape: pos = {self.pos}, char = '{self.char}'"


class InvalidRightParen(ParserError):
    def __init__(self, pos: int):
        super().__init__(pos)
        self._ctor_args = (pos,)

    def message(self):
        return f"ParseError: invalid right parenthesis: pos = {self.pos}"


class NoPrev(ParserError):
    """+, *, ? or | with no expression before it on the current level"""

    def __init__(self, pos: int):
        super().__init__(pos)
        self._ctor_args = (pos,)

    def message(self):
        return f"ParseError: no previous expression: pos = {self.pos}"


class NoRightParen(ParserError):
    def __init__(self):
        super().__init__()
        self._ctor_args = ()

    def message(self):
        return "ParseError: no right parenthesis"


class Empty(ParserError):
    def __init__(self):
        super().__init__()
        self._ctor_args = ()

    def message(self):
        return "ParseError: empty expression"


class NestingTooDeep(ParserError):
    """Only raised when the caller asked for a max_depth"""

    def __init__(self, pos: int, limit: int):
        self.limit = limit
        super().__init__(pos)
        self._ctor_args = (pos, limit)

    def message(self):
        return f"ParseError: nesting too deep: pos = {self.pos}, limit = {self.limit}"

    def __eq__(self, other):
        return super().__eq__(other) and self.limit == other.limit

    def __hash__(self):
        return hash((type(self), self.pos, self.limit))

    def __repr__(self):
        return f"NestingTooDeep({self.pos!r}, {self.limit!r})"


class ScanMode(Enum):
    Normal = 0
    Escape = 1


def parse_escape(pos: int, c: str) -> ExprNode:
    if c in SPECIAL_CHARS:
        return Char(c)
    raise InvalidEscape(pos, c)


def fold_or(alternatives: list) -> Optional[ExprNode]:
    """Collapse completed alternatives into one node.

    [] gives None, [a] gives a, [a, b, c] gives Or(a, Or(b, c)) so the first
    written alternative is always the outermost left operand.
    """
    if not alternatives:
        return None
    node = alternatives[-1]
    for alternative in reversed(alternatives[:-1]):
        node = Or(alternative, node)
    return node


class RegexParser:
    expr_str: str
    max_depth: Optional[int]
    ast: ExprNode

    def __init__(self, expr_str: str, max_depth: Optional[int] = DEFAULT_MAX_DEPTH):
        if not isinstance(expr_str, str):
            raise TypeError(f'pattern must be a str, not {type(expr_str).__name__}')
        self.expr_str = expr_str
        self.max_depth = max_depth
        self._seq = []
        self._seq_or = []
        self._stack = []
        self.ast = self._parse()

    def _parse(self) -> ExprNode:
        mode = ScanMode.Normal
        for i, c in enumerate(self.expr_str):
            if mode == ScanMode.Escape:
                self._seq.append(parse_escape(i, c))
                mode = ScanMode.Normal
            elif c in QUANTIFIERS:
                self._applyQuantifier(i, c)
            elif c == '(':
                self._openGroup(i)
            elif c == ')':
                self._closeGroup(i)
            elif c == '|':
                self._splitAlternative(i)
            elif c == '\\':
                mode = ScanMode.Escape
            else:
                self._seq.append(Char(c))

        # a backslash left pending at the end of input produces nothing
        if self._stack:
            raise NoRightParen()

        node = self._foldLevel()
        if node is None:
            raise Empty()
        return node

    def _applyQuantifier(self, pos: int, c: str):
        if not self._seq:
            raise NoPrev(pos)
        self._seq.append(QUANTIFIERS[c](self._seq.pop()))

    def _openGroup(self, pos: int):
        if self.max_depth is not None and len(self._stack) >= self.max_depth:
            raise NestingTooDeep(pos, self.max_depth)
        self._stack.append((self._seq, self._seq_or))
        self._seq = []
        self._seq_or = []

    def _closeGroup(self, pos: int):
        if not self._stack:
            raise InvalidRightParen(pos)
        prev, prev_or = self._stack.pop()

        # "()" folds to nothing and adds nothing to the enclosing level
        node = self._foldLevel()
        if node is not None:
            prev.append(node)
        self._seq = prev
        self._seq_or = prev_or

    def _splitAlternative(self, pos: int):
        if not self._seq:
            raise NoPrev(pos)
        self._seq_or.append(Seq(self._seq))
        self._seq = []

    def _foldLevel(self) -> Optional[ExprNode]:
        if self._seq:
            self._seq_or.append(Seq(self._seq))
        return fold_or(self._seq_or)


def parse(expr_str: str, max_depth: Optional[int] = DEFAULT_MAX_DEPTH) -> ExprNode:
    return RegexParser(expr_str, max_depth).ast
