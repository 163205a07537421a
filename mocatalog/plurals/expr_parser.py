"""
    Catalog headers specify how to select a plural form with a C expression over the number `n`:

        Plural-Forms: nplurals=3; plural=(n==1 ? 0 : n%10>=2 && n%10<=4 && (n%100<10 || n%100>=20) ? 1 : 2);

    Because the Plural-Forms use C-style ternaries, C integer division and C operator precedence we
    can't eval() them and provide a simple compiler instead: `tokenize` is a cursor producing one token
    at a time, `parse` builds a tree of immutable `Node`s by precedence climbing and `calculate`
    evaluates a tree for a given number.

    The grammar, from the loosest binding level to the tightest:

        conditional := logor ('?' conditional ':' conditional)?
        level 1..10 := level+1 (op level+1)*      (left associative, see PRECEDENCE)
        unary       := ('-' | '~' | '!') unary | value
        value       := NUMBER | 'n' | '(' conditional ')'
"""
import operator
import re
from collections import namedtuple

from mocatalog.exceptions import PluralFormError


INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

# token ids which aren't operator characters
LITERAL = "literal"
VARIABLE = "n"
END = "end"

TWO_CHAR_OPERATORS = ("<<", ">>", "&&", "||", "<=", ">=", "==", "!=")

PRECEDENCE = {
    "*": 10, "/": 10, "%": 10,
    "+": 9, "-": 9,
    "<<": 8, ">>": 8,
    "<": 7, ">": 7, "<=": 7, ">=": 7,
    "==": 6, "!=": 6,
    "&": 5,
    "^": 4,
    "|": 3,
    "&&": 2,
    "||": 1,
}
UNARY_LEVEL = 11

# calculate() recurses once per level of the tree
MAX_DEPTH = 100

UNARY_OPERATORS = ("-", "~", "!")

# node kinds
KIND_LITERAL = "literal"
KIND_VARIABLE = "variable"
KIND_UNARY = "unary"
KIND_BINARY = "binary"
KIND_DIVISION = "division"
KIND_CONDITIONAL = "conditional"

RE_NUMBER = re.compile(r"[0-9]+")


def to_int32(value):
    """ Wrap an arbitrary python int the way a C `int` overflows. """
    return (value - INT_MIN) % 2 ** 32 + INT_MIN


class Token(namedtuple("Token", "id value")):
    __slots__ = ()

    def __repr__(self):
        if self.id == LITERAL:
            return "(literal %s)" % self.value
        return "(%s)" % self.id


class tokenize(object):
    """ Cursor over a Plural-Forms expression.

        `current` is the token under the cursor, `next()` moves to the following one. Tokens are
        only produced when the parser asks for them; to start over construct a new cursor.
    """

    def __init__(self, str_expr):
        self.str_expr = str_expr
        self.pos = 0
        self.current = None
        self.next()

    @property
    def empty(self):
        return self.current.id == END

    def next(self):
        self.current = self._read()
        return self

    def _read(self):
        text, pos = self.str_expr, self.pos
        while pos < len(text) and text[pos].isspace():
            pos += 1

        if pos >= len(text):
            self.pos = pos
            return Token(END, None)

        if text[pos:pos + 2] in TWO_CHAR_OPERATORS:
            self.pos = pos + 2
            return Token(text[pos:pos + 2], None)

        match = RE_NUMBER.match(text, pos)
        if match:
            self.pos = match.end()
            value = int(match.group())
            if value > INT_MAX:
                raise PluralFormError("Number %s is too large for a plural form expression" % match.group())
            return Token(LITERAL, value)

        self.pos = pos + 1
        return Token(text[pos], None)


class Node(namedtuple("Node", "kind id value first second third")):
    """ One node of a compiled expression.

        `kind` says how the node is evaluated, `id` is the operator (or "n"/"literal"), and
        `first`, `second` and `third` are the operands, in source order.
    """
    __slots__ = ()

    def __new__(cls, kind, id, value=None, first=None, second=None, third=None):
        return super(Node, cls).__new__(cls, kind, id, value, first, second, third)

    def __repr__(self):
        if self.kind == KIND_VARIABLE:
            return "(var n)"
        elif self.kind == KIND_LITERAL:
            return "(literal %s)" % self.value
        out = [self.id, self.first, self.second, self.third]
        out = map(str, filter(lambda x: x is not None, out))
        return "(" + " ".join(out) + ")"


def literal(value):
    return Node(KIND_LITERAL, LITERAL, value=value)


def variable():
    return Node(KIND_VARIABLE, VARIABLE)


def unary(id, operand):
    return Node(KIND_UNARY, id, first=operand)


def binary(id, left, right):
    # Division and modulo are checked for a zero divisor when evaluated
    kind = KIND_DIVISION if id in ("/", "%") else KIND_BINARY
    return Node(kind, id, first=left, second=right)


def conditional(condition, then, otherwise):
    return Node(KIND_CONDITIONAL, "?", first=condition, second=then, third=otherwise)


# parser engine
def advance(i, id=None):
    if id and i.current.id != id:
        raise PluralFormError("Expected %r, got %r" % (id, i.current))
    i.next()


def parse_value(i):
    token = i.current
    if token.id == "(":
        advance(i)
        expr = parse_conditional(i)
        advance(i, ")")
        return expr
    elif token.id == LITERAL:
        advance(i)
        return literal(token.value)
    elif token.id == VARIABLE:
        advance(i)
        return variable()
    raise PluralFormError("Unknown operand %r" % (token,))


def parse_unary(i):
    id = i.current.id
    if id in UNARY_OPERATORS:
        advance(i)
        return unary(id, parse_unary(i))
    return parse_value(i)


def parse_binary(i, level=1):
    if level == UNARY_LEVEL:
        return parse_unary(i)

    left = parse_binary(i, level + 1)
    while PRECEDENCE.get(i.current.id) == level:
        id = i.current.id
        advance(i)
        left = binary(id, left, parse_binary(i, level + 1))
    return left


def parse_conditional(i):
    condition = parse_binary(i)
    if i.current.id != "?":
        return condition

    advance(i)
    then = parse_conditional(i)
    advance(i, ":")
    otherwise = parse_conditional(i)
    return conditional(condition, then, otherwise)


def parse(str_expr):
    """ Compile a Plural-Forms expression into a tree of `Node`s.

        Raises PluralFormError for anything that isn't a complete expression, including an empty
        string and leftovers after a valid expression (e.g. "1+2;").
    """
    i = tokenize(str_expr)
    try:
        expr = parse_conditional(i)
    except RecursionError:
        raise PluralFormError("Expression is nested too deeply")
    if not i.empty:
        raise PluralFormError("Unexpected %r after the end of the expression %r" % (i.current, str_expr))
    if depth(expr) > MAX_DEPTH:
        raise PluralFormError("Expression is nested too deeply (more than %d levels)" % MAX_DEPTH)
    return expr


def depth(s):
    """ The number of nodes on the longest path from `s` down to a leaf. """
    deepest = 0
    stack = [(s, 1)]
    while stack:
        node, level = stack.pop()
        deepest = max(deepest, level)
        for child in (node.first, node.second, node.third):
            if child is not None:
                stack.append((child, level + 1))
    return deepest


def _c_div(a, b):
    # C truncates towards zero, python floors
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _c_mod(a, b):
    return a - b * _c_div(a, b)


_unary = {
    "-": operator.neg,
    "~": operator.invert,
    "!": lambda a: int(not a),
}

_binary = {
    "*": operator.mul,
    "/": _c_div,
    "%": _c_mod,
    "+": operator.add,
    "-": operator.sub,
    "<<": lambda a, b: a << (b & 31),
    ">>": lambda a, b: a >> (b & 31),
    "<": lambda a, b: int(a < b),
    ">": lambda a, b: int(a > b),
    "<=": lambda a, b: int(a <= b),
    ">=": lambda a, b: int(a >= b),
    "==": lambda a, b: int(a == b),
    "!=": lambda a, b: int(a != b),
    "&": operator.and_,
    "^": operator.xor,
    "|": operator.or_,
}


def calculate(s, n):
    """ Evaluate the compiled expression `s` for the number `n`, as a 32-bit C int. """
    if s.kind == KIND_VARIABLE:
        return to_int32(int(n))
    elif s.kind == KIND_LITERAL:
        return s.value
    elif s.kind == KIND_CONDITIONAL:
        # Only the selected branch is evaluated, the other one may well divide by zero
        return calculate(s.second, n) if calculate(s.first, n) else calculate(s.third, n)

    a = calculate(s.first, n)
    if s.kind == KIND_UNARY:
        return to_int32(_unary[s.id](a))

    if s.id == "&&":
        return int(bool(a) and bool(calculate(s.second, n)))
    elif s.id == "||":
        return int(bool(a) or bool(calculate(s.second, n)))

    b = calculate(s.second, n)
    if s.kind == KIND_DIVISION and b == 0:
        raise PluralFormError("Division by zero during plural form computation")
    return to_int32(_binary[s.id](a, b))
