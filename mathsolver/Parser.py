# Parser.py
"""
Recursive-descent parser (one token of lookahead).

    expression := term (('+'|'-') term)*
    term       := factor (('*'|'/') factor)*
    factor     := '-' factor
                | postfix ('^' factor)?
    postfix    := primary '!'*
    primary    := NUMBER | CONSTANT | IDENTIFIER
                | FUNCTION '(' expression ')'
                | '(' expression ')'

'^' is right-associative. Unary minus binds looser than '^' and '!'
(-4^2 = -16, -3! = -6) and tighter than the binary operators.
"""

import logging

from . import error as E
from . import Nodes
from .ScientificEngine import function_kind
from .Tokenizer import TokenKind, tokenize

logger = logging.getLogger(__name__)

ADDITIVE = {TokenKind.PLUS: Nodes.BinaryKind.ADD, TokenKind.MINUS: Nodes.BinaryKind.SUB}
MULTIPLICATIVE = {TokenKind.STAR: Nodes.BinaryKind.MUL, TokenKind.SLASH: Nodes.BinaryKind.DIV}


class Parser:
    def __init__(self, text, max_nodes=Nodes.MAX_NODES):
        self.text = text
        self.pool = Nodes.NodePool(max_nodes)
        self._tokens = tokenize(text)
        self._open = 0  # constructs entered but whose node is not built yet
        self.current = next(self._tokens)

    # --- token helpers ---

    def _advance(self):
        token = self.current
        if token.kind != TokenKind.END:
            self.current = next(self._tokens)
        return token

    def _new(self, node_class, *args, span=None, **kwargs):
        return self.pool.new(node_class, *args, span=span, **kwargs)

    def _enter(self, token, nodes_needed=1):
        """Reserve room for a construct before recursing into it."""
        self._open += nodes_needed
        if self.pool.count + self._open > self.pool.capacity:
            raise E.ParseError(f"Expression too large: more than {self.pool.capacity} nodes",
                               kind=E.ErrorKind.NODE_LIMIT_EXCEEDED, span=token.span)

    def _leave(self, nodes_needed=1):
        self._open -= nodes_needed

    def _describe(self, token):
        if token.kind == TokenKind.END:
            return "end of input"
        return f"'{token.text}'"

    def _expect_rparen(self, opening):
        if self.current.kind != TokenKind.RPAREN:
            raise E.ParseError(f"Missing closing parenthesis for '(' at column {opening.span.column}, "
                               f"found {self._describe(self.current)}",
                               kind=E.ErrorKind.UNMATCHED_PAREN, span=self.current.span)
        return self._advance()

    # --- grammar ---

    def parse(self):
        tree = self.parse_expression()
        if self.current.kind != TokenKind.END:
            raise E.ParseError(f"Unexpected input after expression: {self._describe(self.current)}",
                               kind=E.ErrorKind.TRAILING_INPUT, span=self.current.span)
        logger.debug("parsed %r using %d nodes", self.text, self.pool.count)
        return tree

    def parse_expression(self):
        tree = self.parse_term()
        while self.current.kind in ADDITIVE:
            kind = ADDITIVE[self._advance().kind]
            right = self.parse_term()
            tree = self._new(Nodes.BinaryOp, kind, tree, right, span=tree.span.merge(right.span))
        return tree

    def parse_term(self):
        tree = self.parse_factor()
        while self.current.kind in MULTIPLICATIVE:
            kind = MULTIPLICATIVE[self._advance().kind]
            right = self.parse_factor()
            tree = self._new(Nodes.BinaryOp, kind, tree, right, span=tree.span.merge(right.span))
        return tree

    def parse_factor(self):
        if self.current.kind == TokenKind.MINUS:
            minus = self._advance()
            # 0 - operand: two nodes
            self._enter(minus, 2)
            operand = self.parse_factor()
            self._leave(2)
            zero = self._new(Nodes.Number, 0.0, span=minus.span)
            return self._new(Nodes.BinaryOp, Nodes.BinaryKind.SUB, zero, operand,
                             span=minus.span.merge(operand.span), unary=True)

        base = self.parse_postfix()
        if self.current.kind == TokenKind.CARET:
            caret = self._advance()
            self._enter(caret)
            exponent = self.parse_factor()
            self._leave()
            return self._new(Nodes.BinaryOp, Nodes.BinaryKind.POW, base, exponent,
                             span=base.span.merge(exponent.span))
        return base

    def parse_postfix(self):
        tree = self.parse_primary()
        while self.current.kind == TokenKind.BANG:
            bang = self._advance()
            tree = self._new(Nodes.Factorial, tree, span=tree.span.merge(bang.span))
        return tree

    def parse_primary(self):
        token = self.current

        if token.kind == TokenKind.NUMBER:
            self._advance()
            return self._new(Nodes.Number, float(token.text), span=token.span)

        elif token.kind in (TokenKind.CONSTANT, TokenKind.IDENTIFIER):
            self._advance()
            return self._new(Nodes.Variable, token.text, span=token.span)

        elif token.kind == TokenKind.FUNCTION:
            self._advance()
            if self.current.kind != TokenKind.LPAREN:
                raise E.ParseError(f"Missing '(' after function '{token.text}', found {self._describe(self.current)}",
                                   kind=E.ErrorKind.EXPECTED_ARG_LIST, span=self.current.span)
            opening = self._advance()
            self._enter(token)
            argument = self.parse_expression()
            closing = self._expect_rparen(opening)
            self._leave()
            return self._new(Nodes.Function, function_kind(token.text), argument,
                             span=token.span.merge(closing.span))

        elif token.kind == TokenKind.LPAREN:
            opening = self._advance()
            self._enter(opening)
            inner = self.parse_expression()
            closing = self._expect_rparen(opening)
            self._leave()
            return self._new(Nodes.Parenthesis, inner, span=opening.span.merge(closing.span))

        raise E.ParseError(f"Expected a number, variable, function or '(' but found {self._describe(token)}",
                           kind=E.ErrorKind.EXPECTED_OPERAND, span=token.span)


def parse(text, max_nodes=Nodes.MAX_NODES):
    """Parse text into an AST. Raises LexError or ParseError on the first problem."""
    return Parser(text, max_nodes).parse()
