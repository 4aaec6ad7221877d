import pytest

from mathsolver import error as E
from mathsolver.Tokenizer import START, TokenKind, next_token, tokenize


def kinds(text):
    return [token.kind for token in tokenize(text)]


def test_operators_and_punctuation():
    assert kinds("+-*/^(),!") == [
        TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR, TokenKind.SLASH, TokenKind.CARET,
        TokenKind.LPAREN, TokenKind.RPAREN, TokenKind.COMMA, TokenKind.BANG, TokenKind.END,
    ]


def test_numbers_keep_their_text():
    tokens = list(tokenize("12 3.25 .5"))
    assert [(t.kind, t.text) for t in tokens[:-1]] == [
        (TokenKind.NUMBER, "12"), (TokenKind.NUMBER, "3.25"), (TokenKind.NUMBER, ".5"),
    ]


def test_second_decimal_point_starts_a_new_number():
    tokens = list(tokenize("1.2.3"))
    assert [t.text for t in tokens[:-1]] == ["1.2", ".3"]


def test_identifier_classification():
    tokens = list(tokenize("sin cos tan log ln sqrt pi e phi x1 sine Pi _tmp"))
    assert [t.kind for t in tokens[:-1]] == (
        [TokenKind.FUNCTION] * 6 + [TokenKind.CONSTANT] * 3 + [TokenKind.IDENTIFIER] * 4
    )


def test_spans_track_offsets_lines_and_columns():
    tokens = list(tokenize("12 +\n  x"))
    number, plus, name, end = tokens
    assert (number.span.start, number.span.end, number.span.line, number.span.column) == (0, 1, 1, 1)
    assert (plus.span.start, plus.span.line, plus.span.column) == (3, 1, 4)
    assert (name.span.start, name.span.line, name.span.column) == (7, 2, 3)
    assert end.kind == TokenKind.END


def test_unexpected_character_carries_position():
    with pytest.raises(E.LexError) as info:
        list(tokenize("2 $ 3"))
    assert info.value.kind == E.ErrorKind.UNEXPECTED_CHARACTER
    assert info.value.span.start == 2
    assert info.value.span.column == 3


def test_lone_decimal_point_is_rejected():
    with pytest.raises(E.LexError):
        list(tokenize("1 + ."))


def test_end_is_idempotent():
    token, cursor = next_token("7", START)
    assert token.kind == TokenKind.NUMBER
    end, cursor = next_token("7", cursor)
    again, same_cursor = next_token("7", cursor)
    assert end.kind == again.kind == TokenKind.END
    assert same_cursor == cursor


def test_tokenize_is_restartable():
    text = "2 * (x + 1)"
    assert list(tokenize(text)) == list(tokenize(text))
