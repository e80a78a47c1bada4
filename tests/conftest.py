import pytest

from minic_symbols import Token, TokenKind
from minic_buffer import TokenBuffer
from minic_lexer import Tokenizer
from minic_parser import MiniCParser


class ListTokenizer:
    '''hands out a fixed list of tokens, then EOF, counting every fetch'''
    def __init__(self, tokens):
        self.tokens = list(tokens)
        self.fetches = 0

    def next_token(self):
        self.fetches += 1
        if self.tokens:
            return self.tokens.pop(0)
        return Token(TokenKind.EOF, '', 1, 0)


def make_tokens(*pairs):
    return [Token(kind, lexeme, 1, i) for i, (kind, lexeme) in enumerate(pairs)]


@pytest.fixture
def seeded():
    '''buffer over a literal token sequence given as (kind, lexeme) pairs'''
    def build(*pairs):
        return TokenBuffer(ListTokenizer(make_tokens(*pairs)))
    return build


@pytest.fixture
def parser_for():
    '''parser over the tokens of a source fragment'''
    def build(text):
        return MiniCParser(TokenBuffer(Tokenizer(text)))
    return build
