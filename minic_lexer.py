from sly import Lexer
from minic_symbols import Token, TokenKind, MiniCError

'''
Lexer produces tokens for the parser

MiniCLexer holds the token rules, Tokenizer pulls one token at a time out of
the lazy sly generator and turns it into an immutable Token
'''

class LexicalError(MiniCError):
    pass


class MiniCLexer(Lexer):
    # Define names of tokens
    tokens = {IDENFR, INTCON, STRCON, CHARCON,
              CONSTTK, INTTK, CHARTK, VOIDTK, MAINTK, IFTK, ELSETK, DOTK, WHILETK, FORTK, SCANFTK, PRINTFTK, RETURNTK,
              PLUS, MINU, MULT, DIV, LSS, LEQ, GRE, GEQ, EQL, NEQ, ASSIGN,
              SEMICN, COMMA, LPARENT, RPARENT, LBRACK, RBRACK, LBRACE, RBRACE}

    # Specify things to ignore, newlines are counted below
    ignore = ' \t\r\f\v'

    # Literals keep everything between the quotes, newlines included
    @_(r'"[^"]*"')
    def STRCON(self, t):
        self.lineno += t.value.count('\n')
        t.value = t.value[1:-1]
        return t

    @_(r"'[^']*'")
    def CHARCON(self, t):
        self.lineno += t.value.count('\n')
        t.value = t.value[1:-1]
        return t

    IDENFR = r'[a-zA-Z_][a-zA-Z0-9_]*'
    INTCON = r'[0-9]+'

    # Reserved words are remapped from IDENFR
    IDENFR['const'] = CONSTTK
    IDENFR['int'] = INTTK
    IDENFR['char'] = CHARTK
    IDENFR['void'] = VOIDTK
    IDENFR['main'] = MAINTK
    IDENFR['if'] = IFTK
    IDENFR['else'] = ELSETK
    IDENFR['do'] = DOTK
    IDENFR['while'] = WHILETK
    IDENFR['for'] = FORTK
    IDENFR['scanf'] = SCANFTK
    IDENFR['printf'] = PRINTFTK
    IDENFR['return'] = RETURNTK

    # two-character operators must come before their one-character prefixes
    LEQ = r'<='
    GEQ = r'>='
    EQL = r'=='
    NEQ = r'!='
    LSS = r'<'
    GRE = r'>'
    ASSIGN = r'='

    PLUS = r'\+'
    MINU = r'-'
    MULT = r'\*'
    DIV = r'/'
    SEMICN = r';'
    COMMA = r','
    LPARENT = r'\('
    RPARENT = r'\)'
    LBRACK = r'\['
    RBRACK = r'\]'
    LBRACE = r'\{'
    RBRACE = r'\}'

    @_(r'\n+')
    def ignore_newline(self, t):
        self.lineno += len(t.value)

    def error(self, t):
        ch = t.value[0]
        if ch == '"':
            what = 'unterminated string literal'
        elif ch == "'":
            what = 'unterminated character literal'
        elif ch == '!':
            what = "'!' must be followed by '='"
        else:
            what = 'unknown symbol %r' % ch
        raise LexicalError(what, self.lineno, t.index)


class Tokenizer:
    '''
    Pull interface over MiniCLexer.tokenize()

    next_token() returns the tokens in source order, then an EOF token on
    every further call. Nothing is read ahead of the token being returned.
    '''
    def __init__(self, text, lexer=None):
        self.text = text
        self.lexer = lexer if lexer is not None else MiniCLexer()
        self._stream = self.lexer.tokenize(text)
        self._eof = None

    def next_token(self):
        if self._eof is not None:
            return self._eof

        tok = next(self._stream, None)
        if tok is not None:
            return Token(TokenKind[tok.type], tok.value, tok.lineno, tok.index)

        self._eof = Token(TokenKind.EOF, '', self.text.count('\n') + 1, len(self.text))
        return self._eof

    def __iter__(self): # every token up to, not including, EOF
        while True:
            tok = self.next_token()
            if tok.kind is TokenKind.EOF:
                return
            yield tok


def tokenize(text):
    return list(Tokenizer(text))
