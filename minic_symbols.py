import enum
from collections import namedtuple

'''
Vocabulary shared by the lexer, the lookahead buffer and the parser

TokenKind values are the exact text written for a terminal record,
Nonterminal values are the tags written for a completed production
'''

# helper class for Enum, the value of each member is its own name
class AutoName(enum.Enum):
    def _generate_next_value_(name, start, count, last_values):
        return name


class TokenKind(AutoName):
    IDENFR = enum.auto()
    INTCON = enum.auto()
    STRCON = enum.auto()
    CHARCON = enum.auto()

    # reserved words
    CONSTTK = enum.auto()
    INTTK = enum.auto()
    CHARTK = enum.auto()
    VOIDTK = enum.auto()
    MAINTK = enum.auto()
    IFTK = enum.auto()
    ELSETK = enum.auto()
    DOTK = enum.auto()
    WHILETK = enum.auto()
    FORTK = enum.auto()
    SCANFTK = enum.auto()
    PRINTFTK = enum.auto()
    RETURNTK = enum.auto()

    # operators and punctuation
    PLUS = enum.auto()
    MINU = enum.auto()
    MULT = enum.auto()
    DIV = enum.auto()
    LSS = enum.auto()
    LEQ = enum.auto()
    GRE = enum.auto()
    GEQ = enum.auto()
    EQL = enum.auto()
    NEQ = enum.auto()
    ASSIGN = enum.auto()
    SEMICN = enum.auto()
    COMMA = enum.auto()
    LPARENT = enum.auto()
    RPARENT = enum.auto()
    LBRACK = enum.auto()
    RBRACK = enum.auto()
    LBRACE = enum.auto()
    RBRACE = enum.auto()

    EOF = enum.auto()


# kinds that can start a declaration, a relation and a signed value
TYPE_KINDS = frozenset({TokenKind.INTTK, TokenKind.CHARTK})
RELATION_KINDS = frozenset({TokenKind.LSS, TokenKind.LEQ, TokenKind.GRE, TokenKind.GEQ, TokenKind.EQL, TokenKind.NEQ})
SIGN_KINDS = frozenset({TokenKind.PLUS, TokenKind.MINU})
MULTIPLY_KINDS = frozenset({TokenKind.MULT, TokenKind.DIV})


class Nonterminal(enum.Enum):
    PROGRAM = '<程序>'
    CONST_DECLARATION = '<常量说明>'
    CONST_DEFINITION = '<常量定义>'
    UNSIGNED_INTEGER = '<无符号整数>'
    INTEGER = '<整数>'
    VARIABLE_DECLARATION = '<变量说明>'
    VARIABLE_DEFINITION = '<变量定义>'
    DECLARATION_HEAD = '<声明头部>'
    RETURN_FUNCTION = '<有返回值函数定义>'
    VOID_FUNCTION = '<无返回值函数定义>'
    MAIN_FUNCTION = '<主函数>'
    PARAMETER_TABLE = '<参数表>'
    COMPOUND_STATEMENT = '<复合语句>'
    STATEMENT_LIST = '<语句列>'
    STATEMENT = '<语句>'
    ASSIGNMENT_STATEMENT = '<赋值语句>'
    CONDITIONAL_STATEMENT = '<条件语句>'
    CONDITION = '<条件>'
    LOOP_STATEMENT = '<循环语句>'
    STEP = '<步长>'
    READ_STATEMENT = '<读语句>'
    WRITE_STATEMENT = '<写语句>'
    RETURN_STATEMENT = '<返回语句>'
    EXPRESSION = '<表达式>'
    TERM = '<项>'
    FACTOR = '<因子>'
    RETURN_CALL = '<有返回值函数调用语句>'
    VOID_CALL = '<无返回值函数调用语句>'
    ARGUMENT_TABLE = '<值参数表>'
    STRING = '<字符串>'


# lineno is 1-based, index is the 0-based offset of the first character in the source
Token = namedtuple('Token', ['kind', 'lexeme', 'lineno', 'index'])


class MiniCError(Exception):
    '''base class of every error raised while reading a MiniC program'''
    def __init__(self, message, lineno=0, index=0):
        super().__init__(message)
        self.message = message
        self.lineno = lineno
        self.index = index
