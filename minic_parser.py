from functools import partial

from minic_symbols import TokenKind, Nonterminal, MiniCError, TYPE_KINDS, RELATION_KINDS, SIGN_KINDS, MULTIPLY_KINDS
from minic_lexer import Tokenizer
from minic_buffer import TokenBuffer
from minic_trace import Trace

'''
Parser walks the token stream top-down, one method per nonterminal

Each method starts on the first token of its production, matches the tokens
the production implies, and records its own nonterminal after all of its
children. The only state is the token buffer cursor and the call stack.

Calls at statement position are always recorded as calls without a return
value and calls inside a factor as calls with one: both are spelled
identifier ( arguments ) and there is no symbol table to tell them apart.
'''

class ParseError(MiniCError):
    def __init__(self, expected, token, position):
        self.expected = expected
        self.token = token
        self.position = position

        if token.kind is TokenKind.EOF:
            found = 'end of input'
        else:
            found = "%s '%s'" % (token.kind.value, token.lexeme)
        super().__init__('expected %s but found %s (token %d)' % (expected, found, position), token.lineno, token.index)


class MiniCParser:
    def __init__(self, tokens, trace=None):
        self.tokens = tokens
        self.trace = trace if trace is not None else Trace()

        # the keys double as the FIRST set of <语句>
        self.statement_rules = {
            TokenKind.IFTK: (self.conditional_statement, False),
            TokenKind.WHILETK: (self.loop_statement, False),
            TokenKind.DOTK: (self.loop_statement, False),
            TokenKind.FORTK: (self.loop_statement, False),
            TokenKind.LBRACE: (self._block, False),
            TokenKind.SCANFTK: (self.read_statement, True),
            TokenKind.PRINTFTK: (self.write_statement, True),
            TokenKind.RETURNTK: (self.return_statement, True),
            TokenKind.SEMICN: (None, True), # empty statement
            TokenKind.IDENFR: (self._identifier_statement, True),
        }

        self.factor_rules = {
            TokenKind.IDENFR: self._identifier_factor,
            TokenKind.LPARENT: self._parenthesized,
            TokenKind.INTCON: self.integer,
            TokenKind.PLUS: self.integer,
            TokenKind.MINU: self.integer,
            TokenKind.CHARCON: partial(self.match, TokenKind.CHARCON),
        }

        self.loop_rules = {
            TokenKind.WHILETK: self._while_loop,
            TokenKind.DOTK: self._do_loop,
            TokenKind.FORTK: self._for_loop,
        }

    ### Helpers ###

    @property
    def current(self):
        return self.tokens.peek(1)

    # the token k places after the current one
    def lookahead(self, k=1):
        return self.tokens.peek(k + 1)

    def at(self, *kinds):
        return self.current.kind in kinds

    def error(self, expected):
        return ParseError(expected, self.current, self.tokens.position)

    # record the current token and move past it, checking its kind if one is given
    def match(self, kind=None):
        tok = self.current
        if kind is not None and tok.kind is not kind:
            raise self.error(kind.value)
        self.trace.terminal(tok)
        self.tokens.advance()
        return tok

    def match_type(self):
        if self.current.kind not in TYPE_KINDS:
            raise self.error('a type (INTTK or CHARTK)')
        return self.match()

    def emit(self, nonterminal):
        self.trace.nonterminal(nonterminal)

    # int/char IDENFR ( ... starts a function definition, anything else a variable
    def function_ahead(self):
        return self.lookahead(2).kind is TokenKind.LPARENT

    def select(self, rules, expected):
        try:
            return rules[self.current.kind]
        except KeyError:
            raise self.error(expected) from None

    ### Productions ###

    def parse(self):
        try:
            self.program()
        except RecursionError:
            tok = self.current
            raise MiniCError('program nested too deeply (token %d)' % self.tokens.position, tok.lineno, tok.index) from None
        if not self.at(TokenKind.EOF):
            raise self.error('end of input')
        return self.trace

    # <程序> -> [<常量说明>] [<变量说明>] {<有返回值函数定义> | <无返回值函数定义>} <主函数>
    def program(self):
        if self.at(TokenKind.CONSTTK):
            self.const_declaration()

        if self.current.kind in TYPE_KINDS and not self.function_ahead():
            self.variable_declaration()

        while self.current.kind in TYPE_KINDS or self.at(TokenKind.VOIDTK):
            if self.at(TokenKind.VOIDTK):
                if self.lookahead().kind is TokenKind.MAINTK:
                    break # the rest is the entry function
                self.void_function()
            else:
                self.return_function()

        self.main_function()
        self.emit(Nonterminal.PROGRAM)

    # <常量说明> -> const <常量定义> ; {const <常量定义> ;}
    def const_declaration(self):
        while True:
            self.match(TokenKind.CONSTTK)
            self.const_definition()
            self.match(TokenKind.SEMICN)
            if not self.at(TokenKind.CONSTTK):
                break
        self.emit(Nonterminal.CONST_DECLARATION)

    # <常量定义> -> int IDENFR = <整数> {, IDENFR = <整数>} | char IDENFR = CHARCON {, IDENFR = CHARCON}
    def const_definition(self):
        if self.at(TokenKind.INTTK):
            value = self.integer
        elif self.at(TokenKind.CHARTK):
            value = partial(self.match, TokenKind.CHARCON)
        else:
            raise self.error('a type (INTTK or CHARTK)')
        self.match()

        while True:
            self.match(TokenKind.IDENFR)
            self.match(TokenKind.ASSIGN)
            value()
            if not self.at(TokenKind.COMMA):
                break
            self.match(TokenKind.COMMA)
        self.emit(Nonterminal.CONST_DEFINITION)

    # <无符号整数> -> INTCON
    def unsigned_integer(self):
        self.match(TokenKind.INTCON)
        self.emit(Nonterminal.UNSIGNED_INTEGER)

    # <整数> -> [+|-] <无符号整数>
    def integer(self):
        if self.current.kind in SIGN_KINDS:
            self.match()
        self.unsigned_integer()
        self.emit(Nonterminal.INTEGER)

    # <变量说明> -> <变量定义> ; {<变量定义> ;}
    # stops in front of the first function definition
    def variable_declaration(self):
        while True:
            self.variable_definition()
            self.match(TokenKind.SEMICN)
            if self.current.kind not in TYPE_KINDS or self.function_ahead():
                break
        self.emit(Nonterminal.VARIABLE_DECLARATION)

    # <变量定义> -> type IDENFR ['[' <无符号整数> ']'] {, IDENFR ['[' <无符号整数> ']']}
    def variable_definition(self):
        self.match_type()
        while True:
            self.match(TokenKind.IDENFR)
            if self.at(TokenKind.LBRACK):
                self.match(TokenKind.LBRACK)
                self.unsigned_integer()
                self.match(TokenKind.RBRACK)
            if not self.at(TokenKind.COMMA):
                break
            self.match(TokenKind.COMMA)
        self.emit(Nonterminal.VARIABLE_DEFINITION)

    # <声明头部> -> int IDENFR | char IDENFR
    def declaration_head(self):
        self.match_type()
        self.match(TokenKind.IDENFR)
        self.emit(Nonterminal.DECLARATION_HEAD)

    # ( <参数表> ) { <复合语句> }, shared by every function definition
    def _function_body(self, parameters=True):
        self.match(TokenKind.LPARENT)
        if parameters:
            self.parameter_table()
        self.match(TokenKind.RPARENT)
        self.match(TokenKind.LBRACE)
        self.compound_statement()
        self.match(TokenKind.RBRACE)

    # <有返回值函数定义> -> <声明头部> ( <参数表> ) { <复合语句> }
    def return_function(self):
        self.declaration_head()
        self._function_body()
        self.emit(Nonterminal.RETURN_FUNCTION)

    # <无返回值函数定义> -> void IDENFR ( <参数表> ) { <复合语句> }
    def void_function(self):
        self.match(TokenKind.VOIDTK)
        self.match(TokenKind.IDENFR)
        self._function_body()
        self.emit(Nonterminal.VOID_FUNCTION)

    # <主函数> -> void main ( ) { <复合语句> }
    def main_function(self):
        self.match(TokenKind.VOIDTK)
        self.match(TokenKind.MAINTK)
        self._function_body(parameters=False)
        self.emit(Nonterminal.MAIN_FUNCTION)

    # <参数表> -> type IDENFR {, type IDENFR} | epsilon
    def parameter_table(self):
        if self.current.kind in TYPE_KINDS:
            self.match_type()
            self.match(TokenKind.IDENFR)
            while self.at(TokenKind.COMMA):
                self.match(TokenKind.COMMA)
                self.match_type()
                self.match(TokenKind.IDENFR)
        self.emit(Nonterminal.PARAMETER_TABLE)

    # <复合语句> -> [<常量说明>] [<变量说明>] <语句列>
    def compound_statement(self):
        if self.at(TokenKind.CONSTTK):
            self.const_declaration()
        if self.current.kind in TYPE_KINDS:
            self.variable_declaration()
        self.statement_list()
        self.emit(Nonterminal.COMPOUND_STATEMENT)

    # <语句列> -> {<语句>}
    def statement_list(self):
        while self.current.kind in self.statement_rules:
            self.statement()
        self.emit(Nonterminal.STATEMENT_LIST)

    # <语句> -> <条件语句> | <循环语句> | { <语句列> } | <读语句> ; | <写语句> ; | <返回语句> ;
    #         | ; | <赋值语句> ; | <无返回值函数调用语句> ;
    def statement(self):
        rule, terminated = self.select(self.statement_rules, 'a statement')
        if rule is not None:
            rule()
        if terminated:
            self.match(TokenKind.SEMICN)
        self.emit(Nonterminal.STATEMENT)

    def _block(self):
        self.match(TokenKind.LBRACE)
        self.statement_list()
        self.match(TokenKind.RBRACE)

    # IDENFR ( is a call, anything else an assignment
    def _identifier_statement(self):
        if self.lookahead().kind is TokenKind.LPARENT:
            self.void_call()
        else:
            self.assignment_statement()

    # <赋值语句> -> IDENFR = <表达式> | IDENFR [ <表达式> ] = <表达式>
    def assignment_statement(self):
        self.match(TokenKind.IDENFR)
        if self.at(TokenKind.LBRACK):
            self.match(TokenKind.LBRACK)
            self.expression()
            self.match(TokenKind.RBRACK)
        self.match(TokenKind.ASSIGN)
        self.expression()
        self.emit(Nonterminal.ASSIGNMENT_STATEMENT)

    # <条件语句> -> if ( <条件> ) <语句> [else <语句>]
    def conditional_statement(self):
        self.match(TokenKind.IFTK)
        self.match(TokenKind.LPARENT)
        self.condition()
        self.match(TokenKind.RPARENT)
        self.statement()
        if self.at(TokenKind.ELSETK):
            self.match(TokenKind.ELSETK)
            self.statement()
        self.emit(Nonterminal.CONDITIONAL_STATEMENT)

    # <条件> -> <表达式> [relation <表达式>]
    def condition(self):
        self.expression()
        if self.current.kind in RELATION_KINDS:
            self.match()
            self.expression()
        self.emit(Nonterminal.CONDITION)

    # <循环语句> -> while ( <条件> ) <语句>
    #             | do <语句> while ( <条件> )
    #             | for ( IDENFR = <表达式> ; <条件> ; IDENFR = IDENFR (+|-) <步长> ) <语句>
    def loop_statement(self):
        loop = self.select(self.loop_rules, 'a loop (WHILETK, DOTK or FORTK)')
        loop()
        self.emit(Nonterminal.LOOP_STATEMENT)

    def _while_loop(self):
        self.match(TokenKind.WHILETK)
        self.match(TokenKind.LPARENT)
        self.condition()
        self.match(TokenKind.RPARENT)
        self.statement()

    def _do_loop(self):
        self.match(TokenKind.DOTK)
        self.statement()
        self.match(TokenKind.WHILETK)
        self.match(TokenKind.LPARENT)
        self.condition()
        self.match(TokenKind.RPARENT)

    def _for_loop(self):
        self.match(TokenKind.FORTK)
        self.match(TokenKind.LPARENT)
        self.match(TokenKind.IDENFR)
        self.match(TokenKind.ASSIGN)
        self.expression()
        self.match(TokenKind.SEMICN)
        self.condition()
        self.match(TokenKind.SEMICN)
        self.match(TokenKind.IDENFR)
        self.match(TokenKind.ASSIGN)
        self.match(TokenKind.IDENFR)
        if self.current.kind not in SIGN_KINDS:
            raise self.error('PLUS or MINU')
        self.match()
        self.step()
        self.match(TokenKind.RPARENT)
        self.statement()

    # <步长> -> <无符号整数>
    def step(self):
        self.unsigned_integer()
        self.emit(Nonterminal.STEP)

    # <读语句> -> scanf ( IDENFR {, IDENFR} )
    def read_statement(self):
        self.match(TokenKind.SCANFTK)
        self.match(TokenKind.LPARENT)
        self.match(TokenKind.IDENFR)
        while self.at(TokenKind.COMMA):
            self.match(TokenKind.COMMA)
            self.match(TokenKind.IDENFR)
        self.match(TokenKind.RPARENT)
        self.emit(Nonterminal.READ_STATEMENT)

    # <写语句> -> printf ( STRCON [, <表达式>] ) | printf ( <表达式> )
    def write_statement(self):
        self.match(TokenKind.PRINTFTK)
        self.match(TokenKind.LPARENT)
        if self.at(TokenKind.STRCON):
            self.match(TokenKind.STRCON)
            self.emit(Nonterminal.STRING)
            if self.at(TokenKind.COMMA):
                self.match(TokenKind.COMMA)
                self.expression()
        else:
            self.expression()
        self.match(TokenKind.RPARENT)
        self.emit(Nonterminal.WRITE_STATEMENT)

    # <返回语句> -> return [( <表达式> )]
    def return_statement(self):
        self.match(TokenKind.RETURNTK)
        if self.at(TokenKind.LPARENT):
            self.match(TokenKind.LPARENT)
            self.expression()
            self.match(TokenKind.RPARENT)
        self.emit(Nonterminal.RETURN_STATEMENT)

    # <表达式> -> [+|-] <项> {(+|-) <项>}
    def expression(self):
        if self.current.kind in SIGN_KINDS:
            self.match()
        self.term()
        while self.current.kind in SIGN_KINDS:
            self.match()
            self.term()
        self.emit(Nonterminal.EXPRESSION)

    # <项> -> <因子> {(*|/) <因子>}
    def term(self):
        self.factor()
        while self.current.kind in MULTIPLY_KINDS:
            self.match()
            self.factor()
        self.emit(Nonterminal.TERM)

    # <因子> -> IDENFR | IDENFR [ <表达式> ] | ( <表达式> ) | <整数> | CHARCON | <有返回值函数调用语句>
    def factor(self):
        rule = self.select(self.factor_rules, 'a factor')
        rule()
        self.emit(Nonterminal.FACTOR)

    def _identifier_factor(self):
        following = self.lookahead().kind
        if following is TokenKind.LPARENT:
            self.return_call()
        elif following is TokenKind.LBRACK:
            self.match(TokenKind.IDENFR)
            self.match(TokenKind.LBRACK)
            self.expression()
            self.match(TokenKind.RBRACK)
        else:
            self.match(TokenKind.IDENFR)

    def _parenthesized(self):
        self.match(TokenKind.LPARENT)
        self.expression()
        self.match(TokenKind.RPARENT)

    # IDENFR ( <值参数表> ), the tag depends only on where the call appears
    def _call(self, nonterminal):
        self.match(TokenKind.IDENFR)
        self.match(TokenKind.LPARENT)
        self.argument_table()
        self.match(TokenKind.RPARENT)
        self.emit(nonterminal)

    # <有返回值函数调用语句> -> IDENFR ( <值参数表> )
    def return_call(self):
        self._call(Nonterminal.RETURN_CALL)

    # <无返回值函数调用语句> -> IDENFR ( <值参数表> )
    def void_call(self):
        self._call(Nonterminal.VOID_CALL)

    # <值参数表> -> <表达式> {, <表达式>} | epsilon
    def argument_table(self):
        if not self.at(TokenKind.RPARENT):
            self.expression()
            while self.at(TokenKind.COMMA):
                self.match(TokenKind.COMMA)
                self.expression()
        self.emit(Nonterminal.ARGUMENT_TABLE)


def parse(text, trace=None):
    '''tokenize and parse a whole program, returning its trace'''
    parser = MiniCParser(TokenBuffer(Tokenizer(text)), trace)
    return parser.parse()
