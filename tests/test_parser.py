import pytest

from minic_symbols import Nonterminal, TokenKind
from minic_lexer import LexicalError, tokenize
from minic_parser import MiniCParser, ParseError, parse


PROGRAM = '''
const int max = 10, min = -1;
const char letter = 'a';
int count, table[20];
char c;
int square(int x) {
    return (x * x);
}
void show(char ch, int n) {
    printf("value: ", n);
}
void main() {
    int i;
    scanf(i, count);
    for (i = 0; i < max; i = i + 1) {
        table[i] = square(i) + -2;
    }
    do
        i = i - 1;
    while (i > min)
    if (i == 0) show(letter, table[i]); else ;
    while (i != max) i = (i + 1) * 2 / 'b';
    printf("done");
    return;
}
'''


def lines(text):
    return parse(text).lines()


def test_entry_function_after_variable_declaration():
    assert lines('int a; void main ( ) { a = 1 ; }') == [
        'INTTK int', 'IDENFR a', '<变量定义>', 'SEMICN ;', '<变量说明>',
        'VOIDTK void', 'MAINTK main', 'LPARENT (', 'RPARENT )', 'LBRACE {',
        'IDENFR a', 'ASSIGN =', 'INTCON 1', '<无符号整数>', '<整数>', '<因子>', '<项>', '<表达式>', '<赋值语句>',
        'SEMICN ;', '<语句>', '<语句列>', '<复合语句>', 'RBRACE }', '<主函数>', '<程序>',
    ]


def test_whole_program_parses():
    trace = parse(PROGRAM)
    found = trace.nonterminals()
    assert found[-1] is Nonterminal.PROGRAM
    assert found[-2] is Nonterminal.MAIN_FUNCTION
    for nonterminal in Nonterminal:
        assert nonterminal in found, nonterminal


def test_trace_is_deterministic():
    assert parse(PROGRAM).lines() == parse(PROGRAM).lines()


def test_terminal_records_reproduce_the_token_stream():
    assert parse(PROGRAM).terminals() == tokenize(PROGRAM)


def test_declarations_stop_in_front_of_a_function():
    found = parse('int a, b[10]; char c; int f(int x, char y) { return (x); } void g() { } void main() { g(); }').nonterminals()
    assert found.count(Nonterminal.VARIABLE_DECLARATION) == 1
    assert found.count(Nonterminal.VARIABLE_DEFINITION) == 2
    assert found.index(Nonterminal.VARIABLE_DECLARATION) < found.index(Nonterminal.DECLARATION_HEAD)
    assert found.index(Nonterminal.RETURN_FUNCTION) < found.index(Nonterminal.VOID_FUNCTION) < found.index(Nonterminal.MAIN_FUNCTION)


def test_function_first_means_no_variable_declaration():
    found = parse('int f() { } void main() { }').nonterminals()
    assert Nonterminal.VARIABLE_DECLARATION not in found
    assert Nonterminal.RETURN_FUNCTION in found


def test_void_main_ends_function_definitions():
    found = parse('void main() { }').nonterminals()
    assert Nonterminal.VOID_FUNCTION not in found
    assert found == [
        Nonterminal.STATEMENT_LIST, Nonterminal.COMPOUND_STATEMENT, Nonterminal.MAIN_FUNCTION, Nonterminal.PROGRAM,
    ]


def test_const_declaration(parser_for):
    parser = parser_for("const int a = 1, b = -2; const char c = 'x';")
    parser.const_declaration()
    assert parser.trace.lines() == [
        'CONSTTK const', 'INTTK int', 'IDENFR a', 'ASSIGN =', 'INTCON 1', '<无符号整数>', '<整数>',
        'COMMA ,', 'IDENFR b', 'ASSIGN =', 'MINU -', 'INTCON 2', '<无符号整数>', '<整数>', '<常量定义>', 'SEMICN ;',
        'CONSTTK const', 'CHARTK char', 'IDENFR c', 'ASSIGN =', 'CHARCON x', '<常量定义>', 'SEMICN ;',
        '<常量说明>',
    ]
    assert parser.at(TokenKind.EOF)


def test_const_definition_needs_a_type(parser_for):
    parser = parser_for('const x = 1;')
    with pytest.raises(ParseError) as info:
        parser.const_declaration()
    assert info.value.token.lexeme == 'x'


def test_call_statement_has_no_return_value(parser_for):
    parser = parser_for('a ( ) ;')
    parser.statement()
    assert parser.trace.lines() == [
        'IDENFR a', 'LPARENT (', '<值参数表>', 'RPARENT )', '<无返回值函数调用语句>', 'SEMICN ;', '<语句>',
    ]
    assert Nonterminal.RETURN_CALL not in parser.trace.nonterminals()


def test_call_inside_expression_has_a_return_value(parser_for):
    parser = parser_for('x = f(1, y);')
    parser.statement()
    found = parser.trace.nonterminals()
    assert Nonterminal.RETURN_CALL in found
    assert Nonterminal.VOID_CALL not in found
    assert found.count(Nonterminal.EXPRESSION) == 3


def test_indexed_assignment(parser_for):
    parser = parser_for('a[i] = 2')
    parser.assignment_statement()
    assert parser.trace.lines() == [
        'IDENFR a', 'LBRACK [', 'IDENFR i', '<因子>', '<项>', '<表达式>', 'RBRACK ]',
        'ASSIGN =', 'INTCON 2', '<无符号整数>', '<整数>', '<因子>', '<项>', '<表达式>', '<赋值语句>',
    ]


def test_expression_precedence(parser_for):
    parser = parser_for('-a + b * 2')
    parser.expression()
    assert parser.trace.lines() == [
        'MINU -', 'IDENFR a', '<因子>', '<项>',
        'PLUS +', 'IDENFR b', '<因子>', 'MULT *', 'INTCON 2', '<无符号整数>', '<整数>', '<因子>', '<项>',
        '<表达式>',
    ]


def test_signed_integer_factor(parser_for):
    parser = parser_for('1 - -2')
    parser.expression()
    assert parser.trace.lines() == [
        'INTCON 1', '<无符号整数>', '<整数>', '<因子>', '<项>',
        'MINU -', 'MINU -', 'INTCON 2', '<无符号整数>', '<整数>', '<因子>', '<项>', '<表达式>',
    ]


def test_factor_forms(parser_for):
    parser = parser_for("(v[1]) * 'c'")
    parser.term()
    assert parser.trace.lines() == [
        'LPARENT (', 'IDENFR v', 'LBRACK [', 'INTCON 1', '<无符号整数>', '<整数>', '<因子>', '<项>', '<表达式>', 'RBRACK ]',
        '<因子>', '<项>', '<表达式>', 'RPARENT )', '<因子>',
        'MULT *', 'CHARCON c', '<因子>', '<项>',
    ]


def test_condition_with_relation(parser_for):
    parser = parser_for('a <= 3')
    parser.condition()
    assert parser.trace.lines()[4] == 'LEQ <='
    assert parser.trace.lines()[-1] == '<条件>'


def test_for_loop_with_literal_step(parser_for):
    parser = parser_for('for ( i = 0 ; i < 10 ; i = i + 1 ) ;')
    parser.statement()
    got = parser.trace.lines()
    assert got[-12:] == [
        'IDENFR i', 'ASSIGN =', 'IDENFR i', 'PLUS +', 'INTCON 1', '<无符号整数>', '<步长>',
        'RPARENT )', 'SEMICN ;', '<语句>', '<循环语句>', '<语句>',
    ]


def test_for_loop_step_must_be_a_literal(parser_for):
    parser = parser_for('for ( i = 0 ; i < 10 ; i = i + i + 1 ) ;')
    with pytest.raises(ParseError) as info:
        parser.statement()
    assert info.value.expected == 'INTCON'
    assert info.value.token.kind is TokenKind.IDENFR


def test_for_loop_step_is_not_an_expression(parser_for):
    parser = parser_for('for ( i = 0 ; i < 10 ; i = i + 1 + 1 ) ;')
    with pytest.raises(ParseError) as info:
        parser.statement()
    assert info.value.expected == 'RPARENT'


def test_for_loop_needs_a_sign(parser_for):
    parser = parser_for('for ( i = 0 ; i < 10 ; i = i * 2 ) ;')
    with pytest.raises(ParseError) as info:
        parser.statement()
    assert info.value.expected == 'PLUS or MINU'


def test_do_while_and_if_else(parser_for):
    parser = parser_for('do ; while (x) if (x) ; else { }')
    parser.statement_list()
    found = parser.trace.nonterminals()
    assert found.count(Nonterminal.STATEMENT) == 5
    assert found.index(Nonterminal.LOOP_STATEMENT) < found.index(Nonterminal.CONDITIONAL_STATEMENT)
    assert parser.trace.lines()[-1] == '<语句列>'


def test_write_statement_with_string(parser_for):
    parser = parser_for('printf("x = ", x)')
    parser.write_statement()
    assert parser.trace.lines() == [
        'PRINTFTK printf', 'LPARENT (', 'STRCON x = ', '<字符串>', 'COMMA ,',
        'IDENFR x', '<因子>', '<项>', '<表达式>', 'RPARENT )', '<写语句>',
    ]


def test_read_and_return_statements(parser_for):
    parser = parser_for('scanf(a, b); return; return (a);')
    parser.statement_list()
    found = parser.trace.nonterminals()
    assert found.count(Nonterminal.READ_STATEMENT) == 1
    assert found.count(Nonterminal.RETURN_STATEMENT) == 2


def test_productions_run_on_a_seeded_buffer(seeded):
    buf = seeded(
        (TokenKind.IDENFR, 'f'), (TokenKind.LPARENT, '('), (TokenKind.INTCON, '3'),
        (TokenKind.COMMA, ','), (TokenKind.CHARCON, 'z'), (TokenKind.RPARENT, ')'), (TokenKind.SEMICN, ';'),
    )
    parser = MiniCParser(buf)
    parser.statement()
    found = parser.trace.nonterminals()
    assert found[-3:] == [Nonterminal.ARGUMENT_TABLE, Nonterminal.VOID_CALL, Nonterminal.STATEMENT]
    assert buf.position == 7


def test_missing_semicolon_names_both_kinds():
    with pytest.raises(ParseError) as info:
        parse('int a void main() { }')
    err = info.value
    assert err.expected == 'SEMICN'
    assert err.token.kind is TokenKind.VOIDTK
    assert err.position == 2
    assert 'SEMICN' in str(err) and 'VOIDTK' in str(err)


def test_bad_factor_position():
    with pytest.raises(ParseError) as info:
        parse('void main() {\n  x = ;\n}')
    assert info.value.expected == 'a factor'
    assert info.value.position == 7
    assert info.value.lineno == 2
    assert info.value.index == 20


def test_statement_expected_after_condition():
    with pytest.raises(ParseError) as info:
        parse('void main() { if (a) else ; }')
    assert info.value.expected == 'a statement'


def test_entry_function_takes_no_parameters():
    with pytest.raises(ParseError) as info:
        parse('void main(int a) { }')
    assert info.value.expected == 'RPARENT'


def test_missing_entry_function():
    with pytest.raises(ParseError) as info:
        parse('int a;')
    assert 'end of input' in str(info.value)


def test_tokens_after_entry_function_are_rejected():
    with pytest.raises(ParseError) as info:
        parse('void main() { } int x;')
    assert info.value.expected == 'end of input'
    assert info.value.token.lexeme == 'int'


def test_lexical_error_stops_the_parse():
    with pytest.raises(LexicalError):
        parse('void main() { printf("abc')
