# -------------------------------------------------------------------------
# minic_main.py: MiniC lexical and syntax analyzer
# Run with a source file: python minic_main.py testfile.txt output.txt
# -------------------------------------------------------------------------
import argparse
import sys
from minic_symbols import MiniCError
from minic_indexer import SourceIndexer
from minic_lexer import Tokenizer
from minic_parser import parse
from minic_trace import Trace


def build_arg_parser():
    ap = argparse.ArgumentParser(prog='minic', description='Print the token stream or the derivation trace of a MiniC program')
    ap.add_argument('source', help='MiniC source file')
    ap.add_argument('output', nargs='?', help='where to write the result (default: stdout)')
    ap.add_argument('--tokens', action='store_true', help='only run the lexer and print one token per line')
    return ap


def analyze(source, tokens_only=False):
    '''trace of a MiniC source string, raises MiniCError on the first error'''
    if tokens_only:
        trace = Trace()
        for tok in Tokenizer(source):
            trace.terminal(tok)
        return trace
    return parse(source)


def main(argv=None):
    args = build_arg_parser().parse_args(argv)

    try:
        with open(args.source, encoding='utf-8') as f:
            source = f.read()
    except OSError as err:
        print('[MiniC]: cannot read %s: %s' % (args.source, err.strerror), file=sys.stderr)
        return 1
    except UnicodeDecodeError as err:
        print('[MiniC]: cannot read %s: not UTF-8 text (byte %d)' % (args.source, err.start), file=sys.stderr)
        return 1

    try:
        trace = analyze(source, args.tokens)
    except MiniCError as err:
        for line in SourceIndexer(source).describe(err):
            print(line, file=sys.stderr)
        return 1

    if not args.output:
        trace.write(sys.stdout)
        return 0

    try:
        with open(args.output, 'w', encoding='utf-8') as out:
            trace.write(out)
    except OSError as err:
        print('[MiniC]: cannot write %s: %s' % (args.output, err.strerror), file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
