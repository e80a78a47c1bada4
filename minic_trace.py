'''
Definitions for trace records

The parser appends a TerminalRecord every time it matches a token and a
NonterminalRecord once a production and all of its children are complete,
so the trace reads as a post-order walk of the derivation tree
'''


class Record:
    def line(self):
        raise NotImplementedError


class TerminalRecord(Record):
    def __init__(self, token):
        self.token = token

    def line(self):
        return '%s %s' % (self.token.kind.value, self.token.lexeme)

    def __repr__(self):
        return 'TERMINAL %s %r' % (self.token.kind.name, self.token.lexeme)


class NonterminalRecord(Record):
    def __init__(self, nonterminal):
        self.nonterminal = nonterminal

    def line(self):
        return self.nonterminal.value

    def __repr__(self):
        return 'NONTERMINAL %s' % self.nonterminal.name


class Trace:
    '''ordered, append-only sink of trace records'''
    def __init__(self):
        self.records = []

    def terminal(self, token):
        self.records.append(TerminalRecord(token))

    def nonterminal(self, nonterminal):
        self.records.append(NonterminalRecord(nonterminal))

    def lines(self):
        return [record.line() for record in self.records]

    def write(self, stream):
        for line in self.lines():
            stream.write(line + '\n')

    # just the terminal records, in the order they were matched
    def terminals(self):
        return [record.token for record in self.records if isinstance(record, TerminalRecord)]

    def nonterminals(self):
        return [record.nonterminal for record in self.records if isinstance(record, NonterminalRecord)]

    def __repr__(self):
        return 'TRACE (records: %d)' % len(self.records)
