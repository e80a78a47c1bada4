'''
TokenBuffer lets the parser look past the current token

Tokens are fetched from the tokenizer only once and kept in order, so a token
seen through peek() is still handed out by advance() when the cursor reaches it
'''

class TokenBuffer:
    def __init__(self, tokenizer):
        self.tokenizer = tokenizer
        self.tokens = []
        self.cursor = 0

    # fill the buffer until it holds n tokens
    def _fill(self, n):
        while len(self.tokens) < n:
            self.tokens.append(self.tokenizer.next_token())

    def peek(self, k=1):
        if k < 1:
            raise ValueError('peek distance must be at least 1, got %d' % k)
        self._fill(self.cursor + k)
        return self.tokens[self.cursor + k - 1]

    def advance(self):
        tok = self.peek(1)
        self.cursor += 1
        return tok

    @property
    def position(self): # number of tokens consumed so far
        return self.cursor

    def __repr__(self):
        return 'BUFFER (consumed: %d, buffered: %d)' % (self.cursor, len(self.tokens) - self.cursor)
