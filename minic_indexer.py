'''
SourceIndexer maps character offsets back to source lines
Can return a line of source code given the line number, and can optionally mark a column with a ^
'''

class SourceIndexer:
    def __init__(self, source):
        self.source = source

        # line_starts[n - 1] is the offset of the first character of line n
        self.line_starts = [0]
        for i, c in enumerate(source):
            if c == '\n':
                self.line_starts.append(i + 1)

    @property
    def line_count(self):
        return len(self.line_starts)

    def lineno_of(self, index):
        lineno = 1
        for start in self.line_starts[1:]:
            if start > index:
                break
            lineno += 1
        return lineno

    # 1-based column of index within its line
    def get_col(self, lineno, index):
        return index - self.line_starts[lineno - 1] + 1

    def get_line(self, lineno, mark_index=None):
        start = self.line_starts[lineno - 1]
        end = self.source.find('\n', start)
        line = self.source[start:] if end < 0 else self.source[start:end]
        line = line.rstrip('\r')
        if mark_index is not None:
            return (line, self._mark_line(line, self.get_col(lineno, mark_index) - 1))
        return line

    def _mark_line(self, line, col):
        # keep tabs so the caret lines up under the offending character
        pre = ''.join(c if c == '\t' else ' ' for c in line[:col])
        return pre + '^'

    def describe(self, error):
        '''diagnostic lines for a MiniCError, position first then the marked source line'''
        lineno = error.lineno if 1 <= error.lineno <= self.line_count else self.lineno_of(error.index)
        err_line, mark = self.get_line(lineno, error.index)
        return ['At line %d, col %d: %s' % (lineno, self.get_col(lineno, error.index), error.message),
                '| %s' % err_line,
                '| %s' % mark]
