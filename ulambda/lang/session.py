"""Session control for the ulambda language. Runs statements either from a file or, line by line, from the shell.

A session owns the top-level Environment: every named func extends it, and every executable statement is resolved and
evaluated against the environment as it was when the statement was added. Environments are persistent, so later
definitions never leak into earlier statements.
"""

import os

from ulambda.lang.error import LambdaException
from ulambda.lang.lexical import ExecStmt, ImportStmt, Grammar, NamedFunc
from ulambda.lang.numerical import number
from ulambda.pure.evaluation import evaluate
from ulambda.pure.resolution import resolve
from ulambda.pure.runtime import Environment
from ulambda.pure.syntax import NameIntro


class Session:
    """Governs a ulambda session, with control over the scope of named funcs."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.cmd_line = cmd_line    # whether or not in command-line mode

        self.env = Environment()    # top-level bindings, most recent named func first
        self.to_exec = {}           # dict of line num: (ExecStmt, resolved term, environment to run it in)
        self.results = []

        self.line_num = 0           # command-line mode only: lines fed so far
        self.pending = ""           # command-line mode only: statement continued on the next line

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r", encoding="utf-8") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise LambdaException("'{}' could not be opened", path, diagnosis=False)

            for expr in exprs:
                self.add(*expr)

        elif not cmd_line:
            raise LambdaException("'<in>' is a reserved filename", diagnosis=False)

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's exprs), but add_to_prev will indicate whether a line continuation is necessary. Returns
        updated value of line and add_to_prev. Must be called before calling add.
        """
        if ";;" in line:
            line = line[:line.index(";;")]  # get rid of comments

        line = Grammar.preprocess(line)
        if exprs is not None:
            if line and not add_to_prev:
                exprs.append((line, line_num))
            elif add_to_prev:
                prev, prev_line_num = exprs.pop()
                line = f"{prev} {line}"
                exprs.append((line, prev_line_num))

        return line, line.count("(") > line.count(")")

    def add(self, expr, line_num):
        """Adds a statement to the current session. Named funcs are bound immediately, exec stmts are deferred until
        run is called.
        """
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        stmt = Grammar.infer(expr)

        if isinstance(stmt, ImportStmt):
            loaded_module = Session(self.error_handler, self._get_path(stmt.path), self.cmd_line)
            for intro, value in reversed(loaded_module.env):
                self.env = self.env.extend(intro, value)
            # on import, ExecStmts from the imported module will not be run

        elif isinstance(stmt, NamedFunc):
            term = resolve(stmt.term, self.env.labels())
            value = evaluate(self.env, term, self._trace())

            if stmt.name in self.env.labels():
                self.error_handler.warn("'{}' shadows an earlier definition", stmt.name, diagnosis=False)
            self.env = self.env.extend(NameIntro(stmt.name), value)

        elif isinstance(stmt, ExecStmt):
            self.to_exec[line_num] = (stmt, resolve(stmt.term, self.env.labels()), self.env)

        self.error_handler.remove_line(self.path)  # error was not raised

    def feed(self, line):
        """Feeds one command-line line to this session. Returns True if the statement continues on the next line;
        otherwise the (joined) statement is added and run, and False is returned.
        """
        self.line_num += 1
        line, add_to_prev = self.preprocess_line(f"{self.pending} {line}", self.line_num, bool(self.pending))

        if add_to_prev:
            self.pending = line
            return True

        self.pending = ""
        if line:  # empty if line was only a comment
            self.add(line, self.line_num)
            self.run()
        return False

    def run(self):
        """Runs this session's executable statements by evaluating each in the environment it was added in. Will raise
        any errors that are encountered.
        """
        for line_num, (exec_stmt, term, env) in sorted(self.to_exec.items()):
            self.error_handler.register_line(self.path, str(exec_stmt), line_num)

            try:
                self.results.append(Session.display(evaluate(env, term, self._trace())))
            finally:
                del self.to_exec[line_num]

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()

    @staticmethod
    def display(value):
        """Church numerals are shown as numbers, everything else in its term syntax."""
        num = number(value)
        return str(num) if num is not None else str(value)

    def _trace(self):
        """Step callback for evaluate, or None when not tracing. Steps render whole closures, so they are only built
        when printed.
        """
        return self.error_handler.register_step if self.error_handler.trace else None

    def _get_path(self, path):
        """Returns absolute path of an import, relative to this session's file (or the working directory)."""
        if self.path == Session.SH_FILE or os.path.isabs(path):
            return os.path.abspath(path)
        return os.path.abspath(os.path.join(os.path.dirname(self.path), path))
