"""Session control for the monkey interpreter: parses and runs Monkey source, either a whole file or line by line in
command-line mode. One Environment lives for the whole session, so later inputs see earlier bindings.
"""

from monkey.lang.error import GenericException
from monkey.lexer import Lexer
from monkey.parser import Parser
from monkey.runtime.environment import Environment
from monkey.runtime.evaluator import evaluate
from monkey.runtime.object import is_error


class Session:
    """Governs a monkey session, with control over the global scope."""
    SH_FILE = "<in>"  # command-line interpreter filename
    COMMENT = "//"
    OPENERS = "([{"
    CLOSERS = ")]}"

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = Environment()
        self.to_exec = {}  # dict of line num: Programs to execute
        self.results = []  # values of executed Programs, latest last

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    lines = [Session.strip_comment(line) for line in file]
            except OSError:
                raise GenericException("'{}' could not be opened", path)

            source = "\n".join(lines)
            if source.strip():
                self.add(source, 1)

        elif not cmd_line:
            raise GenericException("'{}' is a reserved filename", Session.SH_FILE)

    @staticmethod
    def strip_comment(line):
        """Removes a trailing // comment and trailing whitespace from line. // inside a string literal is kept."""
        in_string = False
        for idx, char in enumerate(line):
            if char == "\"":
                in_string = not in_string
            elif not in_string and line.startswith(Session.COMMENT, idx):
                line = line[:idx]
                break
        return line.rstrip()

    @staticmethod
    def is_open(source):
        """Whether or not source has brackets that have not been closed yet. Brackets inside string literals are
        ignored.
        """
        depth = 0
        in_string = False
        for char in source:
            if char == "\"":
                in_string = not in_string
            elif not in_string and char in Session.OPENERS:
                depth += 1
            elif not in_string and char in Session.CLOSERS:
                depth -= 1
        return depth > 0

    @staticmethod
    def preprocess_line(line, prev=""):
        """Preprocesses a line from the command line. prev is the text of previous lines still waiting to be
        completed. Returns the updated source and whether a line continuation is necessary.
        """
        line = Session.strip_comment(line)
        source = f"{prev}\n{line}" if prev else line
        return source, Session.is_open(source)

    def parse(self, source):
        """Returns the Program for source. Raises a GenericException listing every diagnostic if it is malformed."""
        parser = Parser(Lexer(source))
        program = parser.parse_program()

        if parser.errors:
            count = len(parser.errors)
            msg = "found {} parse error" + ("s" if count > 1 else "")
            raise GenericException(msg, str(count), details=parser.errors)
        return program

    def add(self, source, line_num):
        """Parses source and queues it for execution. Evaluation is delayed until run is called."""
        if not source.strip():
            raise ValueError("source cannot be empty")

        self.error_handler.register_line(self.path, self._first_line(source), line_num)  # in case error is raised
        self.to_exec[line_num] = self.parse(source)
        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Runs this session's queued programs in order. A program evaluating to an Error raises a
        GenericException.
        """
        for line_num, program in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, self._first_line(str(program)), line_num)

            try:
                result = evaluate(program, self.env)
            finally:
                del self.to_exec[line_num]

            if is_error(result):
                raise GenericException(result.message.replace("{", "{{").replace("}", "}}"))
            elif result is not None:
                self.results.append(result)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Returns the rendering of the latest result and forgets it."""
        return self.results.pop().inspect()

    def _first_line(self, source):
        """Line shown in tracebacks. Files are shown by name only."""
        if not self.cmd_line:
            return None
        return source.strip().splitlines()[0] if source.strip() else None
