"""Handles interactive/command-line mode for the monkey interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Monkey interpreter shell."""
    intro = "Monkey interpreter :: Python backend\nType 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary Monkey code."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                try:
                    self.sess.add(line, self.line_num)
                except ValueError:
                    return  # if line is empty, terminate

                self.sess.run()

                if self.sess.results:
                    print(self.sess.pop())

    def do_help(self, arg):
        """Prints an introduction to Monkey and its builtins instead of per-command docs."""
        print("Welcome to the monkey interpreter!\n\n"
              "Monkey is a small expression-oriented language with integers, strings, booleans, \n"
              "arrays, hashes and first-class functions. Try binding a function with \n"
              "'let add = fn(a, b) { a + b };' and then calling it with 'add(1, 2)'.\n\n"
              "Builtins: len, first, last, rest, push, puts, print, println, exit.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return True
