import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from monkey.lang.error import ErrorHandler, GenericException
from monkey.lang.session import Session
from monkey.runtime.object import Integer


def write_source(test_case, source):
    """Writes source to a temporary .mk file that is removed after test_case."""
    fd, path = tempfile.mkstemp(suffix=".mk")
    with os.fdopen(fd, "w") as file:
        file.write(source)
    test_case.addCleanup(os.remove, path)
    return path


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.sess = Session(ErrorHandler(), Session.SH_FILE, cmd_line=True)

    def test_cmd_line_is_not_fatal(self):
        self.assertFalse(self.sess.error_handler.fatal)

    def test_bindings_persist(self):
        self.sess.add("let a = 5;", 1)
        self.sess.run()
        self.assertEqual([], self.sess.results)

        self.sess.add("let double = fn(x) { x * 2 };", 2)
        self.sess.add("double(a)", 3)
        self.sess.run()
        self.assertEqual("10", self.sess.pop())
        self.assertEqual({}, self.sess.to_exec)

    def test_parse_errors(self):
        with self.assertRaises(GenericException) as context:
            self.sess.add("let = 5; (1", 1)
        self.assertIn("expected next token to be IDENT, got ASSIGN instead", context.exception.details)
        self.assertIn("expected next token to be RPAREN, got EOF instead", context.exception.details)
        self.assertEqual({}, self.sess.to_exec)

    def test_runtime_error(self):
        self.sess.add("5 + true", 1)
        with self.assertRaises(GenericException) as context:
            self.sess.run()
        self.assertEqual("type mismatch: INTEGER + BOOLEAN", context.exception.msg)
        self.assertEqual({}, self.sess.to_exec)

    def test_null_result(self):
        self.sess.add("{\"a\": 1}[fn() { 1 }]", 1)
        self.sess.run()
        self.assertEqual("null", self.sess.pop())

    def test_empty_source(self):
        self.assertRaises(ValueError, self.sess.add, "   ", 1)

    def test_preprocess_line(self):
        cases = {
            ("let a = 1; // comment", ""): ("let a = 1;", False),
            ("let f = fn(x) {", ""): ("let f = fn(x) {", True),
            ("x * 2 };", "let f = fn(x) {"): ("let f = fn(x) {\nx * 2 };", False),
            ("[1,", ""): ("[1,", True),
            ("\"{\" + \"//\"", ""): ("\"{\" + \"//\"", False),
            ("// only a comment", ""): ("", False),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, Session.preprocess_line(*case), case)

    def test_reserved_filename(self):
        self.assertRaises(GenericException, Session, ErrorHandler(), Session.SH_FILE, False)


class FileSessionTestCase(unittest.TestCase):

    def test_run_file(self):
        path = write_source(self, """// fibonacci
let fib = fn(n) {
    if (n < 2) { return n; } // base case
    fib(n - 1) + fib(n - 2)
};
fib(15);
""")
        sess = Session(ErrorHandler(), path, cmd_line=False)
        self.assertTrue(sess.error_handler.fatal)

        sess.run()
        self.assertEqual([Integer(610)], sess.results)

    def test_empty_file(self):
        sess = Session(ErrorHandler(), write_source(self, "// nothing here\n"), cmd_line=False)
        sess.run()
        self.assertEqual([], sess.results)

    def test_missing_file(self):
        with self.assertRaises(GenericException) as context:
            Session(ErrorHandler(), "does/not/exist.mk", cmd_line=False)
        self.assertIn("could not be opened", context.exception.msg)

    def test_parse_errors_are_fatal(self):
        path = write_source(self, "let x 5;\n")
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit):
            with ErrorHandler() as error_handler:
                Session(error_handler, path, cmd_line=False)
        self.assertIn("expected next token to be ASSIGN, got INT instead", out.getvalue())


if __name__ == '__main__':
    unittest.main()
