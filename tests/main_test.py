import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout

from monkey.main import build_parser, main


class MainTestCase(unittest.TestCase):

    def write_source(self, source):
        fd, path = tempfile.mkstemp(suffix=".mk")
        with os.fdopen(fd, "w") as file:
            file.write(source)
        self.addCleanup(os.remove, path)
        return path

    def run_main(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            main(list(argv))
        return out.getvalue()

    def test_arguments(self):
        args = build_parser().parse_args([])
        self.assertIsNone(args.file)
        self.assertFalse(args.parse)

        args = build_parser().parse_args(["-p", "prog.mk"])
        self.assertEqual("prog.mk", args.file)
        self.assertTrue(args.parse)

    def test_run_file(self):
        path = self.write_source("""let people = [{"name": "Alice", "age": 24}, {"name": "Anna", "age": 28}];
let ages = fn(list) {
    if (len(list) == 0) { return []; }
    push(ages(rest(list)), first(list)["age"])
};
puts(len(people));
ages(people)
""")
        self.assertEqual("2\n[28, 24]\n", self.run_main(path))

    def test_parse_file(self):
        path = self.write_source("let x = 1 + 2 * 3;\n-a * b // comment\n")
        self.assertEqual("let x = (1 + (2 * 3));((-a) * b)\n", self.run_main("--parse", path))

    def test_deep_recursion(self):
        self.addCleanup(sys.setrecursionlimit, sys.getrecursionlimit())
        path = self.write_source("""let count = fn(n) { if (n == 0) { 0 } else { 1 + count(n - 1) } };
let range = fn(n, acc) { if (n == 0) { acc } else { range(n - 1, push(acc, n)) } };
let map = fn(arr, f) {
    let iter = fn(arr, accumulated) {
        if (len(arr) == 0) { accumulated } else { iter(rest(arr), push(accumulated, f(first(arr)))) }
    };
    iter(arr, [])
};
puts(count(600));
len(map(range(300, []), fn(x) { x * 2 }))
""")
        self.assertEqual("600\n300\n", self.run_main(path))

    def test_runtime_error_exits(self):
        path = self.write_source("let x = 5;\nx + true;\nputs(\"unreachable\");\n")
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as context:
            main([path])
        self.assertEqual(1, context.exception.code)
        self.assertIn("type mismatch: INTEGER + BOOLEAN", out.getvalue())
        self.assertNotIn("unreachable", out.getvalue())

    def test_exit_builtin(self):
        path = self.write_source("puts(\"bye\");\nexit(3);\nputs(\"unreachable\");\n")
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as context:
            main([path])
        self.assertEqual(3, context.exception.code)
        self.assertEqual("bye\n", out.getvalue())


if __name__ == '__main__':
    unittest.main()
