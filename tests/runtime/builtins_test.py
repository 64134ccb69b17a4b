import io
import unittest
from contextlib import redirect_stdout

from monkey.runtime.builtins import BUILTINS
from monkey.runtime.object import NULL, TRUE, Array, Error, Integer, String


def call(name, *arguments):
    return BUILTINS[name].fn(list(arguments))


ONE_TWO_THREE = Array((Integer(1), Integer(2), Integer(3)))


class BuiltinsTestCase(unittest.TestCase):

    def test_registry(self):
        self.assertEqual({"len", "first", "last", "rest", "push", "puts", "print", "println", "exit"}, set(BUILTINS))
        for name, builtin in BUILTINS.items():
            self.assertEqual(name, builtin.name)

    def test_len(self):
        cases = [
            ((String(""),), Integer(0)),
            ((String("four"),), Integer(4)),
            ((String("hello world"),), Integer(11)),
            ((ONE_TWO_THREE,), Integer(3)),
            ((Array(()),), Integer(0)),
            ((Integer(1),), Error("argument to `len` not supported, got INTEGER")),
            ((String("one"), String("two")), Error("wrong number of arguments. got=2, want=1")),
            ((), Error("wrong number of arguments. got=0, want=1")),
        ]
        for arguments, expected in cases:
            self.assertEqual(expected, call("len", *arguments), arguments)

    def test_first_last_rest(self):
        cases = [
            ("first", ONE_TWO_THREE, Integer(1)),
            ("first", Array(()), NULL),
            ("last", ONE_TWO_THREE, Integer(3)),
            ("last", Array(()), NULL),
            ("rest", ONE_TWO_THREE, Array((Integer(2), Integer(3)))),
            ("rest", Array((Integer(1),)), Array(())),
            ("rest", Array(()), NULL),
            ("first", Integer(1), Error("argument to `first` must be ARRAY, got INTEGER")),
            ("last", String("a"), Error("argument to `last` must be ARRAY, got STRING")),
            ("rest", TRUE, Error("argument to `rest` must be ARRAY, got BOOLEAN")),
        ]
        for name, argument, expected in cases:
            self.assertEqual(expected, call(name, argument), (name, argument))

        self.assertEqual(Error("wrong number of arguments. got=2, want=1"), call("first", Array(()), Array(())))

    def test_push(self):
        original = Array((Integer(1),))
        self.assertEqual(Array((Integer(1), Integer(2))), call("push", original, Integer(2)))
        self.assertEqual(Array((Integer(1),)), original)

        self.assertEqual(Array((NULL,)), call("push", Array(()), NULL))
        self.assertEqual(Error("argument to `push` must be ARRAY, got INTEGER"), call("push", Integer(1), Integer(1)))
        self.assertEqual(Error("wrong number of arguments. got=1, want=2"), call("push", original))

    def test_output(self):
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(NULL, call("puts", String("hello"), ONE_TWO_THREE))
            self.assertEqual(NULL, call("print", String("hello"), Integer(5), TRUE))
            self.assertEqual(NULL, call("puts"))
            self.assertEqual(NULL, call("print"))
            self.assertEqual(NULL, call("println", Integer(1), String("two")))
        self.assertEqual("hello\n[1, 2, 3]\nhello 5 true\n\n1\ntwo\n", out.getvalue())

    def test_exit(self):
        should_exit = {(): 0, (Integer(0),): 0, (Integer(4),): 4}
        for arguments, code in should_exit.items():
            with self.assertRaises(SystemExit) as context:
                call("exit", *arguments)
            self.assertEqual(code, context.exception.code)

        self.assertEqual(Error("argument to `exit` must be INTEGER, got STRING"), call("exit", String("1")))
        self.assertEqual(Error("wrong number of arguments. got=2, want=0 or 1"),
                         call("exit", Integer(1), Integer(2)))


if __name__ == '__main__':
    unittest.main()
