import unittest

from monkey.grammar.ast import BlockStatement, ExpressionStatement, Identifier
from monkey.runtime.builtins import BUILTINS
from monkey.runtime.environment import Environment
from monkey.runtime.object import (FALSE, NULL, TRUE, Array, Boolean, Error, Function, Hash, Integer, ReturnValue,
                                   String, is_truthy)


class ObjectTestCase(unittest.TestCase):

    def test_inspect(self):
        body = BlockStatement((ExpressionStatement(Identifier("x")),))
        cases = [
            (Integer(-3), "-3"),
            (TRUE, "true"),
            (FALSE, "false"),
            (String("hello world"), "hello world"),
            (NULL, "null"),
            (Error("identifier not found: x"), "Error: identifier not found: x"),
            (ReturnValue(Integer(1)), "1"),
            (Array((Integer(1), String("a"), Array(()))), "[1, a, []]"),
            (Hash({String("a"): Integer(1), Integer(2): TRUE}), "{a: 1, 2: true}"),
            (Function(("x", "y"), Environment(), body), "fn(x, y) { x }"),
            (BUILTINS["len"], "builtin function len"),
        ]
        for case, expected in cases:
            self.assertEqual(expected, case.inspect(), repr(case))
            self.assertEqual(expected, str(case), repr(case))

    def test_kinds(self):
        cases = [
            (Integer(1), "INTEGER"),
            (TRUE, "BOOLEAN"),
            (String(""), "STRING"),
            (NULL, "NULL"),
            (ReturnValue(NULL), "RETURN_VALUE"),
            (Error(""), "ERROR"),
            (Array(()), "ARRAY"),
            (Hash(), "HASH"),
            (BUILTINS["puts"], "BUILTIN"),
        ]
        for case, expected in cases:
            self.assertEqual(expected, case.kind)

    def test_boolean_singletons(self):
        self.assertIs(TRUE, Boolean.of(True))
        self.assertIs(FALSE, Boolean.of(False))

    def test_truthiness(self):
        should_fail = [FALSE, NULL]
        for case in should_fail:
            self.assertFalse(is_truthy(case), case)

        should_pass = [TRUE, Integer(0), Integer(1), String(""), Array(()), Hash()]
        for case in should_pass:
            self.assertTrue(is_truthy(case), case)

    def test_hash_keys(self):
        should_pass = [Integer(1), TRUE, String("a")]
        for case in should_pass:
            self.assertTrue(case.hashable, case)

        should_fail = [NULL, Array(()), Hash(), Error("x"), BUILTINS["len"]]
        for case in should_fail:
            self.assertFalse(case.hashable, case)

        pairs = {Integer(1): String("int"), TRUE: String("bool"), String("1"): String("str")}
        self.assertEqual(3, len(pairs))
        self.assertEqual(String("bool"), pairs[Boolean.of(True)])


if __name__ == '__main__':
    unittest.main()
