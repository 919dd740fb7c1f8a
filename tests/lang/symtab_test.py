import unittest

from gama.lang.error import CapacityError, UndeclaredVariable, UninitializedVariable
from gama.lang.limits import Limits
from gama.lang.symtab import SymbolTable


class SymbolTableTestCase(unittest.TestCase):

    def setUp(self):
        self.symtab = SymbolTable()

    def test_declare_is_idempotent(self):
        first = self.symtab.declare("a")
        self.assertEqual(first, self.symtab.declare("a"))
        self.assertEqual(1, self.symtab.declare("b"))
        self.assertEqual(2, len(self.symtab))

    def test_lookup(self):
        self.assertIsNone(self.symtab.lookup("a"))
        self.symtab.declare("a")
        self.assertEqual(0, self.symtab.lookup("a"))
        self.assertIn("a", self.symtab)
        self.assertNotIn("A", self.symtab)  # names are case-sensitive

    def test_set_declares(self):
        self.symtab.set("x", 7)
        self.assertEqual(7, self.symtab.get("x"))

    def test_get_errors_are_distinct(self):
        self.assertRaises(UndeclaredVariable, self.symtab.get, "x")

        self.symtab.declare("x")
        self.assertRaises(UninitializedVariable, self.symtab.get, "x")

        try:
            self.symtab.get("y")
        except UndeclaredVariable as error:
            undeclared = error.plain
        try:
            self.symtab.get("x")
        except UninitializedVariable as error:
            uninitialized = error.plain
        self.assertNotEqual(undeclared.replace("y", "x"), uninitialized)

    def test_undefine(self):
        self.symtab.set("x", 3)
        self.symtab.undefine("x")
        self.assertRaises(UninitializedVariable, self.symtab.get, "x")
        self.assertEqual({"x": None}, self.symtab.snapshot())

    def test_snapshot_order(self):
        self.symtab.set("b", 2)
        self.symtab.declare("a")
        self.symtab.set("c", -1)
        self.assertEqual([("b", 2), ("a", None), ("c", -1)], list(self.symtab.snapshot().items()))
        self.assertEqual(["b", "a", "c"], [symbol.name for symbol in self.symtab])

    def test_variable_limit(self):
        symtab = SymbolTable(Limits(max_vars=2))
        symtab.declare("a")
        symtab.set("b", 1)
        symtab.set("a", 2)  # existing names never count twice
        self.assertRaises(CapacityError, symtab.declare, "c")
        self.assertRaises(CapacityError, symtab.set, "c", 1)


if __name__ == '__main__':
    unittest.main()
