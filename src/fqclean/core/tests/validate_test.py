import unittest as ut

from fqclean.core.validate import (require_isinstance,
                                   require_atleast,
                                   require_atmost,
                                   require_between)


class TestRequireIsInstance(ut.TestCase):

    def test_isinstance(self):
        self.assertIsNone(require_isinstance("xyz", 3, int))
        self.assertIsNone(require_isinstance("xyz", 3, (str, int)))

    def test_not_isinstance(self):
        self.assertRaisesRegex(TypeError,
                               "xyz must be an instance of",
                               require_isinstance,
                               "xyz", 3.0, int)

    def test_custom_error(self):
        class MyCustomError(TypeError):
            pass

        self.assertRaises(MyCustomError,
                          require_isinstance,
                          "xyz", 3.0, int, MyCustomError)


class TestRequireAtLeast(ut.TestCase):

    def test_atleast(self):
        self.assertIsNone(require_atleast("xyz", 2, 2))
        self.assertIsNone(require_atleast("xyz", 3, 2))

    def test_not_atleast(self):
        self.assertRaisesRegex(ValueError,
                               "Must have xyz ≥ 2, but got 1",
                               require_atleast,
                               "xyz", 1, 2)

    def test_named(self):
        self.assertRaisesRegex(ValueError,
                               "Must have xyz ≥ abc, but got xyz=1 and abc=2",
                               require_atleast,
                               "xyz", 1, 2, "abc")

    def test_wrong_type(self):
        self.assertRaises(TypeError,
                          require_atleast,
                          "xyz", 1.5, 1, classes=int)


class TestRequireAtMost(ut.TestCase):

    def test_atmost(self):
        self.assertIsNone(require_atmost("xyz", 2, 2))
        self.assertIsNone(require_atmost("xyz", 1, 2))

    def test_not_atmost(self):
        self.assertRaisesRegex(ValueError,
                               "Must have xyz ≤ 2, but got 3",
                               require_atmost,
                               "xyz", 3, 2)


class TestRequireBetween(ut.TestCase):

    def test_inclusive(self):
        for value in [0, 1, 2]:
            self.assertIsNone(require_between("xyz", value, 0, 2))
        for value in [-1, 3]:
            self.assertRaises(ValueError, require_between, "xyz", value, 0, 2)

    def test_exclusive(self):
        self.assertIsNone(require_between("xyz", 1, 0, 2, inclusive=False))
        for value in [0, 2]:
            self.assertRaises(ValueError,
                              require_between,
                              "xyz", value, 0, 2, inclusive=False)

    def test_open_bound(self):
        self.assertIsNone(require_between("xyz", 10 ** 9, 0, None))
        self.assertIsNone(require_between("xyz", -10 ** 9, None, 0))

    def test_custom_error(self):
        class MyCustomError(ValueError):
            pass

        self.assertRaises(MyCustomError,
                          require_between,
                          "xyz", 3, 0, 2, error_type=MyCustomError)


if __name__ == "__main__":
    ut.main(verbosity=2)
