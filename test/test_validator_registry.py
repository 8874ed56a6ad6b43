import unittest

from modelretriever.validators import ValidatorRegistry

from support import RegexValidator, NotEmptyValidator, NamedValidator


class TestValidatorRegistry(unittest.TestCase):

    def setUp(self):
        self.registry = ValidatorRegistry()

    def test_default_id_is_qualified_class_name(self):
        self.assertEqual(RegexValidator().validator_id, f"{RegexValidator.__module__}.RegexValidator")

    def test_add_and_get(self):
        regex = RegexValidator()
        self.assertIsNone(self.registry.add(regex))

        self.assertIs(self.registry.get(regex.validator_id), regex)
        self.assertIn(regex.validator_id, self.registry)
        self.assertEqual(len(self.registry), 1)

    def test_add_same_id_overwrites(self):
        first = NamedValidator("shared")
        second = NamedValidator("shared")

        self.registry.add(first)
        self.assertIs(self.registry.add(second), first)
        self.assertIs(self.registry.get("shared"), second)
        self.assertEqual(self.registry.ids(), ["shared"])

    def test_remove(self):
        regex = RegexValidator()
        self.registry.add(regex)

        self.assertIs(self.registry.remove(regex), regex)
        self.assertIsNone(self.registry.remove(regex))
        self.assertEqual(len(self.registry), 0)

    def test_snapshot_is_read_only_and_detached(self):
        regex = RegexValidator()
        self.registry.add(regex)
        snapshot = self.registry.snapshot()

        with self.assertRaises(TypeError):
            snapshot["other"] = NotEmptyValidator()

        self.registry.add(NotEmptyValidator())
        self.assertEqual(list(snapshot), [regex.validator_id])


if __name__ == "__main__":
    unittest.main()
