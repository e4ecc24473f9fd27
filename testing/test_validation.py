import abc
import unittest
from typing import Any, List, Optional, SupportsInt, Union

from typing_extensions import Protocol, runtime_checkable

from typesafe import errors
from typesafe import validation


class Named:
    def set_name(self, name: str) -> None:
        self.name = name


class Widget(Named):
    pass


class Gadget(Named):
    pass


class Gizmo:
    pass


class Shape(abc.ABC):
    pass


class Circle(Shape):
    pass


@runtime_checkable
class Closeable(Protocol):
    def close(self) -> None: ...


class File:
    def close(self) -> None:
        pass


class TestTypeCheck(unittest.TestCase):
    def test_of_class(self):
        check = validation.TypeCheck.of(int)
        self.assertEqual("int", check.name)
        self.assertTrue(check.matches(3))
        self.assertFalse(check.matches("3"))

        widget_check = validation.TypeCheck.of(Widget)
        self.assertEqual(f"{__name__}.Widget", widget_check.name)

    def test_of_callable(self):
        def has_name(x: Any) -> bool:
            return hasattr(x, "set_name")

        check = validation.TypeCheck.of(has_name)
        self.assertEqual("has_name", check.name)
        self.assertTrue(check.matches(Widget()))
        self.assertFalse(check.matches(Gizmo()))

    def test_of_typecheck_is_unchanged(self):
        check = validation.TypeCheck("Positive", lambda x: x > 0)
        self.assertIs(check, validation.TypeCheck.of(check))

    def test_of_rejects_non_descriptors(self):
        for bad in ("Widget", b"Widget", 3, None):
            with self.subTest(bad):
                with self.assertRaises(errors.ConfigurationError):
                    validation.TypeCheck.of(bad)

    def test_of_rejects_typing_forms(self):
        forms: List[Any] = [List[int], Union[int, str], Optional[int], Any]
        for form in forms:
            with self.subTest(form):
                with self.assertRaises(errors.ConfigurationError):
                    validation.TypeCheck.of(form)

    def test_of_accepts_typing_protocols(self):
        check = validation.TypeCheck.of(SupportsInt)
        self.assertTrue(check.matches(3.5))
        self.assertFalse(check.matches("3"))


class TestAssertAllowedTypesConfigured(unittest.TestCase):
    def test_bad_configurations(self):
        bads: List[Any] = [None, (), [], set(), "int", int, 5, [int, "str"]]
        for bad in bads:
            with self.subTest(bad):
                with self.assertRaises(errors.ConfigurationError):
                    validation.assert_allowed_types_configured(bad)

    def test_good_configurations(self):
        checks = validation.assert_allowed_types_configured([int, str])
        self.assertEqual(("int", "str"), tuple(c.name for c in checks))
        checks = validation.assert_allowed_types_configured(frozenset([int]))
        self.assertEqual(1, len(checks))

    def test_owner_in_message(self):
        with self.assertRaisesRegex(errors.ConfigurationError, "Thingies"):
            validation.assert_allowed_types_configured(None, "Thingies")


class TestValidator(unittest.TestCase):
    def test_nominal(self):
        v = validation.Validator([Widget, Gadget])
        self.assertTrue(v.is_valid_element(Widget()))
        self.assertTrue(v.is_valid_element(Gadget()))
        self.assertFalse(v.is_valid_element(Gizmo()))
        self.assertFalse(v.is_valid_element(object()))
        self.assertFalse(v.is_valid_element(None))

    def test_abc_and_protocol(self):
        v = validation.Validator([Shape, Closeable])
        self.assertTrue(v.is_valid_element(Circle()))
        self.assertTrue(v.is_valid_element(File()))
        self.assertFalse(v.is_valid_element(Gizmo()))

    def test_structural_check(self):
        v = validation.Validator([validation.TypeCheck("Even", _is_even)])
        self.assertTrue(v.is_valid_element(4))
        self.assertFalse(v.is_valid_element(5))
        self.assertEqual(("Even",), v.accepted_type_names)

    def test_matching_type_uses_declared_order(self):
        v = validation.Validator([Named, Widget])
        match = v.matching_type(Widget())
        assert match is not None
        self.assertEqual(f"{__name__}.Named", match.name)
        self.assertIsNone(v.matching_type(Gizmo()))

    def test_predicate_not_called_without_type_match(self):
        calls: List[Any] = []

        def predicate(x: Any) -> bool:
            calls.append(x)
            return True

        v = validation.Validator([Widget], predicate)
        self.assertFalse(v.is_valid_element(Gizmo()))
        self.assertEqual([], calls)

        w = Widget()
        self.assertTrue(v.is_valid_element(w))
        self.assertEqual([w], calls)

    def test_predicate_result(self):
        # A predicate without an explicit return refuses the element.
        def no_return(x: Any) -> None:
            pass

        cases = [
            (lambda x: True, True),
            (lambda x: False, False),
            (no_return, False),
            (lambda x: 0, False),
            (lambda x: 1, True),
        ]
        for predicate, expected in cases:
            with self.subTest(expected=expected):
                v = validation.Validator([Widget], predicate)
                self.assertIs(expected, v.is_valid_element(Widget()))

    def test_check_type_mismatch(self):
        v = validation.Validator([int, str], owner="Things")
        v.check(1)
        with self.assertRaises(errors.InvalidElementError) as ctx:
            v.check(1.5)
        err = ctx.exception
        self.assertEqual("float", err.element_type)
        self.assertEqual(("int", "str"), err.accepted)
        self.assertEqual("Things", err.owner)
        self.assertEqual(1.5, err.element)
        self.assertIn("float", str(err))
        self.assertIn("int, str", str(err))
        self.assertIsInstance(err, TypeError)

    def test_check_predicate_failure(self):
        v = validation.Validator([int], _is_even, owner="Evens")
        v.check(2)
        with self.assertRaisesRegex(errors.InvalidElementError, "admission check"):
            v.check(3)

    def test_check_all_stops_at_first(self):
        seen: List[Any] = []

        def predicate(x: Any) -> bool:
            seen.append(x)
            return True

        v = validation.Validator([int], predicate)
        with self.assertRaises(errors.InvalidElementError) as ctx:
            v.check_all([1, 2, "three", 4])
        self.assertEqual("three", ctx.exception.element)
        self.assertEqual([1, 2], seen)

    def test_empty_configuration(self):
        with self.assertRaises(errors.ConfigurationError):
            validation.Validator([])
        with self.assertRaises(errors.ConfigurationError):
            validation.Validator(None, lambda x: True)


def _is_even(x: Any) -> bool:
    return isinstance(x, int) and x % 2 == 0
