from typing import Any

import pytest

from fieldchain.predicates import contains, is_boolean, is_float, is_integer
from fieldchain.utils import is_camel_or_pascal_case, to_description, to_snake_case


class TestPredicates:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param("42", True, id="positive"),
            pytest.param("-42", True, id="negative"),
            pytest.param("+0", True, id="signed zero"),
            pytest.param("4.2", False, id="decimal"),
            pytest.param(" 42", False, id="whitespace"),
            pytest.param("", False, id="empty"),
            pytest.param(None, False, id="missing"),
            pytest.param(42, False, id="not a string"),
        ],
    )
    def test_is_integer(self, value: Any, expected: bool):
        assert is_integer(value) == expected

    def test_is_integer_bounds(self):
        assert is_integer("10", min=10, max=10)
        assert not is_integer("9", min=10)
        assert not is_integer("11", max=10)
        assert not is_integer("01", allow_leading_zeroes=False)
        assert is_integer("0", allow_leading_zeroes=False)

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param("1", True, id="integer"),
            pytest.param("-1.5", True, id="decimal"),
            pytest.param(".5", True, id="leading dot"),
            pytest.param("1.", True, id="trailing dot"),
            pytest.param("1e-3", True, id="exponent"),
            pytest.param("e3", False, id="exponent only"),
            pytest.param(".", False, id="dot only"),
            pytest.param("-", False, id="sign only"),
            pytest.param("1,5", False, id="comma"),
            pytest.param(None, False, id="missing"),
        ],
    )
    def test_is_float(self, value: Any, expected: bool):
        assert is_float(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param("true", True, id="true"),
            pytest.param("0", True, id="zero"),
            pytest.param("True", False, id="capitalized"),
            pytest.param("yes", False, id="yes"),
            pytest.param(None, False, id="missing"),
        ],
    )
    def test_is_boolean(self, value: Any, expected: bool):
        assert is_boolean(value) == expected

    def test_contains(self):
        assert contains("john@example.com", "@")
        assert not contains("john", "@")
        assert not contains(None, "@")


class TestCasing:
    @pytest.mark.parametrize(
        "name, valid",
        [
            pytest.param("isEven", True, id="camel case"),
            pytest.param("IsEven", True, id="pascal case"),
            pytest.param("even", True, id="single word"),
            pytest.param("is_even", False, id="snake case"),
            pytest.param("is-even", False, id="kebab case"),
            pytest.param("1isEven", False, id="leading digit"),
        ],
    )
    def test_is_camel_or_pascal_case(self, name: str, valid: bool):
        assert is_camel_or_pascal_case(name) == valid

    def test_conversions(self):
        assert to_snake_case("isEven") == "is_even"
        assert to_snake_case("IsPostalCode5") == "is_postal_code5"
        assert to_description("isEven") == "is even"
        assert to_description("HasNoSpaces") == "has no spaces"
