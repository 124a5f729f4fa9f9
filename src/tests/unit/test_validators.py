"""Unit tests for input validators."""

import pytest

from recipe_keeper.utils.validators import (
    is_number,
    validate_positive_number,
    validate_recipe_data,
    validate_required_string,
    validate_servings,
    validate_sort_order,
)


class TestIsNumber:
    @pytest.mark.parametrize("value", [0, 1, 2.5, -3])
    def test_numbers(self, value):
        assert is_number(value) is True

    @pytest.mark.parametrize("value", [True, False, None, "1", float("nan"), float("inf")])
    def test_non_numbers(self, value):
        assert is_number(value) is False


class TestValidatePositiveNumber:
    def test_valid(self):
        assert validate_positive_number(0.5, "Servings needed") == (True, "")

    @pytest.mark.parametrize("value", [0, -1, None, "2", True])
    def test_invalid(self, value):
        is_valid, error = validate_positive_number(value, "Servings needed")
        assert is_valid is False
        assert error.startswith("Servings needed:")


class TestValidateSortOrder:
    def test_zero_allowed(self):
        assert validate_sort_order(0)[0] is True

    @pytest.mark.parametrize("value", [-1, 1.0, "1", None, True])
    def test_invalid(self, value):
        assert validate_sort_order(value)[0] is False


class TestValidateServings:
    @pytest.mark.parametrize("value", [None, 1, 24])
    def test_valid(self, value):
        assert validate_servings(value)[0] is True

    @pytest.mark.parametrize("value", [0, -2, 1.5, "4", False])
    def test_invalid(self, value):
        assert validate_servings(value)[0] is False


class TestValidateRequiredString:
    def test_valid(self):
        assert validate_required_string("Lasagna", "Title") == (True, "")

    @pytest.mark.parametrize("value", [None, "", "   ", 12, "x" * 201])
    def test_invalid(self, value):
        assert validate_required_string(value, "Title")[0] is False


class TestValidateRecipeData:
    def test_valid(self):
        data = {"title": "Soup", "servings": 4, "ingredients": ["water"], "instructions": []}
        assert validate_recipe_data(data) == (True, [])

    def test_optional_fields_may_be_absent(self):
        assert validate_recipe_data({"title": "Soup"}) == (True, [])

    def test_collects_every_error(self):
        is_valid, errors = validate_recipe_data(
            {"title": "", "servings": 0, "ingredients": "water", "instructions": [1]}
        )
        assert is_valid is False
        assert len(errors) == 4
