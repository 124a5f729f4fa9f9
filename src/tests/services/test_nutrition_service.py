"""Tests for nutrition_service (pure functions, no database)."""

import pytest

from recipe_keeper.services.nutrition_service import (
    aggregate_nutrition,
    round_nutrition_value,
    sanitize_nutrition,
)


def _node(servings_needed, servings, nutrition, components=None):
    return {
        "servings_needed": servings_needed,
        "recipe": {"servings": servings, "nutrition": nutrition},
        "components": components or [],
    }


class TestAggregateNutrition:
    """Tests for aggregate_nutrition()."""

    def test_scaling_example(self):
        hierarchy = [_node(2, 4, {"calories": 800, "protein": 40})]

        assert aggregate_nutrition(None, hierarchy) == {"calories": 400.0, "protein": 20.0}

    def test_empty_hierarchy_returns_root_values(self):
        assert aggregate_nutrition({"calories": 250, "fat": 9.5}, []) == {
            "calories": 250.0,
            "fat": 9.5,
        }

    def test_nothing_known_returns_none(self):
        assert aggregate_nutrition(None, []) is None
        assert aggregate_nutrition({}, [_node(1, 2, None)]) is None

    def test_root_and_children_are_summed(self):
        hierarchy = [
            _node(1, 2, {"calories": 100, "sugar": 4}),
            _node(3, 1, {"calories": 10}),
        ]

        result = aggregate_nutrition({"calories": 200, "fiber": 2}, hierarchy)

        assert result == {"calories": 280.0, "fiber": 2.0, "sugar": 2.0}

    def test_absent_fields_stay_absent(self):
        result = aggregate_nutrition({"protein": 5}, [_node(1, 1, {"sodium": 100})])

        assert result == {"protein": 5.0, "sodium": 100.0}
        assert "calories" not in result

    def test_child_without_servings_contributes_nothing(self):
        hierarchy = [_node(2, None, {"calories": 500})]

        assert aggregate_nutrition(None, hierarchy) is None

    def test_child_without_servings_does_not_zero_root_fields(self):
        hierarchy = [_node(2, None, {"calories": 500, "fat": 20})]

        assert aggregate_nutrition({"fat": 1.5}, hierarchy) == {"fat": 1.5}

    def test_grandchildren_are_not_visited(self):
        grandchild = _node(10, 1, {"calories": 1000})
        hierarchy = [_node(1, 1, {"calories": 50}, components=[grandchild])]

        assert aggregate_nutrition(None, hierarchy) == {"calories": 50.0}

    def test_unknown_and_invalid_fields_ignored(self):
        hierarchy = [_node(1, 1, {"calories": "lots", "vitaminC": 30, "protein": 2})]

        assert aggregate_nutrition({"iron": 3}, hierarchy) == {"protein": 2.0}

    def test_output_rounded_to_one_decimal(self):
        hierarchy = [_node(1, 3, {"calories": 100})]

        assert aggregate_nutrition(None, hierarchy) == {"calories": 33.3}

    def test_output_follows_field_order(self):
        hierarchy = [_node(1, 1, {"sodium": 1, "calories": 2, "protein": 3})]

        assert list(aggregate_nutrition(None, hierarchy)) == ["calories", "protein", "sodium"]

    def test_does_not_modify_inputs(self):
        root = {"calories": 100}
        hierarchy = [_node(1, 2, {"calories": 50})]

        aggregate_nutrition(root, hierarchy)

        assert root == {"calories": 100}
        assert hierarchy[0]["recipe"]["nutrition"] == {"calories": 50}


class TestSanitizeNutrition:
    """Tests for sanitize_nutrition()."""

    def test_keeps_valid_fields_rounded(self):
        assert sanitize_nutrition({"calories": 412.46, "saturatedFat": 3}) == {
            "calories": 412.5,
            "saturatedFat": 3.0,
        }

    @pytest.mark.parametrize(
        "value", [-1, "12", None, True, float("inf"), float("nan")]
    )
    def test_drops_invalid_values(self, value):
        assert sanitize_nutrition({"calories": value, "protein": 8}) == {"protein": 8.0}

    def test_zero_is_kept(self):
        assert sanitize_nutrition({"cholesterol": 0}) == {"cholesterol": 0.0}

    def test_drops_unknown_fields(self):
        assert sanitize_nutrition({"vitaminC": 12}) is None

    def test_empty_input(self):
        assert sanitize_nutrition(None) is None
        assert sanitize_nutrition({}) is None


class TestRoundNutritionValue:
    """Tests for round_nutrition_value()."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0.25, 0.3), (0.35, 0.4), (1.04, 1.0), (12, 12.0), (99.95, 100.0)],
    )
    def test_rounds_half_up(self, value, expected):
        assert round_nutrition_value(value) == expected
