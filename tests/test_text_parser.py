"""Tests for free-text meal parsing."""

from nutrition_ai.services.nutrition import aggregate_nutrition
from nutrition_ai.services.text_parser import parse_food_description


def test_parse_rice_and_chicken() -> None:
    items = parse_food_description("rice and chicken")

    assert [item.name for item in items] == ["rice", "chicken"]
    assert all(item.quantity == 100 for item in items)
    assert all(item.category == "manual" for item in items)
    assert aggregate_nutrition(items).calories == 295.0


def test_parse_uses_table_order_and_filler_values() -> None:
    items = parse_food_description("Apple, BROCCOLI")

    assert [item.name for item in items] == ["broccoli", "apple"]
    broccoli = items[0].nutrition
    assert (broccoli.fiber, broccoli.sugar, broccoli.sodium, broccoli.cholesterol) == (
        2,
        5,
        50,
        10,
    )


def test_parse_unknown_text_returns_mixed_meal() -> None:
    items = parse_food_description("asdf")

    assert len(items) == 1
    item = items[0]
    assert item.name == "Mixed meal"
    assert item.quantity == 200
    assert item.category == "estimated"
    nutrition = item.nutrition
    assert (
        nutrition.calories,
        nutrition.protein,
        nutrition.carbohydrates,
        nutrition.fat,
        nutrition.fiber,
        nutrition.sugar,
        nutrition.sodium,
        nutrition.cholesterol,
    ) == (300, 15, 30, 10, 5, 8, 100, 20)


def test_parse_item_ids_are_unique() -> None:
    items = parse_food_description("rice rice chicken")

    assert len({item.id for item in items}) == len(items)
