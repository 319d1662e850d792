"""Test fixtures: sample inventory, recipes and menu rows."""

import pytest

from kitchen_intake.config import Settings
from kitchen_intake.schemas import ExistingMenuItem, InventoryCandidate, Product, RecipeCost


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture()
def inventory() -> list[InventoryCandidate]:
    return [
        InventoryCandidate(id="1", name="Chicken Breast, Boneless", category="Poultry"),
        InventoryCandidate(id="2", name="Ground Beef, 80/20", category="Meat"),
        InventoryCandidate(id="3", name="Salmon Fillet, Fresh", category="Seafood"),
        InventoryCandidate(id="5", name="Tomatoes, Roma", category="Vegetables", brand="Local Farm"),
        InventoryCandidate(id="6", name="Onions, Yellow", category="Vegetables"),
        InventoryCandidate(id="11", name="Butter, Unsalted", category="Dairy", brand="Land O Lakes"),
        InventoryCandidate(id="12", name="Heavy Cream", category="Dairy"),
        InventoryCandidate(id="16", name="All-Purpose Flour", category="Baking"),
        InventoryCandidate(id="20", name="Salt, Kosher", category="Seasonings"),
        InventoryCandidate(id="23", name="Basil, Fresh", category="Herbs"),
        InventoryCandidate(id="27", name="Chocolate Chips, Semi-Sweet", category="Baking"),
    ]


@pytest.fixture()
def ketchup() -> Product:
    return Product(
        name="Heinz Tomato Ketchup",
        brand="Heinz",
        size="32 oz",
        unit="oz",
        barcode="013000006408",
    )


@pytest.fixture()
def pantry() -> list[InventoryCandidate]:
    return [
        InventoryCandidate(id="k1", name="Heinz Tomato Ketchup 32oz", brand="Heinz", unit="oz"),
        InventoryCandidate(id="k2", name="Heinz Mustard", brand="Heinz", unit="oz"),
        InventoryCandidate(id="k3", name="Hunt's Ketchup", brand="Hunt's", unit="oz"),
        InventoryCandidate(id="k4", name="Paper Towels", brand="Bounty", unit="pack"),
    ]


@pytest.fixture()
def existing_menu() -> list[ExistingMenuItem]:
    return [
        ExistingMenuItem(id="m1", item_name="Caesar Salad", price=14.0, category="Salads"),
        ExistingMenuItem(id="m2", item_name="Margherita Pizza", price=18.0, category="Pizza"),
    ]


@pytest.fixture()
def recipes() -> list[RecipeCost]:
    return [
        RecipeCost(id="r1", name="Margherita Pizza", cost_per_portion=5.62),
        RecipeCost(id="r2", name="Grilled Salmon", cost_per_portion=12.0),
        RecipeCost(id="r3", name="Tomato Soup", cost_per_portion=0.0),
    ]
