"""Convert already-fetched barcode API payloads into scored products.

The HTTP calls live with the caller; these adapters only read the JSON the
caller received:

- UPCitemdb ``/prod/trial/lookup``  {"code": "OK", "items": [{...}]}
- Open Food Facts ``/api/v0/product/<code>.json``  {"status": 1, "product": {...}}

A payload that reports no product yields ``None``.
"""

from __future__ import annotations

import logging
from typing import Any

from .confidence import score_fields
from .extraction import as_list, as_mapping, optional_number, optional_str
from .schemas import NutritionFacts, Product
from .units import parse_unit_from_size

logger = logging.getLogger(__name__)

UPC_DATABASE = "upc_database"
OPEN_FOOD_FACTS = "open_food_facts"


def _scored(fields: dict[str, Any]) -> Product:
    confidence = score_fields(
        fields["name"],
        brand=fields.get("brand"),
        category=fields.get("category"),
        size=fields.get("size"),
        description=fields.get("description"),
    )
    return Product(**fields, confidence=confidence)


def product_from_upcitemdb(payload: object, barcode: str | None = None) -> Product | None:
    data = as_mapping(payload)
    items = as_list(data.get("items"))
    if data.get("code") != "OK" or not items:
        return None
    item = as_mapping(items[0])
    name = optional_str(item.get("title"))
    if not name:
        logger.debug("UPCitemdb item without a title, ignoring")
        return None
    size = optional_str(item.get("size"))
    return _scored({
        "name": name,
        "brand": optional_str(item.get("brand")),
        "category": optional_str(item.get("category")),
        "description": optional_str(item.get("description")),
        "size": size,
        "unit": parse_unit_from_size(size),
        "barcode": barcode or optional_str(item.get("upc")) or optional_str(item.get("ean")),
        "images": [u for u in as_list(item.get("images")) if isinstance(u, str) and u],
        "source": UPC_DATABASE,
    })


_OFF_NUTRIMENTS = {
    "energy_kcal": "energy-kcal",
    "fat": "fat",
    "saturated_fat": "saturated-fat",
    "carbohydrates": "carbohydrates",
    "sugars": "sugars",
    "fiber": "fiber",
    "proteins": "proteins",
    "salt": "salt",
    "sodium": "sodium",
}


def _off_nutrition(nutriments: object) -> NutritionFacts | None:
    data = as_mapping(nutriments)
    if not data:
        return None
    return NutritionFacts(**{
        field: optional_number(data.get(key)) for field, key in _OFF_NUTRIMENTS.items()
    })


def product_from_open_food_facts(payload: object, barcode: str | None = None) -> Product | None:
    data = as_mapping(payload)
    product = as_mapping(data.get("product"))
    if data.get("status") != 1 or not product:
        return None
    name = optional_str(product.get("product_name")) or optional_str(product.get("product_name_en"))
    if not name:
        logger.debug("Open Food Facts product without a name, ignoring")
        return None

    tags = [t for t in as_list(product.get("categories_tags")) if isinstance(t, str)]
    size = optional_str(product.get("quantity"))
    images = [
        product.get(key)
        for key in ("image_url", "image_front_url", "image_ingredients_url", "image_nutrition_url")
    ]
    return _scored({
        "name": name,
        "brand": optional_str(product.get("brands")),
        "category": ", ".join(tags) or None,
        "description": optional_str(product.get("generic_name")),
        "size": size,
        "unit": parse_unit_from_size(size),
        "barcode": barcode or optional_str(data.get("code")),
        "images": [u for u in images if isinstance(u, str) and u],
        "nutrition": _off_nutrition(product.get("nutriments")),
        "source": OPEN_FOOD_FACTS,
    })
