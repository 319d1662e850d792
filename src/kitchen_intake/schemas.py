from pydantic import BaseModel, Field


# --- Products and inventory ---

class NutritionFacts(BaseModel):
    energy_kcal: float | None = None
    fat: float | None = None
    saturated_fat: float | None = None
    carbohydrates: float | None = None
    sugars: float | None = None
    fiber: float | None = None
    proteins: float | None = None
    salt: float | None = None
    sodium: float | None = None


class Product(BaseModel):
    """Candidate product from a barcode lookup or a recipe/menu extraction."""

    name: str
    brand: str | None = None
    category: str | None = None
    description: str | None = None
    size: str | None = None
    unit: str | None = None
    barcode: str | None = None
    id: str | None = None
    images: list[str] = Field(default_factory=list)
    nutrition: NutritionFacts | None = None
    source: str | None = None
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)

    model_config = {"frozen": True}


class InventoryCandidate(BaseModel):
    """Read-only projection of an existing inventory record."""

    id: str
    name: str
    brand: str | None = None
    unit: str | None = None
    category: str | None = None
    barcode: str | None = None

    model_config = {"frozen": True}


class EnrichmentResult(BaseModel):
    product: Product
    estimated_quantity: float | None = None
    nutritional_score: int | None = None
    enrichment_applied: list[str] = Field(default_factory=list)


# --- Recipe extraction ---

class ParsedIngredient(BaseModel):
    quantity: str = ""
    unit: str = ""
    ingredient: str = ""
    preparation: str | None = None
    category: str = "general"
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)


class ParsedRecipe(BaseModel):
    recipe_name: str = "Untitled Recipe"
    servings: float | None = None
    portion_size: str | None = None
    prep_time_minutes: float | None = None
    cook_time_minutes: float | None = None
    total_time_minutes: float | None = None
    ingredients: list[ParsedIngredient] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    notes: str | None = None
    category: str | None = None
    source: str | None = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    warnings: list[str] = Field(default_factory=list)


class IngredientMatch(BaseModel):
    id: str
    item_name: str
    brand: str | None = None
    category: str | None = None
    confidence: float
    match_reason: str


class MatchedIngredient(BaseModel):
    ingredient: ParsedIngredient
    inventory_item_id: str | None = None
    match_confidence: float = 0.0
    suggestions: list[IngredientMatch] = Field(default_factory=list)
    converted_amount: float | None = None
    conversion_notes: str | None = None


# --- Unit conversion ---

class ConversionResult(BaseModel):
    success: bool
    converted_amount: float
    from_unit: str
    to_unit: str
    conversion_factor: float | None = None  # None for temperature formulas and failures
    conversion_type: str = "direct"  # direct / database / calculated / estimated
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    notes: str | None = None


# --- Menu extraction ---

class ParsedMenuItem(BaseModel):
    item_name: str = ""
    category: str = "general"
    price: float = Field(default=0.0, ge=0.0)
    target_food_cost_pct: float | None = None
    description: str | None = None
    raw_data: str | None = None
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)


class MenuParseResult(BaseModel):
    items: list[ParsedMenuItem] = Field(default_factory=list)
    total_detected: int = 0
    parse_confidence: float = 0.0
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class MenuFormat(BaseModel):
    format: str  # simple / detailed / pos_export / menu_engineering / unknown
    confidence: float
    detected_columns: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


# --- Menu validation ---

class ExistingMenuItem(BaseModel):
    id: str
    item_name: str
    price: float = 0.0
    category: str | None = None


class RecipeCost(BaseModel):
    id: str
    name: str
    cost_per_portion: float = 0.0


class MenuItemValidation(BaseModel):
    item: ParsedMenuItem
    validation_status: str  # good / warning / error
    validation_message: str = ""
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    recipe_id: str | None = None
    recipe_name: str | None = None
    actual_food_cost_pct: float | None = None
    suggested_price: float | None = None
    price_recommendation: str | None = None


class ValidationSummary(BaseModel):
    total: int
    good: int
    warnings: int
    errors: int
    recipes_linked: int
    avg_confidence: float
    common_issues: list[str]
