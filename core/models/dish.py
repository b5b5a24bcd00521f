# =============================================================================
# core/models/dish.py - Dish (Menu Item) Schemas
# =============================================================================
# A dish is a menu item; its recipe is a list of ingredient lines stored in
# `dish_ingredients`.
# =============================================================================

from typing import Optional

from pydantic import BaseModel, Field


class DishIngredientLine(BaseModel):
    """One ingredient in a dish's recipe."""
    ingredient_id: str = Field(..., min_length=1)
    quantity: float = Field(..., ge=0)
    unit: Optional[str] = None


class DishCreate(BaseModel):
    """
    Schema for adding a dish.

    Example:
        {
            "name": "Margherita",
            "price": 11.5,
            "category": "Pizza",
            "ingredients": [{"ingredient_id": "…", "quantity": 0.2, "unit": "kg"}]
        }
    """

    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    category: Optional[str] = None
    description: Optional[str] = None
    allergens: list[str] = Field(default_factory=list)
    popularity: Optional[float] = Field(default=None, ge=0)
    image_url: Optional[str] = None
    ingredients: list[DishIngredientLine] = Field(default_factory=list)


class DishUpdate(BaseModel):
    """
    Partial update.

    When `ingredients` is sent it replaces the whole recipe.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    price: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = None
    description: Optional[str] = None
    allergens: Optional[list[str]] = None
    popularity: Optional[float] = Field(default=None, ge=0)
    image_url: Optional[str] = None
    ingredients: Optional[list[DishIngredientLine]] = None


class FoodCostRequest(BaseModel):
    """Recipe to price against current ingredient costs."""
    ingredients: list[DishIngredientLine]
