# =============================================================================
# app/routers/dishes.py - Dish (Menu Item) Endpoints
# =============================================================================
# All endpoints require authentication and a business profile.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, status

from app.dependencies import BusinessProfileDep
from core.models.dish import DishCreate, DishUpdate, FoodCostRequest
from core.services.dish_service import DishService

router = APIRouter()

DishId = Annotated[str, Path(description="Dish id")]


@router.get("")
async def list_dishes(
    business_profile_id: BusinessProfileDep,
    include_archived: bool = False,
):
    dishes = DishService.list_dishes(business_profile_id, include_archived=include_archived)
    return {"dishes": dishes, "total": len(dishes)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_dish(request: DishCreate, business_profile_id: BusinessProfileDep):
    """Add a dish with its recipe; food_cost is computed from ingredient costs."""
    return DishService.create_dish(business_profile_id, request.model_dump(mode="json"))


@router.post("/food-cost")
async def calculate_food_cost(request: FoodCostRequest, business_profile_id: BusinessProfileDep):
    """Price a recipe at current ingredient costs without saving it."""
    lines = [line.model_dump() for line in request.ingredients]
    return {"food_cost": DishService.calculate_food_cost(business_profile_id, lines)}


@router.get("/{dish_id}")
async def get_dish(dish_id: DishId, business_profile_id: BusinessProfileDep):
    return DishService.get_dish(business_profile_id, dish_id)


@router.patch("/{dish_id}")
async def update_dish(
    dish_id: DishId,
    request: DishUpdate,
    business_profile_id: BusinessProfileDep,
):
    """Update a dish; an ingredients list replaces the whole recipe."""
    return DishService.update_dish(
        business_profile_id,
        dish_id,
        request.model_dump(mode="json", exclude_unset=True),
    )


@router.post("/{dish_id}/archive")
async def archive_dish(dish_id: DishId, business_profile_id: BusinessProfileDep):
    return DishService.set_archived(business_profile_id, dish_id, True)


@router.post("/{dish_id}/unarchive")
async def unarchive_dish(dish_id: DishId, business_profile_id: BusinessProfileDep):
    return DishService.set_archived(business_profile_id, dish_id, False)


@router.delete("/{dish_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_dish(dish_id: DishId, business_profile_id: BusinessProfileDep):
    """Delete a dish. Dishes with recorded sales return 409; archive them instead."""
    DishService.delete_dish(business_profile_id, dish_id)
