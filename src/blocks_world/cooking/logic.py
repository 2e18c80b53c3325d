from __future__ import annotations

"""
Recipe book and pantry logic.
Recipes list ingredient quantities in grams; the pantry stores grams on hand.
Filters return new books holding copies of the matching recipes.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True, eq=False)
class Ingredient:
    """Ingredient with nutrition info per gram; pantry stock is tracked per instance"""
    name: str
    calories_per_gram: int


@dataclass
class Recipe:
    """Named recipe with servings and ingredient lines"""
    name: str
    servings: int
    ingredients: List[Tuple[Ingredient, int]] = field(default_factory=list)

    def add_ingredient(self, ingredient: Ingredient, quantity: int) -> None:
        self.ingredients.append((ingredient, int(quantity)))

    def total_calories(self) -> int:
        return sum(quantity * ingredient.calories_per_gram for ingredient, quantity in self.ingredients)

    def calories_per_serving(self) -> Optional[int]:
        if self.servings <= 0:
            return None
        return self.total_calories() // self.servings

    def copy(self) -> "Recipe":
        return Recipe(self.name, self.servings, list(self.ingredients))


class Book:
    """Ordered collection of recipes"""

    def __init__(self, recipes: Optional[List[Recipe]] = None):
        self.recipes: List[Recipe] = list(recipes) if recipes else []

    def add_recipe(self, recipe: Recipe) -> None:
        self.recipes.append(recipe)

    def names(self) -> List[str]:
        return [recipe.name for recipe in self.recipes]

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self.recipes)

    def __len__(self) -> int:
        return len(self.recipes)


class Pantry:
    """Stored quantity per ingredient"""

    def __init__(self):
        self.items: Dict[Ingredient, int] = {}

    def store(self, ingredient: Ingredient, quantity: int) -> None:
        """Add quantity to what is already stored for this ingredient"""
        self.items[ingredient] = self.items.get(ingredient, 0) + int(quantity)

    def quantity_of(self, ingredient: Ingredient) -> int:
        return self.items.get(ingredient, 0)

    def has_enough(self, ingredient: Ingredient, needed: int) -> bool:
        if ingredient not in self.items:
            return False
        return self.items[ingredient] >= needed


def can_make(pantry: Pantry, recipe: Recipe) -> bool:
    """Each ingredient line is checked against the pantry on its own"""
    return all(pantry.has_enough(ingredient, quantity) for ingredient, quantity in recipe.ingredients)


def can_make_any(pantry: Pantry, book: Book) -> Book:
    """Book of every recipe that can be made individually from the pantry"""
    result = Book()
    for recipe in book:
        if can_make(pantry, recipe):
            result.add_recipe(recipe.copy())
    return result


def can_make_all(pantry: Pantry, book: Book) -> Optional[Book]:
    """Copy of the whole book if every recipe can be made, otherwise None"""
    if not all(can_make(pantry, recipe) for recipe in book):
        return None
    return Book([recipe.copy() for recipe in book])


def within_calorie_limit(pantry: Optional[Pantry], book: Book, limit: int) -> Book:
    """Book of recipes whose calories per serving are strictly below the limit.

    The pantry is not consulted; recipes without servings never qualify.
    """
    result = Book()
    for recipe in book:
        per_serving = recipe.calories_per_serving()
        if per_serving is not None and per_serving < limit:
            result.add_recipe(recipe.copy())
    return result


def print_book(book: Book) -> None:
    for recipe in book:
        per_serving = recipe.calories_per_serving()
        print(f"{recipe.name} (serves {recipe.servings}, {per_serving} kcal/serving)")
        for ingredient, quantity in recipe.ingredients:
            print(f"  {quantity}g {ingredient.name}")
