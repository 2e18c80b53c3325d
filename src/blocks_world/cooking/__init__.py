"""Recipe book and pantry filters.

Recipes are filtered by what the pantry holds (any / all) or by calories
per serving.
"""

from .logic import (
    Ingredient,
    Recipe,
    Book,
    Pantry,
    can_make,
    can_make_any,
    can_make_all,
    within_calorie_limit,
    print_book,
)

__all__ = [
    "Ingredient",
    "Recipe",
    "Book",
    "Pantry",
    "can_make",
    "can_make_any",
    "can_make_all",
    "within_calorie_limit",
    "print_book",
]
