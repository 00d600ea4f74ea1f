"""Scene composition from YAML recipes."""

from .loader import RecipeLoader, parse_color

__all__ = ["RecipeLoader", "parse_color"]
