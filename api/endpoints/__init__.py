"""
Recipe Book API Endpoints
All API endpoint modules
"""

# Import all endpoint modules
from . import health, recipes, categories, favorites, stats

__all__ = [
    "health",
    "recipes",
    "categories",
    "favorites",
    "stats"
]
