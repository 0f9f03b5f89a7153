"""
RecipeVault REST API (Django REST Framework).

Provides the JSON surface for auth, recipes and ingredients.
"""
