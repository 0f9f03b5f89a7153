"""
RecipeVault API URLs.

Include this in your project's urlpatterns:

    path('api/', include('recipevault.api.urls')),

Paths carry no trailing slash: /api/recipes, /api/recipes/7/ingredients.
"""

from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import IngredientViewSet, LoginView, RecipeViewSet, RegisterView

router = SimpleRouter(trailing_slash=False)
router.register("recipes", RecipeViewSet, basename="recipe")
router.register("ingredients", IngredientViewSet, basename="ingredient")

urlpatterns = [
    path("auth/register", RegisterView.as_view(), name="auth-register"),
    path("auth/login", LoginView.as_view(), name="auth-login"),
] + router.urls
