"""
RecipeVault API Serializers.

Input serializers only coerce types (integers, strings, length limits);
required-field rules live in the services so every entry point enforces
them the same way.
"""

from rest_framework import serializers

from recipevault.models import Ingredient, Recipe


# ── Output ──


class IngredientSerializer(serializers.ModelSerializer):
    """Serializer for Ingredient model."""

    recipe_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Ingredient
        fields = [
            "id",
            "recipe_id",
            "name",
            "quantity",
            "unit",
            "notes",
        ]
        read_only_fields = fields


class RecipeSerializer(serializers.ModelSerializer):
    """Serializer for Recipe model."""

    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Recipe
        fields = [
            "id",
            "user_id",
            "title",
            "description",
            "category",
            "prep_time",
            "cook_time",
            "servings",
            "created_at",
        ]
        read_only_fields = fields


def serialize_recipe_detail(detail) -> dict:
    """A RecipeDetail as one JSON object: the recipe plus ``ingredients``."""
    data = dict(RecipeSerializer(detail.recipe).data)
    data["ingredients"] = IngredientSerializer(detail.ingredients, many=True).data
    return data


# ── Input ──


def _text(max_length=None, trim=True):
    return serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=max_length,
        trim_whitespace=trim,
    )


def _minutes():
    return serializers.IntegerField(required=False, allow_null=True, min_value=0)


class RecipeInputSerializer(serializers.Serializer):
    """Body of POST/PUT /api/recipes."""

    title = _text(max_length=255)
    description = _text()
    category = _text(max_length=100)
    prep_time = _minutes()
    cook_time = _minutes()
    servings = serializers.IntegerField(required=False, allow_null=True, min_value=0)


class IngredientInputSerializer(serializers.Serializer):
    """Body of POST /api/recipes/:recipeId/ingredients and PUT /api/ingredients/:id."""

    name = _text(max_length=255)
    quantity = _text(max_length=50)
    unit = _text(max_length=50)
    notes = _text()


class RegisterSerializer(serializers.Serializer):
    """Body of POST /api/auth/register."""

    name = _text(max_length=150)
    email = _text(max_length=254)
    password = _text(trim=False)


class LoginSerializer(serializers.Serializer):
    """Body of POST /api/auth/login."""

    email = _text(max_length=254)
    password = _text(trim=False)
