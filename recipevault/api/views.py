"""
RecipeVault API Views.

Views are thin: validate/coerce the body, take the caller's Identity off
the request once, and hand it explicitly to the services.
"""

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.renderers import JSONRenderer
from rest_framework.response import Response
from rest_framework.views import APIView

from recipevault.api.authentication import BearerTokenAuthentication
from recipevault.api.exceptions import exception_handler
from recipevault.api.serializers import (
    IngredientInputSerializer,
    IngredientSerializer,
    LoginSerializer,
    RecipeInputSerializer,
    RecipeSerializer,
    RegisterSerializer,
    serialize_recipe_detail,
)
from recipevault.results import Identity
from recipevault.services import build_auth_service, build_vault


class VaultViewMixin:
    """
    Pins authentication, permissions, JSON I/O and error handling so the
    API behaves the same whatever the host project's REST_FRAMEWORK says.
    """

    authentication_classes = [BearerTokenAuthentication]
    permission_classes = [IsAuthenticated]
    renderer_classes = [JSONRenderer]
    parser_classes = [JSONParser]

    def get_exception_handler(self):
        return exception_handler

    def get_identity(self) -> Identity:
        return self.request.user

    def get_vault(self):
        return build_vault()

    def validated(self, serializer_class) -> dict:
        serializer = serializer_class(data=self.request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data


# ══════════════════════════════════════════════════════════════
# AUTH
# ══════════════════════════════════════════════════════════════


class RegisterView(VaultViewMixin, APIView):
    """
    POST /api/auth/register
    {
        "name": "Ana",
        "email": "ana@example.com",
        "password": "s3cret"
    }
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        data = self.validated(RegisterSerializer)
        user_id = build_auth_service().register(
            data.get("name"), data.get("email"), data.get("password")
        )
        return Response(
            {"message": "User registered successfully.", "userId": user_id},
            status=status.HTTP_201_CREATED,
        )


class LoginView(VaultViewMixin, APIView):
    """
    POST /api/auth/login
    {
        "email": "ana@example.com",
        "password": "s3cret"
    }
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        data = self.validated(LoginSerializer)
        result = build_auth_service().login(data.get("email"), data.get("password"))
        return Response(
            {
                "message": "Login successful.",
                "token": result.token,
                "user": result.user.as_dict(),
            }
        )


# ══════════════════════════════════════════════════════════════
# RECIPES
# ══════════════════════════════════════════════════════════════


class RecipeViewSet(VaultViewMixin, viewsets.ViewSet):
    """
    Recipes of the authenticated user.

    list: GET /api/recipes (newest first)
    create: POST /api/recipes
    retrieve: GET /api/recipes/{id} (with ingredients)
    update: PUT /api/recipes/{id} (full replace)
    destroy: DELETE /api/recipes/{id} (cascades to ingredients)
    ingredients: GET/POST /api/recipes/{id}/ingredients
    """

    lookup_value_regex = r"\d+"

    def list(self, request):
        recipes = self.get_vault().list_recipes(self.get_identity())
        return Response(RecipeSerializer(recipes, many=True).data)

    def create(self, request):
        fields = self.validated(RecipeInputSerializer)
        recipe_id = self.get_vault().create_recipe(self.get_identity(), fields)
        return Response(
            {"message": "Recipe created successfully.", "recipeId": recipe_id},
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, pk=None):
        detail = self.get_vault().get_recipe(self.get_identity(), int(pk))
        return Response(serialize_recipe_detail(detail))

    def update(self, request, pk=None):
        fields = self.validated(RecipeInputSerializer)
        self.get_vault().update_recipe(self.get_identity(), int(pk), fields)
        return Response({"message": "Recipe updated successfully."})

    def destroy(self, request, pk=None):
        self.get_vault().delete_recipe(self.get_identity(), int(pk))
        return Response({"message": "Recipe deleted successfully."})

    @action(detail=True, methods=["get"], url_path="ingredients")
    def ingredients(self, request, pk=None):
        """
        List the ingredients of a recipe.

        GET /api/recipes/{id}/ingredients
        """
        ingredients = self.get_vault().list_ingredients(self.get_identity(), int(pk))
        return Response(IngredientSerializer(ingredients, many=True).data)

    @ingredients.mapping.post
    def add_ingredient(self, request, pk=None):
        """
        Add an ingredient to a recipe.

        POST /api/recipes/{id}/ingredients
        {
            "name": "Salt",
            "quantity": "1",
            "unit": "tsp"
        }
        """
        fields = self.validated(IngredientInputSerializer)
        ingredient_id = self.get_vault().create_ingredient(
            self.get_identity(), int(pk), fields
        )
        return Response(
            {"message": "Ingredient added successfully.", "ingredientId": ingredient_id},
            status=status.HTTP_201_CREATED,
        )


# ══════════════════════════════════════════════════════════════
# INGREDIENTS
# ══════════════════════════════════════════════════════════════


class IngredientViewSet(VaultViewMixin, viewsets.ViewSet):
    """
    Individual ingredients, reachable only through an owned recipe.

    retrieve: GET /api/ingredients/{id}
    update: PUT /api/ingredients/{id} (full replace)
    destroy: DELETE /api/ingredients/{id}
    """

    lookup_value_regex = r"\d+"

    def retrieve(self, request, pk=None):
        ingredient = self.get_vault().get_ingredient(self.get_identity(), int(pk))
        return Response(IngredientSerializer(ingredient).data)

    def update(self, request, pk=None):
        fields = self.validated(IngredientInputSerializer)
        self.get_vault().update_ingredient(self.get_identity(), int(pk), fields)
        return Response({"message": "Ingredient updated successfully."})

    def destroy(self, request, pk=None):
        self.get_vault().delete_ingredient(self.get_identity(), int(pk))
        return Response({"message": "Ingredient deleted successfully."})
