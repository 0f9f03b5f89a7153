"""
Initial RecipeVault schema.

Tables:
- recipevault_user (email unique)
- recipevault_recipe (FK -> user, cascade)
- recipevault_ingredient (FK -> recipe, cascade)
"""

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=150, verbose_name="Name")),
                (
                    "email",
                    models.EmailField(
                        max_length=254, unique=True, verbose_name="Email"
                    ),
                ),
                (
                    "password",
                    models.CharField(max_length=128, verbose_name="Password hash"),
                ),
            ],
            options={
                "verbose_name": "Account",
                "verbose_name_plural": "Accounts",
                "db_table": "recipevault_user",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Recipe",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                (
                    "description",
                    models.TextField(blank=True, null=True, verbose_name="Description"),
                ),
                (
                    "category",
                    models.CharField(
                        blank=True,
                        help_text="Free-form, e.g. Dessert, Soup",
                        max_length=100,
                        null=True,
                        verbose_name="Category",
                    ),
                ),
                (
                    "prep_time",
                    models.PositiveIntegerField(
                        blank=True, null=True, verbose_name="Prep time (minutes)"
                    ),
                ),
                (
                    "cook_time",
                    models.PositiveIntegerField(
                        blank=True, null=True, verbose_name="Cook time (minutes)"
                    ),
                ),
                (
                    "servings",
                    models.PositiveIntegerField(
                        blank=True, default=1, null=True, verbose_name="Servings"
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, verbose_name="created at"),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="recipes",
                        to="recipevault.account",
                        verbose_name="Owner",
                    ),
                ),
            ],
            options={
                "verbose_name": "Recipe",
                "verbose_name_plural": "Recipes",
                "db_table": "recipevault_recipe",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["user", "-created_at"],
                        name="rv_recipe_owner_created_idx",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Ingredient",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                (
                    "quantity",
                    models.CharField(
                        blank=True, max_length=50, null=True, verbose_name="Quantity"
                    ),
                ),
                (
                    "unit",
                    models.CharField(
                        blank=True,
                        help_text="g, kg, ml, cup, tbsp...",
                        max_length=50,
                        null=True,
                        verbose_name="Unit",
                    ),
                ),
                (
                    "notes",
                    models.TextField(blank=True, null=True, verbose_name="Notes"),
                ),
                (
                    "recipe",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ingredients",
                        to="recipevault.recipe",
                        verbose_name="Recipe",
                    ),
                ),
            ],
            options={
                "verbose_name": "Ingredient",
                "verbose_name_plural": "Ingredients",
                "db_table": "recipevault_ingredient",
                "ordering": ["id"],
                "indexes": [
                    models.Index(
                        fields=["recipe", "id"], name="rv_ingredient_recipe_idx"
                    )
                ],
            },
        ),
    ]
