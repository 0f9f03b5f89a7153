"""
Move the ingredient -> recipe cascade into the database.

recipevault_ingredient.recipe_id is rebuilt with ON DELETE CASCADE, so a
DELETE on recipevault_recipe removes the recipe's ingredients in the same
statement, whoever issues it. The model field becomes DO_NOTHING to match.

SQLite cannot alter a foreign key in place: the table is rebuilt from its
own DDL, the same way Django's SQLite schema editor remakes tables.
"""

import re

import django.db.models.deletion
from django.db import migrations, models

INGREDIENT_TABLE = "recipevault_ingredient"
RECIPE_TABLE = "recipevault_recipe"
ON_DELETE_CASCADE = " ON DELETE CASCADE"

RECIPE_REFERENCE = re.compile(
    r'(REFERENCES\s+"%s"\s*\("id"\))(\s+ON DELETE CASCADE)?' % RECIPE_TABLE,
    re.IGNORECASE,
)


def _rebuild_sqlite_table(schema_editor, cascade):
    quote = schema_editor.quote_name
    with schema_editor.connection.cursor() as cursor:
        cursor.execute(
            "SELECT type, sql FROM sqlite_master WHERE tbl_name = %s AND sql IS NOT NULL",
            [INGREDIENT_TABLE],
        )
        rows = cursor.fetchall()

    table_sql = next(sql for kind, sql in rows if kind == "table")
    index_sqls = [sql for kind, sql in rows if kind == "index"]

    clause = ON_DELETE_CASCADE if cascade else ""
    table_sql, found = RECIPE_REFERENCE.subn(lambda m: m.group(1) + clause, table_sql)
    if found != 1:
        raise RuntimeError(f"Expected one reference to {RECIPE_TABLE} in {INGREDIENT_TABLE}")

    new_table = f"new__{INGREDIENT_TABLE}"
    table_sql = table_sql.replace(quote(INGREDIENT_TABLE), quote(new_table), 1)

    schema_editor.execute(table_sql)
    schema_editor.execute(
        f"INSERT INTO {quote(new_table)} SELECT * FROM {quote(INGREDIENT_TABLE)}"
    )
    schema_editor.execute(f"DROP TABLE {quote(INGREDIENT_TABLE)}")
    schema_editor.execute(
        f"ALTER TABLE {quote(new_table)} RENAME TO {quote(INGREDIENT_TABLE)}"
    )
    for index_sql in index_sqls:
        schema_editor.execute(index_sql)


def _replace_constraint(schema_editor, cascade):
    connection = schema_editor.connection
    quote = schema_editor.quote_name
    with connection.cursor() as cursor:
        constraints = connection.introspection.get_constraints(cursor, INGREDIENT_TABLE)

    names = [
        name
        for name, info in constraints.items()
        if info["foreign_key"] and info["columns"] == ["recipe_id"]
    ]
    for name in names:
        schema_editor.execute(
            schema_editor.sql_delete_fk
            % {"table": quote(INGREDIENT_TABLE), "name": quote(name)}
        )

    name = names[0] if names else f"{INGREDIENT_TABLE}_recipe_id_fk"
    clause = ON_DELETE_CASCADE if cascade else ""
    schema_editor.execute(
        f"ALTER TABLE {quote(INGREDIENT_TABLE)} ADD CONSTRAINT {quote(name)} "
        f"FOREIGN KEY ({quote('recipe_id')}) "
        f"REFERENCES {quote(RECIPE_TABLE)} ({quote('id')})"
        f"{clause}{connection.ops.deferrable_sql()}"
    )


def _set_cascade(schema_editor, cascade):
    if schema_editor.connection.vendor == "sqlite":
        _rebuild_sqlite_table(schema_editor, cascade)
    else:
        _replace_constraint(schema_editor, cascade)


def add_cascade(apps, schema_editor):
    _set_cascade(schema_editor, cascade=True)


def remove_cascade(apps, schema_editor):
    _set_cascade(schema_editor, cascade=False)


class Migration(migrations.Migration):

    dependencies = [
        ("recipevault", "0001_initial"),
    ]

    operations = [
        migrations.SeparateDatabaseAndState(
            state_operations=[
                migrations.AlterField(
                    model_name="ingredient",
                    name="recipe",
                    field=models.ForeignKey(
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="ingredients",
                        to="recipevault.recipe",
                        verbose_name="Recipe",
                    ),
                ),
            ],
            database_operations=[
                migrations.RunPython(add_cascade, remove_cascade),
            ],
        ),
    ]
