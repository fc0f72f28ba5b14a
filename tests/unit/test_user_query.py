import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from nutrition_admin.backend.db import UserNutrition
from nutrition_admin.backend.routers.users import SORT_COLUMNS, build_user_filters, build_user_order


def compile_pg(*, where=(), order_by=()) -> str:
    query = select(UserNutrition.chat_id).where(*where).order_by(*order_by)
    return str(query.compile(dialect=postgresql.dialect()))


class TestBuildUserOrder:
    def test_default_order(self):
        sql = compile_pg(order_by=build_user_order())

        assert sql.endswith(
            "ORDER BY users_nutrition.is_buyer DESC, users_nutrition.funnel_stage DESC, users_nutrition.first_name"
        )

    @pytest.mark.parametrize(("sort", "column"), [("name", "first_name"), ("funnel", "funnel_stage"), ("weight", "weight")])
    def test_allowlisted_sort(self, sort, column):
        sql = compile_pg(order_by=build_user_order(sort, "asc"))

        assert sql.endswith(f"ORDER BY users_nutrition.{column} ASC NULLS LAST")

    def test_anything_but_asc_is_descending(self):
        sql = compile_pg(order_by=build_user_order("age", "ASC"))

        assert sql.endswith("ORDER BY users_nutrition.age DESC NULLS LAST")

    def test_unknown_sort_never_reaches_sql(self):
        sql = compile_pg(order_by=build_user_order("created_at; DROP TABLE users_nutrition", "asc"))

        assert "DROP" not in sql
        assert sql.endswith("ORDER BY users_nutrition.is_buyer DESC, users_nutrition.funnel_stage ASC NULLS LAST")

    def test_allowlist(self):
        assert set(SORT_COLUMNS) == {"name", "calories", "funnel", "age", "weight"}


class TestBuildUserFilters:
    def test_no_filters(self):
        assert build_user_filters() == []

    def test_search_is_a_bound_parameter(self):
        conditions = build_user_filters(search=" anna ")
        compiled = select(UserNutrition.chat_id).where(*conditions).compile(dialect=postgresql.dialect())

        assert "ILIKE" in str(compiled)
        assert "CAST(users_nutrition.chat_id AS VARCHAR)" in str(compiled)
        assert "%anna%" in compiled.params.values()

    def test_unknown_status_adds_nothing(self):
        assert build_user_filters(status_filter="vip") == []

    def test_all_filters(self):
        conditions = build_user_filters(search="x", status_filter="buyer", goal="weight_loss", funnel_stage="3")

        assert len(conditions) == 4
