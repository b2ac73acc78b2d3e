"""
Tests for the partial-update and search-filter SQL builders.
"""

import re
from collections import OrderedDict

import pytest

from jobly.core.exceptions import BadRequestError
from jobly.core.sql import (
    ClauseAccumulator,
    ParameterizedClause,
    company_filter,
    job_filter,
    quote_identifier,
    sql_for_partial_update,
    where_sql,
)


class TestPartialUpdate:
    """Tests for sql_for_partial_update"""

    def test_translates_column_names(self):
        result = sql_for_partial_update({"firstName": "x"}, {"firstName": "first_name"})

        assert result.set_cols == '"first_name"=$1'
        assert result.values == ["x"]

    def test_unmapped_key_passes_through(self):
        result = sql_for_partial_update({"age": 5}, {"firstName": "first_name"})

        assert '"age"=$1' in result.set_cols
        assert result.values == [5]

    def test_placeholders_follow_insertion_order(self):
        data = OrderedDict([("lastName", "L"), ("age", 32), ("firstName", "Aliya"), ("isAdmin", None)])
        js_to_sql = {"firstName": "first_name", "lastName": "last_name", "isAdmin": "is_admin"}

        set_cols, values = sql_for_partial_update(data, js_to_sql)

        assert set_cols == '"last_name"=$1, "age"=$2, "first_name"=$3, "is_admin"=$4'
        assert values == ["L", 32, "Aliya", None]

    def test_placeholders_are_contiguous_and_unique(self):
        data = {f"field{n}": n for n in range(12)}

        set_cols, values = sql_for_partial_update(data, {})

        indices = [int(i) for i in re.findall(r"\$(\d+)", set_cols)]
        assert indices == list(range(1, 13))
        assert values == list(range(12))

    @pytest.mark.parametrize("js_to_sql", [{}, {"firstName": "first_name"}])
    def test_empty_data_is_rejected(self, js_to_sql):
        with pytest.raises(BadRequestError) as exc:
            sql_for_partial_update({}, js_to_sql)

        assert exc.value.message == "No data"

    def test_values_never_reach_the_sql_text(self):
        payload = "x'; DROP TABLE users; --"

        set_cols, values = sql_for_partial_update({"name": payload}, {})

        assert payload not in set_cols
        assert values == [payload]

    def test_hostile_key_stays_a_quoted_identifier(self):
        set_cols, _ = sql_for_partial_update({'name"=1; DROP TABLE users; --': "x"}, {})

        assert set_cols == '"name""=1; DROP TABLE users; --"=$1'

    def test_same_input_gives_identical_output(self):
        data = {"numEmployees": 10, "logoUrl": "http://x.img"}
        js_to_sql = {"numEmployees": "num_employees", "logoUrl": "logo_url"}

        assert sql_for_partial_update(data, js_to_sql) == sql_for_partial_update(data, js_to_sql)


class TestQuoteIdentifier:

    def test_plain_name(self):
        assert quote_identifier("num_employees") == '"num_employees"'

    def test_embedded_quote_is_doubled(self):
        assert quote_identifier('a"b') == '"a""b"'


class TestClauseAccumulator:

    def test_bind_keeps_placeholders_aligned(self):
        clause = ClauseAccumulator()
        clause.bind("a = {}", "A")
        clause.literal("b IS NULL")
        clause.bind("c > {}", 3)

        assert clause.build() == ParameterizedClause("a = $1 AND b IS NULL AND c > $2", ["A", 3])

    def test_empty(self):
        assert ClauseAccumulator().build() == ParameterizedClause("", [])


class TestCompanyFilter:
    """Tests for the company search filter"""

    def test_name_only(self):
        clause = company_filter.build({"name": "tech"})

        assert clause.clause_text == "name ILIKE $1"
        assert clause.values == ["%tech%"]

    def test_all_criteria_in_fixed_order(self):
        clause = company_filter.build({"maxEmployees": 500, "name": "net", "minEmployees": 10})

        assert clause.clause_text == "name ILIKE $1 AND num_employees >= $2 AND num_employees <= $3"
        assert clause.values == ["%net%", 10, 500]

    def test_employee_bounds_without_name(self):
        clause = company_filter.build({"minEmployees": 10, "maxEmployees": 20})

        assert clause.clause_text == "num_employees >= $1 AND num_employees <= $2"
        assert clause.values == [10, 20]

    def test_max_only_takes_first_slot(self):
        clause = company_filter.build({"maxEmployees": 20})

        assert clause.clause_text == "num_employees <= $1"
        assert clause.values == [20]

    def test_min_greater_than_max_is_rejected(self):
        with pytest.raises(BadRequestError):
            company_filter.build({"minEmployees": 10, "maxEmployees": 5})

    def test_zero_max_below_min_is_rejected(self):
        with pytest.raises(BadRequestError):
            company_filter.build({"minEmployees": 5, "maxEmployees": 0})

    def test_min_equal_to_max_is_allowed(self):
        clause = company_filter.build({"minEmployees": 5, "maxEmployees": 5})

        assert clause.values == [5, 5]

    def test_zero_is_treated_as_not_supplied(self):
        clause = company_filter.build({"minEmployees": 0, "maxEmployees": 3})

        assert clause.clause_text == "num_employees <= $1"
        assert clause.values == [3]

    def test_empty_string_name_is_treated_as_not_supplied(self):
        assert company_filter.build({"name": ""}) == ParameterizedClause("", [])

    def test_unknown_keys_are_ignored(self):
        assert company_filter.build({"title": "eng"}) == ParameterizedClause("", [])

    def test_same_input_gives_identical_output(self):
        criteria = {"name": "a", "minEmployees": 1}

        assert company_filter.build(criteria) == company_filter.build(criteria)


class TestJobFilter:
    """Tests for the job search filter"""

    def test_title_only(self):
        clause = job_filter.build({"title": "eng"})

        assert clause.clause_text == "title ILIKE $1"
        assert clause.values == ["%eng%"]

    def test_min_salary_is_exclusive(self):
        clause = job_filter.build({"minSalary": 40000})

        assert clause.clause_text == "salary > $1"
        assert clause.values == [40000]

    def test_has_equity_binds_nothing(self):
        clause = job_filter.build({"hasEquity": True})

        assert clause.clause_text == "equity > 0"
        assert clause.values == []

    def test_has_equity_false_adds_nothing(self):
        assert job_filter.build({"hasEquity": False}) == ParameterizedClause("", [])

    def test_all_criteria(self):
        clause = job_filter.build({"hasEquity": True, "minSalary": 40000, "title": "j"})

        assert clause.clause_text == "title ILIKE $1 AND salary > $2 AND equity > 0"
        assert clause.values == ["%j%", 40000]

    def test_equity_does_not_shift_placeholders(self):
        clause = job_filter.build({"hasEquity": True, "minSalary": 1})

        assert clause.clause_text == "salary > $1 AND equity > 0"
        assert clause.values == [1]


class TestWhereSql:

    def test_no_predicates_renders_nothing(self):
        assert where_sql(job_filter.build({})) == ""
        assert where_sql(company_filter.build({})) == ""

    def test_predicates_get_where_prefix(self):
        assert where_sql(company_filter.build({"name": "x"})) == "WHERE name ILIKE $1"
