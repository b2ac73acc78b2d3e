"""
Parameterized SQL fragments for partial updates and filtered searches.

Everything here is pure: no I/O, no shared state. Statement text only ever
carries $N placeholders and quoted identifiers. Values travel separately and
are bound by jobly.core.database.query.
"""

from typing import Any, Dict, List, Mapping, NamedTuple, Optional

from jobly.core.exceptions import BadRequestError


class PartialUpdate(NamedTuple):
    """SET clause body plus the values its placeholders refer to."""
    set_cols: str
    values: List[Any]


class ParameterizedClause(NamedTuple):
    """Predicate text plus values; $N in clause_text is values[N - 1]."""
    clause_text: str
    values: List[Any]


def quote_identifier(name: str) -> str:
    """Double-quote a column name, doubling any embedded quote."""
    return '"' + name.replace('"', '""') + '"'


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Dict[str, str]
) -> PartialUpdate:
    """
    Build the SET body of a single-row partial update.

    {"firstName": "Aliya", "age": 32} with {"firstName": "first_name"} =>
        set_cols: '"first_name"=$1, "age"=$2'
        values:   ["Aliya", 32]

    Keys missing from js_to_sql are used as the column name verbatim.
    Placeholders follow the mapping's insertion order.

    Raises:
        BadRequestError: If data_to_update is empty
    """
    keys = list(data_to_update)
    if not keys:
        raise BadRequestError("No data")

    cols = [
        f"{quote_identifier(js_to_sql.get(key, key))}=${idx}"
        for idx, key in enumerate(keys, start=1)
    ]

    return PartialUpdate(
        set_cols=", ".join(cols),
        values=[data_to_update[key] for key in keys],
    )


class ClauseAccumulator:
    """Collects predicate fragments and their bound values in lockstep."""

    def __init__(self):
        self._predicates: List[str] = []
        self._values: List[Any] = []

    def bind(self, template: str, value: Any) -> None:
        """
        Append value and a predicate pointing at its placeholder.

        template holds a single {} where the placeholder goes,
        e.g. "num_employees >= {}".
        """
        self._values.append(value)
        self._predicates.append(template.format(f"${len(self._values)}"))

    def literal(self, predicate: str) -> None:
        """Append a predicate that binds nothing."""
        self._predicates.append(predicate)

    def build(self) -> ParameterizedClause:
        return ParameterizedClause(" AND ".join(self._predicates), list(self._values))


def supplied(criteria: Mapping[str, Any], key: str) -> Optional[Any]:
    """
    Value of a search criterion, or None when it was not supplied.

    Falsy values (0, "", False) count as not supplied, so minEmployees=0
    applies no lower bound.
    """
    value = criteria.get(key)
    return value if value else None


class FilterQueryBuilder:
    """
    Turns optional search criteria into a WHERE body.

    Subclasses list their predicates in apply(), in a fixed order, and may
    reject inconsistent criteria in validate() before anything is built.
    """

    def validate(self, criteria: Mapping[str, Any]) -> None:
        pass

    def apply(self, clause: ClauseAccumulator, criteria: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def build(self, criteria: Mapping[str, Any]) -> ParameterizedClause:
        self.validate(criteria)
        clause = ClauseAccumulator()
        self.apply(clause, criteria)
        return clause.build()


class CompanyFilter(FilterQueryBuilder):
    """name (substring, case-insensitive), minEmployees, maxEmployees."""

    def validate(self, criteria):
        # raw values: an explicit 0 still counts as a bound here
        min_employees = criteria.get("minEmployees")
        max_employees = criteria.get("maxEmployees")
        if min_employees is not None and max_employees is not None and min_employees > max_employees:
            raise BadRequestError(
                "Maximum employees number must be larger than minimum employees number."
            )

    def apply(self, clause, criteria):
        name = supplied(criteria, "name")
        if name is not None:
            clause.bind("name ILIKE {}", f"%{name}%")

        min_employees = supplied(criteria, "minEmployees")
        if min_employees is not None:
            clause.bind("num_employees >= {}", min_employees)

        max_employees = supplied(criteria, "maxEmployees")
        if max_employees is not None:
            clause.bind("num_employees <= {}", max_employees)


class JobFilter(FilterQueryBuilder):
    """
    title (substring, case-insensitive), minSalary, hasEquity.

    minSalary is exclusive (salary > n). hasEquity=True keeps jobs with
    non-zero equity; False or missing does not filter on equity.
    """

    def apply(self, clause, criteria):
        title = supplied(criteria, "title")
        if title is not None:
            clause.bind("title ILIKE {}", f"%{title}%")

        min_salary = supplied(criteria, "minSalary")
        if min_salary is not None:
            clause.bind("salary > {}", min_salary)

        if criteria.get("hasEquity") is True:
            clause.literal("equity > 0")


company_filter = CompanyFilter()
job_filter = JobFilter()


def where_sql(clause: ParameterizedClause) -> str:
    """WHERE prefix for a built clause, or "" when it has no predicates."""
    if not clause.clause_text:
        return ""
    return f"WHERE {clause.clause_text}"
