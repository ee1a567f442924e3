"""QueryBuilder - compiles structured queries into Solr select parameters."""

import re
from typing import Any

from solrbridge.domain.index.model.definition import IndexDefinition, solr_field_name
from solrbridge.domain.search.model.query import CompiledQuery, StructuredQuery
from solrbridge.domain.shared.service import Service

MATCH_ALL = "*:*"

_SPECIAL = re.compile(r'([+\-&|!(){}\[\]^"~*?:\\/])')


class QueryBuilder(Service):
    """Pure transformation; building the same query twice yields equal results."""

    def build(self, query: StructuredQuery, index: IndexDefinition) -> CompiledQuery:
        terms = [term.format() for term in query.terms]
        q = " ".join(terms)

        params: list[tuple[str, str]] = [
            ("q", q or MATCH_ALL),
            ("start", str(query.start)),
            ("rows", str(query.rows)),
        ]

        if query.fields:
            params.append(("fl", ",".join(query.fields)))

        # A field with no values would render as an unparseable `field:()`
        for field, values in query.filters.items():
            if values:
                params.append(("fq", _clause(field, values)))
        for field, values in query.exclusions.items():
            if values:
                params.append(("fq", f"-{_clause(field, values)}"))

        boosts = {**index.boosted_fields, **query.boosted_fields}
        for field, weight in boosts.items():
            for term in query.terms:
                params.append(("bq", f"{solr_field_name(field)}:({escape(term.text)})^{weight:g}"))

        if query.sort:
            sort = ", ".join(f"{solr_field_name(field)} {direction}" for field, direction in query.sort)
            params.append(("sort", sort))

        if index.facet_fields:
            params.append(("facet", "true"))
            params.append(("facet.mincount", str(query.facets_min_count)))
            for facet in index.facet_fields:
                params.append(("facet.field", solr_field_name(facet.field)))

        if query.highlight:
            params.append(("hl", "true"))
            params.append(("hl.fl", ",".join(solr_field_name(f) for f in query.highlight)))

        if query.spellcheck and q:
            params.append(("spellcheck", "true"))
            params.append(("spellcheck.q", q))
            params.append(("spellcheck.collate", "true"))

        return CompiledQuery(core=index.core, params=params, query_terms=terms)


def _clause(field: str, values: list[Any]) -> str:
    """Render ``field:("a" OR "b")``. Separate filters are ANDed by Solr."""
    rendered = " OR ".join(_value(v) for v in values)
    return f"{solr_field_name(field)}:({rendered})"


def escape(text: str) -> str:
    """Backslash-escape Solr query syntax characters, keeping whitespace."""
    return _SPECIAL.sub(r"\\\1", text)


def _value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
