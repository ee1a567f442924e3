"""SearchResultSet - a Solr select response, unwrapped."""

from typing import Any

from pydantic import BaseModel, Field

from solrbridge.domain.index.model.definition import IndexDefinition, solr_field_name
from solrbridge.domain.index.service.document import CLASS_ID_FIELD, CLASSNAME_FIELD
from solrbridge.domain.shared.model.value import ObjectKey


class SearchResultSet(BaseModel):
    total: int = 0
    documents: list[dict[str, Any]] = Field(default_factory=list)
    facets: dict[str, dict[str, int]] = Field(default_factory=dict)
    highlights: dict[str, dict[str, list[str]]] = Field(default_factory=dict)
    collated_spellcheck: str | None = None
    query_terms: list[str] = Field(default_factory=list)
    is_retry: bool = False

    @classmethod
    def from_response(
        cls,
        raw: dict[str, Any],
        index: IndexDefinition,
        query_terms: list[str],
        is_retry: bool = False,
    ) -> "SearchResultSet":
        response = raw.get("response") or {}
        return cls(
            total=int(response.get("numFound", 0)),
            documents=list(response.get("docs", [])),
            facets=_parse_facets(raw, index),
            highlights=raw.get("highlighting") or {},
            collated_spellcheck=_parse_collation(raw),
            query_terms=list(query_terms),
            is_retry=is_retry,
        )

    def with_collation(self, collation: str | None) -> "SearchResultSet":
        return self.model_copy(update={"collated_spellcheck": collation})

    def object_keys(self) -> list[ObjectKey]:
        """Object store identities of the matched documents, in rank order."""
        return [
            ObjectKey(object_id=int(doc[CLASS_ID_FIELD]), class_name=doc[CLASSNAME_FIELD])
            for doc in self.documents
            if CLASS_ID_FIELD in doc and CLASSNAME_FIELD in doc
        ]


def _parse_facets(raw: dict[str, Any], index: IndexDefinition) -> dict[str, dict[str, int]]:
    """Map facet counts to facet titles.

    Solr returns each facet field as a flat ``[value, count, value, count]`` list.
    """
    fields = (raw.get("facet_counts") or {}).get("facet_fields") or {}
    facets: dict[str, dict[str, int]] = {}
    for facet in index.facet_fields:
        flat = fields.get(solr_field_name(facet.field))
        if flat is None:
            continue
        facets[facet.title] = {str(v): int(c) for v, c in zip(flat[::2], flat[1::2])}
    return facets


def _parse_collation(raw: dict[str, Any]) -> str | None:
    """First collated suggestion, in either the flat or the named-list form."""
    collations = (raw.get("spellcheck") or {}).get("collations")
    if not collations:
        return None

    if isinstance(collations, dict):
        candidate = collations.get("collation")
    else:
        candidate = next(
            (collations[i + 1] for i in range(0, len(collations) - 1, 2) if collations[i] == "collation"),
            None,
        )

    # Extended results carry the query under collationQuery
    if isinstance(candidate, dict):
        candidate = candidate.get("collationQuery")
    if isinstance(candidate, list):
        candidate = candidate[0] if candidate else None
    return candidate or None
