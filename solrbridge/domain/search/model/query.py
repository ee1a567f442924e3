"""Structured queries and their compiled Solr form."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field
from typing_extensions import Self

from solrbridge.domain.shared.model.value import ValueObject


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class Term(ValueObject):
    """A free-text term with optional fuzziness and boost."""

    text: str
    fuzzy: int | None = None
    boost: float | None = None

    def format(self) -> str:
        """Render the term in Solr syntax, e.g. ``(word~2)^3``."""
        formatted = self.text
        if self.fuzzy is not None:
            formatted = f"{formatted}~{self.fuzzy}"
        if self.boost is not None and self.boost != 1:
            formatted = f"({formatted})^{self.boost:g}"
        return formatted


class StructuredQuery(BaseModel):
    """What the caller wants to find.

    Term order matters: the first term is the one replaced when a
    spellcheck retry runs.
    """

    terms: list[Term] = Field(default_factory=list)
    filters: dict[str, list[Any]] = Field(default_factory=dict)
    exclusions: dict[str, list[Any]] = Field(default_factory=dict)
    boosted_fields: dict[str, float] = Field(default_factory=dict)
    facets_min_count: int = 1
    sort: list[tuple[str, SortDirection]] = Field(default_factory=list)
    highlight: list[str] = Field(default_factory=list)
    fields: list[str] = Field(default_factory=list)
    start: int = Field(default=0, ge=0)
    rows: int = Field(default=10, ge=0)
    spellcheck: bool = True
    follow_spellcheck: bool = False

    def add_term(self, text: str, fuzzy: int | None = None, boost: float | None = None) -> Self:
        self.terms.append(Term(text=text, fuzzy=fuzzy, boost=boost))
        return self

    def add_filter(self, field: str, *values: Any) -> Self:
        self.filters.setdefault(field, []).extend(values)
        return self

    def add_exclusion(self, field: str, *values: Any) -> Self:
        self.exclusions.setdefault(field, []).extend(values)
        return self

    def add_boosted_field(self, field: str, weight: float) -> Self:
        self.boosted_fields[field] = weight
        return self

    def add_sort(self, field: str, direction: SortDirection = SortDirection.ASC) -> Self:
        self.sort.append((field, direction))
        return self

    def add_highlight(self, field: str) -> Self:
        self.highlight.append(field)
        return self

    def with_first_term(self, text: str) -> "StructuredQuery":
        """Copy of this query whose first term's text is ``text``."""
        terms = list(self.terms)
        if terms:
            terms[0] = terms[0].model_copy(update={"text": text})
        else:
            terms = [Term(text=text)]
        return self.model_copy(update={"terms": terms}, deep=True)


class CompiledQuery(ValueObject):
    """Solr select parameters for one execution attempt against one core."""

    core: str
    params: list[tuple[str, str]]
    query_terms: list[str]

    @property
    def query(self) -> str:
        return self.get("q") or ""

    def get(self, name: str) -> str | None:
        """First value of parameter ``name``."""
        return next((value for key, value in self.params if key == name), None)

    def get_all(self, name: str) -> list[str]:
        return [value for key, value in self.params if key == name]
