"""Index definitions - which classes and fields a Solr core holds."""

from pydantic import BaseModel, Field
from typing_extensions import Self

from solrbridge.domain.shared.model.value import ValueObject


class FacetField(ValueObject):
    """A facetable field, e.g. ``FacetField(field="Channel.ID", title="Channel")``."""

    field: str
    title: str


class IndexDefinition(BaseModel):
    """Configuration of a named index (one Solr core).

    Built from configuration at startup; the ``add_*`` setters exist for
    assembling a definition before it is registered.
    """

    name: str
    classes: list[str] = Field(default_factory=list)
    fulltext_fields: list[str] = Field(default_factory=list)
    sort_fields: list[str] = Field(default_factory=list)
    filter_fields: list[str] = Field(default_factory=list)
    facet_fields: list[FacetField] = Field(default_factory=list)
    boosted_fields: dict[str, float] = Field(default_factory=dict)

    @property
    def core(self) -> str:
        return self.name

    def add_class(self, class_name: str) -> Self:
        if class_name not in self.classes:
            self.classes.append(class_name)
        return self

    def add_fulltext_field(self, field: str) -> Self:
        self.fulltext_fields.append(field)
        return self

    def add_sort_field(self, field: str) -> Self:
        self.sort_fields.append(field)
        return self

    def add_filter_field(self, field: str) -> Self:
        self.filter_fields.append(field)
        return self

    def add_facet_field(self, field: str, title: str) -> Self:
        self.facet_fields.append(FacetField(field=field, title=title))
        return self

    def add_boosted_field(self, field: str, weight: float) -> Self:
        self.boosted_fields[field] = weight
        return self

    def fields_for_indexing(self) -> list[str]:
        """All fields that must be present on indexed documents.

        Union of fulltext, sort, facet and filter fields, first occurrence wins.
        """
        facets = [facet.field for facet in self.facet_fields]
        combined = [*self.fulltext_fields, *self.sort_fields, *facets, *self.filter_fields]
        return list(dict.fromkeys(combined))


def solr_field_name(path: str) -> str:
    """Solr field name for a dotted field path: ``"Channel.Title"`` -> ``"Channel_Title"``."""
    return path.replace(".", "_")
