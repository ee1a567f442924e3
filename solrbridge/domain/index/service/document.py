"""DocumentFactory - turns indexable objects into Solr documents."""

import logging
from collections.abc import Sequence
from datetime import date, datetime
from enum import Enum
from typing import Any

from solrbridge.domain.index.model.definition import solr_field_name
from solrbridge.domain.index.model.hierarchy import ClassHierarchy
from solrbridge.domain.index.port.indexable import Indexable
from solrbridge.domain.shared.model.value import ObjectKey
from solrbridge.domain.shared.service import Service

logger = logging.getLogger(__name__)

# Unique key of a document in Solr
ID_FIELD = "id"
# ID of the object in the object store
CLASS_ID_FIELD = "ObjectID"
CLASSNAME_FIELD = "ClassName"
HIERARCHY_FIELD = "ClassHierarchy"


def object_key(item: Indexable) -> ObjectKey:
    return ObjectKey(object_id=item.id, class_name=item.class_name)


class DocumentFactory(Service):
    hierarchy: ClassHierarchy

    def build(self, items: Sequence[Indexable], fields: list[str]) -> list[dict[str, Any]]:
        """Build one document per item holding every resolvable field.

        Fields that resolve to ``None`` are left out of the document.
        """
        docs = []
        for item in items:
            doc: dict[str, Any] = {
                ID_FIELD: str(object_key(item)),
                CLASS_ID_FIELD: item.id,
                CLASSNAME_FIELD: item.class_name,
                HIERARCHY_FIELD: list(self.hierarchy.ancestors(item.class_name)),
            }
            for path in fields:
                value = item.field_value(path)
                if value is None:
                    continue
                doc[solr_field_name(path)] = _to_solr_value(value)
            docs.append(doc)

        logger.debug(f"Built {len(docs)} documents with {len(fields)} fields")
        return docs


def _to_solr_value(value: Any) -> Any:
    if isinstance(value, (list, tuple, set)):
        return [_to_solr_value(v) for v in value if v is not None]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    if isinstance(value, date):
        return f"{value.isoformat()}T00:00:00Z"
    if isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
