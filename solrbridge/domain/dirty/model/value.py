from pydantic import BaseModel, Field

from solrbridge.domain.index.model.update import OperationType


class DirtyRecord(BaseModel):
    """IDs of one class whose index state is stale for one operation type.

    ``ids`` behaves as an ordered set: duplicates collapse and insertion
    order is kept.
    """

    class_name: str
    type: OperationType
    ids: list[int] = Field(default_factory=list)

    def add(self, object_id: int) -> bool:
        if object_id in self.ids:
            return False
        self.ids.append(object_id)
        return True

    def discard(self, object_id: int) -> bool:
        if object_id not in self.ids:
            return False
        self.ids = [i for i in self.ids if i != object_id]
        return True
