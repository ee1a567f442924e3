from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    model_config = ConfigDict(frozen=True)


class ObjectKey(ValueObject):
    """Identity of an object inside a shared Solr core.

    Objects of different classes may share a numeric ID, so the document
    key combines both: ``"42-Article"``.
    """

    object_id: int
    class_name: str

    def __str__(self) -> str:
        return f"{self.object_id}-{self.class_name}"
