from typing import Any, ClassVar, Self
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pymongo.asynchronous.cursor import AsyncCursor


class MongoModel(BaseModel):
    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid4)

    # Optional fields left out of the stored document when unset, so partial indexes skip them
    sparse_fields: ClassVar[frozenset[str]] = frozenset()

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a MongoDB document keyed by _id, dropping unset sparse fields."""
        data = self.model_dump()
        data["_id"] = data.pop("id")
        for field in self.sparse_fields:
            if data.get(field) is None:
                data.pop(field, None)
        return data

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]
