"""
Shared Models Module

This module contains the pydantic base classes shared by every feature.

Features:
- camelCase wire names
- snake_case storage names
- Document mapping
- Non-null partial updates

Author: Care Admin Development Team
"""

from typing import Any, Dict, Mapping

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def reject_null(value: Any) -> Any:
    """
    Refuse an explicit null.

    Update models declare every field optional so that omitted fields are
    left alone; fields stored as non-null use this to reject `null` sent
    by a client. Omitted fields keep their default and are never validated.
    """
    if value is None:
        raise ValueError("Field may not be null")
    return value


NonNull = BeforeValidator(reject_null)


class CamelModel(BaseModel):
    """
    Base model exchanging camelCase JSON with clients.

    Fields are declared in snake_case, which is also how they are stored in
    MongoDB; either spelling is accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self, exclude_unset: bool = False) -> Dict[str, Any]:
        """Dump the model with storage (snake_case) field names."""
        return self.model_dump(exclude_unset=exclude_unset)


class Document(CamelModel):
    """
    A stored entity exposed with a string id.

    Attributes:
        id (str): Hex string of the MongoDB ObjectId
    """

    id: str

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]):
        data = {key: value for key, value in doc.items() if key != "_id"}
        data["id"] = str(doc["_id"])
        return cls.model_validate(data)
