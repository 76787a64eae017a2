"""Models for server-side table listings (meta.k8s.io/v1 Table)."""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Any
from datetime import datetime


class ColumnDefinition(BaseModel):
    """A named column of a table. Only the name is used for lookups."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    type: str = "string"
    format: str = ""
    description: str = ""
    priority: int = 0


class TableRow(BaseModel):
    """One source record, with cells aligned to the table's column definitions.

    ``object`` is either a typed object exposing ``metadata`` or a raw
    partial-metadata payload (mapping, JSON string or JSON bytes).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    cells: List[Any] = Field(default_factory=list)
    object: Optional[Any] = None


class Table(BaseModel):
    """A table listing for a single resource kind."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    column_definitions: List[ColumnDefinition] = Field(default_factory=list, alias="columnDefinitions")
    rows: List[TableRow] = Field(default_factory=list)


class ObjectMeta(BaseModel):
    """The subset of object metadata recovered for each row."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    namespace: str = ""
    creation_timestamp: Optional[datetime] = Field(None, alias="creationTimestamp")


class PartialObjectMetadata(BaseModel):
    """Metadata-only payload embedded in table rows by ``includeObject=Metadata``."""

    model_config = ConfigDict(extra="ignore")

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
