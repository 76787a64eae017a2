"""Column lookups by name.

Column order is not stable across kinds or API versions, so cells are
always located through the table's column definitions.
"""

from typing import Optional, Sequence, Union

from kubepulse.models.table_models import ColumnDefinition, TableRow

# A cell is a string, an integer, or absent (None).
Cell = Optional[Union[str, int]]

NAME_COLUMN = "Name"
READY_COLUMN = "Ready"
DESIRED_COLUMN = "Desired"
STATUS_COLUMN = "Status"


def locate(name: str, column_definitions: Sequence[ColumnDefinition]) -> Optional[int]:
    """Index of the first column named ``name``, or None."""
    for i, definition in enumerate(column_definitions):
        if definition.name == name:
            return i
    return None


def cell(row: TableRow, column_definitions: Sequence[ColumnDefinition], name: str) -> Cell:
    """Value of column ``name`` in ``row``.

    Missing columns, short rows and values that are neither strings nor
    integers come back as None.
    """
    index = locate(name, column_definitions)
    if index is None or index >= len(row.cells):
        return None
    value = row.cells[index]
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int)):
        return value
    return None
