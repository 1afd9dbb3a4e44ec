from deckledger.db.database import async_session_factory, init_db
from deckledger.db.operations import (
    UnknownColumnError,
    delete_row,
    get_model,
    insert_row,
    list_rows,
    row_to_dict,
    update_row,
)

__all__ = [
    "UnknownColumnError",
    "async_session_factory",
    "delete_row",
    "get_model",
    "init_db",
    "insert_row",
    "list_rows",
    "row_to_dict",
    "update_row",
]
