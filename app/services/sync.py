"""
Cart and inquiry list synchronization.

A ``ListSynchronizer`` holds the caller's view of one list (cart or inquiry)
and keeps it in step with the copy stored in the user's profile document.
Local changes are applied first and the remote write follows; when the
write fails the local list is put back exactly as it was before the change.
"""

import copy
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from app.db import crud
from app.db.store import DocumentStore, Record
from app.models.session import LineSession
from app.models.user import ListKind

logger = logging.getLogger("esimshop.sync")

Restore = Callable[[], None]


class SyncError(Exception):
    """A remote list write failed and the local list was rolled back."""


def apply_optimistic(snapshot: Callable[[], Restore], mutate_local: Callable[[], None],
                     remote: Callable[[], None]) -> None:
    """Snapshot, change local state, then write remotely; restore the snapshot if the write fails."""
    restore = snapshot()
    mutate_local()
    try:
        remote()
    except Exception:
        restore()
        raise


_MESSAGES: Dict[ListKind, Dict[str, str]] = {
    ListKind.cart: {
        "load": "Failed to load your cart",
        "add": "Failed to add item to cart",
        "remove": "Failed to remove item from cart",
        "update": "Failed to update quantity",
        "clear": "Failed to clear cart",
    },
    ListKind.inquiry: {
        "load": "Failed to load your inquiry list",
        "add": "Failed to add item to inquiry list",
        "remove": "Failed to remove item from inquiry list",
        "update": "Failed to update inquiry item",
        "clear": "Failed to clear inquiry list",
    },
}


class ListSynchronizer:
    def __init__(self, store: DocumentStore, session: LineSession, kind: ListKind):
        self.store = store
        self.session = session
        self.kind = kind
        self.items: List[Record] = []
        self.error: Optional[str] = None

    @property
    def user_id(self) -> str:
        return self.session.user_id

    def _snapshot(self) -> Restore:
        saved = copy.deepcopy(self.items)

        def restore():
            self.items = saved
        return restore

    def _run(self, action: str, mutate_local: Callable[[], None], remote: Callable[[], None]) -> None:
        try:
            apply_optimistic(self._snapshot, mutate_local, remote)
        except Exception as e:
            self.error = _MESSAGES[self.kind][action]
            logger.error(f"{self.error} for user {self.user_id}: {e}", exc_info=True)
            raise SyncError(self.error) from e
        self.error = None

    def load(self) -> List[Record]:
        try:
            self.items = crud.get_list(self.store, self.user_id, self.kind)
        except Exception as e:
            self.error = _MESSAGES[self.kind]["load"]
            logger.error(f"{self.error} for user {self.user_id}: {e}", exc_info=True)
            raise SyncError(self.error) from e
        self.error = None
        return self.items

    def contains(self, plan_id: str) -> bool:
        return any(i.get("planId") == plan_id for i in self.items)

    def add(self, item: Record) -> bool:
        """Add ``item`` unless its plan is already listed. Returns whether the list changed."""
        if self.contains(item["planId"]):
            return False
        entry = {**item, "addedAt": datetime.utcnow()}

        def mutate_local():
            self.items = [*self.items, entry]

        def remote():
            crud.add_list_item(self.store, self.user_id, self.kind, entry)

        self._run("add", mutate_local, remote)
        return True

    def remove(self, plan_id: str) -> None:
        def mutate_local():
            self.items = [i for i in self.items if i.get("planId") != plan_id]

        def remote():
            crud.remove_list_item(self.store, self.user_id, self.kind, plan_id)

        self._run("remove", mutate_local, remote)

    def update_quantity(self, plan_id: str, quantity: int) -> None:
        if self.kind is not ListKind.cart:
            raise ValueError("Only cart items carry a quantity")
        if quantity < 1:
            raise ValueError("Quantity must be a positive integer")

        def mutate_local():
            self.items = [
                {**i, "quantity": quantity} if i.get("planId") == plan_id else i
                for i in self.items
            ]

        def remote():
            crud.update_list_item(self.store, self.user_id, self.kind, plan_id, {"quantity": quantity})

        self._run("update", mutate_local, remote)

    def clear(self) -> None:
        def mutate_local():
            self.items = []

        def remote():
            crud.replace_list(self.store, self.user_id, self.kind, [])

        self._run("clear", mutate_local, remote)
