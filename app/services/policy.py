import logging
from enum import Enum
from typing import Iterable, Optional

from config import ADMIN_LINE_USER_IDS

logger = logging.getLogger("esimshop")


class Action(str, Enum):
    view_admin = "view_admin"
    manage_catalog = "manage_catalog"
    import_catalog = "import_catalog"
    manage_menus = "manage_menus"
    maintain_catalog = "maintain_catalog"


class AuthorizationPolicy:
    """Decides which LINE users may perform back-office actions."""

    def __init__(self, admin_user_ids: Iterable[str]):
        self.admin_user_ids = frozenset(admin_user_ids)

    def is_admin(self, user_id: Optional[str]) -> bool:
        return bool(user_id) and user_id in self.admin_user_ids

    def is_authorized(self, user_id: Optional[str], action: Action) -> bool:
        allowed = self.is_admin(user_id)
        if not allowed:
            logger.warning(f"User {user_id!r} denied {Action(action).value}")
        return allowed


policy = AuthorizationPolicy(ADMIN_LINE_USER_IDS)


def get_policy() -> AuthorizationPolicy:
    return policy
