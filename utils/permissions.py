from typing import Optional

from utils.errors import Forbidden

ADMIN_ROLE = "admin"


def can_manage(actor_id: Optional[int], actor_role: Optional[str], owner_id: Optional[int]) -> bool:
    """Owner-or-admin capability check shared by every owned resource."""
    if actor_role == ADMIN_ROLE:
        return True
    if actor_id is None or owner_id is None:
        return False
    return actor_id == owner_id


def ensure_can_manage(actor_id: Optional[int], actor_role: Optional[str], owner_id: Optional[int]):
    if not can_manage(actor_id, actor_role, owner_id):
        raise Forbidden()
