ADMIN_ROLES = frozenset({"ADMIN", "SUPER_ADMIN"})


def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the resource."""
    return actor_id is not None and str(actor_id) == str(owner_id)


def is_admin(role) -> bool:
    """Return True for ``ADMIN`` and ``SUPER_ADMIN`` roles."""
    return str(getattr(role, "value", role)) in ADMIN_ROLES
