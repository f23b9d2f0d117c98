# core/capability.py
from typing import Iterable, Mapping, Protocol

ADMIN_ROLE = "admin"


class CapabilityGate(Protocol):
    def has_capability(self, name: str) -> bool: ...


class AllowAll:
    def has_capability(self, name: str) -> bool:
        return True


class PermissionGate:
    """
    Role/permission check resolved by the upstream auth layer.

    - No role: nothing is allowed.
    - Admin: everything is allowed.
    - Otherwise: the named permission flag decides.

    Only a UX guard; the backend re-checks every command.
    """

    def __init__(
        self,
        role: str | None,
        permissions: Mapping[str, bool] | Iterable[str] | None = None,
    ) -> None:
        self._role = role or None
        if permissions is None:
            self._permissions: dict[str, bool] = {}
        elif isinstance(permissions, Mapping):
            self._permissions = {k: bool(v) for k, v in permissions.items()}
        else:
            self._permissions = {name: True for name in permissions}

    def has_capability(self, name: str) -> bool:
        if self._role is None:
            return False
        if self._role == ADMIN_ROLE:
            return True
        return self._permissions.get(name, False)


def is_allowed(gate: CapabilityGate, capability: str | None) -> bool:
    # Ungated kinds carry no capability name
    return capability is None or gate.has_capability(capability)
