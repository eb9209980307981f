"""RBAC entity model exchanged with the authority engine.

Entities are plain value records. Each converts to and from the camelCase
JSON wire form used by the authority engine and by HTTP callers:

    >>> User.from_dict({"userId": "alice", "ou": "dev"}).to_dict()
    {'userId': 'alice', 'ou': 'dev'}

``None`` fields are left out of the wire form and unknown wire keys are
ignored when decoding.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Set


def _camel(name: str) -> str:
    """Convert a snake_case field name to its camelCase wire key."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_wire(value: Any) -> Any:
    """Convert entities, sets and enums (recursively) to JSON-friendly values."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    if isinstance(value, (list, tuple)):
        return [to_wire(item) for item in value]
    if isinstance(value, dict):
        return {key: to_wire(item) for key, item in value.items()}
    return value


class _WireRecord:
    """Mixin giving dataclasses a camelCase ``to_dict``/``from_dict`` pair.

    Subclasses list nested entity fields in ``_nested`` so they are decoded
    into their entity type instead of staying raw dicts.
    """

    _nested: Dict[str, type] = {}

    def to_dict(self) -> Dict[str, Any]:
        payload = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            payload[_camel(f.name)] = to_wire(value)
        return payload

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]):
        if data is None or isinstance(data, cls):
            return data
        kwargs = {}
        for f in fields(cls):
            key = _camel(f.name)
            if key not in data:
                continue
            value = data[key]
            nested = cls._nested.get(f.name)
            if nested is not None and value is not None:
                if isinstance(value, list):
                    value = [nested.from_dict(item) for item in value]
                else:
                    value = nested.from_dict(value)
            kwargs[f.name] = value
        return cls(**kwargs)


# ─────────────────────────────────────────────────────────────────────────────
# Users and roles
# ─────────────────────────────────────────────────────────────────────────────
@dataclass
class UserRole(_WireRecord):
    """Role assignment (or activation) of a user."""
    user_id: Optional[str] = None
    name: Optional[str] = None
    parents: Optional[List[str]] = None


@dataclass
class User(_WireRecord):
    """RBAC user as stored by the authority engine."""
    user_id: Optional[str] = None
    password: Optional[str] = None
    new_password: Optional[str] = None
    internal_id: Optional[str] = None
    ou: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    cn: Optional[str] = None
    sn: Optional[str] = None
    display_name: Optional[str] = None
    title: Optional[str] = None
    employee_type: Optional[str] = None
    emails: Optional[List[str]] = None
    phones: Optional[List[str]] = None
    mobiles: Optional[List[str]] = None
    locked: Optional[bool] = None
    reset: Optional[bool] = None
    pw_policy: Optional[str] = None
    roles: Optional[List[UserRole]] = None
    admin_roles: Optional[List[UserRole]] = None
    props: Optional[Dict[str, str]] = None

    _nested = {"roles": UserRole, "admin_roles": UserRole}


@dataclass
class Role(_WireRecord):
    """Regular RBAC role."""
    name: Optional[str] = None
    id: Optional[str] = None
    description: Optional[str] = None
    parents: Optional[List[str]] = None
    children: Optional[List[str]] = None
    props: Optional[Dict[str, str]] = None


@dataclass
class AdminRole(Role):
    """Administrative role used by the delegated administration authority.

    Carries the org-unit scopes and role range it may administer.
    """
    os_u: Optional[List[str]] = None
    os_p: Optional[List[str]] = None
    begin_range: Optional[str] = None
    end_range: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["admin"] = True
        return payload


# ─────────────────────────────────────────────────────────────────────────────
# Permissions
# ─────────────────────────────────────────────────────────────────────────────
@dataclass
class Permission(_WireRecord):
    """Operation on a protected object (objName + opName, optional objId).

    ``admin`` marks the permission as belonging to the administrative
    permission space.
    """
    obj_name: Optional[str] = None
    op_name: Optional[str] = None
    obj_id: Optional[str] = None
    admin: bool = False
    internal_id: Optional[str] = None
    description: Optional[str] = None
    abstract_name: Optional[str] = None
    type: Optional[str] = None
    roles: Optional[List[str]] = None
    users: Optional[List[str]] = None
    props: Optional[Dict[str, str]] = None


@dataclass
class PermObj(_WireRecord):
    """Protected object grouping permissions."""
    obj_name: Optional[str] = None
    description: Optional[str] = None
    ou: Optional[str] = None
    type: Optional[str] = None
    admin: bool = False
    internal_id: Optional[str] = None
    props: Optional[Dict[str, str]] = None


@dataclass
class PermGrant(_WireRecord):
    """Request to grant or revoke a permission to exactly one role or user."""
    obj_name: Optional[str] = None
    op_name: Optional[str] = None
    obj_id: Optional[str] = None
    user_id: Optional[str] = None
    role_nm: Optional[str] = None
    admin: bool = False


# ─────────────────────────────────────────────────────────────────────────────
# Separation of duty, hierarchy, org units
# ─────────────────────────────────────────────────────────────────────────────
@dataclass
class SDSet(_WireRecord):
    """Separation-of-duty role set.

    Whether it is static (SSD) or dynamic (DSD) depends on the operation it
    is used with, not on a field.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    members: Optional[Set[str]] = None
    cardinality: Optional[int] = None

    @classmethod
    def from_dict(cls, data):
        sd_set = super().from_dict(data)
        if sd_set is not None and sd_set.members is not None:
            sd_set.members = set(sd_set.members)
        return sd_set


@dataclass
class RoleRelationship(_WireRecord):
    """Directed hierarchy edge: ``parent`` is the senior role."""
    parent: Optional[Role] = None
    child: Optional[Role] = None

    @classmethod
    def from_dict(cls, data):
        if data is None or isinstance(data, cls):
            return data
        return cls(parent=_role_ref(data.get("parent")), child=_role_ref(data.get("child")))


def _role_ref(value) -> Optional[Role]:
    """Accept either a role object or a bare role name."""
    if value is None or isinstance(value, Role):
        return value
    if isinstance(value, str):
        return Role(name=value)
    return Role.from_dict(value)


class OrgUnitType(str, Enum):
    USER = "USER"
    PERM = "PERM"


@dataclass
class OrgUnit(_WireRecord):
    """Organizational unit used to scope user and permission searches."""
    name: Optional[str] = None
    type: OrgUnitType = OrgUnitType.USER


# ─────────────────────────────────────────────────────────────────────────────
# Session
# ─────────────────────────────────────────────────────────────────────────────
@dataclass
class Session:
    """Opaque session token issued by the access authority.

    The gateway never inspects the session beyond the read-only helpers
    below; it is handed back to the engine exactly as received.
    """
    payload: Dict[str, Any]

    @property
    def session_id(self) -> Optional[str]:
        return self.payload.get("sessionId")

    @property
    def user_id(self) -> Optional[str]:
        return self.payload.get("userId")

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.payload)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["Session"]:
        if data is None or isinstance(data, cls):
            return data
        return cls(payload=dict(data))
