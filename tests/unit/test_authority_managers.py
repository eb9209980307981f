"""Tests for authority manager handles and the factory."""
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from rbac_gateway.core.authority import (
    AccessManager,
    AdminManager,
    AuthorityFactory,
    DelegatedAdminManager,
    ReviewManager,
)
from rbac_gateway.core.errors import EngineProtocolError
from rbac_gateway.core.models import (
    AdminRole,
    OrgUnit,
    OrgUnitType,
    Permission,
    Role,
    SDSet,
    Session,
    User,
    UserRole,
)


@pytest.fixture()
def fake_client():
    client = MagicMock(name="AuthorityClient")
    client.call.return_value = None
    return client


def _last_call(fake_client):
    path, payload = fake_client.call.call_args.args
    return path, payload


def test_payload_carries_context_and_acting_session(fake_client, session):
    admin = AdminManager(fake_client, "acme")
    admin.set_admin(session)
    fake_client.call.return_value = {"userId": "alice", "ou": "dev"}

    user = admin.add_user(User(user_id="alice"))

    path, payload = _last_call(fake_client)
    assert path == "adminMgr/addUser"
    assert payload["contextId"] == "acme"
    assert payload["session"] == {"sessionId": "sess-1", "userId": "admin"}
    assert payload["user"] == {"userId": "alice"}
    assert user == User(user_id="alice", ou="dev")


def test_payload_without_session(fake_client):
    AdminManager(fake_client, "HOME").delete_role(Role("clerk"))
    _, payload = _last_call(fake_client)
    assert payload["session"] is None
    assert payload["role"] == {"name": "clerk"}


def test_add_ascendant_sends_child_and_parent(fake_client):
    AdminManager(fake_client, "HOME").add_ascendant(Role("clerk"), Role("manager"))
    path, payload = _last_call(fake_client)
    assert path == "adminMgr/addAscendant"
    assert payload["child"] == {"name": "clerk"}
    assert payload["parent"] == {"name": "manager"}


def test_grant_names_target_argument_by_kind(fake_client):
    admin = AdminManager(fake_client, "HOME")
    perm = Permission(obj_name="ledger", op_name="post")

    admin.grant_permission(perm, Role("clerk"))
    _, payload = _last_call(fake_client)
    assert payload["role"] == {"name": "clerk"}
    assert "user" not in payload

    admin.grant_permission(perm, User("alice"))
    _, payload = _last_call(fake_client)
    assert payload["user"] == {"userId": "alice"}
    assert "role" not in payload


def test_delegated_grant_uses_del_admin_path(fake_client):
    DelegatedAdminManager(fake_client, "HOME").grant_permission(
        Permission(obj_name="ledger", op_name="post", admin=True), AdminRole("sec-admin")
    )
    path, payload = _last_call(fake_client)
    assert path == "delAdminMgr/grantPermission"
    assert payload["role"]["admin"] is True
    assert payload["permission"]["admin"] is True


def test_set_cardinality_returns_engine_set(fake_client):
    fake_client.call.return_value = {"name": "tellers", "members": ["a", "b"], "cardinality": 3}
    result = AdminManager(fake_client, "HOME").set_ssd_set_cardinality(SDSet(name="tellers", cardinality=3), 3)
    _, payload = _last_call(fake_client)
    assert payload["cardinality"] == 3
    assert result.members == {"a", "b"}


def test_review_decodes_lists_and_sets(fake_client):
    review = ReviewManager(fake_client, "HOME")

    fake_client.call.return_value = [{"userId": "alice"}, {"userId": "bob"}]
    assert review.find_users_by_ou(OrgUnit("dev", OrgUnitType.USER)) == [User("alice"), User("bob")]
    path, payload = _last_call(fake_client)
    assert path == "reviewMgr/findUsers"
    assert payload["orgUnit"] == {"name": "dev", "type": "USER"}

    fake_client.call.return_value = ["clerk", "manager", "clerk"]
    assert review.authorized_roles(User("alice")) == {"clerk", "manager"}

    fake_client.call.return_value = None
    assert review.find_role_names("cl", 5) == []


def test_review_cardinality_is_int(fake_client):
    fake_client.call.return_value = "4"
    assert ReviewManager(fake_client, "HOME").dsd_role_set_cardinality(SDSet(name="x")) == 4


def test_access_sends_explicit_session_and_trusted_flag(fake_client, session):
    access = AccessManager(fake_client, "HOME")

    fake_client.call.return_value = {"sessionId": "new"}
    new_session = access.create_session(User("alice", password="pw"), trusted=True)
    path, payload = _last_call(fake_client)
    assert path == "accessMgr/createSession"
    assert payload["isTrusted"] is True
    assert new_session == Session({"sessionId": "new"})

    fake_client.call.return_value = True
    assert access.check_access(session, Permission(obj_name="ledger", op_name="read")) is True
    _, payload = _last_call(fake_client)
    assert payload["session"] == session.to_dict()


def test_access_add_active_role(fake_client, session):
    fake_client.call.return_value = {"sessionId": "sess-1", "roles": ["clerk"]}
    refreshed = AccessManager(fake_client, "HOME").add_active_role(session, UserRole(user_id="admin", name="clerk"))
    _, payload = _last_call(fake_client)
    assert payload["userRole"] == {"userId": "admin", "name": "clerk"}
    assert refreshed.to_dict()["roles"] == ["clerk"]


def test_factory_builds_fresh_handles_with_default_context(fake_client):
    factory = AuthorityFactory(fake_client, default_context_id="HOME")

    first = factory.admin_manager(None)
    second = factory.admin_manager("acme")

    assert first is not second
    assert first.context_id == "HOME"
    assert second.context_id == "acme"
    assert isinstance(factory.delegated_admin_manager(), DelegatedAdminManager)
    assert isinstance(factory.review_manager(), ReviewManager)
    assert isinstance(factory.access_manager(), AccessManager)


def test_factory_from_config():
    cfg = SimpleNamespace(
        authority_url="http://authority.test/",
        authority_timeout=2.5,
        authority_username="gw",
        authority_password="pw",
        default_context_id="acme",
    )
    factory = AuthorityFactory.from_config(cfg)
    assert factory.client.base_url == "http://authority.test"
    assert factory.client.timeout == 2.5
    assert factory.default_context_id == "acme"
    assert factory.review_manager().context_id == "acme"


# ─────────────────────────────────────────────────────────────────────────────
# Malformed success results
# ─────────────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("result", [None, "three", True, {"cardinality": 3}])
def test_cardinality_rejects_non_numeric_result(fake_client, result):
    fake_client.call.return_value = result
    with pytest.raises(EngineProtocolError):
        ReviewManager(fake_client, "HOME").ssd_role_set_cardinality(SDSet(name="tellers"))


@pytest.mark.parametrize("result", ["clerk", {"name": "clerk"}, 7])
def test_list_results_must_be_lists(fake_client, result):
    fake_client.call.return_value = result
    review = ReviewManager(fake_client, "HOME")

    with pytest.raises(EngineProtocolError):
        review.find_roles("cl")
    with pytest.raises(EngineProtocolError):
        review.find_role_names("cl", 5)
    with pytest.raises(EngineProtocolError):
        review.authorized_roles(User("alice"))


def test_list_items_must_be_objects(fake_client):
    fake_client.call.return_value = [{"name": "clerk"}, "manager"]
    with pytest.raises(EngineProtocolError):
        ReviewManager(fake_client, "HOME").find_roles("cl")


def test_entity_result_must_be_object(fake_client):
    fake_client.call.return_value = ["alice"]
    with pytest.raises(EngineProtocolError):
        ReviewManager(fake_client, "HOME").read_user(User("alice"))


def test_entity_result_with_malformed_field(fake_client):
    fake_client.call.return_value = {"name": "tellers", "members": 5}
    with pytest.raises(EngineProtocolError):
        AdminManager(fake_client, "HOME").create_ssd_set(SDSet(name="tellers"))


def test_missing_entity_result_stays_none(fake_client):
    fake_client.call.return_value = None
    assert ReviewManager(fake_client, "HOME").read_role(Role("clerk")) is None


def test_authenticate_requires_a_session(fake_client):
    fake_client.call.return_value = None
    with pytest.raises(EngineProtocolError):
        AccessManager(fake_client, "HOME").authenticate("alice", "pw")


@pytest.mark.parametrize("result", [None, "true", 1])
def test_check_access_requires_boolean(fake_client, session, result):
    fake_client.call.return_value = result
    with pytest.raises(EngineProtocolError):
        AccessManager(fake_client, "HOME").check_access(session, Permission(obj_name="ledger", op_name="read"))


@pytest.mark.parametrize("result", [None, "", 42])
def test_get_user_id_requires_string(fake_client, session, result):
    fake_client.call.return_value = result
    with pytest.raises(EngineProtocolError):
        AccessManager(fake_client, "HOME").get_user_id(session)
