"""
Connection request workflow: send, accept, reject and every refused transition.
"""

import pytest

from matching.logic import ConnectionService
from utils import crud_user
from utils.errors import InvalidStateTransition, NotFound, ValidationFailure


@pytest.fixture
def pair(make_user):
    return make_user(name="Alice"), make_user(name="Bob")


def test_send_records_request_on_recipient(db, pair):
    alice, bob = pair

    result = ConnectionService(db).send_request(alice.id, bob.id)

    assert result.success
    assert crud_user.get_profile(db, bob.id).pending_connections == {alice.id}
    assert crud_user.get_profile(db, alice.id).pending_connections == set()


def test_accept_connects_both_sides(db, pair):
    alice, bob = pair
    service = ConnectionService(db)
    service.send_request(alice.id, bob.id)

    result = service.respond(bob.id, alice.id, "accept")

    assert result.message == "Connection request accepted successfully"
    alice_profile = crud_user.get_profile(db, alice.id)
    bob_profile = crud_user.get_profile(db, bob.id)
    assert bob.id in alice_profile.connections
    assert alice.id in bob_profile.connections
    assert alice.id not in bob_profile.pending_connections


def test_reject_forgets_the_request(db, pair):
    alice, bob = pair
    service = ConnectionService(db)
    service.send_request(alice.id, bob.id)

    service.respond(bob.id, alice.id, "reject")

    bob_profile = crud_user.get_profile(db, bob.id)
    assert alice.id not in bob_profile.connections
    assert alice.id not in bob_profile.pending_connections
    # no memory of the rejection, so asking again works
    assert service.send_request(alice.id, bob.id).success


def test_self_request_is_refused(db, make_user):
    alice = make_user()
    with pytest.raises(InvalidStateTransition):
        ConnectionService(db).send_request(alice.id, alice.id)


def test_unknown_target(db, make_user):
    alice = make_user()
    with pytest.raises(NotFound):
        ConnectionService(db).send_request(alice.id, "no-such-user")


def test_inactive_target(db, make_user):
    alice = make_user()
    bob = make_user(is_active=False)
    with pytest.raises(InvalidStateTransition, match="not active"):
        ConnectionService(db).send_request(alice.id, bob.id)


def test_duplicate_request(db, pair):
    alice, bob = pair
    service = ConnectionService(db)
    service.send_request(alice.id, bob.id)

    with pytest.raises(InvalidStateTransition, match="already sent"):
        service.send_request(alice.id, bob.id)


def test_reverse_pending_must_be_answered(db, pair):
    alice, bob = pair
    service = ConnectionService(db)
    service.send_request(alice.id, bob.id)

    with pytest.raises(InvalidStateTransition, match="already sent you"):
        service.send_request(bob.id, alice.id)


def test_already_connected_either_direction(db, pair):
    alice, bob = pair
    service = ConnectionService(db)
    service.send_request(alice.id, bob.id)
    service.respond(bob.id, alice.id, "accept")

    with pytest.raises(InvalidStateTransition, match="Already connected"):
        service.send_request(alice.id, bob.id)
    with pytest.raises(InvalidStateTransition, match="Already connected"):
        service.send_request(bob.id, alice.id)


def test_respond_without_pending_request(db, pair):
    alice, bob = pair
    with pytest.raises(InvalidStateTransition, match="No pending"):
        ConnectionService(db).respond(bob.id, alice.id, "accept")


def test_second_response_is_refused(db, pair):
    alice, bob = pair
    service = ConnectionService(db)
    service.send_request(alice.id, bob.id)
    service.respond(bob.id, alice.id, "accept")

    with pytest.raises(InvalidStateTransition):
        service.respond(bob.id, alice.id, "accept")


def test_respond_with_unknown_decision(db, pair):
    alice, bob = pair
    service = ConnectionService(db)
    service.send_request(alice.id, bob.id)

    with pytest.raises(ValidationFailure) as exc_info:
        service.respond(bob.id, alice.id, "maybe")

    assert "status" in exc_info.value.errors
    # request is still waiting for an answer
    assert alice.id in crud_user.get_profile(db, bob.id).pending_connections


def test_respond_to_unknown_requester(db, make_user):
    bob = make_user()
    with pytest.raises(NotFound):
        ConnectionService(db).respond(bob.id, "no-such-user", "reject")


def test_concurrent_duplicate_request_is_refused(db, pair, monkeypatch):
    alice, bob = pair
    alice_id, bob_id = alice.id, bob.id
    # state both workers read before either one wrote
    stale = {alice_id: crud_user.get_profile(db, alice_id), bob_id: crud_user.get_profile(db, bob_id)}
    service = ConnectionService(db)
    service.send_request(alice_id, bob_id)

    db.expunge_all()
    monkeypatch.setattr(crud_user, "get_profile", lambda session, user_id: stale[user_id])
    monkeypatch.setattr(db, "get", lambda *args, **kwargs: None)

    with pytest.raises(InvalidStateTransition, match="already sent"):
        service.send_request(alice_id, bob_id)

    # the savepoint rollback keeps the first request and the session usable
    assert crud_user.get_set_members(db, bob_id, "pending_connections") == {alice_id}


def test_add_to_set_is_idempotent(db, pair):
    alice, bob = pair

    assert crud_user.add_to_set(db, bob.id, "pending_connections", alice.id) is True
    assert crud_user.add_to_set(db, bob.id, "pending_connections", alice.id) is False
    assert crud_user.get_set_members(db, bob.id, "pending_connections") == {alice.id}
