import pytest

from py_chat.registry import ConnectionRegistry, UsernameAlreadySetError


@pytest.fixture
def registry():
    return ConnectionRegistry()


def test_add_assigns_unique_ids_in_accept_order(registry, socket_pairs):
    sessions = [registry.add(socket_pairs()[0], ("127.0.0.1", n)) for n in range(3)]

    assert len({s.conn_id for s in sessions}) == 3
    assert [s.conn_id for s in registry] == [s.conn_id for s in sessions]
    assert all(s.username is None for s in sessions)


def test_remove_is_idempotent(registry, socket_pairs):
    session = registry.add(socket_pairs()[0])

    assert registry.remove(session.conn_id) is session
    assert registry.remove(session.conn_id) is None
    assert session.conn_id not in registry
    assert len(registry) == 0


def test_username_is_set_once(registry, socket_pairs):
    session = registry.add(socket_pairs()[0])
    registry.set_username(session.conn_id, "alice")

    with pytest.raises(UsernameAlreadySetError):
        registry.set_username(session.conn_id, "mallory")
    assert registry.username_of(session.conn_id) == "alice"


def test_username_lookup_for_unknown_connection(registry):
    assert registry.username_of(42) is None


def test_removal_during_iteration_visits_each_session_once(registry, socket_pairs):
    sessions = [registry.add(socket_pairs()[0]) for _ in range(4)]

    visited = []
    for session in registry:
        visited.append(session.conn_id)
        registry.remove(session.conn_id)

    assert visited == [s.conn_id for s in sessions]
    assert len(registry) == 0


def test_new_connection_does_not_inherit_removed_state(registry, socket_pairs):
    sock = socket_pairs()[0]
    old = registry.add(sock)
    registry.set_username(old.conn_id, "alice")
    registry.remove(old.conn_id)

    new = registry.add(sock)

    assert new.conn_id != old.conn_id
    assert new.username is None
    assert registry.username_of(old.conn_id) is None
