"""
Tests for the ConnectionRegistry.

Covers registration, lookup, deregistration (including double close) and
snapshot iteration.
"""

from datetime import UTC, datetime

import pytest

from chatrelay.exceptions import ConnectionAlreadyRegisteredError


class TestConnectionRegistry:
    """Test cases for the live connection -> session table."""

    def test_register_creates_fresh_session(self, registry, make_connection):
        """Test that register() returns a session with an id and no username."""
        conn = make_connection()
        before = datetime.now(UTC)

        session = registry.register(conn)

        assert session.id
        assert session.username is None
        assert before <= session.connected_at <= datetime.now(UTC)
        assert registry.lookup(conn) is session
        assert registry.size() == 1
        assert conn in registry

    def test_register_twice_raises(self, registry, make_connection):
        """Test that registering the same handle twice is rejected."""
        conn = make_connection()
        session = registry.register(conn)

        with pytest.raises(ConnectionAlreadyRegisteredError) as exc_info:
            registry.register(conn)

        assert exc_info.value.client_id == session.id
        assert registry.size() == 1

    def test_sessions_get_distinct_ids(self, registry, make_connection):
        """Test that concurrently live sessions get distinct ids."""
        sessions = [registry.register(make_connection(str(i))) for i in range(50)]

        assert len({session.id for session in sessions}) == 50

    def test_lookup_unregistered_returns_none(self, registry, make_connection):
        assert registry.lookup(make_connection()) is None

    def test_deregister_returns_session_and_removes_entry(self, registry, make_connection):
        """Test that deregister() hands back the removed session."""
        conn = make_connection()
        session = registry.register(conn)

        removed = registry.deregister(conn)

        assert removed is session
        assert registry.lookup(conn) is None
        assert registry.size() == 0
        assert conn not in registry

    def test_double_deregister_is_noop(self, registry, make_connection):
        """Test that deregistering an already removed handle returns None."""
        conn = make_connection()
        registry.register(conn)
        registry.deregister(conn)

        assert registry.deregister(conn) is None
        assert registry.size() == 0

    def test_identity_not_equality_keys_entries(self, registry, make_connection):
        """Test that two handles with the same name are separate entries."""
        first = make_connection("same")
        second = make_connection("same")

        registry.register(first)
        registry.register(second)

        assert registry.size() == 2
        assert registry.lookup(first) is not registry.lookup(second)

    def test_size_tracks_connect_disconnect_sequence(self, registry, make_connection):
        """Test that size equals the number of currently registered handles."""
        conns = [make_connection(str(i)) for i in range(5)]
        for conn in conns:
            registry.register(conn)
        registry.deregister(conns[1])
        registry.deregister(conns[3])
        registry.deregister(conns[3])

        assert registry.size() == 3
        assert len(registry) == 3
        assert set(registry) == {conns[0], conns[2], conns[4]}

    def test_for_each_visits_every_entry(self, registry, make_connection):
        """Test that for_each() visits each (connection, session) pair once."""
        conns = [make_connection(str(i)) for i in range(3)]
        sessions = {conn: registry.register(conn) for conn in conns}
        seen = {}

        registry.for_each(lambda conn, session: seen.setdefault(conn, session))

        assert seen == sessions

    def test_for_each_tolerates_mutation_during_iteration(self, registry, make_connection):
        """Test that a visitor may deregister entries while iterating."""
        conns = [make_connection(str(i)) for i in range(3)]
        for conn in conns:
            registry.register(conn)

        registry.for_each(lambda conn, _session: registry.deregister(conn))

        assert registry.size() == 0
