import logging
from unittest.mock import MagicMock, patch

import pytest
from txn_studio.core.generic_events import Event


class TestGenericEvent:
    """Unit tests for the generic `Event` helper."""

    def test_register_and_dispatch(self):
        """Registering listeners and dispatching should call each listener with event type and data."""
        event: Event[dict] = Event("test_event")
        listener_one = MagicMock()
        listener_two = MagicMock()

        event.register("listener_one", listener_one)
        event.register("listener_two", listener_two)
        assert event.listener_count == 2

        event.dispatch({"foo": "bar"})

        listener_one.assert_called_once_with("test_event", {"foo": "bar"})
        listener_two.assert_called_once_with("test_event", {"foo": "bar"})

        # get_listeners should return a copy
        listeners_snapshot = event.get_listeners()
        listeners_snapshot.pop("listener_one")
        assert event.listener_count == 2

    def test_register_same_name_replaces(self):
        event: Event[int] = Event("int_event")
        old, new = MagicMock(), MagicMock()
        event.register("view", old)
        event.register("view", new)

        event.dispatch(1)

        old.assert_not_called()
        new.assert_called_once_with("int_event", 1)

    def test_unregister(self):
        """Unregister removes a listener and raises KeyError for unknown names."""
        event: Event[int] = Event("int_event")
        listener = MagicMock()
        event.register("my_listener", listener)

        event.unregister("my_listener")
        event.dispatch(123)

        listener.assert_not_called()
        with pytest.raises(KeyError):
            event.unregister("non_existent")

    def test_listener_may_unregister_itself_during_dispatch(self):
        event: Event[str] = Event("self_removing")
        other = MagicMock()

        def one_shot(event_type, data):
            event.unregister("one_shot")

        event.register("one_shot", one_shot)
        event.register("other", other)

        event.dispatch("x")

        other.assert_called_once()
        assert event.listener_count == 1

    def test_dispatch_with_exception_in_listener(self):
        """Exceptions raised by listeners must be caught and logged; other listeners continue to run."""
        event: Event[str] = Event("fault_tolerant")

        def faulty_listener(evt_type: str, data: str):
            raise ValueError("Boom!")

        good_listener = MagicMock()
        event.register("bad", faulty_listener)
        event.register("good", good_listener)

        with patch.object(logging, "exception") as mock_log_exc:
            event.dispatch("payload")

        good_listener.assert_called_once_with("fault_tolerant", "payload")
        mock_log_exc.assert_called_once()
