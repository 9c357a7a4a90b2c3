import asyncio

from core.event_hub import EventHub


class TestEventHub:
    """Test publish/subscribe dispatch."""

    def test_inline_dispatch_without_loop(self):
        hub = EventHub()
        received = []
        hub.subscribe("topic", lambda topic, msg: received.append((topic, msg)))
        hub.send_all_on_topic("topic", 1)
        assert received == [("topic", 1)]

    def test_subscribe_once(self):
        """Test that subscribing the same handler twice delivers once."""
        hub = EventHub()
        received = []

        def handler(topic, msg):
            received.append(msg)

        hub.subscribe("topic", handler)
        hub.subscribe("topic", handler)
        hub.send_all_on_topic("topic", "x")
        assert received == ["x"]

    def test_unsubscribe(self):
        hub = EventHub()
        received = []

        def handler(topic, msg):
            received.append(msg)

        hub.subscribe("topic", handler)
        hub.unsubscribe("topic", handler)
        hub.send_all_on_topic("topic", "x")
        assert received == []

    def test_handler_error_does_not_stop_others(self):
        """Test that a failing handler is logged and the next one still runs."""
        hub = EventHub()
        received = []

        def broken(topic, msg):
            raise RuntimeError("boom")

        hub.subscribe("topic", broken)
        hub.subscribe("topic", lambda topic, msg: received.append(msg))
        hub.send_all_on_topic("topic", 2)
        assert received == [2]

    def test_same_loop_dispatch(self):
        """Test that sync handlers run immediately when published from the hub's loop."""
        hub = EventHub()
        received = []
        hub.subscribe("topic", lambda topic, msg: received.append(msg))

        async def publish():
            hub.init(asyncio.get_running_loop())
            hub.send_all_on_topic("topic", "now")
            return list(received)

        assert asyncio.run(publish()) == ["now"]

    def test_async_handler_on_loop(self):
        hub = EventHub()
        received = []

        async def handler(topic, msg):
            received.append(msg)

        hub.subscribe("topic", handler)

        async def publish():
            hub.init(asyncio.get_running_loop())
            hub.send_all_on_topic("topic", "later")
            await asyncio.sleep(0)

        asyncio.run(publish())
        assert received == ["later"]
