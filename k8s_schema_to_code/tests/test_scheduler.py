import pytest

from k8s_schema_to_code.pipeline.scheduler import EmissionScheduler


class TestEmissionScheduler:
    def test_request_is_idempotent(self):
        scheduler = EmissionScheduler()
        calls = []

        assert scheduler.request("Foo", lambda: calls.append("first"))
        assert not scheduler.request("Foo", lambda: calls.append("second"))
        scheduler.drain()

        assert calls == ["first"]
        assert scheduler.emitted == ["Foo"]

    def test_emitted_names_are_never_requeued(self):
        scheduler = EmissionScheduler()
        calls = []
        scheduler.request("Foo", lambda: calls.append("Foo"))
        scheduler.drain()

        assert not scheduler.request("Foo", lambda: calls.append("again"))
        scheduler.drain()
        assert calls == ["Foo"]

    def test_drain_is_fifo_and_follows_new_requests(self):
        scheduler = EmissionScheduler()
        order = []

        def emit(name, *refs):
            def thunk():
                order.append(name)
                for ref in refs:
                    scheduler.request(ref, emit(ref))

            return thunk

        scheduler.request("A", emit("A", "C", "D"))
        scheduler.request("B", emit("B", "D", "E"))
        scheduler.drain()

        assert order == ["A", "B", "C", "D", "E"]
        assert scheduler.emitted == order
        assert scheduler.pending == []

    def test_cycles_terminate(self):
        scheduler = EmissionScheduler()
        graph = {"A": ["B"], "B": ["A", "B"]}
        order = []

        def emit(name):
            def thunk():
                order.append(name)
                for ref in graph[name]:
                    scheduler.request(ref, emit(ref))

            return thunk

        scheduler.request("A", emit("A"))
        scheduler.drain()
        assert order == ["A", "B"]

    def test_running_name_stays_pending_until_its_thunk_returns(self):
        scheduler = EmissionScheduler()
        seen = {}

        def thunk():
            seen["pending"] = scheduler.is_pending("Self")
            seen["requeued"] = scheduler.request("Self", thunk)

        scheduler.request("Self", thunk)
        scheduler.drain()

        assert seen == {"pending": True, "requeued": False}
        assert scheduler.is_emitted("Self")
        assert not scheduler.is_pending("Self")

    def test_thunk_errors_propagate_and_keep_the_name_pending(self):
        scheduler = EmissionScheduler()

        def fail():
            raise ValueError("boom")

        scheduler.request("Broken", fail)
        with pytest.raises(ValueError, match="boom"):
            scheduler.drain()

        assert scheduler.is_pending("Broken")
        assert not scheduler.is_emitted("Broken")
