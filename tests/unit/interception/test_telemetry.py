import asyncio
import logging

import pytest

from conduit import InterceptionError, InvocationEvent, telemetry, telemetry_listener
from conduit.interception import TelemetryOptions, wrap_telemetry


class Calculator:
    @telemetry
    def add(self, a, b):
        return a + b

    @telemetry(logging=True)
    def divide(self, a, b):
        return a / b

    @telemetry
    async def slow_double(self, value):
        await asyncio.sleep(0)
        return value * 2

    @telemetry
    async def fail_later(self):
        raise ValueError("async failure")


def _collect(container):
    events: list[InvocationEvent] = []
    container.on("telemetry", events.append)
    return events


def test_sync_success_emits_one_event_with_result(container):
    container.register(Calculator)
    events = _collect(container)

    assert container.resolve(Calculator).add(2, b=3) == 5

    assert len(events) == 1
    event = events[0]
    assert event.class_name == "Calculator"
    assert event.method_name == "add"
    assert event.args == (2,)
    assert event.kwargs == {"b": 3}
    assert event.result == 5
    assert event.error is None
    assert event.end_time >= event.start_time
    assert event.duration_ms >= 0


def test_sync_failure_emits_error_and_reraises_same_exception(container):
    container.register(Calculator)
    events = _collect(container)

    with pytest.raises(ZeroDivisionError) as exc:
        container.resolve(Calculator).divide(1, 0)

    assert len(events) == 1
    assert events[0].error is exc.value
    assert not events[0].succeeded


def test_wrapped_method_keeps_its_name(container):
    calc = container.construct(Calculator)
    assert calc.add.__name__ == "add"


@pytest.mark.asyncio
async def test_async_success_emits_after_completion(container):
    container.register(Calculator)
    events = _collect(container)

    calc = container.resolve(Calculator)
    assert await calc.slow_double(4) == 8
    assert [e.result for e in events] == [8]


@pytest.mark.asyncio
async def test_async_failure_emits_error_and_reraises(container):
    container.register(Calculator)
    events = _collect(container)

    with pytest.raises(ValueError, match="async failure"):
        await container.resolve(Calculator).fail_later()
    assert isinstance(events[0].error, ValueError)


def test_logging_option_writes_one_line(container, caplog):
    container.register(Calculator)
    calc = container.resolve(Calculator)
    with caplog.at_level(logging.INFO, logger="conduit"):
        calc.divide(4, 2)
        with pytest.raises(ZeroDivisionError):
            calc.divide(1, 0)

    lines = [r.getMessage() for r in caplog.records if r.name.startswith("conduit.interception")]
    assert len(lines) == 2
    assert lines[0].startswith("[Telemetry] Calculator.divide - SUCCESS (")
    assert lines[0].endswith("ms)")
    assert lines[1].startswith("[Telemetry] Calculator.divide - ERROR: division by zero (")


def test_telemetry_listener_receives_events(container):
    class Monitor:
        def __init__(self):
            self.seen = []

        @telemetry_listener
        def record(self, event):
            self.seen.append(event.method_name)

    container.register(Monitor).register(Calculator)
    monitor = container.resolve(Monitor)
    container.resolve(Calculator).add(1, 1)
    assert monitor.seen == ["add"]


def test_clear_removes_telemetry_listener_subscriptions(container):
    class Monitor:
        @telemetry_listener
        def record(self, event):
            pass

    container.register(Monitor)
    container.resolve(Monitor)
    assert container.bus.listener_count("telemetry") == 1
    container.clear()
    assert container.bus.listener_count("telemetry") == 0


def test_wrap_telemetry_on_plain_function_returning_awaitable():
    emitted = []

    async def compute():
        return "done"

    def starts_work():
        return compute()

    wrapped = wrap_telemetry(
        starts_work,
        class_name="Job",
        method_name="starts_work",
        emit=lambda name, payload: emitted.append((name, payload)),
        options=TelemetryOptions(),
    )
    assert asyncio.run(wrapped()) == "done"
    assert emitted[0][0] == "telemetry"
    assert emitted[0][1].result == "done"


def test_slotted_class_fails_with_named_method(container):
    class Slotted:
        __slots__ = ()

        @telemetry_listener
        def watch(self, event):
            pass

        @telemetry
        def run(self):
            return 1

    container.register(Slotted)
    with pytest.raises(InterceptionError) as exc:
        container.resolve(Slotted)
    assert exc.value.code == "INTERCEPTION_WRAP"
    assert "Slotted.run" in exc.value.message
    assert container.bus.listener_count("telemetry") == 0
    with pytest.raises(InterceptionError):
        container.resolve(Slotted)
