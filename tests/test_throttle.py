from grid_engine.runtime.throttle import Throttle


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_throttle(interval_ms: int = 1000) -> tuple[Throttle, FakeClock, list[float]]:
    clock = FakeClock()
    calls: list[float] = []
    throttle = Throttle(interval_ms, lambda: calls.append(clock.now), clock=clock)
    return throttle, clock, calls


def test_first_call_fires_immediately() -> None:
    throttle, _clock, calls = make_throttle()

    throttle()

    assert calls == [0.0]
    assert not throttle.pending


def test_calls_inside_window_coalesce_into_trailing_call() -> None:
    throttle, clock, calls = make_throttle()
    throttle()
    clock.advance(0.2)
    throttle()
    clock.advance(0.2)
    throttle()

    assert throttle.pending
    assert throttle.poll() is False

    clock.advance(0.6)
    assert throttle.poll() is True
    assert calls == [0.0, 1.0]
    assert throttle.fired == 2
    assert not throttle.pending


def test_call_after_window_fires_immediately() -> None:
    throttle, clock, calls = make_throttle()
    throttle()
    clock.advance(1.5)

    throttle()

    assert calls == [0.0, 1.5]


def test_flush_fires_pending_call() -> None:
    throttle, clock, calls = make_throttle()
    throttle()
    clock.advance(0.1)
    throttle()

    assert throttle.flush() is True
    assert calls == [0.0, 0.1]
    assert throttle.flush() is False


def test_cancel_drops_pending_call() -> None:
    throttle, clock, calls = make_throttle()
    throttle()
    clock.advance(0.1)
    throttle()

    throttle.cancel()
    clock.advance(5)

    assert throttle.poll() is False
    assert calls == [0.0]
