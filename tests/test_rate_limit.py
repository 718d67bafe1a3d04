# tests/test_rate_limit.py
# Ventana deslizante en memoria con reloj falso.

from weddings.rate_limit import SlidingWindowLimiter, get_limits_from_env


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_blocks_after_max_and_recovers_when_window_slides():
    clock = FakeClock()
    limiter = SlidingWindowLimiter(3, 60, clock=clock)

    assert all(limiter.is_allowed("login:1.2.3.4") for _ in range(3))
    assert limiter.is_allowed("login:1.2.3.4") is False

    clock.now += 59
    assert limiter.is_allowed("login:1.2.3.4") is False

    clock.now += 1
    assert limiter.is_allowed("login:1.2.3.4") is True


def test_keys_are_independent_and_resettable():
    limiter = SlidingWindowLimiter(1, 60, clock=FakeClock())
    assert limiter.is_allowed("a")
    assert limiter.is_allowed("b")
    assert not limiter.is_allowed("a")

    limiter.reset("a")
    assert limiter.is_allowed("a")


def test_non_positive_max_disables_limit():
    limiter = SlidingWindowLimiter(0, 60, clock=FakeClock())
    assert all(limiter.is_allowed("x") for _ in range(50))


def test_limits_from_env(monkeypatch):
    monkeypatch.setenv("LOGIN_RL_MAX", "9")
    monkeypatch.setenv("LOGIN_RL_WINDOW", "30")
    assert get_limits_from_env("LOGIN_RL", 5, 60) == (9, 30)

    monkeypatch.setenv("LOGIN_RL_MAX", "nueve")
    assert get_limits_from_env("LOGIN_RL", 5, 60) == (5, 60)
