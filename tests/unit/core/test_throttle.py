"""Unit tests for RateLimiter."""

from collections.abc import Callable

from slowrm.core.throttle import RateLimiter


class TestRateLimiter:
    """Tests for RateLimiter."""

    def test_starts_at_zero(self, fake_sleep: Callable[[float], None]) -> None:
        """A new limiter has an empty counter."""
        limiter = RateLimiter(5, 0.1, sleep=fake_sleep)
        assert limiter.bytes_since_pause == 0

    def test_credit_accumulates(self, fake_sleep: Callable[[float], None]) -> None:
        """Credited sizes add up."""
        limiter = RateLimiter(5, 0.1, sleep=fake_sleep)
        limiter.credit(3)
        limiter.credit(3)
        assert limiter.bytes_since_pause == 6

    def test_no_pause_at_threshold(
        self, fake_sleep: Callable[[float], None], sleeps: list[float]
    ) -> None:
        """Reaching the threshold exactly does not pause."""
        limiter = RateLimiter(5, 0.1, sleep=fake_sleep)
        limiter.credit(5)

        assert limiter.maybe_pause() is False
        assert sleeps == []
        assert limiter.bytes_since_pause == 5

    def test_pause_above_threshold(
        self, fake_sleep: Callable[[float], None], sleeps: list[float]
    ) -> None:
        """Going past the threshold pauses once and resets the counter."""
        limiter = RateLimiter(5, 0.25, sleep=fake_sleep)
        limiter.credit(6)

        assert limiter.maybe_pause() is True
        assert sleeps == [0.25]
        assert limiter.bytes_since_pause == 0

        # Counter is empty now, so the next check does nothing
        assert limiter.maybe_pause() is False
        assert sleeps == [0.25]

    def test_counter_reset_right_after_sleep(self) -> None:
        """The counter still holds its value during the sleep and is zero after."""
        seen: list[int] = []
        limiter = RateLimiter(5, 0.1, sleep=lambda _s: seen.append(limiter.bytes_since_pause))
        limiter.credit(9)

        limiter.pause()

        assert seen == [9]
        assert limiter.bytes_since_pause == 0

    def test_pause_is_unconditional(
        self, fake_sleep: Callable[[float], None], sleeps: list[float]
    ) -> None:
        """pause() sleeps even with an empty counter."""
        limiter = RateLimiter(5, 0.1, sleep=fake_sleep)
        limiter.pause()
        limiter.pause()
        assert sleeps == [0.1, 0.1]

    def test_zero_threshold_pauses_after_any_bytes(
        self, fake_sleep: Callable[[float], None], sleeps: list[float]
    ) -> None:
        """With a zero threshold a single credited byte triggers a pause."""
        limiter = RateLimiter(0, 0.1, sleep=fake_sleep)
        assert limiter.maybe_pause() is False

        limiter.credit(1)
        assert limiter.maybe_pause() is True
        assert sleeps == [0.1]

    def test_small_file_sequence(
        self, fake_sleep: Callable[[float], None], sleeps: list[float]
    ) -> None:
        """Two 3-byte files under a 5-byte threshold: the third file waits once."""
        limiter = RateLimiter(5, 0.1, sleep=fake_sleep)

        assert limiter.maybe_pause() is False
        limiter.credit(3)
        assert limiter.maybe_pause() is False
        limiter.credit(3)
        assert limiter.bytes_since_pause == 6

        assert limiter.maybe_pause() is True
        assert limiter.bytes_since_pause == 0
        assert sleeps == [0.1]
