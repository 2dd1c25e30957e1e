"""Tests for the sliding-window rate limiter."""

import asyncio

import pytest

from lol_match_crawler.infrastructure.api import EndpointRateLimiter, RateLimiter, parse_rate_limit_header


class TestParseRateLimitHeader:
    """Test parsing of the provider's "limit:seconds" format."""

    def test_parses_multiple_windows(self):
        assert parse_rate_limit_header("20:1,100:120") == [(20, 1.0), (100, 120.0)]

    def test_ignores_whitespace_and_empty_items(self):
        assert parse_rate_limit_header(" 18:1 , ,90:120 ") == [(18, 1.0), (90, 120.0)]

    @pytest.mark.parametrize("header", ["", "20", "20:abc", "x:1"])
    def test_rejects_malformed(self, header):
        with pytest.raises(ValueError):
            parse_rate_limit_header(header)


class TestRateLimiter:
    """Test that admitted requests never exceed any window."""

    def test_from_header_builds_windows(self, fake_clock):
        limiter = RateLimiter.from_header("18:1,90:120", clock=fake_clock, sleep=fake_clock.sleep)
        assert limiter.windows == [(18, 1.0), (90, 120.0)]

    def test_requires_a_window(self):
        with pytest.raises(ValueError):
            RateLimiter(())

    def test_rejects_invalid_window(self):
        with pytest.raises(ValueError):
            RateLimiter(((0, 1.0),))

    def test_admits_burst_up_to_limit_without_waiting(self, fake_clock):
        limiter = RateLimiter(((3, 1.0),), clock=fake_clock, sleep=fake_clock.sleep)

        async def scenario():
            for _ in range(3):
                await limiter.acquire()

        asyncio.run(scenario())
        assert fake_clock.sleeps == []

    def test_waits_for_oldest_request_to_leave_window(self, fake_clock):
        limiter = RateLimiter(((2, 1.0),), clock=fake_clock, sleep=fake_clock.sleep)
        start = fake_clock.now

        async def scenario():
            for _ in range(3):
                await limiter.acquire()

        asyncio.run(scenario())
        assert len(fake_clock.sleeps) == 1
        assert fake_clock.now - start == pytest.approx(1.0 + RateLimiter._SLACK_S)

    def test_every_window_is_respected(self, fake_clock):
        windows = ((5, 1.0), (12, 10.0))
        limiter = RateLimiter(windows, clock=fake_clock, sleep=fake_clock.sleep)
        admitted = []

        async def scenario():
            for _ in range(40):
                await limiter.acquire()
                admitted.append(fake_clock.now)

        asyncio.run(scenario())

        for limit, seconds in windows:
            for i, t in enumerate(admitted):
                in_window = [u for u in admitted[: i + 1] if t - u < seconds]
                assert len(in_window) <= limit

    def test_get_status_reports_usage(self, fake_clock):
        limiter = RateLimiter(((5, 1.0), (10, 120.0)), clock=fake_clock, sleep=fake_clock.sleep)

        async def scenario():
            await limiter.acquire()
            await limiter.acquire()

        asyncio.run(scenario())
        assert limiter.get_status() == [(2, 5, 1.0), (2, 10, 120.0)]

        fake_clock.now += 5
        assert limiter.get_status()[0][0] == 0
        assert limiter.get_status()[1][0] == 2


def acquire_n(limiter, n):
    async def scenario():
        for _ in range(n):
            await limiter.acquire()
    asyncio.run(scenario())


class TestAdoptLimits:
    """Test switching to the limits the provider reports."""

    def test_requests_already_sent_still_count(self, fake_clock):
        limiter = RateLimiter(((10, 1.0), (100, 120.0)), clock=fake_clock, sleep=fake_clock.sleep)
        acquire_n(limiter, 3)
        fake_clock.now += 5

        limiter.adopt([(20, 1.0), (5, 10.0)])

        assert limiter.windows == [(20, 1.0), (5, 10.0)]
        assert limiter.get_status() == [(0, 20, 1.0), (3, 5, 10.0)]

    def test_provider_counts_above_ours_are_booked(self, fake_clock):
        limiter = RateLimiter(((20, 1.0), (100, 120.0)), clock=fake_clock, sleep=fake_clock.sleep)
        acquire_n(limiter, 1)

        limiter.adopt([(20, 1.0), (100, 120.0)], counts=[(1, 1.0), (60, 120.0)])

        assert limiter.get_status() == [(1, 20, 1.0), (60, 100, 120.0)]

    def test_adopted_limits_are_enforced(self, fake_clock):
        limiter = RateLimiter(((20, 1.0),), clock=fake_clock, sleep=fake_clock.sleep)
        acquire_n(limiter, 2)

        limiter.adopt([(2, 1.0)])
        acquire_n(limiter, 1)

        assert fake_clock.sleeps == [pytest.approx(1.0 + RateLimiter._SLACK_S)]

    def test_adopt_requires_a_window(self, fake_clock):
        limiter = RateLimiter(clock=fake_clock, sleep=fake_clock.sleep)
        with pytest.raises(ValueError):
            limiter.adopt([])


class TestEndpointRateLimiter:
    """Test per-endpoint limiters."""

    def test_unknown_endpoint_does_not_wait(self, fake_clock):
        endpoints = EndpointRateLimiter(clock=fake_clock, sleep=fake_clock.sleep)
        endpoints.add_endpoint_limiter("league", [(1, 10.0)])

        async def scenario():
            for _ in range(5):
                await endpoints.acquire("match")

        asyncio.run(scenario())
        assert fake_clock.sleeps == []

    def test_endpoints_are_limited_independently(self, fake_clock):
        endpoints = EndpointRateLimiter(clock=fake_clock, sleep=fake_clock.sleep)
        endpoints.add_endpoint_limiter("league", [(1, 10.0)])
        endpoints.add_endpoint_limiter("account", [(1, 60.0)])

        async def scenario():
            await endpoints.acquire("league")
            await endpoints.acquire("account")
            await endpoints.acquire("league")

        asyncio.run(scenario())
        assert fake_clock.sleeps == [pytest.approx(10.0 + RateLimiter._SLACK_S)]

    def test_adopt_creates_missing_limiter(self, fake_clock):
        endpoints = EndpointRateLimiter(clock=fake_clock, sleep=fake_clock.sleep)

        endpoints.adopt("match", [(30, 10.0)], counts=[(4, 10.0)])

        assert endpoints.get("match").get_status() == [(4, 30, 10.0)]
