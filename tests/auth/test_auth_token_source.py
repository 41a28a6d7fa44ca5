import asyncio
import unittest

from odrivefs.auth import CachedToken, StaticTokenSource
from odrivefs.errors import TokenError


class CountingSource:
    def __init__(self, token: str = "tok", *, fail_times: int = 0) -> None:
        self.calls = 0
        self.token = token
        self.fail_times = fail_times

    async def get_token(self) -> str:
        self.calls += 1
        await asyncio.sleep(0)
        if self.calls <= self.fail_times:
            raise RuntimeError("sign-in cancelled")
        return self.token


class TestStaticTokenSource(unittest.IsolatedAsyncioTestCase):
    async def test_returns_token(self) -> None:
        self.assertEqual(await StaticTokenSource("abc").get_token(), "abc")

    def test_rejects_empty_token(self) -> None:
        with self.assertRaises(ValueError):
            StaticTokenSource("  ")


class TestCachedToken(unittest.IsolatedAsyncioTestCase):
    async def test_fetches_once_and_reuses(self) -> None:
        source = CountingSource()
        cached = CachedToken(source)

        self.assertFalse(cached.is_set)
        self.assertEqual(await cached.get(), "tok")
        self.assertEqual(await cached.get(), "tok")
        self.assertTrue(cached.is_set)
        self.assertEqual(source.calls, 1)

    async def test_concurrent_first_callers_share_one_fetch(self) -> None:
        source = CountingSource()
        cached = CachedToken(source)

        tokens = await asyncio.gather(*(cached.get() for _ in range(10)))

        self.assertEqual(set(tokens), {"tok"})
        self.assertEqual(source.calls, 1)

    async def test_failure_is_wrapped_and_not_cached(self) -> None:
        source = CountingSource(fail_times=1)
        cached = CachedToken(source)

        with self.assertRaises(TokenError) as ctx:
            await cached.get()
        self.assertIsInstance(ctx.exception.cause, RuntimeError)

        self.assertEqual(await cached.get(), "tok")
        self.assertEqual(source.calls, 2)

    async def test_empty_token_is_rejected(self) -> None:
        with self.assertRaises(TokenError):
            await CachedToken(CountingSource(token="")).get()


if __name__ == "__main__":
    unittest.main()
