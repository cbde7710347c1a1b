import random
import string
import unittest
from unittest.mock import patch

from models.models import TranslationResult
from translator.cache import CacheGateway, MemoryTranslationCache, build_cache_key
from backend_fakes import FailingCache


def _success(**overrides):
    fields = dict(
        code=200,
        id=123000,
        data="こんにちは",
        alternatives=["やあ"],
        source_lang="EN",
        target_lang="JA",
        method="Free",
        cached=False,
    )
    fields.update(overrides)
    return TranslationResult(**fields)


class TestCacheKey(unittest.TestCase):
    def test_encodes_like_uri_component(self):
        self.assertEqual(
            build_cache_key("EN", "JA", "Hello World/!?"),
            "deeplx.cache/EN/JA/Hello%20World%2F!%3F",
        )

    def test_same_triple_same_key(self):
        self.assertEqual(
            build_cache_key("EN", "DE", "Hello"), build_cache_key("EN", "DE", "Hello")
        )

    def test_any_field_changes_key(self):
        rng = random.Random(42)
        alphabet = string.ascii_letters + " /äö日本\n"
        langs = ["EN", "DE", "JA", "ZH", "FR"]
        for _ in range(200):
            src, tgt = rng.choice(langs), rng.choice(langs)
            text = "".join(rng.choice(alphabet) for _ in range(rng.randint(1, 12)))
            key = build_cache_key(src, tgt, text)
            other_src = rng.choice([lang for lang in langs if lang != src])
            other_tgt = rng.choice([lang for lang in langs if lang != tgt])
            self.assertNotEqual(key, build_cache_key(other_src, tgt, text))
            self.assertNotEqual(key, build_cache_key(src, other_tgt, text))
            self.assertNotEqual(key, build_cache_key(src, tgt, text + "x"))


class TestMemoryTranslationCache(unittest.IsolatedAsyncioTestCase):
    async def test_put_and_get(self):
        cache = MemoryTranslationCache()
        await cache.put("k", "v", 60)
        self.assertEqual(await cache.get("k"), "v")
        self.assertIsNone(await cache.get("missing"))

    async def test_expired_entry_is_dropped(self):
        cache = MemoryTranslationCache()
        with patch("translator.cache.time") as mock_time:
            mock_time.monotonic.return_value = 1000.0
            await cache.put("k", "v", 10)
        with patch("translator.cache.time") as mock_time:
            mock_time.monotonic.return_value = 1011.0
            self.assertIsNone(await cache.get("k"))
        self.assertEqual(len(cache), 0)

    async def test_evicts_oldest_over_capacity(self):
        cache = MemoryTranslationCache(max_entries=2)
        await cache.put("a", "1", 60)
        await cache.put("b", "2", 60)
        await cache.put("c", "3", 60)
        self.assertIsNone(await cache.get("a"))
        self.assertEqual(await cache.get("c"), "3")

    async def test_last_write_wins(self):
        cache = MemoryTranslationCache()
        await cache.put("k", "first", 60)
        await cache.put("k", "second", 60)
        self.assertEqual(await cache.get("k"), "second")


class TestCacheGateway(unittest.IsolatedAsyncioTestCase):
    async def test_store_then_lookup(self):
        gateway = CacheGateway(MemoryTranslationCache())
        await gateway.store("k", _success())
        found = await gateway.lookup("k")
        self.assertEqual(found, _success())

    async def test_store_always_persists_cached_false(self):
        gateway = CacheGateway(MemoryTranslationCache())
        await gateway.store("k", _success(cached=True))
        found = await gateway.lookup("k")
        self.assertFalse(found.cached)

    async def test_store_uses_default_ttl(self):
        cache = MemoryTranslationCache()
        gateway = CacheGateway(cache, ttl=5)
        with patch("translator.cache.time") as mock_time:
            mock_time.monotonic.return_value = 0.0
            await gateway.store("k", _success())
        with patch("translator.cache.time") as mock_time:
            mock_time.monotonic.return_value = 6.0
            self.assertIsNone(await gateway.lookup("k"))

    async def test_store_failure_is_swallowed(self):
        gateway = CacheGateway(FailingCache())
        with self.assertLogs("translator.cache", level="ERROR"):
            await gateway.store("k", _success())

    async def test_lookup_failure_is_a_miss(self):
        gateway = CacheGateway(FailingCache())
        with self.assertLogs("translator.cache", level="ERROR"):
            self.assertIsNone(await gateway.lookup("k"))

    async def test_unreadable_entry_is_a_miss(self):
        cache = MemoryTranslationCache()
        await cache.put("k", "not json", 60)
        gateway = CacheGateway(cache)
        self.assertIsNone(await gateway.lookup("k"))


if __name__ == "__main__":
    unittest.main()
