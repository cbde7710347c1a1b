"""翻译结果缓存."""

import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Optional, Tuple
from urllib.parse import quote

from pydantic import ValidationError as PydanticValidationError

from models.models import TranslationResult
from config.logging_config import get_logger

logger = get_logger(__name__)

CACHE_KEY_PREFIX = "deeplx.cache"
DEFAULT_TTL = 3600

# encodeURIComponent 不转义的字符
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_cache_key(source_lang: str, target_lang: str, text: str) -> str:
    """
    生成缓存键.

    Args:
        source_lang: 规范化后的源语言
        target_lang: 规范化后的目标语言
        text: 原始文本

    Returns:
        形如 deeplx.cache/EN/JA/Hello%20World 的缓存键
    """
    encoded = quote(text, safe=_URI_COMPONENT_SAFE)
    return f"{CACHE_KEY_PREFIX}/{source_lang}/{target_lang}/{encoded}"


class TranslationCache(ABC):
    """共享缓存的最小接口：按键读写序列化后的结果."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """返回未过期的值，不存在时返回 None."""

    @abstractmethod
    async def put(self, key: str, value: str, ttl: int) -> None:
        """写入值，ttl 秒后过期."""


class MemoryTranslationCache(TranslationCache):
    """进程内 TTL 缓存，超过容量时淘汰最早写入的条目."""

    def __init__(self, max_entries: int = 10000):
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, Tuple[float, str]]" = OrderedDict()

    async def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if expires_at <= time.monotonic():
            del self._entries[key]
            return None
        return value

    async def put(self, key: str, value: str, ttl: int) -> None:
        # 同一个键重复写入时以最后一次为准
        self._entries.pop(key, None)
        self._entries[key] = (time.monotonic() + ttl, value)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    async def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class CacheGateway:
    """在翻译结果与缓存中的序列化副本之间转换."""

    def __init__(self, cache: TranslationCache, ttl: int = DEFAULT_TTL):
        self.cache = cache
        self.ttl = ttl

    async def lookup(self, key: str) -> Optional[TranslationResult]:
        """读取缓存结果；cached 字段保持存储时的值，由调用方改写."""
        try:
            raw = await self.cache.get(key)
        except Exception as e:
            logger.error(f"Cache lookup failed, treating as miss: {e}")
            return None
        if raw is None:
            return None
        try:
            return TranslationResult.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.warning(f"Discarding unreadable cache entry: {e}")
            return None

    async def store(
        self, key: str, result: TranslationResult, ttl: Optional[int] = None
    ) -> None:
        """写入缓存，失败只记录日志，不影响请求."""
        stored = result.model_copy(update={"cached": False})
        try:
            await self.cache.put(
                key, stored.model_dump_json(exclude_none=True), ttl or self.ttl
            )
        except Exception as e:
            logger.error(f"Failed to store translation in cache: {e}")
