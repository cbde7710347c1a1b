"""DeepLX 翻译调度：缓存查询、模拟客户端调用 DeepL、解析结果并写回缓存."""

import asyncio
import random
from typing import Any, Callable, Dict, Optional, Set

import httpx

from config.settings import settings
from config.logging_config import get_logger
from models.models import TranslationMethod, TranslationResult
from translator.cache import (
    CacheGateway,
    MemoryTranslationCache,
    TranslationCache,
    build_cache_key,
)
from translator.errors import (
    BackendHttpError,
    BackendPayloadError,
    BackendThrottled,
    TranslationError,
    UnexpectedFailure,
    ValidationError,
)
from translator.protocol import (
    build_headers,
    build_payload,
    current_millis,
    get_i_count,
    get_random_number,
    get_timestamp,
    render_body,
)

logger = get_logger(__name__)

AUTO_LANG = "auto"
DEFAULT_SOURCE_LANG = "EN"


def normalize_source_lang(source_lang: Optional[str]) -> str:
    """未指定或为 auto 时回退到 EN，其余转为大写."""
    if not source_lang or source_lang.lower() == AUTO_LANG:
        return DEFAULT_SOURCE_LANG
    return source_lang.upper()


class DeepLXTranslator:
    """单次翻译请求的调度器."""

    def __init__(
        self,
        cache: Optional[TranslationCache] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        cache_ttl: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        """
        初始化翻译调度器.

        Args:
            cache: 共享结果缓存，默认使用进程内缓存
            api_url: DeepL jsonrpc 地址
            timeout: 调用 DeepL 的超时时间（秒）
            cache_ttl: 缓存过期时间（秒）
            transport: httpx 传输层，测试时可替换
            rng: 请求 id 的随机数来源
            clock: 返回当前毫秒时间戳的函数
        """
        if cache is None:
            cache = MemoryTranslationCache(max_entries=settings.cache_max_entries)
        self.cache_gateway = CacheGateway(cache, ttl=cache_ttl or settings.cache_ttl)
        self.api_url = api_url or settings.deepl_api_url
        self.timeout = timeout or settings.request_timeout
        self.transport = transport
        self.rng = rng
        self.clock = clock or current_millis
        self._pending: Set[asyncio.Task] = set()

    async def translate(
        self,
        source_lang: Optional[str],
        target_lang: Optional[str],
        text: Optional[str],
        dl_session: str = "",
        use_cache: bool = False,
        background_tasks=None,
    ) -> TranslationResult:
        """
        翻译文本，所有失败都转换为带状态码的结果，不向外抛出异常.

        Args:
            source_lang: 源语言，None 或 auto 视为 EN
            target_lang: 目标语言
            text: 待翻译文本
            dl_session: DeepL Pro 会话 cookie，非空时以 Pro 方式调用
            use_cache: 是否读写缓存
            background_tasks: 后台任务登记器（需提供 add_task），缓存写入在响应返回后执行

        Returns:
            翻译结果
        """
        if not text:
            return self._failure(ValidationError("No text to translate."))
        if not target_lang:
            return self._failure(ValidationError("No target language specified."))

        source = normalize_source_lang(source_lang)
        target = target_lang.upper()
        cache_key = build_cache_key(source, target, text)

        if use_cache:
            cached = await self.cache_gateway.lookup(cache_key)
            if cached is not None:
                logger.debug(f"Cache hit for {source}->{target}")
                return cached.model_copy(update={"cached": True})

        try:
            result = await self._request_backend(source, target, text, dl_session)
        except TranslationError as e:
            return self._failure(e)
        except Exception as e:
            logger.exception(f"Unexpected error while translating: {e}")
            return self._failure(
                UnexpectedFailure(f"An unexpected error occurred: {e}")
            )

        if use_cache:
            self._schedule_store(cache_key, result, background_tasks)
        return result

    async def _request_backend(
        self, source: str, target: str, text: str, dl_session: str
    ) -> TranslationResult:
        request_id = get_random_number(self.rng)
        timestamp = get_timestamp(get_i_count(text), self.clock())
        payload = build_payload(request_id, source, target, text, timestamp)
        body = render_body(request_id, payload)

        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport, follow_redirects=True
        ) as client:
            response = await client.post(
                self.api_url,
                content=body.encode("utf-8"),
                headers=build_headers(dl_session),
            )
        return self._parse_response(response, request_id, target, dl_session)

    def _parse_response(
        self,
        response: httpx.Response,
        request_id: int,
        target: str,
        dl_session: str,
    ) -> TranslationResult:
        if response.status_code == 429:
            logger.warning("DeepL rate limited this IP (429)")
            raise BackendThrottled(
                "Too many requests, your IP has been blocked by DeepL temporarily."
            )
        if not response.is_success:
            logger.warning(f"DeepL responded with HTTP {response.status_code}")
            raise BackendHttpError(
                f"DeepL API error: {response.text}", code=response.status_code
            )

        data: Dict[str, Any] = response.json()
        error = data.get("error")
        if error is not None:
            message = error.get("message") if isinstance(error, dict) else error
            logger.error(f"DeepL returned an error payload: {message}")
            raise BackendPayloadError(f"DeepL API returned an error: {message}")

        result = data.get("result") or {}
        texts = result.get("texts")
        if not texts:
            raise BackendPayloadError("Translation failed, no text returned.")

        first = texts[0]
        alternatives = [
            alt["text"]
            for alt in first.get("alternatives") or []
            if isinstance(alt, dict) and isinstance(alt.get("text"), str)
        ]
        return TranslationResult(
            code=200,
            id=request_id,
            data=first.get("text"),
            alternatives=alternatives,
            source_lang=result.get("lang"),
            target_lang=target,
            method=TranslationMethod.PRO if dl_session else TranslationMethod.FREE,
            cached=False,
        )

    def _schedule_store(
        self, cache_key: str, result: TranslationResult, background_tasks
    ) -> None:
        """缓存写入不阻塞响应：交给后台任务登记器，或作为独立的 asyncio 任务运行."""
        if background_tasks is not None:
            background_tasks.add_task(self.cache_gateway.store, cache_key, result)
            return
        task = asyncio.create_task(self.cache_gateway.store(cache_key, result))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """等待尚未完成的缓存写入任务."""
        if self._pending:
            await asyncio.gather(*self._pending)

    @staticmethod
    def _failure(error: TranslationError) -> TranslationResult:
        return TranslationResult(code=error.code, message=error.message, cached=False)
