"""DeepLX 翻译接口路由."""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import JSONResponse

from config.settings import Settings
from config.logging_config import get_logger
from models.models import OfficialTranslateRequest, TranslateRequest
from translator.deeplx_translator import AUTO_LANG, DeepLXTranslator
from translator.normalizer import join_texts, to_official_response, to_simple_response
from .auth import require_dl_session, verify_token
from .dependencies import get_settings, get_translator

logger = get_logger(__name__)

# 创建路由实例，所有翻译接口在私有模式下都需要令牌
router = APIRouter(dependencies=[Depends(verify_token)])


def resolve_cache_policy(requested: Optional[bool], default: bool) -> bool:
    """请求中显式给出的 cache 优先，否则使用接口默认值."""
    return requested if requested is not None else default


@router.post("/translate")
async def translate(
    req: TranslateRequest,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    translator: DeepLXTranslator = Depends(get_translator),
):
    """
    免费接口.

    公开模式下默认启用缓存，私有模式下默认关闭。
    """
    use_cache = resolve_cache_policy(req.cache, not settings.is_private)
    result = await translator.translate(
        req.source_lang,
        req.target_lang,
        req.text,
        dl_session="",
        use_cache=use_cache,
        background_tasks=background_tasks,
    )
    return JSONResponse(to_simple_response(result), status_code=result.code)


@router.post("/v1/translate")
async def translate_pro(
    req: TranslateRequest,
    background_tasks: BackgroundTasks,
    dl_session: str = Depends(require_dl_session),
    translator: DeepLXTranslator = Depends(get_translator),
):
    """Pro 接口，使用服务端配置的 DL_SESSION，默认不使用缓存."""
    use_cache = resolve_cache_policy(req.cache, False)
    result = await translator.translate(
        req.source_lang,
        req.target_lang,
        req.text,
        dl_session=dl_session,
        use_cache=use_cache,
        background_tasks=background_tasks,
    )
    return JSONResponse(to_simple_response(result), status_code=result.code)


@router.post("/v2/translate")
async def translate_official(
    req: OfficialTranslateRequest,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    translator: DeepLXTranslator = Depends(get_translator),
):
    """
    官方接口兼容格式.

    源语言总是自动检测；多段文本按换行拼接后一次翻译。
    成功时返回 {"translations": [...], "cached": bool}。
    """
    use_cache = resolve_cache_policy(req.cache, not settings.is_private)
    result = await translator.translate(
        AUTO_LANG,
        req.target_lang,
        join_texts(req.text),
        dl_session="",
        use_cache=use_cache,
        background_tasks=background_tasks,
    )
    return JSONResponse(to_official_response(result), status_code=result.code)
