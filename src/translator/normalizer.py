"""把翻译结果转换为各接口的响应格式."""

from typing import Any, Dict, List, Optional, Union

from models.models import TranslationResult


def to_simple_response(result: TranslationResult) -> Dict[str, Any]:
    """/translate 与 /v1/translate 的响应格式，省略为空的字段."""
    return result.model_dump(exclude_none=True)


def to_official_response(result: TranslationResult) -> Dict[str, Any]:
    """
    /v2/translate 的官方兼容格式.

    Args:
        result: 翻译结果

    Returns:
        成功时为 {"translations": [...], "cached": bool}，失败时退回简单格式
    """
    if not result.ok:
        return to_simple_response(result)
    return {
        "translations": [
            {
                "detected_source_language": result.source_lang,
                "text": result.data,
            }
        ],
        "cached": result.cached,
    }


def join_texts(text: Optional[Union[str, List[str]]]) -> Optional[str]:
    """多段文本用换行拼接成一段，整体交给 DeepL 处理."""
    if isinstance(text, list):
        return "\n".join(text)
    return text
