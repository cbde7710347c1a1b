"""API数据模型定义."""

from pydantic import BaseModel
from typing import List, Optional, Union


class TranslateRequest(BaseModel):
    """/translate 与 /v1/translate 的请求体."""

    text: Optional[str] = None
    source_lang: Optional[str] = None
    target_lang: str
    cache: Optional[bool] = None


class OfficialTranslateRequest(BaseModel):
    """/v2/translate 的请求体（兼容官方接口，不支持指定源语言）."""

    text: Optional[Union[str, List[str]]] = None
    target_lang: str
    cache: Optional[bool] = None


class TranslationResult(BaseModel):
    """一次翻译请求的规范结果.

    成功时包含 id/data/alternatives/source_lang/target_lang/method，
    失败时只有 code/message/cached。
    """

    code: int
    id: Optional[int] = None
    data: Optional[str] = None
    alternatives: Optional[List[str]] = None
    source_lang: Optional[str] = None
    target_lang: Optional[str] = None
    method: Optional[str] = None
    cached: bool = False
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.code == 200


class TranslationMethod:
    """翻译方式常量."""

    FREE = "Free"
    PRO = "Pro"
