"""私有模式下的访问令牌校验."""

import secrets
from typing import Optional

from fastapi import Depends, Request

from config.settings import Settings
from config.logging_config import get_logger
from .dependencies import get_settings
from .errors import AuthError, ConfigurationError

logger = get_logger(__name__)

AUTH_SCHEMES = ("Bearer", "DeepL-Auth-Key")


def extract_header_token(authorization: Optional[str]) -> str:
    """
    从 Authorization 头中取出令牌.

    Args:
        authorization: 形如 "Bearer <token>" 或 "DeepL-Auth-Key <token>" 的请求头

    Returns:
        令牌，格式不符时返回空字符串
    """
    if not authorization:
        return ""
    parts = authorization.split(" ")
    if len(parts) == 2 and parts[0] in AUTH_SCHEMES:
        return parts[1]
    return ""


def _matches(candidate: Optional[str], token: str) -> bool:
    if not candidate:
        return False
    return secrets.compare_digest(candidate.encode("utf-8"), token.encode("utf-8"))


async def verify_token(request: Request, settings: Settings = Depends(get_settings)):
    """仅在配置了 TOKEN 时校验查询参数或请求头中的令牌."""
    if not settings.is_private:
        return
    query_token = request.query_params.get("token")
    header_token = extract_header_token(request.headers.get("Authorization"))
    if _matches(query_token, settings.token) or _matches(header_token, settings.token):
        return
    logger.warning(f"Rejected request to {request.url.path}: invalid access token")
    raise AuthError()


async def require_dl_session(settings: Settings = Depends(get_settings)) -> str:
    """Pro 接口需要服务端配置 DL_SESSION."""
    if not settings.dl_session:
        raise ConfigurationError("DL_SESSION is not configured.")
    return settings.dl_session
