"""翻译流程中的错误类型."""


class TranslationError(Exception):
    """翻译失败，携带返回给客户端的状态码与消息."""

    code = 500

    def __init__(self, message: str, code: int = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(TranslationError):
    """请求中没有可翻译的文本."""

    code = 400


class BackendThrottled(TranslationError):
    """DeepL 返回 429，当前 IP 被临时限流."""

    code = 429


class BackendHttpError(TranslationError):
    """DeepL 返回了其他非 2xx 状态码."""


class BackendPayloadError(TranslationError):
    """DeepL 返回 2xx，但响应体中没有可用的翻译结果."""


class UnexpectedFailure(TranslationError):
    """网络或解析过程中的意外异常."""
