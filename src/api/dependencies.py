"""路由依赖：配置与翻译调度器."""

from config.settings import Settings, settings
from translator.deeplx_translator import DeepLXTranslator

translator = DeepLXTranslator()


def get_settings() -> Settings:
    return settings


def get_translator() -> DeepLXTranslator:
    return translator
