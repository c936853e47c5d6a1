"""
Tools パッケージ
- 外部サービスのラッパー (LLM 生成 / LINE Messaging API)
"""

from .generation import GenerationService
from .line_gateway import LineMessagingGateway, split_text, create_signature_validator

__all__ = [
    "GenerationService",
    "LineMessagingGateway",
    "split_text",
    "create_signature_validator",
]
