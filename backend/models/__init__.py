"""
Models パッケージ
- Webhook 受信スキーマ (Pydantic)
- 会話ステート / フロー定義
- 生成結果レコード
- LLM 初期化
"""

from .schemas import WebhookRequest, WebhookEvent, EventSource, MessageContent
from .conversation import (
    ConversationState,
    FlowKind,
    CampQuery,
    BivouacQuery,
    ItemQuery,
    Flow,
    FlowStep,
    PersistAction,
    StepResult,
    TerminalRequest,
)
from .records import CampInfo, BivouacInfo, ItemInfo


__all__ = [
    "WebhookRequest",
    "WebhookEvent",
    "EventSource",
    "MessageContent",
    "ConversationState",
    "FlowKind",
    "CampQuery",
    "BivouacQuery",
    "ItemQuery",
    "Flow",
    "FlowStep",
    "PersistAction",
    "StepResult",
    "TerminalRequest",
    "CampInfo",
    "BivouacInfo",
    "ItemInfo",
]
