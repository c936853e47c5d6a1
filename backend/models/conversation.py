from enum import Enum
from typing import List, Optional, Type, Union

from pydantic import BaseModel, Field


class ConversationState(str, Enum):
    """ユーザーごとの会話ステート (ストアには value 文字列で保存)"""
    CAMP_WAITING_REGION = "camp_waiting_region"
    CAMP_WAITING_DATE = "camp_waiting_date"
    CAMP_WAITING_CONDITIONS = "camp_waiting_conditions"
    BIVOUAC_WAITING_PREFECTURE = "bivouac_waiting_prefecture"
    BIVOUAC_WAITING_CONDITIONS = "bivouac_waiting_conditions"
    ITEM_WAITING_LOCATION = "item_waiting_location"
    ITEM_WAITING_DURATION = "item_waiting_duration"
    ITEM_WAITING_CONDITIONS = "item_waiting_conditions"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ConversationState"]:
        """未知の文字列なら None を返す"""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class FlowKind(str, Enum):
    CAMP = "camp"
    BIVOUAC = "bivouac"
    ITEM = "item"
    GENERAL = "general"


class CampQuery(BaseModel):
    region: Optional[str] = None
    date: Optional[str] = None
    conditions: Optional[str] = None


class BivouacQuery(BaseModel):
    prefecture: Optional[str] = None
    conditions: Optional[str] = None


class ItemQuery(BaseModel):
    location: Optional[str] = None
    duration: Optional[str] = None
    conditions: Optional[str] = None


FlowQuery = Union[CampQuery, BivouacQuery, ItemQuery]


class FlowStep(BaseModel):
    """フロー内の 1ステップ: 待機ステート / 収集するフィールド / 質問文"""
    state: ConversationState
    field: str
    prompt: str


class Flow(BaseModel):
    kind: FlowKind
    trigger: str
    query_model: Type[BaseModel]
    steps: List[FlowStep]

    def step_index(self, state: ConversationState) -> Optional[int]:
        for idx, step in enumerate(self.steps):
            if step.state == state:
                return idx
        return None


class PersistAction(str, Enum):
    NONE = "none"
    SAVE = "save"
    CLEAR = "clear"


class TerminalRequest(BaseModel):
    """ターミナルアクションの起動要求"""
    kind: FlowKind
    query: Optional[FlowQuery] = None
    text: str = Field(default="", description="General アクション用の受信テキスト")


class StepResult(BaseModel):
    next_state: Optional[ConversationState] = None
    data: Optional[FlowQuery] = None
    persist: PersistAction = PersistAction.NONE
    reply: Optional[str] = None
    terminal: Optional[TerminalRequest] = None
