from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional


class EventSource(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str = Field(default="user", description="送信元タイプ (user/group/room)")
    user_id: Optional[str] = Field(None, alias="userId", description="LINE ユーザーID")


class MessageContent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = Field(..., description="メッセージ種別 (text/image/...)")
    id: Optional[str] = None
    text: Optional[str] = None


class WebhookEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str = Field(..., description="イベント種別 (message/follow/...)")
    reply_token: Optional[str] = Field(None, alias="replyToken")
    source: Optional[EventSource] = None
    message: Optional[MessageContent] = None
    timestamp: Optional[int] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.source.user_id if self.source else None


class WebhookRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    destination: Optional[str] = None
    # 先頭イベントだけを WebhookEvent として検証するので、ここでは生のまま受ける
    events: List[Any] = Field(default_factory=list)
