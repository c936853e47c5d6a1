import logging
from typing import Any, Dict, List

from linebot.v3.messaging import (
    AsyncApiClient,
    AsyncMessagingApi,
    Configuration,
    FlexContainer,
    FlexMessage,
    PushMessageRequest,
    ReplyMessageRequest,
    TextMessage,
)
from linebot.v3.webhook import SignatureValidator

logger = logging.getLogger(__name__)

# LINE Messaging API の制限
MAX_TEXT_LENGTH = 5000
MAX_MESSAGES_PER_REQUEST = 5


def split_text(text: str, limit: int = MAX_TEXT_LENGTH) -> List[str]:
    """テキストを limit 文字以下のチャンクに分割する (空文字なら空リスト)"""
    if not text:
        return []
    return [text[i:i + limit] for i in range(0, len(text), limit)]


class LineMessagingGateway:
    """
    LINE への返信 (reply) / プッシュ (push) のラッパー
    - reply: 受信イベントの replyToken で1回だけ使える (テキストのみ)
    - push: userId 宛てに何度でも送れる (テキスト / Flex)
    """

    def __init__(self, messaging_api: AsyncMessagingApi):
        self.messaging_api = messaging_api

    @classmethod
    def from_access_token(cls, access_token: str) -> "LineMessagingGateway":
        configuration = Configuration(access_token=access_token)
        return cls(AsyncMessagingApi(AsyncApiClient(configuration)))

    async def reply_text(self, reply_token: str, text: str) -> None:
        chunks = split_text(text)[:MAX_MESSAGES_PER_REQUEST]
        if not chunks:
            return
        await self.messaging_api.reply_message(
            ReplyMessageRequest(
                reply_token=reply_token,
                messages=[TextMessage(text=chunk) for chunk in chunks],
            )
        )
        logger.info(f"💬 reply 送信: {len(chunks)}件")

    async def push_text(self, user_id: str, text: str) -> None:
        chunks = split_text(text)
        for start in range(0, len(chunks), MAX_MESSAGES_PER_REQUEST):
            batch = chunks[start:start + MAX_MESSAGES_PER_REQUEST]
            await self.messaging_api.push_message(
                PushMessageRequest(
                    to=user_id,
                    messages=[TextMessage(text=chunk) for chunk in batch],
                )
            )
        logger.info(f"📨 push テキスト送信: {user_id} ({len(chunks)}件)")

    async def push_flex(self, user_id: str, alt_text: str, contents: Dict[str, Any]) -> None:
        message = FlexMessage(alt_text=alt_text, contents=FlexContainer.from_dict(contents))
        await self.messaging_api.push_message(PushMessageRequest(to=user_id, messages=[message]))
        logger.info(f"📨 push Flex送信: {user_id} ({alt_text})")


def create_signature_validator(channel_secret: str) -> SignatureValidator:
    return SignatureValidator(channel_secret)
