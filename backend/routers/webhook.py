from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from typing import Optional
from linebot.v3.webhook import SignatureValidator
from config import settings
from models.schemas import WebhookEvent, WebhookRequest
from agent.factory import create_event_handler
from agent.handler import EventHandler
from tools.line_gateway import create_signature_validator
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

_event_handler: Optional[EventHandler] = None


async def get_event_handler() -> EventHandler:
    # AsyncApiClient はイベントループ上で生成する必要があるため初回リクエスト時に作る
    global _event_handler
    if _event_handler is None:
        _event_handler = create_event_handler()
    return _event_handler


def get_signature_validator() -> SignatureValidator:
    return create_signature_validator(settings.LINE_CHANNEL_SECRET)


@router.post("/webhook")
async def webhook(
    request: Request,
    x_line_signature: Optional[str] = Header(None),
    validator: SignatureValidator = Depends(get_signature_validator),
    handler: EventHandler = Depends(get_event_handler),
):
    """LINE Webhook エンドポイント"""
    raw = await request.body()

    # ボディなしはヘルスチェック等とみなして成功を返す
    if not raw:
        return PlainTextResponse("OK")

    # UTF-8 でないボディは置換文字入りになり、署名が一致しないので 401 になる
    body = raw.decode("utf-8", errors="replace")
    if not x_line_signature or not validator.validate(body, x_line_signature):
        logger.warning("🚫 署名検証に失敗しました")
        return PlainTextResponse("Unauthorized", status_code=401)

    try:
        payload = WebhookRequest.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"⚠️ 不正なペイロードを無視: {e}")
        return PlainTextResponse("OK")

    if not payload.events:
        return PlainTextResponse("OK")

    # バッチの先頭イベントだけを処理する (2件目以降は検証もしない)
    try:
        event = WebhookEvent.model_validate(payload.events[0])
    except ValidationError as e:
        logger.warning(f"⚠️ 不正なイベントを無視: {e}")
        return PlainTextResponse("OK")

    logger.info(f"=== イベント受信: type={event.type} user={event.user_id} ===")
    await handler.handle_event(event)

    return PlainTextResponse("OK")
