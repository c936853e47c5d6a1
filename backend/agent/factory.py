import logging

from config import settings
from models.chat_models import get_llm
from agent.actions import TerminalActions
from agent.handler import EventHandler
from tools.generation import GenerationService
from tools.line_gateway import LineMessagingGateway
from utils.user_store import create_user_store

logger = logging.getLogger(__name__)


def create_event_handler() -> EventHandler:
    """外部サービス (ストア / LLM / LINE) を組み立てて EventHandler を生成"""
    store = create_user_store(settings.USER_STORE_BACKEND, settings.DYNAMODB_TABLE, settings.AWS_REGION)
    gateway = LineMessagingGateway.from_access_token(settings.LINE_CHANNEL_ACCESS_TOKEN)
    generation = GenerationService(get_llm())

    logger.info("✅ EventHandler 初期化完了")
    return EventHandler(
        store=store,
        gateway=gateway,
        actions=TerminalActions(generation=generation, gateway=gateway),
    )
