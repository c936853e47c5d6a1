import logging
from typing import Optional

from models.conversation import PersistAction, StepResult
from models.schemas import WebhookEvent
from agent.actions import ActionOutcome, TerminalActions
from agent.prompts import WELCOME_MESSAGE
from agent.state_machine import ConversationStateMachine
from tools.line_gateway import LineMessagingGateway
from utils.user_store import UserRecord, UserStore

logger = logging.getLogger(__name__)


class EventHandler:
    """Webhook イベント 1件を処理する (ステート読込 -> 遷移 -> 保存 -> 返信 -> アクション)"""

    def __init__(
        self,
        store: UserStore,
        gateway: LineMessagingGateway,
        actions: TerminalActions,
        state_machine: Optional[ConversationStateMachine] = None,
    ):
        self.store = store
        self.gateway = gateway
        self.actions = actions
        self.state_machine = state_machine or ConversationStateMachine()

    async def handle_event(self, event: WebhookEvent) -> Optional[ActionOutcome]:
        user_id = event.user_id
        if not user_id:
            logger.info(f"userId のないイベントは無視: type={event.type}")
            return None

        if event.type == "follow":
            await self.handle_follow(user_id, event.reply_token)
            return None

        if event.type == "message" and event.message and event.message.type == "text":
            return await self.handle_text(user_id, event.reply_token, event.message.text or "")

        logger.info(f"未対応のイベントは無視: type={event.type} ({user_id})")
        return None

    async def handle_follow(self, user_id: str, reply_token: Optional[str]) -> None:
        await self.store.register(user_id)
        logger.info(f"👋 友だち追加: {user_id}")
        if reply_token:
            await self.gateway.reply_text(reply_token, WELCOME_MESSAGE)

    async def handle_text(self, user_id: str, reply_token: Optional[str], text: str) -> Optional[ActionOutcome]:
        record = await self.store.get(user_id)
        result = self.state_machine.step(user_id, text, record.state, record.data)

        # 返信より先にステートを保存する
        await self._persist(user_id, result)

        if result.reply and reply_token:
            await self.gateway.reply_text(reply_token, result.reply)

        if result.terminal is None:
            return None

        outcome = await self.actions.run(result.terminal, user_id, reply_token or "")
        logger.info(f"[ACTION] {outcome.kind.value}: {outcome.status.value} ({user_id})")
        return outcome

    async def _persist(self, user_id: str, result: StepResult) -> None:
        if result.persist == PersistAction.SAVE:
            await self.store.put(
                UserRecord(
                    user_id=user_id,
                    state=result.next_state.value if result.next_state else None,
                    data=result.data.model_dump_json(exclude_none=True) if result.data else None,
                )
            )
        elif result.persist == PersistAction.CLEAR:
            await self.store.clear(user_id)
