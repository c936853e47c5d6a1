"""
会話ステートマシン

受信テキストと現在のステートから、次のステート・保存するデータ・即時返信・
ターミナルアクションを決める。ストアやLINEには一切触らない純粋なロジック。
"""

import logging
from typing import Dict, List, Optional

from pydantic import ValidationError

from models.conversation import (
    BivouacQuery,
    CampQuery,
    ConversationState,
    Flow,
    FlowKind,
    FlowStep,
    ItemQuery,
    PersistAction,
    StepResult,
    TerminalRequest,
)
from agent.prompts import (
    BIVOUAC_CONDITIONS_PROMPT,
    BIVOUAC_PREFECTURE_PROMPT,
    BIVOUAC_TRIGGER,
    CAMP_CONDITIONS_PROMPT,
    CAMP_DATE_PROMPT,
    CAMP_REGION_PROMPT,
    CAMP_TRIGGER,
    ITEM_CONDITIONS_PROMPT,
    ITEM_DURATION_PROMPT,
    ITEM_LOCATION_PROMPT,
    ITEM_TRIGGER,
)

logger = logging.getLogger(__name__)


FLOWS: List[Flow] = [
    Flow(
        kind=FlowKind.CAMP,
        trigger=CAMP_TRIGGER,
        query_model=CampQuery,
        steps=[
            FlowStep(state=ConversationState.CAMP_WAITING_REGION, field="region", prompt=CAMP_REGION_PROMPT),
            FlowStep(state=ConversationState.CAMP_WAITING_DATE, field="date", prompt=CAMP_DATE_PROMPT),
            FlowStep(state=ConversationState.CAMP_WAITING_CONDITIONS, field="conditions", prompt=CAMP_CONDITIONS_PROMPT),
        ],
    ),
    Flow(
        kind=FlowKind.BIVOUAC,
        trigger=BIVOUAC_TRIGGER,
        query_model=BivouacQuery,
        steps=[
            FlowStep(state=ConversationState.BIVOUAC_WAITING_PREFECTURE, field="prefecture", prompt=BIVOUAC_PREFECTURE_PROMPT),
            FlowStep(state=ConversationState.BIVOUAC_WAITING_CONDITIONS, field="conditions", prompt=BIVOUAC_CONDITIONS_PROMPT),
        ],
    ),
    Flow(
        kind=FlowKind.ITEM,
        trigger=ITEM_TRIGGER,
        query_model=ItemQuery,
        steps=[
            FlowStep(state=ConversationState.ITEM_WAITING_LOCATION, field="location", prompt=ITEM_LOCATION_PROMPT),
            FlowStep(state=ConversationState.ITEM_WAITING_DURATION, field="duration", prompt=ITEM_DURATION_PROMPT),
            FlowStep(state=ConversationState.ITEM_WAITING_CONDITIONS, field="conditions", prompt=ITEM_CONDITIONS_PROMPT),
        ],
    ),
]


class ConversationStateMachine:
    def __init__(self, flows: Optional[List[Flow]] = None):
        self.flows = flows if flows is not None else FLOWS
        self._by_trigger: Dict[str, Flow] = {flow.trigger: flow for flow in self.flows}
        self._by_state: Dict[ConversationState, Flow] = {
            step.state: flow for flow in self.flows for step in flow.steps
        }

    def step(
        self,
        user_id: str,
        inbound_text: str,
        current_state: Optional[str] = None,
        current_data: Optional[str] = None,
    ) -> StepResult:
        """1ターン分の遷移を計算する"""
        if not current_state:
            return self._step_idle(user_id, inbound_text)

        state = ConversationState.parse(current_state)
        flow = self._by_state.get(state) if state else None
        if flow is None:
            # 通常は起こらない: 不明なステートはリセットして一般メッセージ扱い
            logger.warning(f"⚠️ 不明なステート '{current_state}' -> リセット: {user_id}")
            return StepResult(
                persist=PersistAction.CLEAR,
                terminal=TerminalRequest(kind=FlowKind.GENERAL, text=inbound_text),
            )

        idx = flow.step_index(state)
        current = flow.steps[idx]
        query = self._load_query(flow, idx, current_data, user_id)
        if query is None:
            # 前の項目が復元できないので、不明ステートと同じくリセットして一般メッセージ扱い
            return StepResult(
                persist=PersistAction.CLEAR,
                terminal=TerminalRequest(kind=FlowKind.GENERAL, text=inbound_text),
            )
        query = query.model_copy(update={current.field: inbound_text})

        if idx + 1 < len(flow.steps):
            following = flow.steps[idx + 1]
            logger.info(f"[FLOW] {flow.kind.value}: {current.field} 受付 -> {following.state.value} ({user_id})")
            return StepResult(
                next_state=following.state,
                data=query,
                persist=PersistAction.SAVE,
                reply=following.prompt,
            )

        logger.info(f"[FLOW] {flow.kind.value}: 全項目そろったのでターミナルアクションへ ({user_id})")
        return StepResult(
            persist=PersistAction.CLEAR,
            terminal=TerminalRequest(kind=flow.kind, query=query),
        )

    def _step_idle(self, user_id: str, inbound_text: str) -> StepResult:
        flow = self._by_trigger.get(inbound_text.strip())
        if flow is None:
            return StepResult(terminal=TerminalRequest(kind=FlowKind.GENERAL, text=inbound_text))

        first = flow.steps[0]
        logger.info(f"[FLOW] {flow.kind.value} 開始 -> {first.state.value} ({user_id})")
        return StepResult(
            next_state=first.state,
            persist=PersistAction.SAVE,
            reply=first.prompt,
        )

    def _load_query(self, flow: Flow, idx: int, current_data: Optional[str], user_id: str):
        """保存データを復元する。それまでの項目がそろっていなければ None"""
        if idx == 0:
            return flow.query_model()
        try:
            query = flow.query_model.model_validate_json(current_data or "")
        except ValidationError as e:
            logger.warning(f"⚠️ 保存データの読み込み失敗 -> リセット ({user_id}): {e}")
            return None

        missing = [step.field for step in flow.steps[:idx] if getattr(query, step.field) is None]
        if missing:
            logger.warning(f"⚠️ 保存データに {missing} がありません -> リセット ({user_id})")
            return None
        return query
