"""
ターミナルアクション

フローの全項目がそろったとき (または一般メッセージのとき) に実行するパイプライン。
受付返信 -> 生成 -> パース -> カード作成 -> push

生成・送信で起きた例外はここで捕まえてログに出し、ユーザーにはお詫びを1通 push する。
結果は ActionOutcome として返し、呼び出し元には例外を投げない。
ただしテンプレート構造の不一致 (TemplateShapeError) だけはそのまま投げる。
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from models.conversation import BivouacQuery, CampQuery, FlowKind, ItemQuery, TerminalRequest
from agent.prompts import (
    APOLOGY_MESSAGE,
    BIVOUAC_ACK_TEMPLATE,
    BIVOUAC_SEARCH_PROMPT,
    CAMP_ACK_TEMPLATE,
    CAMP_DETAIL_PROMPT,
    CAMP_SEARCH_PROMPT,
    GENERAL_FALLBACK_MESSAGE,
    GENERAL_SYSTEM_PROMPT,
    ITEM_ACK_TEMPLATE,
    ITEM_DETAIL_PROMPT,
    ITEM_SUGGEST_PROMPT,
)
from tools.generation import GenerationService
from tools.line_gateway import LineMessagingGateway
from utils.cards import TemplateShapeError, compose_bivouac_carousel, compose_camp_carousel
from utils.parsers import parse_bivouac_info, parse_camp_info, parse_item_info

logger = logging.getLogger(__name__)

# 持ち物ごとの追加質問は先頭3件まで
MAX_ITEM_DETAILS = 3


class ActionStatus(str, Enum):
    DELIVERED = "delivered"
    EMPTY = "empty"
    FAILED = "failed"


class ActionOutcome(BaseModel):
    kind: FlowKind
    status: ActionStatus
    records: int = 0
    error: Optional[str] = None


class TerminalActions:
    def __init__(
        self,
        generation: GenerationService,
        gateway: LineMessagingGateway,
        camp_template: Optional[List[Dict[str, Any]]] = None,
        bivouac_template: Optional[List[Dict[str, Any]]] = None,
    ):
        self.generation = generation
        self.gateway = gateway
        self.camp_template = camp_template
        self.bivouac_template = bivouac_template

    async def run(self, request: TerminalRequest, user_id: str, reply_token: str) -> ActionOutcome:
        if request.kind == FlowKind.CAMP:
            return await self.run_camp(request.query, user_id, reply_token)
        if request.kind == FlowKind.BIVOUAC:
            return await self.run_bivouac(request.query, user_id, reply_token)
        if request.kind == FlowKind.ITEM:
            return await self.run_item(request.query, user_id, reply_token)
        return await self.run_general(request.text, user_id, reply_token)

    # ------------------------------------------------------------
    # キャンプ場調べ
    # ------------------------------------------------------------
    async def run_camp(self, query: CampQuery, user_id: str, reply_token: str) -> ActionOutcome:
        fields = query.model_dump()
        try:
            await self.gateway.reply_text(reply_token, CAMP_ACK_TEMPLATE.format(**fields))

            completion = await self.generation.generate(CAMP_SEARCH_PROMPT.format(**fields))
            records = parse_camp_info(completion)
            if not records:
                return await self._empty(FlowKind.CAMP, user_id)

            card = compose_camp_carousel(records, self.camp_template)
            await self.gateway.push_flex(user_id, "おすすめキャンプ場", card)

            # 2回目の生成: 各キャンプ場の詳細
            names = "\n".join(f"{idx}. {record.name}" for idx, record in enumerate(records, 1))
            detail = await self.generation.generate(
                CAMP_DETAIL_PROMPT.format(names=names, conditions=query.conditions)
            )
            if detail:
                await self.gateway.push_text(user_id, detail)

            logger.info(f"✅ キャンプ場調べ完了: {user_id} ({len(records)}件)")
            return ActionOutcome(kind=FlowKind.CAMP, status=ActionStatus.DELIVERED, records=len(records))
        except TemplateShapeError:
            raise
        except Exception as e:
            return await self._failed(FlowKind.CAMP, user_id, e)

    # ------------------------------------------------------------
    # 野営地調べ
    # ------------------------------------------------------------
    async def run_bivouac(self, query: BivouacQuery, user_id: str, reply_token: str) -> ActionOutcome:
        fields = query.model_dump()
        try:
            await self.gateway.reply_text(reply_token, BIVOUAC_ACK_TEMPLATE.format(**fields))

            completion = await self.generation.generate(BIVOUAC_SEARCH_PROMPT.format(**fields))
            records = parse_bivouac_info(completion)
            if not records:
                return await self._empty(FlowKind.BIVOUAC, user_id)

            card = compose_bivouac_carousel(records, self.bivouac_template)
            await self.gateway.push_flex(user_id, "おすすめ野営地", card)

            logger.info(f"✅ 野営地調べ完了: {user_id} ({len(records)}件)")
            return ActionOutcome(kind=FlowKind.BIVOUAC, status=ActionStatus.DELIVERED, records=len(records))
        except TemplateShapeError:
            raise
        except Exception as e:
            return await self._failed(FlowKind.BIVOUAC, user_id, e)

    # ------------------------------------------------------------
    # 持ち物提案
    # ------------------------------------------------------------
    async def run_item(self, query: ItemQuery, user_id: str, reply_token: str) -> ActionOutcome:
        fields = query.model_dump()
        try:
            await self.gateway.reply_text(reply_token, ITEM_ACK_TEMPLATE.format(**fields))

            completion = await self.generation.generate(ITEM_SUGGEST_PROMPT.format(**fields))
            records = parse_item_info(completion)
            if not records:
                return await self._empty(FlowKind.ITEM, user_id)

            summary = "\n".join(
                f"{idx}. {record.name}: {record.description}" for idx, record in enumerate(records, 1)
            )
            await self.gateway.push_text(user_id, f"🎒 おすすめの持ち物\n{summary}")

            # 持ち物ごとの詳細は1件ずつ順番に問い合わせる
            for record in records[:MAX_ITEM_DETAILS]:
                detail = await self.generation.generate(ITEM_DETAIL_PROMPT.format(name=record.name, **fields))
                if detail:
                    await self.gateway.push_text(user_id, f"【{record.name}】\n{detail}")

            logger.info(f"✅ 持ち物提案完了: {user_id} ({len(records)}件)")
            return ActionOutcome(kind=FlowKind.ITEM, status=ActionStatus.DELIVERED, records=len(records))
        except Exception as e:
            return await self._failed(FlowKind.ITEM, user_id, e)

    # ------------------------------------------------------------
    # 一般メッセージ (フロー外)
    # ------------------------------------------------------------
    async def run_general(self, text: str, user_id: str, reply_token: str) -> ActionOutcome:
        try:
            answer = await self.generation.generate(text, system_prompt=GENERAL_SYSTEM_PROMPT)
        except Exception:
            logger.exception(f"❌ 一般メッセージの生成失敗: {user_id}")
            answer = None

        try:
            await self.gateway.reply_text(reply_token, answer or GENERAL_FALLBACK_MESSAGE)
        except Exception as e:
            return await self._failed(FlowKind.GENERAL, user_id, e)

        status = ActionStatus.DELIVERED if answer else ActionStatus.EMPTY
        return ActionOutcome(kind=FlowKind.GENERAL, status=status)

    # ------------------------------------------------------------
    async def _empty(self, kind: FlowKind, user_id: str) -> ActionOutcome:
        logger.warning(f"⚠️ {kind.value}: 生成結果から0件 -> お詫びを送信 ({user_id})")
        await self.gateway.push_text(user_id, APOLOGY_MESSAGE)
        return ActionOutcome(kind=kind, status=ActionStatus.EMPTY)

    async def _failed(self, kind: FlowKind, user_id: str, error: Exception) -> ActionOutcome:
        logger.exception(f"❌ {kind.value} アクション失敗: {user_id}")
        try:
            await self.gateway.push_text(user_id, APOLOGY_MESSAGE)
        except Exception:
            logger.exception(f"❌ お詫びメッセージの送信にも失敗: {user_id}")
        return ActionOutcome(kind=kind, status=ActionStatus.FAILED, error=str(error))
