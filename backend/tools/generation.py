import logging
from typing import List, Optional

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

logger = logging.getLogger(__name__)


class GenerationService:
    """
    LLM 生成のラッパー

    1ターンのチャット形式で呼び出し、応答テキスト (なければ None) を返す。
    例外はそのまま呼び出し元 (ターミナルアクション) に投げる。
    """

    def __init__(self, llm):
        self.llm = llm

    async def generate(self, prompt: str, system_prompt: Optional[str] = None) -> Optional[str]:
        messages: List[BaseMessage] = []
        if system_prompt:
            messages.append(SystemMessage(content=system_prompt))
        messages.append(HumanMessage(content=prompt))

        logger.info(f"🧠 生成リクエスト: {prompt[:80]}...")
        result = await self.llm.ainvoke(messages)

        content = getattr(result, "content", None)
        if not content:
            logger.warning("⚠️ 生成結果が空です")
            return None
        text = str(content).strip()
        logger.info(f"🧠 生成完了: {len(text)}文字")
        return text or None
