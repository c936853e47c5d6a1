from langchain_openai import ChatOpenAI
import logging
from config import settings
from agent.callbacks import GenerationTimingCallbackHandler

logger = logging.getLogger(__name__)

def get_llm():
    # 明示的なタイムアウトは設定しない (ホスト環境の制限に任せる)
    logger.info(f"🤖 LLM 初期化: model={settings.OPENAI_MODEL}")
    return ChatOpenAI(
        model=settings.OPENAI_MODEL,
        temperature=settings.OPENAI_TEMPERATURE,
        openai_api_key=settings.OPENAI_API_KEY,
        callbacks=[GenerationTimingCallbackHandler()],
    )
