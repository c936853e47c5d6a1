from fastapi import APIRouter
from utils.generation_timings import snapshot

router = APIRouter()


@router.get("/stats/generation")
async def generation_stats(reset: bool = False):
    """LLM 呼び出し時間のモデル別集計"""
    return {"models": snapshot(reset=reset)}
