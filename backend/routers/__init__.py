from .webhook import router as webhook_router
from .stats import router as stats_router

__all__ = ["webhook_router", "stats_router"]
