import time
import logging
from langchain_core.callbacks import BaseCallbackHandler
from utils.generation_timings import record_generation_timing

logger = logging.getLogger(__name__)


class GenerationTimingCallbackHandler(BaseCallbackHandler):
    """Record start/end timestamps for each chat model call."""

    def __init__(self):
        super().__init__()
        self._starts = {}

    def _start(self, serialized, run_id):
        model = None
        if isinstance(serialized, dict):
            model = (serialized.get("kwargs") or {}).get("model_name") or serialized.get("name")
        self._starts[run_id] = (time.time(), model)
        logger.debug(f"[GenTiming] start model={model} run_id={run_id}")

    def on_chat_model_start(self, serialized, messages, **kwargs):
        self._start(serialized, kwargs.get("run_id"))

    def on_llm_start(self, serialized, prompts, **kwargs):
        self._start(serialized, kwargs.get("run_id"))

    def on_llm_end(self, response, **kwargs):
        run_id = kwargs.get("run_id")
        start, model = self._starts.pop(run_id, (None, None))
        if start is None:
            return
        duration = time.time() - start
        record_generation_timing(model=model or "unknown_model", duration=duration)
        logger.debug(f"[GenTiming] end model={model} run_id={run_id} duration={duration:.3f}s")

    def on_llm_error(self, error, **kwargs):
        run_id = kwargs.get("run_id")
        start, model = self._starts.pop(run_id, (None, None))
        if start is None:
            return
        duration = time.time() - start
        record_generation_timing(model=model or "unknown_model", duration=duration, success=False, error=str(error))
        logger.debug(f"[GenTiming] error model={model} run_id={run_id} duration={duration:.3f}s")
