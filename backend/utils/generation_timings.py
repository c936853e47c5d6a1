"""
LLM 呼び出し時間の集計

GenerationTimingCallbackHandler が1回ごとの所要時間をここに積み、
/stats/generation がモデル別の件数・平均・最大・失敗数にまとめて返す。
"""

import threading
from collections import defaultdict
from typing import Any, Dict, List, Optional

_lock = threading.Lock()
_durations: Dict[str, List[float]] = defaultdict(list)
_failures: Dict[str, int] = defaultdict(int)
_last_error: Dict[str, str] = {}
_enabled = True

# モデルごとに保持する直近の件数
MAX_SAMPLES_PER_MODEL = 500


def set_generation_timing_enabled(enabled: bool) -> None:
    global _enabled
    _enabled = enabled


def record_generation_timing(model: str, duration: float, success: bool = True, error: Optional[str] = None):
    if not _enabled:
        return
    with _lock:
        samples = _durations[model]
        samples.append(duration)
        if len(samples) > MAX_SAMPLES_PER_MODEL:
            del samples[0]
        if not success:
            _failures[model] += 1
            if error:
                _last_error[model] = error


def snapshot(reset: bool = False) -> Dict[str, Dict[str, Any]]:
    """モデル別の集計を返す。reset=True なら集計をクリアする"""
    with _lock:
        models = set(_durations) | set(_failures)
        summary = {}
        for model in sorted(models):
            times = _durations.get(model, [])
            summary[model] = {
                "count": len(times),
                "mean_s": sum(times) / len(times) if times else 0.0,
                "max_s": max(times) if times else 0.0,
                "failures": _failures.get(model, 0),
                "last_error": _last_error.get(model),
            }
        if reset:
            _durations.clear()
            _failures.clear()
            _last_error.clear()
        return summary
