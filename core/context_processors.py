# core/context_processors.py
import time

from preferences.session import get_session_preferences
from preferences.store import WEB_NAMESPACE


def benchmark(request):
    """Expose request timing to the footer when the user enabled the benchmark."""
    web = get_session_preferences(request).get(WEB_NAMESPACE, {})
    if not web.get("show_benchmark"):
        return {"show_benchmark": False}

    started = getattr(request, "benchmark_started_at", None)
    if started is None:
        return {"show_benchmark": True, "benchmark_ms": None}
    return {
        "show_benchmark": True,
        "benchmark_ms": round((time.perf_counter() - started) * 1000, 1),
    }
