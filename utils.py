"""
Utility functions for lazyiter

Logging setup, performance measurement and introspection helpers for
Pipeline objects.
"""

import time
import gc
import logging
import tracemalloc
from typing import Any, Callable, List, Optional

import psutil

from lazyiter import Pipeline, Map, Filter, TakeWhile
from models import PerformanceReport, PerformanceSummary, PipelineDescription, PipelineSettings

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Reports recorded by measure_performance
_performance_reports: List[PerformanceReport] = []


def configure_logging(settings: Optional[PipelineSettings] = None) -> PipelineSettings:
    """Apply level and format from settings (or the environment) to the root logger."""
    settings = settings or PipelineSettings.from_env()
    logging.basicConfig(level=settings.log_level, format=settings.log_format, force=True)
    logger.debug(f"Logging configured at {settings.log_level}")
    return settings


def _rss_mb() -> float:
    return psutil.Process().memory_info().rss / 1024 / 1024


def measure_performance(operation_name: str, func: Callable, *args,
                        settings: Optional[PipelineSettings] = None, **kwargs) -> PerformanceReport:
    """Run func(*args, **kwargs) and record how long it took and how much it allocated"""
    settings = settings or PipelineSettings()

    # Leave a caller's own tracemalloc session running.
    owns_trace = settings.track_memory and not tracemalloc.is_tracing()
    if owns_trace:
        tracemalloc.start()
    if settings.track_memory:
        tracemalloc.reset_peak()
        gc.collect()

    start_time = time.perf_counter()

    try:
        result = func(*args, **kwargs)
    except Exception as e:
        execution_time_ms = (time.perf_counter() - start_time) * 1000
        report = PerformanceReport(
            operation=operation_name,
            execution_time_ms=execution_time_ms,
            memory_usage_mb=_peak_mb() if settings.track_memory else None,
            rss_mb=_rss_mb(),
            success=False,
            error=str(e),
        )
        _performance_reports.append(report)
        logger.error(f"{operation_name} failed after {execution_time_ms:.2f}ms: {e}")
        raise
    finally:
        if settings.track_memory:
            peak_mb = _peak_mb()
        if owns_trace:
            tracemalloc.stop()

    execution_time_ms = (time.perf_counter() - start_time) * 1000
    report = PerformanceReport(
        operation=operation_name,
        execution_time_ms=execution_time_ms,
        memory_usage_mb=peak_mb if settings.track_memory else None,
        rss_mb=_rss_mb(),
        success=True,
        result_size=len(result) if hasattr(result, "__len__") else None,
        result=result,
    )
    _performance_reports.append(report)
    logger.info(f"{operation_name} completed in {execution_time_ms:.2f}ms")
    return report


def _peak_mb() -> float:
    _, peak = tracemalloc.get_traced_memory()
    return peak / 1024 / 1024


def get_performance_summary() -> PerformanceSummary:
    """Get summary of all recorded measurements"""
    if not _performance_reports:
        return PerformanceSummary()

    total_time_ms = sum(r.execution_time_ms for r in _performance_reports)
    return PerformanceSummary(
        total_operations=len(_performance_reports),
        failed_operations=sum(1 for r in _performance_reports if not r.success),
        total_time_ms=total_time_ms,
        avg_time_ms=total_time_ms / len(_performance_reports),
        peak_memory_mb=max((r.memory_usage_mb or 0.0) for r in _performance_reports),
    )


def clear_performance_metrics():
    """Clear all recorded measurements"""
    _performance_reports.clear()


def validate_lazy_evaluation(candidate: Any) -> bool:
    """Check that candidate is a Pipeline whose queue holds only known operations"""
    if not isinstance(candidate, Pipeline):
        return False
    return all(isinstance(op, (Map, Filter, TakeWhile)) for op in candidate.operations)


def describe_pipeline(pipeline: Pipeline) -> PipelineDescription:
    kinds = [op.kind for op in pipeline.operations]
    return PipelineDescription(
        source_length=len(pipeline.source),
        operations=kinds,
        operation_count=len(kinds),
    )
