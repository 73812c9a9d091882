"""
lazyiter - Pydantic Models

Settings and measurement report models used by the pipeline utilities.
"""

import os
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class PipelineSettings(BaseModel):
    """Logging and measurement settings"""
    log_level: str = Field(
        "INFO",
        description="Root log level applied by configure_logging"
    )
    log_format: str = Field(
        "%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="logging format string",
        min_length=1
    )
    track_memory: bool = Field(
        True,
        description="Whether measure_performance traces peak allocations"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Normalize and check the level name"""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "PipelineSettings":
        """Build settings from LAZYITER_* environment variables."""
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        if "LAZYITER_LOG_LEVEL" in env:
            values["log_level"] = env["LAZYITER_LOG_LEVEL"]
        if "LAZYITER_LOG_FORMAT" in env:
            values["log_format"] = env["LAZYITER_LOG_FORMAT"]
        if "LAZYITER_TRACK_MEMORY" in env:
            values["track_memory"] = env["LAZYITER_TRACK_MEMORY"]
        return cls(**values)


class PerformanceReport(BaseModel):
    """Timing and memory figures for one measured call"""
    operation: str = Field(..., description="Name of the measured operation")
    execution_time_ms: float = Field(..., description="Wall time in milliseconds", ge=0)
    memory_usage_mb: Optional[float] = Field(
        None,
        description="Peak traced allocation in megabytes",
        ge=0
    )
    rss_mb: float = Field(..., description="Process resident set size after the call", ge=0)
    success: bool = Field(..., description="Whether the call returned normally")
    result_size: Optional[int] = Field(None, description="len() of the result when it has one", ge=0)
    error: Optional[str] = Field(None, description="Error message for failed calls")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the call finished")
    result: Any = Field(None, description="Value returned by the call", exclude=True)


class PerformanceSummary(BaseModel):
    """Aggregate over every recorded PerformanceReport"""
    total_operations: int = Field(0, ge=0)
    failed_operations: int = Field(0, ge=0)
    total_time_ms: float = Field(0.0, ge=0)
    avg_time_ms: float = Field(0.0, ge=0)
    peak_memory_mb: float = Field(0.0, ge=0)


class PipelineDescription(BaseModel):
    """Static view of a pipeline's source and queued operations"""
    source_length: int = Field(..., ge=0)
    operations: List[str] = Field(default_factory=list)
    operation_count: int = Field(0, ge=0)
