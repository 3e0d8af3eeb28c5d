"""
Structured logging utility for the Mod Collection Ranker.
Provides structured logs with trace IDs so one collection run can be followed
across concurrent page workers.
"""
import uuid
import logging
import structlog
from contextvars import ContextVar
from typing import Any, Dict, List, Optional

from modrank.config import config

# Context variable for trace ID
trace_id_var: ContextVar[str] = ContextVar("trace_id", default="")


def get_trace_id() -> str:
    """Get current trace ID or generate new one."""
    trace_id = trace_id_var.get()
    if not trace_id:
        trace_id = str(uuid.uuid4())[:8]
        trace_id_var.set(trace_id)
    return trace_id


def set_trace_id(trace_id: Optional[str] = None) -> str:
    """Set a new trace ID for the current context."""
    new_trace_id = trace_id or str(uuid.uuid4())[:8]
    trace_id_var.set(new_trace_id)
    return new_trace_id


def add_trace_id(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Processor to add trace ID to all log entries."""
    event_dict["trace_id"] = get_trace_id()
    return event_dict


def configure_logging():
    """Configure structlog with appropriate processors."""
    processors = [
        structlog.contextvars.merge_contextvars,
        add_trace_id,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if config.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.LOG_LEVEL.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance with the given name."""
    return structlog.get_logger(name)


class LayerLogger:
    """
    Specialized logger for the pipeline layers.
    Ensures consistent logging format across resolver, workers,
    aggregator, scorer and ranker.
    """

    def __init__(self, layer_name: str):
        self.layer_name = layer_name
        self.logger = get_logger(layer_name)

    def log_decision(
        self,
        decision: str,
        reason: str,
        user: Optional[str] = None,
        **extra
    ):
        """Log a decision made by this layer."""
        self.logger.info(
            "decision_made",
            layer=self.layer_name,
            decision=decision,
            reason=reason,
            user=user,
            **extra
        )

    def log_action(
        self,
        action: str,
        status: str = "started",
        **extra
    ):
        """Log an action being performed."""
        self.logger.info(
            f"action_{status}",
            layer=self.layer_name,
            action=action,
            **extra
        )

    def log_error(
        self,
        error: str,
        error_type: str = "unknown",
        **extra
    ):
        """Log an error with full context."""
        self.logger.error(
            "error_occurred",
            layer=self.layer_name,
            error=error,
            error_type=error_type,
            **extra
        )

    def log_recovered(
        self,
        error: str,
        error_type: str,
        fallback: str,
        **extra
    ):
        """Log an error that was recovered locally with a fallback value."""
        self.logger.warning(
            "error_recovered",
            layer=self.layer_name,
            error=error,
            error_type=error_type,
            fallback=fallback,
            **extra
        )

    def log_page_result(
        self,
        page: int,
        mods_found: int,
        result: str,
        **extra
    ):
        """Log the outcome of one page worker."""
        self.logger.info(
            "page_processed",
            layer=self.layer_name,
            page=page,
            mods_found=mods_found,
            result=result,
            **extra
        )

    def log_stat_ranges(
        self,
        ranges: List[Dict[str, Any]],
        qualified_mods: int,
        **extra
    ):
        """Log the frozen stat range table."""
        self.logger.info(
            "stat_ranges_frozen",
            layer=self.layer_name,
            ranges=ranges,
            qualified_mods=qualified_mods,
            **extra
        )

    def log_ranked_mod(
        self,
        position: int,
        **fields
    ):
        """Log one entry of the final ranking."""
        self.logger.info(
            "mod_ranked",
            layer=self.layer_name,
            position=position,
            **fields
        )


# Initialize logging on module import
configure_logging()
