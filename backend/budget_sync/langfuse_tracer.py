"""
Langfuse tracing integration for budget_sync.

Each sync run becomes one trace with a span per step (grid fetch, planning,
batch write) so failed runs can be inspected after the fact.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from langfuse import Langfuse
from langfuse.types import TraceContext

logger = logging.getLogger(__name__)


@dataclass
class TraceHandle:
    """Lightweight wrapper for Langfuse trace context."""

    client: Any
    trace_context: TraceContext
    root_span: Optional[object] = None

    def end(self):
        """End the root span if it is still open."""
        if self.root_span:
            try:
                self.root_span.end()
            except Exception as e:
                logger.warning("Failed to end root span: %s", e)
            finally:
                self.root_span = None


class LangfuseTracer:
    """Wrapper for Langfuse client with budget_sync-specific configuration."""

    def __init__(self):
        """Initialize the Langfuse tracer with environment variables."""
        self.enabled = bool(os.getenv("LANGFUSE_PUBLIC_KEY"))
        self.client = None

        if self.enabled:
            try:
                debug_mode = os.getenv("LANGFUSE_DEBUG", "false").lower() == "true"
                self.client = Langfuse(
                    public_key=os.getenv("LANGFUSE_PUBLIC_KEY"),
                    secret_key=os.getenv("LANGFUSE_SECRET_KEY"),
                    host=os.getenv("LANGFUSE_HOST", "http://localhost:3001"),
                    debug=debug_mode,
                )
                logger.info(
                    "Langfuse client initialized with host: %s", os.getenv("LANGFUSE_HOST")
                )
            except Exception:
                logger.warning("Failed to initialize Langfuse", exc_info=True)
                self.enabled = False

    def is_enabled(self) -> bool:
        """Check if Langfuse tracing is enabled and available."""
        return self.enabled

    def create_trace(
        self,
        name: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[TraceHandle]:
        """
        Create a new trace for monitoring a sync run.

        Args:
            name: Name of the operation (e.g., "sync_month")
            metadata: Optional metadata dictionary

        Returns:
            TraceHandle or None if tracing is disabled
        """
        if not self.enabled or not self.client:
            return None

        try:
            trace_id = self.client.create_trace_id()
            trace_context = TraceContext(trace_id=trace_id, user_id="system")

            root_span = self.client.start_span(
                trace_context=trace_context,
                name=name,
                metadata=metadata or {},
            )
            logger.debug("Created trace: %s (ID: %s)", name, trace_id)
            return TraceHandle(
                client=self.client, trace_context=trace_context, root_span=root_span
            )
        except Exception:
            logger.warning("Failed to create trace", exc_info=True)
            return None

    def add_span(
        self,
        trace: Optional[TraceHandle],
        name: str,
        input_text: Optional[str] = None,
        output_text: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log one step of the run to the trace.

        Args:
            trace: Trace object from create_trace()
            name: Name of the span (e.g., "fetch_grid")
            input_text: Optional input data
            output_text: Optional output data
            metadata: Optional additional metadata
        """
        if not trace or not self.client:
            return

        try:
            span = self.client.start_span(
                trace_context=trace.trace_context,
                name=name,
                input=input_text or "",
                metadata=metadata or {},
            )
            if output_text:
                span.update(output=output_text)
            span.end()
        except Exception:
            logger.warning("Failed to add span %s to trace", name, exc_info=True)

    def end_trace(self, trace: Optional[TraceHandle]) -> None:
        """Finalize a trace by flushing to ensure all events are sent."""
        if not trace:
            return
        try:
            trace.end()
            if self.client:
                self.client.flush()
        except Exception:
            logger.warning("Failed to end trace", exc_info=True)


# Global instance
_tracer = None


def get_tracer() -> LangfuseTracer:
    """Get or create the global Langfuse tracer instance."""
    global _tracer
    if _tracer is None:
        _tracer = LangfuseTracer()
    return _tracer
