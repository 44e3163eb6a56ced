"""Lead time / delivery / discovery view module."""

from flow_app.features.metric_view.context import (
    DELIVERY_VIEW,
    DISCOVERY_VIEW,
    LEAD_TIME_VIEW,
    MetricView,
    MetricViewContext,
    build_metric_context,
)

__all__ = [
    "DELIVERY_VIEW",
    "DISCOVERY_VIEW",
    "LEAD_TIME_VIEW",
    "MetricView",
    "MetricViewContext",
    "build_metric_context",
]
