"""Prometheus metrics for the structured classifier."""

from structured_classifier.monitoring.metrics import (
    classification_requests_total,
    classified_labels_total,
    llm_latency_seconds,
    validation_failures_total,
)

__all__ = [
    "classification_requests_total",
    "classified_labels_total",
    "validation_failures_total",
    "llm_latency_seconds",
]
