"""Prometheus metrics for the structured classifier.

Metrics live in the default prometheus_client registry; exposing them
(push gateway, start_http_server, ...) is left to the embedding process.
"""

from prometheus_client import Counter, Histogram

# === Classification Metrics ===

classification_requests_total = Counter(
    "classification_requests_total",
    "Total classification calls by outcome",
    ["outcome"],
)
"""
Classification calls by outcome.

Labels:
- outcome: success, invalid_input, transport_error, malformed_response
"""

classified_labels_total = Counter(
    "classified_labels_total",
    "Successful classifications by returned label",
    ["label"],
)
"""
Label distribution of successful classifications.

A sudden shift usually means a prompt, model or label-set change.
"""

# === Validation Metrics ===

validation_failures_total = Counter(
    "validation_failures_total",
    "Total response validation failures by stage and error type",
    ["stage", "error_type"],
)
"""
Validation failures by stage and error type.

Labels:
- stage: stage1 (content extraction), stage2 (decoding), stage3 (label check)
- error_type: missing_content, json_decode_error, result_validation_error, etc.
"""

# === LLM Performance Metrics ===

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "Chat completion latency in seconds",
    ["model", "success"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)
"""
Round-trip latency of the single chat-completions call.

Labels:
- model: Model identifier (e.g., gemma-3-270m-it)
- success: true (2xx), false (timeout, network or HTTP error)
"""
