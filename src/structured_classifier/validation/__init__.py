"""
Staged response validation.

- pipeline.py: ResponseValidator orchestrating the stages, parse_response()
- stage1_content.py: choices[0].message.content extraction (hard fail)
- stage2_decode.py: JSON decode into ClassificationResult (hard fail)
- stage3_label_check.py: label membership via JSON Schema (opt-in)
"""

from .pipeline import ResponseValidator, parse_response

__all__ = [
    "ResponseValidator",
    "parse_response",
]
