"""
Command-line entry point for the structured classifier.

Usage:
  # Classify the built-in sample review with the default labels
  python -m structured_classifier

  # Custom text and labels
  structured-classify --text "App crashes on login" -l feature -l bug -l confusion

  # JSON output, strict label checking
  structured-classify --text "..." -l positive -l negative --json --strict-labels

Exit codes:
  0: success
  1: transport failure or malformed response
  2: invalid input or argument error
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog
from pydantic import ValidationError

from structured_classifier.classifier import StructuredClassifier
from structured_classifier.config import Settings
from structured_classifier.llm.exceptions import ClassifierError, InvalidInput
from structured_classifier.llm.prompt_builder import PromptBuilder
from structured_classifier.logging_config import configure_logging
from structured_classifier.models.classification import ClassifierConfig


logger = structlog.get_logger(__name__)

SAMPLE_TEXT = (
    "things really get weird, though not particularly scary: "
    "the movie is all portent and no content."
)
SAMPLE_LABELS = ["feature", "bug", "confusion"]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="structured-classify",
        description="Classify text into one of a closed set of labels using a local LLM.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--text", "-t", default=SAMPLE_TEXT, help="Text to classify.")
    p.add_argument(
        "--label", "-l",
        dest="labels",
        action="append",
        metavar="LABEL",
        help="Candidate label (repeatable). Default: feature, bug, confusion.",
    )
    p.add_argument("--model", "-m", help="Model identifier.")
    p.add_argument("--temperature", type=float, help="Sampling temperature (0-2).")
    p.add_argument("--timeout", type=float, help="Request timeout in seconds.")
    p.add_argument("--base-url", help="Inference server URL.")
    p.add_argument(
        "--strict-labels",
        action="store_true",
        default=None,
        help="Reject a returned label outside the given labels.",
    )
    p.add_argument("--json", action="store_true", help="Print the result as JSON.")
    return p


def _format_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'config'}: {err['msg']}"
        for err in error.errors()
    )


def main(argv: Optional[Sequence[str]] = None, settings: Optional[Settings] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {
        "model": args.model,
        "temperature": args.temperature,
        "timeout": args.timeout,
        "base_url": args.base_url,
        "strict_labels": args.strict_labels,
    }
    try:
        settings = settings or Settings()
        base = settings.classifier_config()
        config = ClassifierConfig.model_validate(
            {**base.model_dump(), **{k: v for k, v in overrides.items() if v is not None}}
        )
    except ValidationError as e:
        print(f"error: invalid configuration: {_format_validation_error(e)}", file=sys.stderr)
        return 2

    configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)

    labels = args.labels or SAMPLE_LABELS

    prompt_builder = PromptBuilder(
        Path(settings.PROMPT_TEMPLATES_DIR) if settings.PROMPT_TEMPLATES_DIR else None
    )

    try:
        with StructuredClassifier(config=config, prompt_builder=prompt_builder) as classifier:
            result = classifier.classify(args.text, labels)
    except InvalidInput as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2
    except ClassifierError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.model_dump(), ensure_ascii=False, indent=2))
    else:
        print(f"\nINPUT: {args.text}\nLABEL: {result.label}\nREASON: {result.reason}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
