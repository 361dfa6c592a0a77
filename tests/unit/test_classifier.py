"""
Unit tests for StructuredClassifier (end-to-end over a mocked server).
"""

import json
from unittest.mock import Mock

import httpx
import pytest

from structured_classifier import classifier as classifier_module
from structured_classifier.classifier import StructuredClassifier, classify
from structured_classifier.llm.exceptions import (
    InvalidInput,
    MalformedResponse,
    TransportError,
    TransportTimeout,
)
from structured_classifier.models.classification import (
    ClassificationRequest,
    ClassificationResult,
    ClassifierConfig,
)


REVIEW_RESPONSE = {
    "choices": [
        {
            "message": {
                "content": "{\"label\":\"confusion\",\"reason\":\"The review expresses ambiguity about tone.\"}"
            }
        }
    ]
}


class TestClassify:
    """End-to-end classification scenarios."""

    def test_review_classified(self, mock_lmstudio, sample_text, sample_labels):
        client, received = mock_lmstudio(json_body=REVIEW_RESPONSE)
        classifier = StructuredClassifier(client=client)

        result = classifier.classify(sample_text, sample_labels)

        assert result == ClassificationResult(
            label="confusion", reason="The review expresses ambiguity about tone."
        )
        assert len(received) == 1
        sent = json.loads(received[0].content)
        assert sent["response_format"]["json_schema"]["schema"]["properties"]["label"]["enum"] == sample_labels
        assert sample_text in sent["messages"][1]["content"]

    def test_missing_content_is_malformed(self, mock_lmstudio, sample_text, sample_labels):
        client, received = mock_lmstudio(json_body={"choices": [{"message": {}}]})
        classifier = StructuredClassifier(client=client)

        with pytest.raises(MalformedResponse):
            classifier.classify(sample_text, sample_labels)

        assert len(received) == 1

    def test_invalid_input_sends_nothing(self, mock_lmstudio, sample_labels):
        client, received = mock_lmstudio(json_body=REVIEW_RESPONSE)
        classifier = StructuredClassifier(client=client)

        with pytest.raises(InvalidInput):
            classifier.classify("   ", sample_labels)
        with pytest.raises(InvalidInput):
            classifier.classify("text", [])

        assert received == []

    def test_server_error_not_retried(self, mock_lmstudio, sample_text, sample_labels):
        client, received = mock_lmstudio(status_code=503, text="busy")
        classifier = StructuredClassifier(client=client)

        with pytest.raises(TransportError):
            classifier.classify(sample_text, sample_labels)

        assert len(received) == 1

    def test_timeout_not_retried(self, mock_lmstudio, sample_text, sample_labels):
        client, received = mock_lmstudio(error=httpx.ConnectTimeout)
        classifier = StructuredClassifier(client=client)

        with pytest.raises(TransportTimeout):
            classifier.classify(sample_text, sample_labels)

        assert len(received) == 1

    def test_strict_labels_from_config(self, mock_lmstudio, make_completion, sample_text):
        client, _ = mock_lmstudio(json_body=make_completion({"label": "spam", "reason": "x"}))
        classifier = StructuredClassifier(
            config=ClassifierConfig(strict_labels=True), client=client
        )

        with pytest.raises(MalformedResponse):
            classifier.classify(sample_text, ["feature", "bug"])

    def test_out_of_set_label_passes_by_default(self, mock_lmstudio, make_completion, sample_text):
        client, _ = mock_lmstudio(json_body=make_completion({"label": "spam", "reason": "x"}))
        classifier = StructuredClassifier(client=client)

        assert classifier.classify(sample_text, ["feature", "bug"]).label == "spam"

    def test_per_call_config(self, mock_lmstudio, sample_text, sample_labels):
        client, received = mock_lmstudio(json_body=REVIEW_RESPONSE)
        classifier = StructuredClassifier(client=client)

        classifier.classify(
            sample_text,
            sample_labels,
            ClassifierConfig(model="qwen2.5-7b-instruct", temperature=0.7),
        )

        sent = json.loads(received[0].content)
        assert sent["model"] == "qwen2.5-7b-instruct"
        assert sent["temperature"] == 0.7

    def test_timeout_passed_to_client(self, sample_text, sample_labels):
        client = Mock()
        client.complete = Mock(return_value=REVIEW_RESPONSE)
        classifier = StructuredClassifier(config=ClassifierConfig(timeout=7.5), client=client)

        classifier.classify(sample_text, sample_labels)

        client.complete.assert_called_once()
        assert client.complete.call_args.kwargs["timeout"] == 7.5


class TestClassifyRequest:

    def test_request_parameters_applied(self, mock_lmstudio, sample_text, sample_labels):
        client, received = mock_lmstudio(json_body=REVIEW_RESPONSE)
        classifier = StructuredClassifier(client=client)
        request = ClassificationRequest(
            text=sample_text,
            labels=sample_labels,
            temperature=0.0,
            model="gemma-3-1b-it",
            timeout=10,
        )

        result = classifier.classify_request(request)

        assert result.label == "confusion"
        sent = json.loads(received[0].content)
        assert sent["model"] == "gemma-3-1b-it"
        assert sent["temperature"] == 0.0


class TestLifecycle:

    def test_injected_client_not_closed(self):
        client = Mock()
        with StructuredClassifier(client=client):
            pass

        client.close.assert_not_called()

    def test_owned_client_closed(self, monkeypatch):
        created = Mock()
        monkeypatch.setattr(classifier_module, "LMStudioClient", Mock(return_value=created))

        with StructuredClassifier(config=ClassifierConfig(base_url="http://box:1234", timeout=12)):
            pass

        classifier_module.LMStudioClient.assert_called_once_with(
            base_url="http://box:1234", timeout=12, endpoint="/v1/chat/completions"
        )
        created.close.assert_called_once()

    def test_module_level_classify(self, monkeypatch, mock_lmstudio, sample_text, sample_labels):
        client, received = mock_lmstudio(json_body=REVIEW_RESPONSE)
        monkeypatch.setattr(classifier_module, "LMStudioClient", lambda **kwargs: client)

        result = classify(sample_text, sample_labels)

        assert result.label == "confusion"
        assert len(received) == 1
