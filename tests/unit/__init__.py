"""
Unit tests for the structured classifier.

Test individual components in isolation:
- Schema builder (enum, strictness, idempotence)
- Prompt builder (input rules, messages, response_format)
- Validation stages (content extraction, decoding, label check)
- LM Studio client (error mapping over httpx.MockTransport)
- Classifier facade and command line
"""
