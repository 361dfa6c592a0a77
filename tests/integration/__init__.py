"""
Integration tests against a running LM Studio server.

Skipped unless a server answers on http://localhost:1234/v1/models.
"""
