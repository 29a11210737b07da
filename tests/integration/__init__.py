"""Integration tests for the HTTP API.

Drives the real FastAPI app through httpx.ASGITransport with the session
registry overridden to use a fake completion client.
"""
