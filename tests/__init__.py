"""Test package for Quirra.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP API workflows through the ASGI app

The completion provider is always replaced by a fake client or an
httpx.MockTransport; no test talks to the real Gemini API.
Leverages pytest with pytest-check for soft assertions.
"""
