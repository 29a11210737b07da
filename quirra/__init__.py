"""Quirra - conversational assistant with optional PDF context.

Combines FastAPI for HTTP endpoints, httpx for the Gemini API,
NiceGUI for the chat interface, and Pydantic for data validation.

Components:
    - conversation: Message log, document context, context assembly, turn lifecycle
    - agent: Gemini completion client and configuration
    - parsing: PDF text extraction
    - api: HTTP endpoints
    - ui: Web interface for chat interactions
    - models: Message, provider, and API schemas
"""

__version__ = "0.1.0"
