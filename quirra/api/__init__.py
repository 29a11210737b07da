"""FastAPI endpoints for Quirra.

Endpoints:
    - GET /health: Service health status
    - POST /chat: Run one chat turn
    - GET /chat/sessions/{id}: Session transcript and pending state
    - DELETE /chat/sessions/{id}/document: Drop the document context
    - POST /upload/pdf: Attach a PDF as document context
"""

from quirra.api.app import app, create_app

__all__ = ["app", "create_app"]
