"""NiceGUI interface - thin rendering layer for chat interactions.

Responsibilities:
    - Chat transcript display with a typing indicator
    - PDF upload for document context
    - Starting a fresh conversation

Contains no conversation logic. Delegates every operation to the session's
ConversationController.
"""
