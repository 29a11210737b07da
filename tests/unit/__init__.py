"""Unit tests for individual components in isolation.

Coverage:
    - conversation/: Log, document store, assembler, controller, registry
    - agent/: Configuration and the Gemini client wire mapping
    - parsing/: PDF validation and text extraction
"""
