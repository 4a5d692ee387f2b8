"""Core (UI-agnostic) dashboard logic.

This package contains:
- configuration (environment variables)
- dataset loading (remote JSON -> pandas)
- filter normalization
- view compute functions (JSON-serializable payloads)
"""
