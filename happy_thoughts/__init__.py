"""
Happy Thoughts API — Application Package Initializer
=====================================================

What: Marks the `happy_thoughts` directory as a Python package.
Why:  Enables module imports like `from happy_thoughts.config import settings`.
Who:  Used by uvicorn (`happy_thoughts.main:app`), the seed CLI, and pytest.

Architecture Note:
    The service follows the same thin layering on every request:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     ThoughtService (Business Logic) │  ← not-found, envelopes, error wrapping
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data / Rules)   │  ← message rules + Pydantic contracts
    ├─────────────────────────────────────┤
    │     ThoughtStore (Persistence)      │  ← async MongoDB collection façade
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
