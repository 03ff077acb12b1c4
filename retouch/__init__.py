"""
Retouch - Iterative AI image editing engine

An account-gated service for refining one working image through repeated
AI-assisted edits. The engine provides:
- Accounts, credentials and single-token sessions
- A linear edit history with undo/redo
- An auxiliary reference image for style guidance
- Orchestration of the external image transform
"""

__version__ = "0.1.0"
