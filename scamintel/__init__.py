"""
Scam Intelligence Engine
=========================
Turns scammer messages into structured intelligence:

- core/       — extraction, conflict resolution, classification,
                risk scoring and cross-turn merging
- schemas.py  — pydantic record models and classification enums
- config.py   — environment-driven settings
- session_store.py — reference get/put store for session records
"""

__version__ = "1.0.0"
