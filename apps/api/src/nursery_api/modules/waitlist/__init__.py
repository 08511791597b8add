"""
Waitlist Module

API Endpoints:
- POST /waitlist/join - Join the queue; answers with position and estimated wait
- GET /waitlist/join?phone=... - Live position, recomputed from active entries
"""

from .router import router

__all__ = ["router"]
