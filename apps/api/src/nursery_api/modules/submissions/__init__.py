"""
Submissions Module

Intake pipeline for the nursery's public forms:
1. Validation with every failing rule reported at once
2. Per-form duplicate rules checked against stored records
3. Reference assignment and persistence (append-only)
4. PDF record rendered off the event loop
5. Staff and submitter emails delivered by a background dispatcher

API Endpoints:
- POST /forms/{application,medical,consent,funding,change,aboutme}
- POST /jobs/apply
- POST /contact
- POST /availability/check
- POST /bookings
"""

from .notifications import dispatcher
from .router import router

__all__ = ["router", "dispatcher"]
