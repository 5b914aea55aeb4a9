"""
Billing Portal Package

Internal dashboard backend for following up on blocked and disabled customers:
- Administrator login against the identity store
- Customer, billing and inventory reads from the portal REST API
- Client-side filtering of the follow-up list
- Comments, payment promises and device-collection tasks
"""

__version__ = "1.0.0"
__author__ = "Billing Portal Team"
