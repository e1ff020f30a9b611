"""
Member Registry Service
=======================

REST service for the members of a lifesaving organisation.

Features:
- Member and member type CRUD operations
- Assessments, educations, appearances and further education per member
- Paged listings with Link / X-Total-Count headers
- Alert headers for the web client's notifications
- PostgreSQL or in-memory entity stores

Port: 8080
"""

__version__ = "0.1.0"
