# This project was developed with assistance from AI tools.
"""
Domain enums shared by the SQLAlchemy models (db package)
and the Pydantic schemas (api package).
"""

import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    BUYER = "buyer"
