"""
store_service package

This package contains the backend of the NestMart store.
It includes:

- FastAPI application factory (`main.py`)
- SQLAlchemy models and database integration (`models.py`, `db.py`)
- Password hashing, JWT tokens and the role gate (`security.py`)
- The request pipeline for protected routes (`dependencies.py`)
- Pydantic schemas (`schemas.py`)
"""
