"""
API Module

FastAPI application and route handlers.

Package Structure:
==================
    api/
    ├── main.py           ← Application entry point
    ├── routes.py         ← Route registration
    ├── dependencies/     ← FastAPI dependencies
    ├── handlers/         ← Route handlers
    └── middleware/       ← Error handlers, request logging

Usage:
======
    # Run the API
    uvicorn esoteric_planner.api.main:app --reload

    # Import the app
    from esoteric_planner.api.main import app, create_application
"""
