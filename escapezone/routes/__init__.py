"""
FastAPI routers for all API endpoints.

Each module defines a router for one feature (recommendations, advice,
chat, auth notification, health).
"""
