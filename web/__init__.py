"""
Web application package for the chess engine.

Provides a FastAPI REST API with in-memory game sessions and a stateless
best-move endpoint. Run with: uvicorn web.app:app
"""
