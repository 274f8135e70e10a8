"""
Tasker API package.

The ASGI application lives in ``api.app`` (``uvicorn api.app:app``).
"""
