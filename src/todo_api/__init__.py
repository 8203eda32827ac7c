"""
Todo API package.

A FastAPI service exposing CRUD endpoints for todo items stored in MongoDB
(or in memory). Build an application with todo_api.main.create_app, or use
the module-level todo_api.main.app.
"""

__version__ = "0.1.0"
