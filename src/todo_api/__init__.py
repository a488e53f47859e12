"""
Todo API package.

An in-memory todo list served over HTTP with FastAPI. Build an application
with todo_api.main.create_app(), or run the development server with
`python -m todo_api.main`.
"""

__version__ = "0.1.0"
