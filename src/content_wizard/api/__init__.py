"""HTTP surface of the content wizard (FastAPI routers, models, handlers)."""
