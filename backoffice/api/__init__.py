"""HTTP layer: FastAPI app factory, shared dependencies and one router package per resource."""
