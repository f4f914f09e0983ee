"""Top-level application package for the receipt points API.

This package contains everything required to run the FastAPI backend
that accepts purchase receipts, keeps them in an in-memory store and
scores them with a fixed set of reward point rules. It includes the
Pydantic schemas, the receipt parser, the points calculator, the
thread-safe receipt store and the API routers.

To run the API locally you can execute:

```bash
uvicorn receipt_points.api.main:app --reload --port 8080
```

or simply ``receipt-points`` once the project is installed. You can
override configuration values using environment variables or a ``.env``
file at the project root.
"""

__all__: list[str] = []
