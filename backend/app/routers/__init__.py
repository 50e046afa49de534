from . import health, responses

__all__ = [
    "health",
    "responses",
]
