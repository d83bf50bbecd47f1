from .routes import router, static_router

__all__ = ["router", "static_router"]
