"""
HTTP API package.

The versioned routers live under ``app.api.v1``; include them with:

    from app.api.v1 import api_router as api_v1_router
    app.include_router(api_v1_router, prefix="/api/v1")
"""
