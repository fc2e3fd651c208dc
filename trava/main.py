"""FastAPI application."""

from fastapi import FastAPI

from trava.api.routes.health import router as health_router
from trava.api.routes.itinerary import router as itinerary_router
from trava.api.routes.metrics import router as metrics_router

app = FastAPI(title="Trava Itinerary API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(itinerary_router, tags=["itinerary"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Trava Itinerary API", "version": "0.1.0"}
