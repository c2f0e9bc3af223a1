import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from toollink.api import catalog, dashboard, inventory
from toollink.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="ToolLink Admin API",
    description="Admin backend-for-frontend for ToolLink inventory and warehouse operations",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(catalog.router, prefix=settings.API_PREFIX)
app.include_router(inventory.router, prefix=settings.API_PREFIX)
app.include_router(dashboard.router, prefix=settings.API_PREFIX)


@app.get("/health")
async def health_check():
    return {"status": "ok", "version": "0.1.0", "upstream": settings.INVENTORY_API_URL}
