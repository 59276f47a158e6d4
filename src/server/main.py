"""FastAPI application."""

from fastapi import FastAPI

from server.routers.validate import router as validate_router

app = FastAPI(title="docschema", description="Validate document section structure against a schema.")
app.include_router(validate_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}
