"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from househack.api.routes import ai, calculator, properties, workspaces
from househack.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="HouseHack",
    description="FHA house hacking tracker and self-sufficiency calculator",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(calculator.router)
app.include_router(workspaces.router)
app.include_router(properties.router)
app.include_router(ai.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
