from __future__ import annotations

from fastapi import FastAPI

from .endpoints.payments import router as payments_router

app = FastAPI(title="Adyen Gateway API", version="0.1.0")

app.include_router(payments_router)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
