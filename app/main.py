# app/main.py
import logging

from fastapi import FastAPI

from .catalog import catalog_router
from .config import Config


logging.basicConfig(
    level=Config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)

app = FastAPI(
    title="Books Catalog",
    description=(
        "Searchable book catalogue. Records are loaded once from a remote "
        "JSON source, with a bundled dataset as fallback, and served from "
        "an in-memory cache."
    ),
    version="1.0.0",
)

app.include_router(catalog_router)


# 🔹 Base route for a quick smoke check
@app.get("/")
def root():
    return {"status": "ok", "message": "Books catalog live", "api": "/api/books"}
