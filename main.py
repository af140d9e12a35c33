from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from db import init_db
from settings import CORS_ALLOW_ORIGINS
from matching.routes import router as matching_router
from matching.version_routes import router as version_router

logging.basicConfig(level=logging.INFO)
logging.info("App starting")

app = FastAPI(title="Trainer Matching API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

init_db()

app.include_router(matching_router)
app.include_router(version_router)


@app.get("/", tags=["meta"])
def root():
    return {"status": "ok", "service": "trainer-matching"}
