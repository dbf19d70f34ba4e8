# eyecare/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eyecare.config import get_settings
from eyecare.api.routes import router as api_router


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
)

app = FastAPI(title="Eye Care Diagnostic API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)


@app.get("/")
def root():
    return {"message": "Eye Care Diagnostic API is running"}


app.include_router(api_router, prefix="/api")
