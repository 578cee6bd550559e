"""FastAPI application entrypoint."""

from dotenv import load_dotenv
from fastapi import FastAPI

from transcript_triage.adapters.inbound.http.routes import router

# Load environment variables from .env file
load_dotenv()

app = FastAPI(
    title="Transcript Triage",
    description="Transcript summaries and retention lead follow-up using Clean Architecture",
    version="0.1.0",
)

app.include_router(router)
