# FastAPI entry point
# framework_quiz/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import os
import sys

# Add project root to sys.path to allow for absolute imports
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from framework_quiz.endpoints import questions as questions_router
from framework_quiz.services.question_generator import load_prompt_variations
from framework_quiz.utils.config import settings
from framework_quiz.utils.logger import logger

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    logger.info("Framework Quiz API starting up...")
    logger.info(f"LLM provider: {settings.llm_provider}, model: {settings.active_model_name()}")

    # Fail fast on a missing or malformed variations file; the LLM client is built on first use
    load_prompt_variations()

    logger.info("Startup complete.")
    yield
    logger.info("Framework Quiz API shutting down...")

# --- FastAPI App Initialization ---
app = FastAPI(
    title="Framework Quiz API",
    description="Generates personality-test style questions that help pick a web framework.",
    version="1.0.0",
    lifespan=lifespan
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this to your frontend's domain
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Routers ---
app.include_router(questions_router.router, prefix="/api/v1/questions", tags=["Questions"])

# --- Root Endpoints ---
@app.get("/")
async def root():
    return {"message": "Welcome to the Framework Quiz API"}

@app.get("/health")
async def health_check():
    return {"status": "healthy", "provider": settings.llm_provider, "model": settings.active_model_name()}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("framework_quiz.main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
