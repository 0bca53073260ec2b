"""FastAPI application for the Study Buddy chatbot."""
import base64
import binascii

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from study_buddy import __version__
from study_buddy.config import API_HOST, API_PORT, CORS_ORIGINS, ENV_FILE
from study_buddy.chat_page import render_chat_page
from study_buddy.gemini_client import GeminiClient, GeminiError, get_gemini_client
from study_buddy.logger import get_logger
from study_buddy.models import ChatRequest, ChatResponse, VisionRequest, VisionResponse
from study_buddy.sample_answers import find_answer, get_fallback_resolver

logger = get_logger("api")

if ENV_FILE:
    logger.info("Loaded .env from %s", ENV_FILE)
else:
    logger.warning("Using default .env loading (may not find API keys)")

app = FastAPI(
    title="Study Buddy API",
    description="Study assistant chatbot backed by Gemini with canned-answer fallback",
    version=__version__
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=CORS_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


def decode_image(image: str, mime_type: str):
    """
    Decode base64 image data, accepting an optional data: URL prefix.
    Returns (bytes, mime_type). Raises ValueError on bad input.
    """
    if image.startswith("data:") and "," in image:
        header, image = image.split(",", 1)
        declared = header[5:].split(";", 1)[0]
        if declared:
            mime_type = declared

    try:
        data = base64.b64decode(image, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Image is not valid base64: {e}") from e

    if not data:
        raise ValueError("No image provided")
    return data, mime_type


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Study Buddy API",
        "version": __version__,
        "endpoints": {
            "chat": "/chat",
            "vision": "/vision",
            "ui": "/ui",
            "docs": "/docs"
        }
    }


@app.get("/health")
async def health(client: GeminiClient = Depends(get_gemini_client)):
    """Health check endpoint - shows Gemini and fallback status."""
    return {
        "status": "healthy",
        "model": client.model_name,
        "gemini_configured": client.configured,
        "fallback_entries": len(get_fallback_resolver())
    }


@app.get("/ui", response_class=HTMLResponse)
async def chat_ui():
    """Browser chat page."""
    return HTMLResponse(render_chat_page())


@app.get("/debug/fallback")
def debug_fallback(q: str = Query(..., description="Your question")):
    """
    Run only the canned-answer matcher for a question.
    Shows what a user would get if Gemini were down.
    """
    resolver = get_fallback_resolver()
    entry = resolver.exact_match(q)
    match = "exact"
    if entry is None:
        entry = resolver.keyword_match(q)
        match = "keyword"
    if entry is None:
        match = "default"

    return {
        "query": q,
        "match": match,
        "question": entry.question if entry else None,
        "answer": resolver.resolve(q)
    }


@app.get("/debug/gemini")
async def debug_gemini(client: GeminiClient = Depends(get_gemini_client)):
    """
    Minimal sanity check for Gemini API key/model.
    Proves Gemini works independently of the fallback.
    """
    try:
        text = await client.generate_answer("Say 'hello' and name one branch of science.")
    except GeminiError as e:
        return {"ok": False, "model": client.model_name, "error": str(e)}
    return {"ok": True, "model": client.model_name, "sample": text[:200]}


@app.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, client: GeminiClient = Depends(get_gemini_client)):
    """
    Main chat endpoint.
    Asks Gemini first; any Gemini failure falls back to the canned answers.
    """
    try:
        answer = await client.generate_answer(request.content)
        return ChatResponse(answer=answer, source="gemini")
    except Exception as e:
        logger.exception("Gemini API error, falling back to sample answers: %s", e)

    answer = find_answer(request.content)
    logger.info("Generated fallback response: %d chars", len(answer))
    return ChatResponse(answer=answer, source="fallback")


@app.post("/vision", response_model=VisionResponse)
async def vision(request: VisionRequest, client: GeminiClient = Depends(get_gemini_client)):
    """
    Extract the text (usually a question) from an uploaded image.
    No fallback: Gemini failures are reported to the caller.
    """
    if not request.image:
        raise HTTPException(status_code=400, detail="No image provided")

    try:
        image, mime_type = decode_image(request.image, request.mime_type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        text = await client.extract_text(image, mime_type)
    except GeminiError as e:
        logger.exception("Error in vision endpoint: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    return VisionResponse(text=text)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
