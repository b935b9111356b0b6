# Entry point for the FastAPI app
from fastapi import BackgroundTasks, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
import json
import logging

from . import config, security
from .adapters import get_adapter_for_channel
from .adapters.channel_detector import detect_channel
from .rag.knowledge_base import DEFAULT_KNOWLEDGE_BASE
from .rag.retriever import DEFAULT_TOP_K, get_default_retriever
from .responder import get_responder

logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

app = FastAPI()

DEFAULT_TEST_QUERY = "What are your business hours?"
EVENT_RECEIVED = "EVENT_RECEIVED"


@app.on_event("startup")
def startup_event():
    # Refuse to start without the required secrets
    missing = config.missing_config()
    if missing:
        logger.error(f"[STARTUP] Missing required environment variables: {', '.join(missing)}")
        logger.error("[STARTUP] Please check your .env file")
    config.validate_config()

    logger.info("=" * 50)
    logger.info(f"[STARTUP] Server running on port {config.PORT}")
    logger.info(f"[STARTUP] Webhook URL: http://localhost:{config.PORT}/webhook")
    logger.info(f"[STARTUP] Business knowledge base loaded: {len(DEFAULT_KNOWLEDGE_BASE)} documents")
    logger.info(f"[STARTUP] Using Groq API with {config.GROQ_MODEL}")
    if config.APP_SECRET:
        logger.info("[STARTUP] Webhook signature validation enabled")
    logger.info("=" * 50)


@app.get("/")
def root():
    return PlainTextResponse("Facebook Messenger Bot with RAG is running!")


@app.get("/webhook")
async def verify_webhook(request: Request):
    """Messenger subscription handshake: echo hub.challenge when the token matches."""
    params = request.query_params
    challenge = security.verify_subscription(
        params.get("hub.mode"),
        params.get("hub.verify_token"),
        params.get("hub.challenge"),
    )
    return PlainTextResponse(challenge)


@app.post("/webhook")
async def messenger_webhook(request: Request, background_tasks: BackgroundTasks):
    """Receive Messenger events.

    - Validates the payload signature when APP_SECRET is configured.
    - Acknowledges immediately; replies are produced in a background task
      so the platform's delivery ack never waits on the completion API.
    """
    body = await request.body()
    security.validate_signature(request, body)

    try:
        data = json.loads(body or b"{}")
    except ValueError:
        logger.warning(f"[WEBHOOK] Could not parse request body: {body[:200]!r}")
        return PlainTextResponse(EVENT_RECEIVED)

    try:
        channel = detect_channel(data)
    except ValueError:
        logger.info("[WEBHOOK] Ignoring payload for unknown channel")
        return PlainTextResponse(EVENT_RECEIVED)

    adapter = get_adapter_for_channel(channel)
    background_tasks.add_task(adapter.handle_payload, data, get_responder())
    return PlainTextResponse(EVENT_RECEIVED)


@app.get("/test-rag")
async def test_rag(q: str = DEFAULT_TEST_QUERY):
    """Debug endpoint: show the ranked documents and the generated reply for a query."""
    try:
        relevant_docs = get_default_retriever().retrieve_top_k(q, DEFAULT_TOP_K)
        response = await get_responder().respond(q)
        return {
            "query": q,
            "relevantDocs": [doc.to_dict() for doc in relevant_docs],
            "aiResponse": response,
        }
    except Exception as e:
        logger.exception("[DEBUG] Error in /test-rag")
        return JSONResponse(status_code=500, content={"error": str(e)})


def run():
    import uvicorn

    uvicorn.run("ragbot.main:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
