import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import openai
from openai import AsyncOpenAI

from . import config
from .rag.retriever import DEFAULT_TOP_K, Retriever, format_context, get_default_retriever

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "I'm experiencing high traffic right now. Please try again in a moment! 🤖"
TROUBLE_MESSAGE = (
    "I'm having trouble processing your request right now. "
    "Please leave us a message and we'll get back to you soon, In Sha Allah!"
)
REPHRASE_MESSAGE = "I'd be happy to help! Could you please rephrase your question?"

SYSTEM_PROMPT_TEMPLATE = """You are a helpful customer service assistant for an NFC Card business.

Context from our business knowledge base:
{context}

Instructions:
- Answer based on the context provided above
- Be friendly, helpful, and use "In Sha Allah" naturally when talking about future operations
- If asked about ordering, politely mention we're temporarily closed but will return soon, In Sha Allah
- Keep responses concise (2-3 sentences)
- Show enthusiasm about our 800+ designs and customization options
- Emphasize the modern, convenient nature of NFC cards"""


class ResponseStatus(Enum):
    """How a reply was produced."""
    OK = "ok"
    EMPTY = "empty"
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"


@dataclass(frozen=True)
class ResponderResult:
    """Outcome of a reply attempt.

    Every status carries displayable text; failures are fallback messages
    for the end user, never exceptions.
    """
    text: str
    status: ResponseStatus

    @property
    def ok(self) -> bool:
        return self.status is ResponseStatus.OK


def build_system_prompt(context: str) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(context=context)


def is_rate_limit_error(error: Exception) -> bool:
    """True when the error is an HTTP 429 from the completion API."""
    if isinstance(error, openai.RateLimitError):
        return True
    if isinstance(error, openai.APIStatusError):
        return error.status_code == 429
    response = getattr(error, "response", None)
    return getattr(response, "status_code", None) == 429


class Responder:
    """
    Answers a customer message with retrieval-augmented generation: ranks the
    knowledge base, injects the top entries into the system prompt and asks
    the Groq-hosted model for a short reply.
    """

    def __init__(
        self,
        retriever: Optional[Retriever] = None,
        completion_client: Optional[AsyncOpenAI] = None,
        top_k: int = DEFAULT_TOP_K,
    ):
        self.retriever = retriever or get_default_retriever()
        self._client = completion_client
        self.top_k = top_k

    @property
    def client(self) -> AsyncOpenAI:
        # Created lazily so importing the module does not require GROQ_API_KEY
        if self._client is None:
            self._client = AsyncOpenAI(api_key=config.GROQ_API_KEY, base_url=config.GROQ_API_URL)
        return self._client

    async def generate(self, user_message: str) -> ResponderResult:
        """
        Produce a reply for a user message.

        Args:
            user_message: Raw text sent by the customer

        Returns:
            ResponderResult whose text is always safe to send to the user
        """
        try:
            relevant_docs = self.retriever.retrieve_top_k(user_message, self.top_k)
            context = format_context(relevant_docs)
            logger.info(f"[RESPONDER] Retrieved context: {context[:100]}...")

            response = await self.client.chat.completions.create(
                model=config.GROQ_MODEL,
                messages=[
                    {
                        "role": "system",
                        "content": build_system_prompt(context)
                    },
                    {
                        "role": "user",
                        "content": user_message
                    }
                ],
                temperature=config.TEMPERATURE,
                max_tokens=config.MAX_TOKENS,
                top_p=config.TOP_P
            )

            content = response.choices[0].message.content
            reply = (content or "").strip()
            if not reply:
                logger.warning("[RESPONDER] Completion returned empty content")
                return ResponderResult(REPHRASE_MESSAGE, ResponseStatus.EMPTY)

            return ResponderResult(reply, ResponseStatus.OK)

        except Exception as e:
            if is_rate_limit_error(e):
                logger.warning(f"[RESPONDER] Rate limited by completion API: {e}")
                return ResponderResult(RATE_LIMIT_MESSAGE, ResponseStatus.RATE_LIMITED)

            logger.error(f"[RESPONDER] Error generating response: {e}")
            return ResponderResult(TROUBLE_MESSAGE, ResponseStatus.FAILED)

    async def respond(self, user_message: str) -> str:
        """Reply text for a user message; never raises."""
        result = await self.generate(user_message)
        return result.text


_responder: Optional[Responder] = None


def get_responder() -> Responder:
    """Return the shared responder used by the webhook handlers."""
    global _responder
    if _responder is None:
        _responder = Responder()
    return _responder
