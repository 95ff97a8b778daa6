"""
Inspirational quote source for the "press 2" menu branch.

Quotes come from a Groq-hosted chat model through LangChain. When no API key is
configured, or the model fails or returns nothing usable, a quote is picked from
a curated built-in list instead, so callers always hear something.
"""

import logging
import random
import re
from typing import List, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_groq import ChatGroq

from quotes.prompts import FALLBACK_QUOTES, QUOTE_REQUEST, QUOTE_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

_WRAPPING_QUOTES = "\"'“”‘’"


def clean_quote(text: str) -> str:
    """
    Normalise model output for speech: collapse whitespace and line breaks,
    strip surrounding quotation marks.
    """
    cleaned = re.sub(r"\s+", " ", text or "").strip()
    return cleaned.strip(_WRAPPING_QUOTES).strip()


class QuoteGenerator:
    """
    Produces one short inspirational quote per call.

    Attributes:
        chat_model (Optional[ChatGroq]): The LLM client, or None when running on fallbacks only.
        fallback_quotes (List[str]): Quotes used when the model is unavailable.
    """

    def __init__(
        self,
        api_key: str = "",
        model_name: str = "llama-3.1-8b-instant",
        timeout: int = 5,
        max_retries: int = 1,
        fallback_quotes: Optional[List[str]] = None,
    ):
        self.fallback_quotes = list(fallback_quotes or FALLBACK_QUOTES)
        self.chat_model = None
        if not api_key:
            logger.info("GROQ_API_KEY not set; inspirational quotes will use the built-in list.")
            return
        try:
            self.chat_model = ChatGroq(
                temperature=0.9,
                model_name=model_name,
                groq_api_key=api_key,
                request_timeout=timeout,
                max_retries=max_retries,
            )
            logger.info("ChatGroq quote model %s initialized.", model_name)
        except Exception:
            logger.exception("Error initializing ChatGroq; falling back to built-in quotes.")
            self.chat_model = None

    def fallback_quote(self) -> str:
        return random.choice(self.fallback_quotes)

    async def generate(self) -> str:
        """
        Return an inspirational quote as plain text.

        Returns:
            str: A non-empty quote, from the model when possible, else from the fallback list.
        """
        if self.chat_model is None:
            return self.fallback_quote()

        messages = [SystemMessage(content=QUOTE_SYSTEM_PROMPT), HumanMessage(content=QUOTE_REQUEST)]
        try:
            reply = await self.chat_model.ainvoke(messages)
        except Exception:
            logger.exception("Quote generation failed; using a built-in quote.")
            return self.fallback_quote()

        quote = clean_quote(reply.content if isinstance(reply.content, str) else "")
        if not quote:
            logger.warning("Quote model returned an empty reply; using a built-in quote.")
            return self.fallback_quote()
        return quote
