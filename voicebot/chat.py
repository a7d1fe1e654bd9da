"""Chat model calls through OpenAI chat completions, with per-chat history."""

import asyncio
import logging

from voicebot.constants import (
    CHAT_MODEL,
    CHAT_MAX_HISTORY,
    CHAT_RETRY_COUNT,
    CHAT_RETRY_BASE_DELAY,
    CHAT_RETRY_MAX_DELAY,
    SYSTEM_PROMPT,
)
from voicebot.models import ChatTurn

logger = logging.getLogger(__name__)

# HTTP status codes worth retrying on
_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


def _is_retryable(exc: Exception) -> bool:
    """Return True if the exception is a transient OpenAI error."""
    if type(exc).__name__ in ("RateLimitError", "APITimeoutError", "APIConnectionError"):
        return True
    return getattr(exc, "status_code", None) in _RETRYABLE_STATUS_CODES


async def chat_completions_with_retry(client, **kwargs):
    """Call ``client.chat.completions.create(**kwargs)`` with retry.

    Retries up to CHAT_RETRY_COUNT times on rate-limit, 5xx and connection
    errors with capped exponential back-off. Non-retryable errors are
    re-raised immediately.
    """
    delay = CHAT_RETRY_BASE_DELAY

    for attempt in range(CHAT_RETRY_COUNT + 1):
        try:
            return await client.chat.completions.create(**kwargs)
        except Exception as exc:
            if not _is_retryable(exc) or attempt == CHAT_RETRY_COUNT:
                logger.warning("OpenAI chat call failed (attempt %d): %s", attempt + 1, exc)
                raise
            logger.warning(
                "OpenAI chat call failed (attempt %d/%d): %s, retrying in %.1fs",
                attempt + 1, CHAT_RETRY_COUNT + 1, exc, delay,
            )
            await asyncio.sleep(delay)
            delay = min(delay * 2, CHAT_RETRY_MAX_DELAY)


class ChatModel:
    """Conversational model that remembers the last few turns of each chat."""

    def __init__(
        self,
        client,
        model: str = CHAT_MODEL,
        system_prompt: str = SYSTEM_PROMPT,
        max_history: int = CHAT_MAX_HISTORY,
    ):
        self.client = client
        self.model = model
        self.system_prompt = system_prompt
        self.max_history = max_history
        # In memory only; one entry per chat seen since startup, never evicted
        self._history: dict[int, list[ChatTurn]] = {}

    def history(self, chat_id: int) -> list[ChatTurn]:
        return list(self._history.get(chat_id, []))

    def _messages(self, chat_id: int, text: str) -> list[dict]:
        messages = [{"role": "system", "content": self.system_prompt}]
        for turn in self._history.get(chat_id, []):
            messages.append({"role": turn.role, "content": turn.content})
        messages.append({"role": "user", "content": text})
        return messages

    async def call(self, chat_id: int, text: str) -> str:
        """Send text to the model and return its reply.

        History is only extended when the call succeeds.
        """
        response = await chat_completions_with_retry(
            self.client,
            model=self.model,
            messages=self._messages(chat_id, text),
        )
        reply = (response.choices[0].message.content or "").strip()

        turns = self._history.setdefault(chat_id, [])
        turns.append(ChatTurn(role="user", content=text))
        turns.append(ChatTurn(role="assistant", content=reply))
        if len(turns) > self.max_history:
            del turns[: len(turns) - self.max_history]

        return reply
