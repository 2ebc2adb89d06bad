"""Language model HTTP client for the advisory chat assistant"""

import httpx
from typing import Any, Dict, List
from cashflow_gateway.domain.models import ChatMessage, ChatReply
from cashflow_gateway.domain.exceptions import ChatServiceError, EmptyChatResponseError
from cashflow_gateway.config import settings

SYSTEM_PROMPT = """You are BLA (Business Lending Advocate) AI, an expert assistant specializing in business loans and financing.
Your key responsibilities:
- Help users understand different types of business loans (especially SBA 7(a) loans)
- Explain loan application processes and requirements
- Discuss loan packaging and brokering services
- Answer questions about cash flow analysis
- Provide general guidance about business financing

Important guidelines:
- Be professional but friendly
- Give concise, clear answers
- Use simple language to explain complex concepts
- When discussing specific loan amounts or rates, always clarify they are estimates
- For very specific questions about rates or approval, suggest contacting a BLA representative
- Never make promises about loan approval
- Focus on education and guidance rather than sales

Remember: You represent Business Lending Advocate and should align with their mission of helping businesses secure the funding they deserve through expert guidance and simplified processes."""


class ChatClient:
    """Client for an OpenAI-compatible chat completions API"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.chat_api_base).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.chat_api_key
        self.model = model or settings.chat_model
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def build_payload(self, messages: List[ChatMessage]) -> Dict[str, Any]:
        """System prompt first, then the conversation as sent by the user"""
        return {
            "model": self.model,
            "messages": [{"role": "system", "content": SYSTEM_PROMPT}]
            + [{"role": m.role, "content": m.content} for m in messages],
            "temperature": 0.7,
            "max_tokens": 500,
            "top_p": 1,
            "frequency_penalty": 0,
            "presence_penalty": 0,
        }

    async def complete(self, messages: List[ChatMessage]) -> ChatReply:
        """
        Ask the model for the next assistant turn.

        Raises:
            ChatServiceError: On timeout, HTTP errors, or a non-JSON response
            EmptyChatResponseError: When the response carries no message content
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=self.build_payload(messages),
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()
                data = response.json()

            except httpx.TimeoutException as e:
                raise ChatServiceError(f"Chat API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise ChatServiceError(f"Chat API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise ChatServiceError(f"Chat API unreachable: {e}") from e
            except ValueError as e:
                raise ChatServiceError(f"Invalid JSON from chat API: {e}") from e

        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices:
            raise EmptyChatResponseError("No response generated from AI")

        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not content:
            raise EmptyChatResponseError("Invalid response format from AI")

        return ChatReply(content=content)
