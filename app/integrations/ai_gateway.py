# app/integrations/ai_gateway.py
from __future__ import annotations
import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class AIGatewayError(RuntimeError):
    def __init__(self, code: str, status_code: int, data: Any = None):
        super().__init__(code)
        self.code = code
        self.status_code = status_code
        self.data = data


class AIGatewayClient:
    """Cliente do gateway de IA (endpoint /chat/completions compatível com OpenAI)."""

    def __init__(self, api_key: str, url: str, model: str, timeout: float = 60.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self.url = url
        self.model = model
        self._timeout = timeout
        self._transport = transport
        self._headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def chat(self, *, system: str, user: str) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        }
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            r = await client.post(self.url, json=payload, headers=self._headers)

        if r.status_code == 429:
            raise AIGatewayError("rate_limited", 429)
        if r.status_code == 402:
            raise AIGatewayError("payment_required", 402)
        if r.status_code >= 400:
            logger.error("AI gateway error: %s %s", r.status_code, r.text[:500])
            raise AIGatewayError("gateway_error", r.status_code, r.text)

        data = r.json() or {}
        choices = data.get("choices") or []
        content = None
        if choices:
            content = (choices[0].get("message") or {}).get("content")
        return content or "Unable to generate analysis"
