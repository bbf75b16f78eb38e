import logging
import aiohttp
from typing import Optional
from src.core.config import settings
from src.core.data_types import AgentResult

logger = logging.getLogger(__name__)

class AgentClient:
    def __init__(self, api_key: Optional[str] = None, api_base: Optional[str] = None,
                 timeout: Optional[float] = None):
        self.api_key = api_key or settings.agent_api_key
        self.api_base = (api_base or settings.agent_api_base).rstrip("/")
        self.timeout = timeout or settings.agent_request_timeout

        if not self.api_key:
            logger.warning("AGENT_API_KEY not set. Discovery and reports will fail.")

    async def invoke(self, message: str, agent_id: str) -> AgentResult:
        """
        Send a natural-language instruction to an agent and wait for its result.

        HTTP-level failures come back as ``AgentResult(success=False)``.
        Transport errors (connection, timeout) propagate to the caller.
        """
        if not self.api_key:
            logger.error("Attempted to call agent %s without API key.", agent_id)
            return AgentResult(success=False, error="AGENT_API_KEY is not configured")

        url = f"{self.api_base}/agents/{agent_id}/invoke"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        payload = {"message": message, "agent_id": agent_id}

        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(url, headers=headers, json=payload) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    logger.error(f"Agent API Error {response.status}: {error_text[:500]}")
                    return AgentResult(success=False, error=f"Agent API failed: {response.status}")

                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    logger.error(f"Agent API returned non-JSON body: {e}")
                    return AgentResult(success=False, error="Agent API returned an invalid response")

        result = AgentResult.from_payload(data)
        if not result.success:
            logger.error(f"Agent {agent_id} reported failure: {result.error}")
        return result

# Singleton
agent_client = AgentClient()
