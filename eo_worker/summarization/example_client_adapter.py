"""Offline generation client.

Returns canned responses shaped like a real provider's, so the whole
pipeline can run locally without an API key.
"""

import json

from eo_worker.summarization.client_base import BaseGenerationClient


class ExampleClientAdapter(BaseGenerationClient):
    """Deterministic stand-in for a chat-completion provider. No network calls."""

    SUMMARY_RESPONSE = (
        "- Directs federal agencies to review the affected programs.\n"
        "- Sets reporting deadlines for the responsible departments."
    )
    IMPACT_RESPONSE = json.dumps(
        {
            "average": "Most households will see little direct change in the short term.",
            "poorest": "Low-income families may face delays in program access.",
            "richest": "High earners are largely unaffected by the order.",
        }
    )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, system_prompt
        if '"average"' in user_prompt:
            return self.IMPACT_RESPONSE
        return self.SUMMARY_RESPONSE
