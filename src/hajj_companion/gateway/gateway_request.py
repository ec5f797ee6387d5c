from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from hajj_companion.domain.messages import ChatMessage


class GatewayRequest(BaseModel):
    """Chat completion request sent to the model gateway."""

    messages: List[ChatMessage] = Field(description="Ordered chat messages.")
    model: str = Field(description="Model identifier for the request.")
    stream: bool = Field(default=True, description="Request an event stream.")
    temperature: Optional[float] = Field(
        default=None, description="Sampling temperature, provider default if None."
    )

    def to_payload(self) -> Dict[str, Any]:
        """Builds the OpenAI-compatible JSON body."""

        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [message.to_payload() for message in self.messages],
            "stream": self.stream,
        }
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        return payload
