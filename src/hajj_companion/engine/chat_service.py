"""Chat orchestration: retrieval enrichment followed by the gateway call."""

import logging
from typing import List, Optional, Sequence

from hajj_companion.domain.error_sanitizer import build_exception_details
from hajj_companion.domain.exceptions import RetrievalError
from hajj_companion.domain.knowledge_item import KnowledgeItem
from hajj_companion.domain.messages import ChatMessage, last_user_message
from hajj_companion.engine.prompt_builder import PromptBuilder
from hajj_companion.gateway.gateway_client import ModelGatewayClient
from hajj_companion.gateway.gateway_stream import GatewayStream
from hajj_companion.retrieval.context_retriever import ContextRetriever

logger = logging.getLogger(__name__)


class ChatService:
    """
    Answers a conversation with optional knowledge enrichment.

    Retrieval failures never abort a chat: the conversation is sent to the
    gateway without enrichment instead. Gateway failures propagate.

    Args:
        retriever: Knowledge retriever for the last user message.
        gateway: Model gateway client.
        prompt_builder: Builds the system prompt and message list.
    """

    def __init__(
        self,
        retriever: ContextRetriever,
        gateway: ModelGatewayClient,
        prompt_builder: Optional[PromptBuilder] = None,
    ) -> None:
        self.retriever = retriever
        self.gateway = gateway
        self.prompt_builder = prompt_builder or PromptBuilder()

    def retrieve_enrichment(self, messages: Sequence[ChatMessage]) -> str:
        """
        Retrieves knowledge for the last user message.

        Args:
            messages: Conversation messages from the client.

        Returns:
            The enrichment section, or an empty string when nothing applies.
        """
        last_user = last_user_message(messages)
        if last_user is None or not last_user.content.strip():
            return ""

        items: List[KnowledgeItem]
        try:
            items = self.retriever.retrieve(last_user.content)
        except RetrievalError as exc:
            logger.warning(
                "Knowledge retrieval failed, answering without enrichment",
                extra={
                    "retriever": self.retriever.name,
                    "error_details": build_exception_details(exc),
                },
            )
            return ""

        logger.info(
            "Knowledge retrieval complete",
            extra={"retriever": self.retriever.name, "result_count": len(items)},
        )
        return self.prompt_builder.build_enrichment(items)

    def build_messages(self, messages: Sequence[ChatMessage]) -> List[ChatMessage]:
        """Builds the gateway message list for a conversation."""

        enrichment = self.retrieve_enrichment(messages)
        return self.prompt_builder.build_messages(messages, enrichment)

    def stream(self, messages: Sequence[ChatMessage]) -> GatewayStream:
        """
        Opens a streaming answer for the conversation.

        Raises:
            GatewayError: If the gateway rejects the request.
        """
        return self.gateway.stream(self.build_messages(messages))

    def complete(self, messages: Sequence[ChatMessage]) -> str:
        """
        Returns the full answer for the conversation.

        Raises:
            GatewayError: If the gateway rejects the request.
        """
        return self.gateway.complete(self.build_messages(messages))

    def close(self) -> None:
        """Releases retriever and gateway resources."""

        self.retriever.close()
        self.gateway.close()
