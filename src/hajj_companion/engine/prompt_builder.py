"""System prompt construction for the pilgrimage guide."""

from typing import List, Optional, Sequence

from hajj_companion.domain.knowledge_item import KnowledgeItem
from hajj_companion.domain.messages import ChatMessage
from hajj_companion.retrieval.context_assembler import assemble

KNOWLEDGE_HEADING = "**Relevant Knowledge Base Information:**"

DEFAULT_SYSTEM_PROMPT = """You are an AI assistant specializing in Hajj and Umrah guidance with access to a knowledge base. Your role is to help pilgrims navigate their spiritual journey with accurate, compassionate, and practical advice.

Core Responsibilities:
- Provide accurate information about Hajj and Umrah rituals, steps, and requirements
- Offer practical guidance on logistics, preparation, and common challenges
- Answer questions about Islamic practices related to pilgrimage
- Give respectful spiritual guidance while maintaining Islamic authenticity
- Help with planning, packing lists, health precautions, and travel tips
- When relevant knowledge base information is provided, use it to enhance your responses
- Cite the knowledge base when using specific information from it

Guidelines:
- Always be respectful and compassionate
- Base answers on authentic Islamic sources and the provided knowledge base
- Provide practical, actionable advice
- If unsure about religious rulings, recommend consulting with a local scholar
- Keep responses clear, concise, and helpful
- Use simple language that pilgrims can easily understand
- When knowledge base context is available, integrate it naturally into your response

Remember: You're helping people prepare for one of the most important spiritual journeys of their lives. Be supportive, informative, and encouraging."""


class PromptBuilder:
    """
    Builds the message list sent to the model gateway.

    Args:
        system_prompt: Base instructions for the assistant.
    """

    def __init__(self, system_prompt: str = DEFAULT_SYSTEM_PROMPT) -> None:
        self.system_prompt = system_prompt

    def build_enrichment(self, items: Sequence[KnowledgeItem]) -> str:
        """
        Renders retrieved items as a section for the system prompt.

        Args:
            items: Retrieved knowledge items, best first.

        Returns:
            The enrichment section, or an empty string when ``items`` is empty.
        """
        if not items:
            return ""
        return f"{KNOWLEDGE_HEADING}\n\n{assemble(items)}"

    def build_system_prompt(self, enrichment: Optional[str] = None) -> str:
        """Returns the system prompt with the enrichment appended when present."""

        if not enrichment:
            return self.system_prompt
        return f"{self.system_prompt}\n\n{enrichment}"

    def build_messages(
        self, messages: Sequence[ChatMessage], enrichment: Optional[str] = None
    ) -> List[ChatMessage]:
        """
        Prepends the system prompt to the conversation.

        Args:
            messages: Conversation messages from the client.
            enrichment: Optional retrieved knowledge section.

        Returns:
            The ordered list of messages for the gateway.
        """
        system_message = ChatMessage(
            role="system", content=self.build_system_prompt(enrichment)
        )
        return [system_message, *messages]
