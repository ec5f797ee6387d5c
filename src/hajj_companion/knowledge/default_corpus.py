"""Bundled Hajj and Umrah knowledge base, exported from the hajj_knowledge table."""

from typing import Tuple

from hajj_companion.domain.knowledge_item import KnowledgeItem

_EXPORTED_AT = "2025-11-19 13:43:52.501397+00"

DEFAULT_KNOWLEDGE_ITEMS: Tuple[KnowledgeItem, ...] = (
    KnowledgeItem(
        id="6c2f6c37-2cce-4241-8d5e-8e9ac88ff6a0",
        title="Tawaf Ritual",
        content=(
            "Tawaf is the act of circumambulating the Kaaba seven times in a "
            "counter-clockwise direction. It begins at the Black Stone (Hajar "
            "al-Aswad) and ends at the same point. Pilgrims should be in a state "
            "of wudu and men should uncover their right shoulder (Idtiba)."
        ),
        category="rituals",
        keywords=(
            "tawaf",
            "kaaba",
            "circumambulation",
            "black stone",
            "wudu",
            "seven circuits",
            "ritual",
        ),
        created_at=_EXPORTED_AT,
    ),
    KnowledgeItem(
        id="36c9a27b-b099-4ee3-bc7e-2463e0531019",
        title="Sa'i Between Safa and Marwa",
        content=(
            "Sa'i involves walking seven times between Safa and Marwa. This "
            "commemorates Hajar's search for water for Ismail. Men run between "
            "the green markers (Raml)."
        ),
        category="rituals",
        keywords=(
            "sai",
            "safa",
            "marwa",
            "seven laps",
            "hajar",
            "ismail",
            "running",
            "raml",
        ),
        created_at=_EXPORTED_AT,
    ),
    KnowledgeItem(
        id="0a6675fb-4210-47ac-b333-7fab4fe8feea",
        title="Day of Arafat",
        content=(
            "The Day of Arafat is the most important day of Hajj. Pilgrims remain "
            "in Arafat in prayer and supplication until sunset. Missing this day "
            "invalidates Hajj."
        ),
        category="rituals",
        keywords=(
            "arafat",
            "dhul hijjah",
            "important",
            "prayer",
            "supplication",
            "dua",
            "talbiyah",
        ),
        created_at=_EXPORTED_AT,
    ),
    KnowledgeItem(
        id="c5d36cff-886e-46a2-97c1-a8b109bea994",
        title="Ihram Requirements",
        content=(
            "Ihram is the sacred state entered before Hajj or Umrah. Men wear two "
            "white cloths, women wear modest clothing. Perform ghusl, pray two "
            "rakaat, then make niyyah."
        ),
        category="preparation",
        keywords=(
            "ihram",
            "state",
            "white cloth",
            "ghusl",
            "niyyah",
            "intention",
            "preparation",
        ),
        created_at=_EXPORTED_AT,
    ),
    KnowledgeItem(
        id="deb093fa-74a1-4ec2-82ff-6a0f63712229",
        title="Prohibited Acts in Ihram",
        content=(
            "While in Ihram, pilgrims must avoid perfume, cutting hair or nails, "
            "killing animals, sexual relations, arguments, and covering the head "
            "(men) or face (women)."
        ),
        category="rules",
        keywords=("ihram", "prohibited", "forbidden", "restrictions", "rules", "haram"),
        created_at=_EXPORTED_AT,
    ),
)
