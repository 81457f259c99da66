# src/stance_rag/prompting/composer.py

from __future__ import annotations

from typing import Sequence

from stance_rag.prompting.prompts.system_prompt import (
    EVIDENCE_DELIMITER,
    EVIDENCE_INTRO,
    FALLBACK_SYSTEM_PROMPT,
    HEADER_TEMPLATE,
    MISSION_TEMPLATE,
    NO_EVIDENCE_PLACEHOLDER,
    STANDPOINT_CONCEALMENT_RULE,
    STANDPOINT_INSTRUCTIONS,
    STRATEGY_INSTRUCTIONS,
    TASK_INSTRUCTIONS,
)
from stance_rag.session.state import EvidenceSnippet, Standpoint, Strategy


def _source_line(snippet: EvidenceSnippet) -> str:
    ref = snippet.source_ref
    if ref is None or not ref.document_name:
        return "[Source: Unknown]"
    if ref.page_numbers:
        pages = ", ".join(str(p) for p in ref.page_numbers)
        return f"[Source: {ref.document_name}, Pages: {pages}]"
    return f"[Source: {ref.document_name}]"


def format_evidence(evidence: Sequence[EvidenceSnippet]) -> str:
    if not evidence:
        return NO_EVIDENCE_PLACEHOLDER
    blocks = [
        f"Context {i} (Score: {s.score:.4f}):\n{_source_line(s)}\n{s.content.strip()}\n"
        for i, s in enumerate(evidence, start=1)
    ]
    return EVIDENCE_DELIMITER.join(blocks)


def compose(standpoint: Standpoint, strategy: Strategy, topic: str, evidence: Sequence[EvidenceSnippet]) -> str:
    """Assemble the stance-conditioned system prompt for one turn.

    Pure: the same inputs always give the same string. Sections, in order:
    header, mission, concealment rule, evidence, task instructions.
    """
    sections = [
        HEADER_TEMPLATE.format(topic=topic),
        MISSION_TEMPLATE.format(
            standpoint=standpoint,
            standpoint_instructions=STANDPOINT_INSTRUCTIONS[standpoint],
            strategy_instructions=STRATEGY_INSTRUCTIONS[strategy],
        ),
        STANDPOINT_CONCEALMENT_RULE,
        f"{EVIDENCE_INTRO}\n\n{format_evidence(evidence)}",
        TASK_INSTRUCTIONS,
    ]
    return "\n\n".join(sections)


def baseline_prompt() -> str:
    """Neutral prompt used when evidence retrieval failed for the turn."""
    return FALLBACK_SYSTEM_PROMPT
