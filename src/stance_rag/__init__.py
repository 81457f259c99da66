"""Evidence-grounded persuasive dialogue policy using LangGraph.

This package decides, per chat turn, whether to retrieve evidence, ask a
clarifying question, or offer a suggestion, with clear separation between:
- Session: immutable per-conversation search state
- Trigger: model-based trigger classification with keyword fallback
- Retrieval: evidence backend calls plus score/standpoint filtering
- Prompting: system prompt composition for the assigned standpoint/strategy
- Policy: the per-turn state machine tying the stages together
"""

__version__ = "0.1.0"
