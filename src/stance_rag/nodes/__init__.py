"""Turn graph nodes."""

from stance_rag.nodes.compose_prompt import compose_prompt
from stance_rag.nodes.decide_action import make_decide_action_node
from stance_rag.nodes.retrieve_evidence import make_retrieve_evidence_node

__all__ = ["make_decide_action_node", "make_retrieve_evidence_node", "compose_prompt"]
