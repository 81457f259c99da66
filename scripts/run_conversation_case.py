# scripts/run_conversation_case.py

import argparse
import asyncio
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv

env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage  # noqa: E402

from scripts.case_utils import get_case_id, resolve_cases  # noqa: E402
from stance_rag.config import load_backend_config, load_search_config, validate_search_config  # noqa: E402
from stance_rag.model import get_classifier_model, get_default_model  # noqa: E402
from stance_rag.policy import ConversationPolicy  # noqa: E402
from stance_rag.retrieval.adapters import HttpEvidenceBackend, parse_context_payload  # noqa: E402
from stance_rag.retrieval.retriever import EvidenceRetriever  # noqa: E402
from stance_rag.session.session import ASSISTANT_PREFIX, USER_PREFIX, initialize_session  # noqa: E402
from stance_rag.session.store import InMemorySessionStore  # noqa: E402
from stance_rag.trigger.classifier import TriggerClassifier  # noqa: E402
from tests.trigger_eval.json_utils import write_artifact  # noqa: E402

ARTIFACTS_DIR = Path("artifacts/conversation_eval")


class CaseEvidenceBackend:
    """Serves the evidence listed in the case file, for runs without a live backend."""

    def __init__(self, raw_snippets: List[Dict[str, Any]]):
        self.snippets = parse_context_payload({"snippets": raw_snippets})

    async def search(self, *, query, top_k, snippet_size):
        return list(self.snippets[:top_k])


def _history_messages(dialogue_history) -> List[Any]:
    messages = []
    for entry in dialogue_history:
        if entry.startswith(USER_PREFIX):
            messages.append(HumanMessage(content=entry[len(USER_PREFIX) :]))
        elif entry.startswith(ASSISTANT_PREFIX):
            messages.append(AIMessage(content=entry[len(ASSISTANT_PREFIX) :]))
    return messages


async def run_single_case(
    case_path: Path,
    case: Dict[str, Any],
    *,
    run_id: str,
    max_retries: int,
    use_live_backend: bool,
    classifier_llm,
    reply_llm,
) -> None:
    """Play every turn of a case through decide -> reply -> record."""
    case_id = get_case_id(case_path, case)
    config = load_search_config()
    for problem in validate_search_config(config):
        print(f"  ⚠ Config: {problem}")

    backend_config = load_backend_config()
    if use_live_backend and backend_config.is_configured:
        backend = HttpEvidenceBackend(backend_config, timeout=config.request_timeout_sec)
    else:
        backend = CaseEvidenceBackend(case.get("evidence") or [])

    policy = ConversationPolicy(
        EvidenceRetriever(backend, config),
        TriggerClassifier.from_config(config, classifier_llm),
        config=config,
        max_retries=max_retries,
    )

    store = InMemorySessionStore()
    store.set(case_id, initialize_session(case["topic"], case["standpoint"], case["strategy"]))

    print(f"\nRunning conversation case: {case_id} ({case['strategy']}, {case['standpoint']})")
    turns_out = []
    for i, turn in enumerate(case["turns"], 1):
        session = store.get(case_id)
        user_message = turn["user"]

        decision = await policy.decide(session, user_message)

        if turn.get("assistant"):
            reply = turn["assistant"]
        elif reply_llm is not None:
            messages = [
                SystemMessage(content=decision.system_prompt),
                *_history_messages(session.dialogue_history),
                HumanMessage(content=user_message),
            ]
            raw = await reply_llm.ainvoke(messages)
            reply = raw.content if isinstance(raw.content, str) else str(raw.content)
        else:
            reply = "(no reply generated)"

        store.set(case_id, policy.record_decision(session, user_message, reply, decision))

        action = decision.action_taken
        print(
            f"  [{i}] searched={action.searched} asked={action.asked_clarification} "
            f"suggested={action.provided_suggestion} evidence={len(decision.evidence)}"
            + (" (retrieval failed)" if decision.retrieval_failed else "")
        )
        turns_out.append({"user": user_message, "assistant": reply, "decision": decision})

    final_session = store.get(case_id)
    write_artifact(ARTIFACTS_DIR, run_id, f"{case_id}.input.json", case)
    write_artifact(ARTIFACTS_DIR, run_id, f"{case_id}.turns.json", turns_out)
    write_artifact(ARTIFACTS_DIR, run_id, f"{case_id}.final_session.json", final_session)

    print(f"  ✓ Completed; stats: {final_session.stats.model_dump()}")
    print(f"Artifacts written to: {ARTIFACTS_DIR / run_id}")


def main():
    parser = argparse.ArgumentParser(description="Run conversation case(s) through the turn policy.")
    parser.add_argument(
        "--case",
        required=True,
        help="Path to case JSON or glob pattern",
    )
    parser.add_argument(
        "--run-id",
        default="manual_conversation",
        help="Run id for artifacts",
    )
    parser.add_argument(
        "--max-retries",
        type=int,
        default=1,
        help="Attempts for the retrieval node",
    )
    parser.add_argument(
        "--live-backend",
        action="store_true",
        help="Use the HTTP evidence backend (PINECONE_* env) instead of the case's evidence",
    )
    parser.add_argument(
        "--keywords-only",
        action="store_true",
        help="Skip the classification model; keyword rules decide",
    )
    parser.add_argument(
        "--scripted",
        action="store_true",
        help="Do not generate replies; use the case's assistant text or a placeholder",
    )

    args = parser.parse_args()
    cases = resolve_cases(args.case)
    print(f"Found {len(cases)} case(s) to process")

    classifier_llm = None if args.keywords_only else get_classifier_model()
    reply_llm = None if args.scripted else get_default_model()

    for case_path, case_data in cases:
        try:
            asyncio.run(
                run_single_case(
                    case_path,
                    case_data,
                    run_id=args.run_id,
                    max_retries=args.max_retries,
                    use_live_backend=args.live_backend,
                    classifier_llm=classifier_llm,
                    reply_llm=reply_llm,
                )
            )
        except Exception as e:
            print(f"\n❌ Error processing {case_path.name}: {e}")
            raise


if __name__ == "__main__":
    main()
