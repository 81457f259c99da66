# tests/unit/trigger/test_classifier.py
"""Unit tests for TriggerClassifier."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from langchain_core.messages import AIMessage

from stance_rag.config import SearchConfig
from stance_rag.trigger.classifier import TriggerClassifier, build_strategy_rules, build_trigger_conditions
from stance_rag.trigger.prompts.trigger import (
    CLARIFICATION_AWAITING_RULES,
    CLARIFICATION_PENDING_RULES,
    CLARIFICATION_READY_RULES,
    NO_RECENT_DIALOGUE,
    SUGGESTION_NEEDS_SUPPORT_NOTE,
    SUGGESTION_RULES,
    UNIVERSAL_CONDITIONS,
)


def _run(coro):
    return asyncio.run(coro)


class TestStrategyRules:
    """Tests for the strategy-specific prompt section."""

    def test_clarification_without_state(self):
        assert build_strategy_rules("clarification", None, False) == CLARIFICATION_PENDING_RULES

    def test_clarification_awaiting(self, awaiting_state):
        assert build_strategy_rules("clarification", awaiting_state, False) == CLARIFICATION_AWAITING_RULES

    def test_clarification_ready(self, ready_state):
        assert build_strategy_rules("clarification", ready_state, False) == CLARIFICATION_READY_RULES

    def test_suggestion_with_support_note(self):
        rules = build_strategy_rules("suggestion", None, True)
        assert rules.startswith(SUGGESTION_RULES)
        assert SUGGESTION_NEEDS_SUPPORT_NOTE in rules

    def test_conditions_lead_with_universal(self):
        conditions = build_trigger_conditions("suggestion", None, False)
        assert conditions.startswith(UNIVERSAL_CONDITIONS)
        assert conditions.endswith(SUGGESTION_RULES)


class TestKeywordPath:
    """Without a model the keyword rules decide."""

    def test_no_model(self, awaiting_state):
        classifier = TriggerClassifier()
        assert _run(classifier.should_trigger("I want to see the statistics now", "T", "clarification", awaiting_state))
        assert not _run(classifier.should_trigger("Phones are fine.", "T", "clarification", awaiting_state))


class TestModelPath:
    """Tests for the model-backed classification path."""

    def test_json_verdict_wins_over_keywords(self, chat_model_factory):
        """Keywords would say True for a substantial suggestion message; the model says no."""
        llm = chat_model_factory('{"shouldTrigger": false, "reason": "small talk"}')
        classifier = TriggerClassifier(llm)

        assert _run(classifier.should_trigger("Phones are fine.", "T", "suggestion")) is False

    def test_substring_verdict(self, chat_model_factory):
        llm = chat_model_factory("shouldTrigger: true")
        classifier = TriggerClassifier(llm)

        assert _run(classifier.should_trigger("ok", "T", "suggestion")) is True

    def test_output_token_cap(self, chat_model_factory):
        llm = chat_model_factory('{"shouldTrigger": true}')
        classifier = TriggerClassifier(llm, max_tokens=123)

        _run(classifier.should_trigger("hello", "T", "suggestion"))

        llm.bind.assert_called_once_with(max_tokens=123)

    def test_from_config(self, chat_model_factory):
        llm = chat_model_factory('{"shouldTrigger": true}')
        classifier = TriggerClassifier.from_config(SearchConfig(classifier_max_tokens=50, classifier_timeout_sec=3.0), llm)

        assert classifier.max_tokens == 50
        assert classifier.timeout_sec == 3.0
        assert classifier.llm is llm

    def test_prompt_carries_context(self, chat_model_factory, awaiting_state):
        llm = chat_model_factory('{"shouldTrigger": false}')
        classifier = TriggerClassifier(llm)

        _run(
            classifier.should_trigger(
                "I think so",
                "Phones in schools",
                "clarification",
                awaiting_state,
                history=["User: earlier", "Assistant: reply"],
            )
        )

        prompt_value = llm.bound.ainvoke.call_args[0][0]
        system, human = prompt_value.to_messages()
        assert system.type == "system"
        assert "Phones in schools" in human.content
        assert "User: earlier\nAssistant: reply" in human.content
        assert "User message: I think so" in human.content
        assert CLARIFICATION_AWAITING_RULES in human.content
        assert '"shouldTrigger": true or false' in human.content

    def test_empty_history_placeholder(self, chat_model_factory):
        llm = chat_model_factory('{"shouldTrigger": false}')
        _run(TriggerClassifier(llm).should_trigger("hello", "T", "suggestion"))

        _, human = llm.bound.ainvoke.call_args[0][0].to_messages()
        assert NO_RECENT_DIALOGUE in human.content

    def test_per_call_model_overrides_default(self, chat_model_factory):
        default = chat_model_factory('{"shouldTrigger": false}')
        override = chat_model_factory('{"shouldTrigger": true}')
        classifier = TriggerClassifier(default)

        assert _run(classifier.should_trigger("hello", "T", "suggestion", llm=override)) is True
        default.bind.assert_not_called()

    def test_list_content_blocks(self, chat_model_factory):
        llm = chat_model_factory([{"type": "text", "text": '{"shouldTrigger": true, "reason": "x"}'}])
        assert _run(TriggerClassifier(llm).should_trigger("hello", "T", "suggestion")) is True


class TestDegradation:
    """Every model-path failure falls back to the keyword rules."""

    def test_model_error(self, chat_model_factory, awaiting_state, caplog):
        llm = chat_model_factory(side_effect=RuntimeError("provider down"))
        classifier = TriggerClassifier(llm)

        result = _run(
            classifier.should_trigger("I want to see the statistics now", "T", "clarification", awaiting_state)
        )

        assert result is True
        assert "ClassificationDegraded" in caplog.text
        assert "provider down" in caplog.text

    def test_unparseable_output(self, chat_model_factory, caplog):
        llm = chat_model_factory("I would rather not say.")
        classifier = TriggerClassifier(llm)

        assert _run(classifier.should_trigger("ok", "T", "suggestion")) is False
        assert "unparseable" in caplog.text

    def test_timeout(self, chat_model_factory, caplog):
        async def slow(*args, **kwargs):
            await asyncio.sleep(5)
            return AIMessage(content='{"shouldTrigger": false}')

        llm = chat_model_factory('{"shouldTrigger": false}')
        llm.bound.ainvoke = AsyncMock(side_effect=slow)
        classifier = TriggerClassifier(llm, timeout_sec=0.01)

        # Keywords: substantial suggestion message -> True
        assert _run(classifier.should_trigger("Phones are fine.", "T", "suggestion")) is True
        assert "exceeded" in caplog.text

    def test_cancellation_propagates(self, chat_model_factory):
        llm = chat_model_factory(side_effect=asyncio.CancelledError())
        classifier = TriggerClassifier(llm)

        with pytest.raises(asyncio.CancelledError):
            _run(classifier.should_trigger("hello", "T", "suggestion"))
