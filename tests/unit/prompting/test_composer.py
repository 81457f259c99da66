# tests/unit/prompting/test_composer.py
"""Unit tests for the system prompt composer."""

import itertools

import pytest

from stance_rag.prompting.composer import baseline_prompt, compose, format_evidence
from stance_rag.prompting.prompts.system_prompt import (
    EVIDENCE_DELIMITER,
    FALLBACK_SYSTEM_PROMPT,
    NO_EVIDENCE_PLACEHOLDER,
    STANDPOINT_CONCEALMENT_RULE,
    STANDPOINT_INSTRUCTIONS,
    STRATEGY_INSTRUCTIONS,
)

COMBINATIONS = list(itertools.product(["supporting", "opposing"], ["suggestion", "clarification"]))


class TestFormatEvidence:
    """Tests for format_evidence()."""

    def test_empty_uses_placeholder(self):
        assert format_evidence([]) == NO_EVIDENCE_PLACEHOLDER

    def test_block_layout(self, evidence):
        blocks = format_evidence(evidence).split(EVIDENCE_DELIMITER)

        assert len(blocks) == 3
        assert blocks[0] == "Context 1 (Score: 0.9123):\n[Source: lse-phones.pdf, Pages: 2, 3]\nBans raised scores by 6%.\n"
        assert blocks[1].startswith("Context 2 (Score: 0.8000):\n[Source: survey.pdf]\n")
        assert blocks[2].startswith("Context 3 (Score: 0.7500):\n[Source: Unknown]\n")


class TestCompose:
    """Tests for compose()."""

    @pytest.mark.parametrize("standpoint,strategy", COMBINATIONS)
    @pytest.mark.parametrize("with_evidence", [True, False])
    def test_always_contains_concealment_rule(self, standpoint, strategy, with_evidence, evidence):
        prompt = compose(standpoint, strategy, "Phones in schools", evidence if with_evidence else [])
        assert STANDPOINT_CONCEALMENT_RULE in prompt

    @pytest.mark.parametrize("standpoint,strategy", COMBINATIONS)
    def test_section_order(self, standpoint, strategy, evidence):
        prompt = compose(standpoint, strategy, "Phones in schools", evidence)

        positions = [
            prompt.index("Phones in schools"),
            prompt.index(f"Assigned standpoint: {standpoint}"),
            prompt.index(STANDPOINT_INSTRUCTIONS[standpoint]),
            prompt.index(STRATEGY_INSTRUCTIONS[strategy]),
            prompt.index(STANDPOINT_CONCEALMENT_RULE),
            prompt.index("Context 1 (Score:"),
            prompt.index("Never concede your core standpoint"),
        ]
        assert positions == sorted(positions)

    def test_no_evidence_placeholder(self):
        prompt = compose("opposing", "clarification", "Phones in schools", [])
        assert NO_EVIDENCE_PLACEHOLDER in prompt
        assert "Context 1" not in prompt

    def test_closing_rules(self, evidence):
        prompt = compose("supporting", "suggestion", "T", evidence)
        assert "Never reveal your conversation strategy" in prompt
        assert "Never present yourself as neutral or balanced" in prompt

    def test_deterministic(self, evidence):
        assert compose("supporting", "suggestion", "T", evidence) == compose("supporting", "suggestion", "T", evidence)

    def test_topic_with_braces(self):
        """Topic text is inserted literally."""
        assert "{weird} topic" in compose("supporting", "suggestion", "{weird} topic", [])


class TestBaselinePrompt:
    def test_is_neutral_fallback(self):
        prompt = baseline_prompt()
        assert prompt == FALLBACK_SYSTEM_PROMPT
        assert STANDPOINT_CONCEALMENT_RULE not in prompt
