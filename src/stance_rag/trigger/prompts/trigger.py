# src/stance_rag/trigger/prompts/trigger.py
"""Prompt for the search-trigger classification call.

Template variables: topic, user_message, recent_dialogue, trigger_conditions.
Literal JSON braces are doubled for ChatPromptTemplate.
"""

TRIGGER_SYSTEM_PROMPT = (
    "You are a professional conversation analysis assistant skilled at determining when "
    "information retrieval is needed. Follow the requirement to return JSON only."
)

TRIGGER_PROMPT = """You are a conversational AI assistant deciding whether to run a search that retrieves evidence documents for the current turn.

Conversation topic: {topic}

Recent conversation:
{recent_dialogue}

User message: {user_message}

{trigger_conditions}

Analyze the user message and decide whether search should be triggered now.

Respond ONLY with a JSON object:
{{
  "shouldTrigger": true or false,
  "reason": "brief explanation of your judgment"
}}
"""

UNIVERSAL_CONDITIONS = """TRIGGER CONDITIONS (search if ANY condition is met):
1. The user explicitly asks for evidence, data, research, sources, statistics, studies, etc.
2. The user expresses uncertainty ("I'm not sure", "I don't know", "What data exists", "I'm unclear about...")
3. The assistant needs factual support to sustain its standpoint

DO NOT TRIGGER SEARCH when:
1. The user states a clear personal opinion that does not need evidence (e.g. "I just think X is annoying")
2. The message is off-topic casual chat or a greeting"""

CLARIFICATION_AWAITING_RULES = """CRITICAL RULE FOR CLARIFICATION STRATEGY:
- The assistant is AWAITING the user's answer to clarification questions
- The user has NOT yet shown readiness for search
- DO NOT trigger search in this state UNLESS the user explicitly asks for evidence, data, or research
- If the user only answers the clarification questions, return false"""

CLARIFICATION_READY_RULES = """CLARIFICATION STRATEGY STATE:
- The user has answered clarification questions or asked for search
- Search may proceed based on the general conditions above"""

CLARIFICATION_PENDING_RULES = """CLARIFICATION STRATEGY STATE:
- No clarification questions have been asked yet
- Clarification should come before searching
- Only trigger search if the user explicitly asks for evidence or data"""

SUGGESTION_RULES = """SUGGESTION STRATEGY:
- The assistant should offer suggestions early
- Trigger search if the user asks questions or the assistant needs factual support"""

SUGGESTION_NEEDS_SUPPORT_NOTE = "- The assistant currently needs factual support"

NO_RECENT_DIALOGUE = "(no previous turns)"

TRIGGER_PROMPT_VERSION = "1.0"
