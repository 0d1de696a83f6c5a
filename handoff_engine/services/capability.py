"""
Keyword-based capability matching.
"""
from handoff_engine.domains.agents import Agent
from handoff_engine.interfaces.services.matching import CapabilityMatcher

DESCRIPTION_WORD_SCORE = 15
CAPABILITY_SCORE = 25
CATEGORY_SCORE = 20
MIN_WORD_LENGTH = 4
MAX_SCORE = 100


class KeywordCapabilityMatcher(CapabilityMatcher):
    """Scores intent by case-insensitive substring overlap.

    - +15 for every intent word longer than three characters that appears
      in the agent description
    - +25 for every capability tag that appears in the intent
    - +20 if the agent category appears in the intent

    The total is capped at 100.
    """

    def match(self, intent: str, agent: Agent) -> int:
        intent_text = (intent or "").lower()
        score = 0

        description = agent.description.lower()
        if description:
            for word in intent_text.split():
                if len(word) >= MIN_WORD_LENGTH and word in description:
                    score += DESCRIPTION_WORD_SCORE

        for capability in agent.capabilities:
            tag = capability.strip().lower()
            if tag and tag in intent_text:
                score += CAPABILITY_SCORE

        category = agent.category.strip().lower()
        if category and category in intent_text:
            score += CATEGORY_SCORE

        return min(score, MAX_SCORE)
