"""
Suggestion Node

Asks an external ranking service for desk swaps that would improve a
floor's compatibility. The core only knows the SuggestionProvider
interface; GeminiSuggestionAgent is the hosted implementation and
StaticSuggestionProvider a deterministic one for tests and offline use.

TRACED with LangSmith (no-op unless LANGSMITH_TRACING is enabled).
"""

import asyncio
import functools
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Set

from google import genai
from google.genai import types
from langsmith import traceable
from pydantic import ValidationError

from spacesync.config import get_settings
from spacesync.exceptions import SuggestionError
from spacesync.models.suggestion import (
    ExpectedImprovement,
    PairSnapshot,
    SuggestionResponse,
    SuggestionSnapshot,
    SwapSuggestion,
)

logger = logging.getLogger(__name__)


SUGGESTION_SYSTEM_PROMPT = """You are an expert consultant in workplace organisation.
Analyse the spatial compatibility data of an office floor and suggest desk swaps
that would improve how the team is seated.

## RULES
- Suggest at most {max_suggestions} concrete swaps
- Every suggestion must say who moves and where (use the exact names and desk labels given)
- Briefly explain why the swap would improve the situation
- Consider both critical pairs (low score) and excellent pairs (high score) - do not break up what works
- If the global score is already high (>70%), say the layout is good and only suggest micro-optimisations

## OUTPUT FORMAT
Return ONLY valid JSON:
{{
    "overall_assessment": "<1-2 sentence assessment of the current layout>",
    "suggestions": [
        {{
            "person_a": "<name of person A>",
            "desk_a": "<current desk label of person A>",
            "person_b": "<name of person B>",
            "desk_b": "<current desk label of person B>",
            "reason": "<short reason>",
            "expected_improvement": "high" | "medium" | "low"
        }}
    ]
}}
"""


def build_suggestion_prompt(snapshot: SuggestionSnapshot, max_insights: int = 10) -> str:
    """Render a snapshot as the user message sent to the model."""
    desk_lines = "\n".join(
        f"- {d.label} ({d.room_name}): {d.assignee_name}" for d in snapshot.desks
    )
    pair_lines = "\n".join(
        f"- {p.person_a} <-> {p.person_b}: {p.score}% ({p.level}) "
        f"[Comm: {p.breakdown.get('communication_flow')}, "
        f"Collab: {p.breakdown.get('collaboration_flow')}, "
        f"RIASEC: {p.breakdown.get('riasec_complementarity')}, "
        f"Conflict: {p.breakdown.get('conflict_risk')}]"
        for p in snapshot.pairs
    )
    insights = [i for p in snapshot.pairs for i in p.insights if i][:max_insights]

    return f"""Analyse this office layout:

Global score: {snapshot.global_average}%
Adjacent pairs: {len(snapshot.pairs)}

Assigned desks:
{desk_lines}

Adjacent pairs with score:
{pair_lines}

Relevant insights:
{chr(10).join(insights)}

Suggest desk swaps that improve overall compatibility."""


def parse_suggestion_response(response_text: str, max_suggestions: int) -> SuggestionResponse:
    """
    Parse the model's JSON answer into a SuggestionResponse.

    Markdown fences are stripped; camelCase keys are accepted as well.

    Raises:
        SuggestionError: If the text is not valid JSON or misses required fields
    """
    cleaned = response_text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    if cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    cleaned = cleaned.strip()

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise SuggestionError(f"Failed to parse suggestion response as JSON: {e}") from e

    if not isinstance(data, dict):
        raise SuggestionError("Suggestion response is not a JSON object")

    suggestions = []
    for raw in data.get("suggestions") or []:
        try:
            suggestions.append(SwapSuggestion(
                person_a=raw.get("person_a", raw.get("personA")),
                desk_a=raw.get("desk_a", raw.get("deskA")),
                person_b=raw.get("person_b", raw.get("personB")),
                desk_b=raw.get("desk_b", raw.get("deskB")),
                reason=raw.get("reason", ""),
                expected_improvement=raw.get(
                    "expected_improvement", raw.get("expectedImprovement", "medium")
                ),
            ))
        except (AttributeError, ValidationError) as e:
            logger.warning(f"Skipping malformed suggestion {raw!r}: {e}")

    assessment = data.get("overall_assessment", data.get("overallAssessment"))
    if not assessment:
        raise SuggestionError("Suggestion response has no overall assessment")

    return SuggestionResponse(
        overall_assessment=assessment,
        suggestions=suggestions[:max_suggestions],
    )


class SuggestionProvider(ABC):
    """Opaque ranking/advice function over a floor snapshot."""

    @abstractmethod
    async def suggest(self, snapshot: SuggestionSnapshot) -> SuggestionResponse:
        """Return an overall assessment and ranked swap suggestions.

        Raises:
            SuggestionError: If the provider fails
        """
        pass


class GeminiSuggestionAgent(SuggestionProvider):
    """
    Suggestion provider backed by Gemini.
    All calls are traced with LangSmith.
    """

    def __init__(self, client: Optional[Any] = None, model: Optional[str] = None):
        settings = get_settings()
        if client is None:
            if not settings.google_api_key:
                raise ValueError("GOOGLE_API_KEY environment variable is not set")
            client = genai.Client(api_key=settings.google_api_key)
        self.client = client
        self.model = model or settings.model_name
        self.temperature = settings.suggestion_temperature
        self.max_suggestions = settings.max_suggestions

    @traceable(name="suggestion_agent.suggest", run_type="chain", tags=["suggestions", "gemini"])
    async def suggest(self, snapshot: SuggestionSnapshot) -> SuggestionResponse:
        prompt = build_suggestion_prompt(snapshot)
        try:
            response_text = await self._call_gemini(prompt)
        except Exception as e:
            logger.error(f"Suggestion call failed: {e}")
            raise SuggestionError(f"Suggestion service failed: {e}") from e
        return parse_suggestion_response(response_text, self.max_suggestions)

    @traceable(
        name="gemini_suggestion_call",
        run_type="llm",
        tags=["gemini", "suggestions", "api-call"],
        metadata={"task": "desk_swap_suggestions"}
    )
    async def _call_gemini(self, prompt: str) -> str:
        """
        Make the Gemini API call in a worker thread.
        """
        config = types.GenerateContentConfig(
            system_instruction=SUGGESTION_SYSTEM_PROMPT.format(max_suggestions=self.max_suggestions),
            response_mime_type="application/json",
            temperature=self.temperature,
        )
        response = await asyncio.to_thread(
            self.client.models.generate_content,
            model=self.model,
            contents=[prompt],
            config=config,
        )
        if not response.text:
            raise RuntimeError("Empty response from Gemini")
        return response.text


class StaticSuggestionProvider(SuggestionProvider):
    """
    Deterministic provider: for each critical pair (worst first), propose
    moving its second person next to the first person of the best pair
    that shares nobody with it. Each person is proposed at most once.
    """

    def __init__(self, max_suggestions: int = 5, critical_below: int = 60):
        self.max_suggestions = max_suggestions
        self.critical_below = critical_below

    async def suggest(self, snapshot: SuggestionSnapshot) -> SuggestionResponse:
        critical = sorted(
            (p for p in snapshot.pairs if p.score < self.critical_below),
            key=lambda p: p.score,
        )
        best_first = sorted(snapshot.pairs, key=lambda p: p.score, reverse=True)

        used: Set[str] = set()
        suggestions: List[SwapSuggestion] = []
        for weak in critical:
            if len(suggestions) >= self.max_suggestions:
                break
            if weak.person_b in used:
                continue
            partner = self._swap_partner(weak, best_first, used)
            if partner is None:
                continue
            used.update({weak.person_b, partner.person_a})
            suggestions.append(SwapSuggestion(
                person_a=weak.person_b,
                desk_a=weak.desk_b,
                person_b=partner.person_a,
                desk_b=partner.desk_a,
                reason=f"{weak.person_a} and {weak.person_b} score only {weak.score}% as neighbours.",
                expected_improvement=(
                    ExpectedImprovement.HIGH if weak.score < 40 else ExpectedImprovement.MEDIUM
                ),
            ))

        if snapshot.global_average > 70:
            assessment = f"The layout is already good ({snapshot.global_average}%); only micro-optimisations apply."
        elif not snapshot.pairs:
            assessment = "No adjacent pairs to evaluate."
        else:
            assessment = f"Global compatibility is {snapshot.global_average}%; some neighbours could be rearranged."
        return SuggestionResponse(overall_assessment=assessment, suggestions=suggestions)

    @staticmethod
    def _swap_partner(
        weak: PairSnapshot,
        best_first: List[PairSnapshot],
        used: Set[str]
    ) -> Optional[PairSnapshot]:
        involved = {weak.person_a, weak.person_b}
        for pair in best_first:
            if pair.score <= weak.score:
                return None
            if involved & {pair.person_a, pair.person_b}:
                continue
            if pair.person_a in used:
                continue
            return pair
        return None


@functools.lru_cache()
def get_suggestion_provider() -> SuggestionProvider:
    """
    Get a singleton suggestion provider.
    Cached to avoid re-initializing the Gemini client on every request.
    """
    return GeminiSuggestionAgent()
