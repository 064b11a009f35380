"""
Compatibility Scorer

Scores how well two people would work seated next to each other.

Seven sub-scores (each 0-100) are combined with fixed weights:

    positive                         penalty
    riasec_complementarity  0.20     conflict_risk           0.10
    communication_flow      0.15     environmental_friction  0.15
    values_alignment        0.10
    collaboration_flow      0.40
    generation_synergy      0.15

Missing inputs never fail the computation: each sub-score falls back to
its neutral value on its own. The overall score, the level and every
breakdown field are independent of argument order.
"""

import logging
import math
from datetime import date
from typing import Dict, List, Optional, Sequence, Set, Tuple

from spacesync.core.generation import analyze_synergy
from spacesync.models.profile import (
    RIASEC_DIMENSIONS,
    LinkTargetType,
    PersonProfile,
    RiasecScore,
)
from spacesync.models.proximity import (
    ProximityBreakdown,
    ProximityLevel,
    ProximityResult,
    SynergyResult,
    SynergyType,
)

logger = logging.getLogger(__name__)


WEIGHTS = {
    "riasec_complementarity": 0.20,
    "communication_flow": 0.15,
    "values_alignment": 0.10,
    "collaboration_flow": 0.40,
    "generation_synergy": 0.15,
    "conflict_risk": 0.10,
    "environmental_friction": 0.15,
}

PENALTIES = ("conflict_risk", "environmental_friction")

NEUTRAL_SCORE = 50
NO_COLLABORATION_SCORE = 40

# Lower bounds of each level, highest first
LEVEL_THRESHOLDS = (
    (80, ProximityLevel.EXCELLENT),
    (60, ProximityLevel.GOOD),
    (40, ProximityLevel.FAIR),
)

# Dimension pairings that work well together
RIASEC_COMPLEMENTARY_PAIRS = [
    ("R", "I"), ("I", "A"), ("S", "E"), ("E", "C"), ("R", "C"), ("A", "S"),
]

# Traits that clash when found on opposite sides of a pair
CONFLICT_PATTERNS = [
    ("micromanagement", "autonom"),
    ("control", "creativity"),
    ("rigidity", "flexibility"),
    ("burnout", "burnout"),
]

FOCUS_KEYWORDS = [
    "focus", "concentration", "analytical thinking", "detail oriented",
    "precision", "research", "analysis", "introversion", "silence",
    "quiet", "noise sensitive", "noise-sensitive",
]

FACTOR_LABELS = {
    "riasec_complementarity": "complementary RIASEC profiles",
    "communication_flow": "communication style",
    "values_alignment": "shared values",
    "collaboration_flow": "declared collaboration",
    "generation_synergy": "generational synergy",
    "conflict_risk": "conflict risk",
    "environmental_friction": "environmental friction",
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def score_to_level(score: float) -> ProximityLevel:
    """
    Map an overall score to its qualitative band.

    poor < 40 <= fair < 60 <= good < 80 <= excellent
    """
    for lower_bound, level in LEVEL_THRESHOLDS:
        if score >= lower_bound:
            return level
    return ProximityLevel.POOR


def _normalize(tags: Sequence[str]) -> Set[str]:
    return {t.lower().strip() for t in tags if t and t.strip()}


# ============ RIASEC ============

def _top_dimensions(scores: RiasecScore, n: int = 3) -> Set[str]:
    # Stable sort keeps the canonical R-I-A-S-E-C order on ties
    ranked = sorted(RIASEC_DIMENSIONS, key=lambda d: -getattr(scores, d))
    return set(ranked[:n])


def riasec_complementarity(
    scores_a: Optional[RiasecScore],
    scores_b: Optional[RiasecScore]
) -> float:
    """
    Neither identical nor opposite profiles are best.

    Cosine similarity around 0.6 scores highest, complementary pairings
    between the two top-3 sets add a bonus and heavily overlapping top-3
    sets are penalised.
    """
    if scores_a is None or scores_b is None:
        return NEUTRAL_SCORE

    top_a = _top_dimensions(scores_a)
    top_b = _top_dimensions(scores_b)

    bonus = 0
    for d1, d2 in RIASEC_COMPLEMENTARY_PAIRS:
        if (d1 in top_a and d2 in top_b) or (d2 in top_a and d1 in top_b):
            bonus += 20

    overlap = len(top_a & top_b)
    similarity_penalty = -10 if overlap == 3 else (-5 if overlap == 2 else 0)

    vec_a = scores_a.as_tuple()
    vec_b = scores_b.as_tuple()
    dot = sum(a * b for a, b in zip(vec_a, vec_b))
    mag_a = math.sqrt(sum(a * a for a in vec_a))
    mag_b = math.sqrt(sum(b * b for b in vec_b))
    cosine = dot / (mag_a * mag_b) if mag_a and mag_b else 0.0

    cosine_score = max(0.0, 100 - abs(cosine - 0.6) * 150)
    return clamp(cosine_score + bonus + similarity_penalty)


# ============ Soft skills / values ============

def communication_flow(skills_a: Sequence[str], skills_b: Sequence[str]) -> float:
    """Soft-skill overlap: some shared ground is good, total overlap less so."""
    a = _normalize(skills_a)
    b = _normalize(skills_b)
    if not a or not b:
        return NEUTRAL_SCORE

    jaccard = len(a & b) / len(a | b)
    if 0.3 <= jaccard <= 0.6:
        return 90
    if jaccard > 0.6:
        return 70
    if jaccard > 0.1:
        return 60
    return 30


def values_alignment(values_a: Sequence[str], values_b: Sequence[str]) -> float:
    a = _normalize(values_a)
    b = _normalize(values_b)
    if not a or not b:
        return NEUTRAL_SCORE
    share_ratio = len(a & b) / max(len(a), len(b))
    return 30 + share_ratio * 70


# ============ Collaboration ============

def _directional_collaboration(source: PersonProfile, target: PersonProfile) -> List[float]:
    """Candidate collaboration values declared by source about target."""
    profile = source.collaboration_profile
    if profile is None:
        return []

    candidates = []
    for link in profile.links:
        if link.target_type == LinkTargetType.MEMBER and link.target_id == target.member_id:
            bonus = 10 if link.personal_affinity >= 4 else 0
            candidates.append(min(100.0, link.collaboration_percentage + bonus))
        elif link.target_type == LinkTargetType.TEAM:
            for entry in link.member_breakdown:
                if entry.member_id != target.member_id:
                    continue
                effective = link.collaboration_percentage * entry.percentage / 100
                affinity = entry.affinity if entry.affinity is not None else link.personal_affinity
                bonus = 5 if affinity >= 4 else 0
                candidates.append(min(100.0, effective + bonus))
    return candidates


def declared_collaboration(person_a: PersonProfile, person_b: PersonProfile) -> List[float]:
    """Candidate collaboration values declared in either direction (empty when neither links the other)."""
    return _directional_collaboration(person_a, person_b) + _directional_collaboration(person_b, person_a)


def collaboration_flow(person_a: PersonProfile, person_b: PersonProfile) -> float:
    """
    Strongest declared collaboration between the two, in either direction.

    Returns NO_COLLABORATION_SCORE when neither declares the other; a
    declared link never scores below that value.
    """
    best = max(declared_collaboration(person_a, person_b), default=0.0)
    return clamp(max(NO_COLLABORATION_SCORE, best))


# ============ Penalties ============

def conflict_risk(risks_a: Sequence[str], risks_b: Sequence[str]) -> float:
    """Clashing risk factors across the pair, plus risk factors both share."""
    a = _normalize(risks_a)
    b = _normalize(risks_b)
    if not a and not b:
        return 0

    def has(tags: Set[str], pattern: str) -> bool:
        return any(pattern in tag for tag in tags)

    risk = 0
    for p1, p2 in CONFLICT_PATTERNS:
        if (has(a, p1) and has(b, p2)) or (has(a, p2) and has(b, p1)):
            risk += 25
    risk += 15 * len(a & b)
    return clamp(risk)


def _needs_focus(person: PersonProfile) -> bool:
    tags = _normalize(list(person.soft_skills) + list(person.risk_factors))
    return any(kw in tag for tag in tags for kw in FOCUS_KEYWORDS)


def _environment_traits(person: PersonProfile) -> Tuple[int, int]:
    profile = person.collaboration_profile
    if profile is None:
        return 3, 3
    return profile.environmental_impact, profile.operational_fluidity


def environmental_friction(person_a: PersonProfile, person_b: PersonProfile) -> float:
    """Noise and working-rhythm mismatch between neighbours."""
    impact_a, fluidity_a = _environment_traits(person_a)
    impact_b, fluidity_b = _environment_traits(person_b)

    friction = 0
    if impact_a >= 4 and _needs_focus(person_b):
        friction += 35
    if impact_b >= 4 and _needs_focus(person_a):
        friction += 35

    fluidity_delta = abs(fluidity_a - fluidity_b)
    if fluidity_delta >= 3:
        friction += 25
    elif fluidity_delta >= 2:
        friction += 10

    if impact_a >= 5 and impact_b >= 5:
        friction += 20
    elif impact_a >= 4 and impact_b >= 4:
        friction += 10

    return clamp(friction)


# ============ Combination ============

def weighted_total(breakdown: Dict[str, float]) -> float:
    total = 0.0
    for name, weight in WEIGHTS.items():
        if name in PENALTIES:
            total -= breakdown[name] * weight
        else:
            total += breakdown[name] * weight
    return total


def _primary_factors(breakdown: Dict[str, float]) -> Tuple[Optional[str], Optional[str]]:
    """Biggest lift above neutral and biggest drag, by weighted contribution."""
    lifts = {
        name: (value - NEUTRAL_SCORE) * WEIGHTS[name]
        for name, value in breakdown.items() if name not in PENALTIES
    }
    drags = {name: breakdown[name] * WEIGHTS[name] for name in PENALTIES}

    lift = max(lifts, key=lambda n: lifts[n])
    drag = max(drags, key=lambda n: drags[n])
    return (lift if lifts[lift] > 0 else None, drag if drags[drag] > 0 else None)


def build_insights(
    breakdown: Dict[str, float],
    synergy: SynergyResult,
    linked: bool = True
) -> List[str]:
    """Advisory strings for a pair; `linked` tells whether either person declared the other."""
    insights = []
    collab = breakdown["collaboration_flow"]
    env = breakdown["environmental_friction"]

    if collab >= 70:
        insights.append(f"High collaboration flow ({round_half_up(collab)}%): worth seating them together.")
    elif not linked:
        insights.append("No direct collaboration flow mapped.")
    if env >= 50:
        insights.append("Environmental friction risk: incompatible working styles.")
    elif env >= 30:
        insights.append("Possible noise disturbance for the neighbour.")
    if breakdown["riasec_complementarity"] >= 75:
        insights.append("Highly complementary RIASEC profiles.")
    if breakdown["conflict_risk"] >= 50:
        insights.append("Friction risk: incompatible risk factors.")
    if synergy.type == SynergyType.REVERSE_MENTORING:
        insights.append(f"Reverse mentoring opportunity: {synergy.reason}")
    elif synergy.type == SynergyType.MENTORING:
        insights.append(f"Mentoring opportunity: {synergy.reason}")
    if breakdown["values_alignment"] >= 80:
        insights.append("Strong values alignment.")

    lift, drag = _primary_factors(breakdown)
    if lift is not None:
        insights.append(f"Main strength: {FACTOR_LABELS[lift]}.")
    if drag is not None:
        insights.append(f"Main concern: {FACTOR_LABELS[drag]}.")
    return insights


def score_pair(
    person_a: PersonProfile,
    person_b: PersonProfile,
    reference_date: Optional[date] = None
) -> ProximityResult:
    """
    Compute the compatibility of two people seated next to each other.

    Args:
        person_a: First person
        person_b: Second person (a different member)
        reference_date: Day ages are computed on (default: today)

    Returns:
        ProximityResult with overall score, breakdown, level and insights

    Example:
        >>> result = score_pair(alice, bob)
        >>> result.score == score_pair(bob, alice).score
        True
    """
    if reference_date is None:
        reference_date = date.today()

    synergy = analyze_synergy(person_a, person_b, reference_date)
    linked = bool(declared_collaboration(person_a, person_b))
    breakdown = {
        "riasec_complementarity": riasec_complementarity(person_a.riasec_scores, person_b.riasec_scores),
        "communication_flow": communication_flow(person_a.soft_skills, person_b.soft_skills),
        "values_alignment": values_alignment(person_a.primary_values, person_b.primary_values),
        "collaboration_flow": collaboration_flow(person_a, person_b),
        "generation_synergy": float(synergy.score),
        "conflict_risk": conflict_risk(person_a.risk_factors, person_b.risk_factors),
        "environmental_friction": environmental_friction(person_a, person_b),
    }

    score = round_half_up(clamp(weighted_total(breakdown)))
    logger.debug(f"Scored {person_a.member_id} <-> {person_b.member_id}: {score}")

    return ProximityResult(
        score=score,
        breakdown=ProximityBreakdown(**{k: round_half_up(v) for k, v in breakdown.items()}),
        level=score_to_level(score),
        insights=build_insights(breakdown, synergy, linked),
        synergy=synergy,
    )
