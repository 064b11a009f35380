"""
Generational synergy between two people.

Age gaps are read as mentoring opportunities: peers support each other,
a wide gap suggests mentoring, and a junior with strong digital skills
can reverse-mentor a senior colleague.
"""

from datetime import date
from typing import List, Optional

from spacesync.models.profile import PersonProfile
from spacesync.models.proximity import SynergyResult, SynergyType


NEUTRAL_SYNERGY_SCORE = 50

# Skills that make a junior a credible reverse mentor
TECH_SKILLS = [
    "ai", "artificial intelligence", "machine learning", "deep learning",
    "python", "react", "javascript", "typescript", "node",
    "cloud", "aws", "azure", "gcp", "kubernetes", "docker",
    "social media", "digital marketing", "seo", "sem",
    "automation", "rpa", "no-code", "low-code",
    "data analysis", "data science", "analytics", "power bi", "tableau",
    "ux design", "ui design", "figma", "design thinking",
    "blockchain", "web3", "crypto",
    "agile", "scrum", "devops", "ci/cd",
    "mobile development", "flutter", "react native",
    "cybersecurity", "security",
]


def generation_for_year(year: int) -> str:
    if year >= 2013:
        return "Gen Alpha"
    if year >= 1997:
        return "Gen Z"
    if year >= 1981:
        return "Millennial"
    if year >= 1965:
        return "Gen X"
    if year >= 1946:
        return "Baby Boomer"
    return "Builders"


def age_on(birth_date: date, reference_date: date) -> Optional[int]:
    """Completed years between birth_date and reference_date."""
    age = reference_date.year - birth_date.year
    if (reference_date.month, reference_date.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age if age >= 0 else None


def person_age(person: PersonProfile, reference_date: date) -> Optional[int]:
    """Age from birth date when known, otherwise the stored age."""
    if person.birth_date is not None:
        return age_on(person.birth_date, reference_date)
    return person.age


def tech_skills(person: PersonProfile) -> List[str]:
    found = []
    for skill in person.hard_skills:
        name = skill.name.lower().strip()
        if not name:
            continue
        if any(tech in name or name in tech for tech in TECH_SKILLS):
            found.append(skill.name)
    return found


def analyze_synergy(
    person_a: PersonProfile,
    person_b: PersonProfile,
    reference_date: date
) -> SynergyResult:
    """
    Classify the generational relationship between two people.

    Returns a neutral result (type NONE, score 50) when either age is
    unknown. The analysis depends only on the unordered pair.
    """
    age_a = person_age(person_a, reference_date)
    age_b = person_age(person_b, reference_date)
    if age_a is None or age_b is None:
        return SynergyResult(
            type=SynergyType.NONE,
            score=NEUTRAL_SYNERGY_SCORE,
            reason="Not enough age data for a generational analysis.",
        )

    gap = abs(age_a - age_b)
    gen_a = generation_for_year(reference_date.year - age_a)
    gen_b = generation_for_year(reference_date.year - age_b)

    if gap < 5:
        return SynergyResult(
            type=SynergyType.PEER_SUPPORT,
            score=60,
            reason=f"Same generational range ({gen_a}): effective peer collaboration.",
            age_gap=gap, generation_a=gen_a, generation_b=gen_b,
        )

    if age_a > age_b:
        junior, senior_gen, junior_gen = person_b, gen_a, gen_b
    else:
        junior, senior_gen, junior_gen = person_a, gen_b, gen_a
    junior_tech = tech_skills(junior)

    if gap >= 15:
        if len(junior_tech) >= 2:
            return SynergyResult(
                type=SynergyType.REVERSE_MENTORING,
                score=85,
                reason=f"{junior_gen} with strong tech skills can guide {senior_gen} on digital topics.",
                age_gap=gap, generation_a=gen_a, generation_b=gen_b,
                tech_skills=junior_tech[:5],
            )
        return SynergyResult(
            type=SynergyType.MENTORING,
            score=80,
            reason=f"{senior_gen} can pass experience and strategic vision on to {junior_gen}.",
            age_gap=gap, generation_a=gen_a, generation_b=gen_b,
        )

    if len(junior_tech) >= 3:
        return SynergyResult(
            type=SynergyType.REVERSE_MENTORING,
            score=70,
            reason="Moderate generational gap with strong tech complementarity.",
            age_gap=gap, generation_a=gen_a, generation_b=gen_b,
            tech_skills=junior_tech[:5],
        )
    return SynergyResult(
        type=SynergyType.MENTORING,
        score=65,
        reason="Moderate generational gap: room for two-way exchange and light mentoring.",
        age_gap=gap, generation_a=gen_a, generation_b=gen_b,
    )
