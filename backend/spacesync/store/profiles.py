"""
Profile adapter.

Joins the loosely-typed records a backend keeps about a person (company
member, user profile, RIASEC result, psychometric session, role
collaboration profile) into the single PersonProfile the engine reads.
Records are plain dicts as returned by the database client; column names
follow the backend schema.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from spacesync.models.profile import (
    CollaborationLink,
    CollaborationProfile,
    HardSkill,
    MemberBreakdown,
    PersonProfile,
    RiasecScore,
)

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]


def _riasec_value(record: Record, column: str) -> float:
    value = record.get(column) or 0
    try:
        value = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric RIASEC {column}={value!r}")
        return 0.0
    if value < 0:
        logger.warning(f"Clamping negative RIASEC {column}={value} to 0")
        return 0.0
    return value


def _likert(data: Record, key: str, default: int = 3) -> int:
    """Read a 1-5 Likert value, clamping out-of-range numbers and defaulting unreadable ones."""
    value = data.get(key)
    if value is None:
        return default
    try:
        number = int(round(float(value)))
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric {key}={value!r}, using {default}")
        return default
    clamped = max(1, min(5, number))
    if clamped != number:
        logger.warning(f"Clamping {key}={value!r} to {clamped}")
    return clamped


def parse_riasec(record: Optional[Record]) -> Optional[RiasecScore]:
    """Convert a riasec_results row (score_r ... score_c) to a RiasecScore.

    Negative or non-numeric columns are read as 0.
    """
    if not record:
        return None
    return RiasecScore(
        R=_riasec_value(record, "score_r"),
        I=_riasec_value(record, "score_i"),
        A=_riasec_value(record, "score_a"),
        S=_riasec_value(record, "score_s"),
        E=_riasec_value(record, "score_e"),
        C=_riasec_value(record, "score_c"),
    )


def parse_collaboration_profile(data: Optional[Record]) -> Optional[CollaborationProfile]:
    """
    Convert the JSON collaboration_profile stored on a role.

    The JSON uses camelCase keys (targetType, collaborationPercentage,
    memberBreakdown, ...). Malformed links are skipped with a warning
    rather than discarding the whole profile.
    """
    if not data:
        return None

    links = []
    for raw in data.get("links") or []:
        try:
            breakdown = [
                MemberBreakdown(
                    member_id=entry["memberId"],
                    member_label=entry.get("memberLabel", ""),
                    percentage=entry.get("percentage", 0),
                    affinity=entry.get("affinity"),
                )
                for entry in raw.get("memberBreakdown") or []
            ]
            links.append(CollaborationLink(
                target_type=raw["targetType"],
                target_id=raw["targetId"],
                target_label=raw.get("targetLabel", ""),
                collaboration_percentage=raw.get("collaborationPercentage", 0),
                personal_affinity=raw.get("personalAffinity", 3),
                member_breakdown=breakdown,
            ))
        except (KeyError, ValidationError) as e:
            logger.warning(f"Skipping malformed collaboration link {raw!r}: {e}")

    return CollaborationProfile(
        links=links,
        environmental_impact=_likert(data, "environmentalImpact"),
        operational_fluidity=_likert(data, "operationalFluidity"),
    )


def assemble_profile(
    member: Record,
    person: Optional[Record] = None,
    riasec: Optional[Record] = None,
    karma: Optional[Record] = None,
    role_id: Optional[str] = None,
    role_title: Optional[str] = None,
    collaboration_profile: Optional[Record] = None,
) -> PersonProfile:
    """
    Build a PersonProfile for one company member.

    Args:
        member: company_members row (id, user_id, job_title, placeholder names)
        person: profiles row of the linked user (names, birth_date, age)
        riasec: riasec_results row of the linked user
        karma: psychometric session row (soft_skills, primary_values, risk_factors, hard_skills)
        role_id: Role the member is assigned to
        role_title: Title of that role
        collaboration_profile: collaboration_profile JSON of that role

    Returns:
        PersonProfile keyed by the member ID
    """
    person = person or {}
    karma = karma or {}

    return PersonProfile(
        id=member.get("user_id") or member["id"],
        member_id=member["id"],
        first_name=person.get("first_name") or member.get("placeholder_first_name") or "",
        last_name=person.get("last_name") or member.get("placeholder_last_name") or "",
        job_title=member.get("job_title") or None,
        role_id=role_id,
        role_title=role_title,
        riasec_scores=parse_riasec(riasec),
        soft_skills=karma.get("soft_skills") or [],
        primary_values=karma.get("primary_values") or [],
        risk_factors=karma.get("risk_factors") or [],
        birth_date=person.get("birth_date") or None,
        age=person.get("age") or None,
        hard_skills=[HardSkill(**s) for s in karma.get("hard_skills") or []],
        collaboration_profile=parse_collaboration_profile(collaboration_profile),
    )


def assemble_profiles(
    members: Iterable[Record],
    persons_by_user: Mapping[str, Record],
    riasec_by_user: Mapping[str, Record],
    karma_by_user: Mapping[str, Record],
    role_by_member: Mapping[str, str],
    roles: Mapping[str, Record],
) -> Dict[str, PersonProfile]:
    """
    Join several record sets into profiles keyed by member ID.

    `roles` maps role id -> company_roles row (title, collaboration_profile).
    Placeholder members without a user account still get a profile built
    from their placeholder names.
    """
    profiles: Dict[str, PersonProfile] = {}
    for member in members:
        user_id = member.get("user_id")
        role_id = role_by_member.get(member["id"])
        role = roles.get(role_id, {}) if role_id else {}
        profiles[member["id"]] = assemble_profile(
            member,
            person=persons_by_user.get(user_id) if user_id else None,
            riasec=riasec_by_user.get(user_id) if user_id else None,
            karma=karma_by_user.get(user_id) if user_id else None,
            role_id=role_id,
            role_title=role.get("title"),
            collaboration_profile=role.get("collaboration_profile"),
        )
    return profiles


def member_ids_on_desks(desks: Iterable[Any]) -> List[str]:
    """Distinct assignee member IDs in desk order."""
    seen = []
    for desk in desks:
        member_id = getattr(desk, "company_member_id", None)
        if member_id and member_id not in seen:
            seen.append(member_id)
    return seen
