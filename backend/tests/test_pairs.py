"""Tests for pair enumeration and floor aggregates."""

import pytest

from spacesync.core.pairs import (
    build_pairs,
    desk_scores,
    global_average,
    scorable_desks,
    summarize_pairs,
)
from spacesync.core.scoring import round_half_up, score_to_level
from spacesync.models.proximity import (
    DeskRef,
    ProximityBreakdown,
    ProximityLevel,
    ProximityResult,
    ScoredPair,
)

from conftest import (
    REFERENCE_DATE,
    collab,
    make_desk,
    make_profile,
    make_room,
    member_link,
    profiles_map,
)


def test_square_floor_pairs_everyone(square_floor):
    desks, rooms, profiles = square_floor

    pairs = build_pairs(desks, rooms, profiles, reference_date=REFERENCE_DATE)

    assert len(pairs) == 6
    assert {frozenset((p.desk_a.id, p.desk_b.id)) for p in pairs} == {
        frozenset(("d1", "d2")), frozenset(("d1", "d3")), frozenset(("d1", "d4")),
        frozenset(("d2", "d3")), frozenset(("d2", "d4")), frozenset(("d3", "d4")),
    }
    diagonal = next(p for p in pairs if {p.desk_a.id, p.desk_b.id} == {"d1", "d4"})
    assert diagonal.distance == pytest.approx(141.42, abs=0.01)


def test_pairs_are_sorted_by_score(square_floor):
    desks, rooms, profiles = square_floor

    scores = [p.score for p in build_pairs(desks, rooms, profiles, reference_date=REFERENCE_DATE)]

    assert scores == sorted(scores, reverse=True)


def test_desk_scores_and_global_average(square_floor):
    desks, rooms, profiles = square_floor
    pairs = build_pairs(desks, rooms, profiles, reference_date=REFERENCE_DATE)

    per_desk = desk_scores(pairs)

    assert set(per_desk) == {"d1", "d2", "d3", "d4"}
    for desk_id, score in per_desk.items():
        own = [p.score for p in pairs if desk_id in (p.desk_a.id, p.desk_b.id)]
        assert score.pair_count == 3
        assert score.average_score == round_half_up(sum(own) / len(own))
    assert global_average(pairs) == pytest.approx(sum(p.score for p in pairs) / 6)


def test_equal_scores_keep_enumeration_order():
    rooms = [make_room()]
    desks = [make_desk(f"d{i}", 40 * i, 0, f"m{i}") for i in range(1, 5)]
    profiles = profiles_map(*(make_profile(f"m{i}") for i in range(1, 5)))

    pairs = build_pairs(desks, rooms, profiles, reference_date=REFERENCE_DATE)

    assert [(p.desk_a.id, p.desk_b.id) for p in pairs] == [
        ("d1", "d2"), ("d1", "d3"), ("d1", "d4"),
        ("d2", "d3"), ("d2", "d4"), ("d3", "d4"),
    ]
    assert all(p.score == 46 for p in pairs)


def test_far_desks_are_not_paired():
    rooms = [make_room(width=800)]
    desks = [make_desk("d1", 0, 0, "a"), make_desk("d2", 150, 0, "b"), make_desk("d3", 500, 0, "c")]
    profiles = profiles_map(make_profile("a"), make_profile("b"), make_profile("c"))

    pairs = build_pairs(desks, rooms, profiles, reference_date=REFERENCE_DATE)

    assert [(p.desk_a.id, p.desk_b.id) for p in pairs] == [("d1", "d2")]
    assert "d3" not in desk_scores(pairs)


def test_threshold_override():
    rooms = [make_room()]
    desks = [make_desk("d1", 0, 0, "a"), make_desk("d2", 150, 0, "b")]
    profiles = profiles_map(make_profile("a"), make_profile("b"))

    assert build_pairs(desks, rooms, profiles, threshold=100, reference_date=REFERENCE_DATE) == []


def test_unusable_desks_are_skipped():
    rooms = [make_room()]
    desks = [
        make_desk("d1", 0, 0, "a"),
        make_desk("d2", 50, 0, None),
        make_desk("d3", 100, 0, "ghost"),
        make_desk("d4", 0, 50, "b", room_id="missing"),
        make_desk("d5", 50, 50, "c"),
    ]
    profiles = profiles_map(make_profile("a"), make_profile("b"), make_profile("c"))

    assert [d.id for d in scorable_desks(desks, {r.id: r for r in rooms}, profiles)] == ["d1", "d5"]
    pairs = build_pairs(desks, rooms, profiles, reference_date=REFERENCE_DATE)
    assert [(p.desk_a.id, p.desk_b.id) for p in pairs] == [("d1", "d5")]


def test_same_person_on_two_desks_is_not_paired_with_themselves():
    rooms = [make_room()]
    desks = [make_desk("d1", 0, 0, "a"), make_desk("d2", 50, 0, "a"), make_desk("d3", 100, 0, "b")]
    profiles = profiles_map(make_profile("a"), make_profile("b"))

    pairs = build_pairs(desks, rooms, profiles, reference_date=REFERENCE_DATE)

    assert [(p.desk_a.id, p.desk_b.id) for p in pairs] == [("d1", "d3"), ("d2", "d3")]


def test_empty_floor():
    pairs = build_pairs([make_desk("d1", 0, 0)], [make_room()], {}, reference_date=REFERENCE_DATE)

    assert pairs == []
    assert desk_scores(pairs) == {}
    assert global_average(pairs) == 0.0
    report = summarize_pairs(pairs)
    assert report.pair_count == 0
    assert report.global_average == 0.0
    assert report.critical_pairs == []


def test_input_is_not_mutated(square_floor):
    desks, rooms, profiles = square_floor
    before = [d.model_dump() for d in desks]

    build_pairs(desks, rooms, profiles, reference_date=REFERENCE_DATE)

    assert [d.model_dump() for d in desks] == before


def test_summarize_pairs():
    rooms = [make_room()]
    desks = [make_desk("d1", 0, 0, "a"), make_desk("d2", 60, 0, "b"), make_desk("d3", 120, 0, "c")]
    profiles = profiles_map(
        make_profile("a", collaboration_profile=collab(member_link("b", 100, 5))),
        make_profile("b", risk_factors=["Micromanagement", "Burnout"],
                     collaboration_profile=collab(impact=5, fluidity=1)),
        make_profile("c", soft_skills=["Focus"], risk_factors=["Needs autonomy", "Burnout"],
                     collaboration_profile=collab(impact=5, fluidity=5)),
    )
    pairs = build_pairs(desks, rooms, profiles, reference_date=REFERENCE_DATE)

    report = summarize_pairs(pairs, max_insights=2)

    assert report.pair_count == 3
    assert report.global_average == round(global_average(pairs), 1)
    assert report.excellent_count == sum(1 for p in pairs if p.result.level == ProximityLevel.EXCELLENT)
    assert report.poor_count == sum(1 for p in pairs if p.result.level == ProximityLevel.POOR)
    assert len(report.top_insights) == 2
    assert report.top_insights[0].score == pairs[0].score
    assert [p.score for p in report.critical_pairs] == sorted(
        p.score for p in pairs if p.result.level == ProximityLevel.POOR
    )


def _fixed_pair(desk_a, desk_b, score):
    breakdown = ProximityBreakdown(**{name: 50 for name in ProximityBreakdown.model_fields})
    return ScoredPair(
        desk_a=DeskRef(id=desk_a, label=desk_a.upper(), x=0, y=0, room_id="room1"),
        desk_b=DeskRef(id=desk_b, label=desk_b.upper(), x=0, y=0, room_id="room1"),
        person_a=make_profile(f"p-{desk_a}"),
        person_b=make_profile(f"p-{desk_b}"),
        distance=50,
        result=ProximityResult(score=score, breakdown=breakdown, level=score_to_level(score)),
    )


def test_report_lists_best_excellent_pairs():
    pairs = [
        _fixed_pair("d1", "d2", 81),
        _fixed_pair("d3", "d4", 95),
        _fixed_pair("d5", "d6", 79),
        _fixed_pair("d7", "d8", 88),
        _fixed_pair("d9", "d10", 90),
        _fixed_pair("d11", "d12", 20),
    ]

    report = summarize_pairs(pairs)

    assert report.excellent_count == 4
    assert [p.score for p in report.top_pairs] == [95, 90, 88]
    assert [p.score for p in report.critical_pairs] == [20]
    assert summarize_pairs(pairs, max_top=1).top_pairs[0].desk_a.id == "d3"
