"""Tests for the collaboration flow graph."""

import pytest

from spacesync.core.flow import (
    build_flow_connections,
    count_missing_targets,
    distant_collaborators,
    summarize_flow,
)

from conftest import (
    collab,
    make_desk,
    make_profile,
    make_room,
    member_link,
    profiles_map,
    team_link,
)


def _floor(*seats, width=1000):
    """seats: (desk_id, x, member_id)"""
    rooms = [make_room(width=width)]
    desks = [make_desk(desk_id, x, 0, member_id) for desk_id, x, member_id in seats]
    return desks, rooms


def test_two_directions_merge_into_one_connection():
    desks, rooms = _floor(("d1", 0, "alice"), ("d2", 100, "bob"))
    profiles = profiles_map(
        make_profile("alice", collaboration_profile=collab(member_link("bob", 20, 3))),
        make_profile("bob", collaboration_profile=collab(member_link("alice", 15, 4))),
    )

    connections = build_flow_connections(desks, rooms, profiles)

    assert len(connections) == 1
    conn = connections[0]
    assert conn.key == "alice::bob"
    assert (conn.member_a_id, conn.member_b_id) == ("alice", "bob")
    assert (conn.desk_a_id, conn.desk_b_id) == ("d1", "d2")
    assert (conn.pct_ab, conn.affinity_ab) == (20, 3)
    assert (conn.pct_ba, conn.affinity_ba) == (15, 4)
    assert conn.bidirectional
    assert conn.strongest_percentage == 20
    assert conn.strongest_affinity == 4
    assert conn.distance == pytest.approx(100)
    assert conn.position_a == (16.0, 16.0)


def test_one_sided_declaration_is_not_bidirectional():
    desks, rooms = _floor(("d1", 0, "alice"), ("d2", 100, "bob"))
    profiles = profiles_map(
        make_profile("alice", collaboration_profile=collab(member_link("bob", 30), member_link("bob", 25))),
        make_profile("bob"),
    )

    conn = build_flow_connections(desks, rooms, profiles)[0]

    assert conn.pct_ab == 30
    assert conn.pct_ba == 0
    assert not conn.bidirectional


def test_key_is_order_independent():
    desks, rooms = _floor(("d1", 0, "zoe"), ("d2", 100, "adam"))
    profiles = profiles_map(
        make_profile("zoe", collaboration_profile=collab(member_link("adam", 40))),
        make_profile("adam"),
    )

    conn = build_flow_connections(desks, rooms, profiles)[0]

    assert conn.key == "adam::zoe"
    assert conn.member_a_id == "zoe"


def test_team_link_fans_out_to_members():
    desks, rooms = _floor(("d1", 0, "alice"), ("d2", 100, "bob"), ("d3", 200, "carol"))
    profiles = profiles_map(
        make_profile("alice", collaboration_profile=collab(
            team_link("t1", 50, {"bob": 60, "carol": 40}, affinity=2, overrides={"carol": 5})
        )),
        make_profile("bob"),
        make_profile("carol"),
    )

    by_key = {c.key: c for c in build_flow_connections(desks, rooms, profiles)}

    assert by_key["alice::bob"].pct_ab == 30
    assert by_key["alice::bob"].affinity_ab == 2
    assert by_key["alice::carol"].pct_ab == 20
    assert by_key["alice::carol"].affinity_ab == 5


def test_team_shares_below_noise_floor_are_dropped():
    desks, rooms = _floor(("d1", 0, "alice"), ("d2", 100, "bob"), ("d3", 200, "carol"))
    profiles = profiles_map(
        make_profile("alice", collaboration_profile=collab(team_link("t1", 10, {"bob": 20, "carol": 30}))),
        make_profile("bob"),
        make_profile("carol"),
    )

    connections = build_flow_connections(desks, rooms, profiles)

    assert [c.key for c in connections] == ["alice::carol"]
    assert connections[0].pct_ab == 3


def test_repeated_direction_keeps_the_maximum():
    desks, rooms = _floor(("d1", 0, "alice"), ("d2", 100, "bob"))
    profiles = profiles_map(
        make_profile("alice", collaboration_profile=collab(
            member_link("bob", 10, 5),
            team_link("t1", 50, {"bob": 60}, affinity=2),
        )),
        make_profile("bob"),
    )

    conn = build_flow_connections(desks, rooms, profiles)[0]

    assert conn.pct_ab == 30
    assert conn.affinity_ab == 5


def test_unseated_targets_are_counted_as_missing():
    desks, rooms = _floor(("d1", 0, "alice"), ("d2", 100, "bob"))
    profiles = profiles_map(
        make_profile("alice", collaboration_profile=collab(
            member_link("bob", 10), member_link("remote", 40), member_link("alice", 5),
        )),
        make_profile("bob"),
    )

    assert len(build_flow_connections(desks, rooms, profiles)) == 1
    assert count_missing_targets(desks, rooms, profiles) == 1


class TestDistantCollaborators:
    def _connection(self, distance_x, pct):
        desks, rooms = _floor(("d1", 0, "alice"), ("d2", distance_x, "bob"))
        profiles = profiles_map(
            make_profile("alice", collaboration_profile=collab(member_link("bob", pct))),
            make_profile("bob"),
        )
        return build_flow_connections(desks, rooms, profiles)

    def test_heavy_collaborators_far_apart(self):
        assert len(distant_collaborators(self._connection(300, 30))) == 1

    def test_light_collaboration_is_ignored(self):
        assert distant_collaborators(self._connection(300, 15)) == []

    def test_close_collaborators_are_fine(self):
        assert distant_collaborators(self._connection(150, 30)) == []

    def test_threshold_is_exclusive_for_alerts(self):
        assert distant_collaborators(self._connection(200, 20)) == []
        assert len(distant_collaborators(self._connection(201, 20))) == 1


def test_summarize_flow():
    desks, rooms = _floor(("d1", 0, "alice"), ("d2", 100, "bob"), ("d3", 600, "carol"))
    profiles = profiles_map(
        make_profile("alice", collaboration_profile=collab(member_link("bob", 10, 2), member_link("carol", 40, 5))),
        make_profile("bob", collaboration_profile=collab(member_link("alice", 15, 4), member_link("dave", 50))),
        make_profile("carol"),
    )

    report = summarize_flow(desks, rooms, profiles)

    assert report.connection_count == 2
    assert [c.key for c in report.connections] == ["alice::carol", "alice::bob"]
    assert report.average_percentage == 28
    assert report.average_affinity == 4.5
    assert report.bidirectional_count == 1
    assert report.missing_count == 1
    assert [c.key for c in report.distant_collaborators] == ["alice::carol"]


def test_summarize_empty_floor():
    desks, rooms = _floor(("d1", 0, None))

    report = summarize_flow(desks, rooms, {})

    assert report.connection_count == 0
    assert report.average_percentage == 0
    assert report.average_affinity == 0.0
    assert report.distant_collaborators == []
