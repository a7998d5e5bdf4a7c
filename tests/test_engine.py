#!/usr/bin/env python3
"""
Engine Tests

End-to-end frame evaluation: alignment of outputs, statelessness and
agreement with the per-component functions.
"""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from constellation import (
    ConstellationEngine,
    LinkEdge,
    compute_frame,
    create_iridium_crosslink_config,
    propagate,
    resolve_links,
)


class TestPropagateAll:
    """Positions for the whole constellation."""

    def test_matches_single_propagation(self, iridium_engine, iridium_config):
        """propagate_all() agrees with propagate() for every satellite."""
        states = iridium_engine.propagate_all(33.3)
        assert len(states) == 66
        for state in states:
            expected = propagate(iridium_config, state.index.plane, state.index.sat, 33.3)
            np.testing.assert_allclose(state.position, expected, atol=1e-9)

    def test_flat_order(self, iridium_engine):
        """States are listed by flat index."""
        states = iridium_engine.propagate_all(0.0)
        assert [state.index.flat for state in states] == list(range(66))

    def test_engine_propagate(self, iridium_engine):
        """The engine's propagate() reproduces the regression position."""
        np.testing.assert_allclose(
            iridium_engine.propagate(0, 0, 0.0), [7151.0, 0.0, 0.0], atol=1e-9
        )

    def test_state_geometry(self, iridium_engine):
        """Radius, altitude and render-frame position of a state."""
        state = iridium_engine.propagate_all(10.0)[5]
        assert state.radius == pytest.approx(7151.0)
        assert state.altitude_above(6371.0) == pytest.approx(780.0)
        assert np.linalg.norm(state.render_position(6371.0)) == pytest.approx(7151.0 / 6371.0)


class TestComputeFrame:
    """Full pipeline output."""

    def test_outputs_are_index_aligned(self, iridium_engine):
        """Footprints line up with satellites."""
        frame = iridium_engine.compute_frame(21.0)
        assert len(frame.satellites) == len(frame.footprints) == 66
        for state, footprint in zip(frame.satellites, frame.footprints):
            assert footprint.index == state.index
            np.testing.assert_allclose(
                footprint.sub_satellite_point, state.position / np.linalg.norm(state.position)
            )

    def test_links_are_visible_edges(self, iridium_engine):
        """links is exactly the visible subset of edges."""
        frame = iridium_engine.compute_frame(64.0)
        assert len(frame.edges) == iridium_engine.comparisons_per_frame == 2145
        assert frame.links == frozenset(edge for edge in frame.edges if edge.visible)
        assert frame.link_count == len(frame.links)

    def test_matches_resolver(self, iridium_engine, iridium_config):
        """Frame links agree with resolve_links() on the same states."""
        frame = iridium_engine.compute_frame(88.8)
        assert frame.links == resolve_links(iridium_config, list(frame.satellites))

    def test_is_linked_symmetric(self, iridium_engine):
        """is_linked() ignores argument order."""
        frame = iridium_engine.compute_frame(5.0)
        for edge in frame.edges:
            assert frame.is_linked(edge.i, edge.j) == frame.is_linked(edge.j, edge.i) == edge.visible
        assert not frame.is_linked(3, 3)

    def test_links_of(self, iridium_engine):
        """links_of() lists neighbours of one satellite."""
        frame = iridium_engine.compute_frame(5.0)
        for flat in range(66):
            for other in frame.links_of(flat):
                assert frame.is_linked(flat, other)

    def test_stateless(self, iridium_engine):
        """Evaluating other times in between does not change a frame."""
        first = iridium_engine.compute_frame(12.0)
        iridium_engine.compute_frame(500.0)
        iridium_engine.compute_frame(-3.0)
        second = iridium_engine.compute_frame(12.0)
        assert first.links == second.links
        for a, b in zip(first.satellites, second.satellites):
            np.testing.assert_array_equal(a.position, b.position)

    def test_periodic_links(self, iridium_engine, iridium_config):
        """Link set repeats after one orbital period."""
        t = 37.0
        a = iridium_engine.compute_frame(t)
        b = iridium_engine.compute_frame(t + iridium_config.orbital_period)
        assert a.links == b.links

    def test_independent_engines(self, iridium_engine):
        """Two configurations evaluated side by side do not interfere."""
        crosslink = ConstellationEngine(create_iridium_crosslink_config())
        before = iridium_engine.compute_frame(40.0)
        crosslink.compute_frame(40.0)
        after = iridium_engine.compute_frame(40.0)
        assert before.links == after.links

    def test_module_level_compute_frame(self, iridium_config, iridium_engine):
        """compute_frame() matches an engine's result."""
        assert compute_frame(iridium_config, 9.0).links == iridium_engine.compute_frame(9.0).links

    def test_frame_at_wall_clock(self, iridium_engine):
        """frame_at() evaluates the UTC time of day in minutes."""
        moment = datetime(2024, 3, 1, 1, 30, 30, tzinfo=timezone.utc)
        frame = iridium_engine.frame_at(moment)
        assert frame.elapsed_minutes == pytest.approx(90.5)

    def test_summary(self, iridium_engine):
        """Frame summary reports counts and link distance range."""
        config = iridium_engine.config.with_overrides(max_link_distance=4100.0)
        frame = ConstellationEngine(config).compute_frame(0.0)
        summary = frame.summary()
        assert summary["num_satellites"] == 66
        assert summary["candidate_pairs"] == 2145
        assert summary["visible_links"] == frame.link_count > 0
        assert summary["max_link_distance"] <= 4100.0

    def test_summary_without_links(self, iridium_engine):
        """Distance range is None when nothing is linked."""
        config = iridium_engine.config.with_overrides(max_link_distance=0.0)
        summary = ConstellationEngine(config).compute_frame(0.0).summary()
        assert summary["visible_links"] == 0
        assert summary["min_link_distance"] is None


class TestEngine:
    """Engine construction and reporting."""

    def test_one_orbit_per_plane(self, iridium_engine):
        """Orbits are built once per plane."""
        assert len(iridium_engine.orbits) == 6
        assert iridium_engine.num_satellites == 66

    def test_default_config(self):
        """Without a configuration the Iridium defaults are used."""
        assert ConstellationEngine().num_satellites == 66

    def test_get_summary(self, iridium_engine):
        """Engine summary exposes configuration and cost."""
        summary = iridium_engine.get_summary()
        assert summary["comparisons_per_frame"] == 2145
        assert summary["raan_spacing_deg"] == pytest.approx(60.0)
        assert summary["link_policy"] == "distance"

    def test_logs_construction(self, iridium_config, caplog):
        """Engine creation is logged at INFO."""
        with caplog.at_level(logging.INFO, logger="constellation.engine"):
            ConstellationEngine(iridium_config)
        assert "2145 pair checks per frame" in caplog.text

    def test_frame_logged_at_debug(self, iridium_engine, caplog):
        """Each frame logs its link count at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="constellation.engine"):
            iridium_engine.compute_frame(1.0)
        assert "links visible" in caplog.text

    def test_repr(self, iridium_engine):
        """repr mentions the satellite count."""
        assert "satellites=66" in repr(iridium_engine)

    def test_link_edge_lookup(self, iridium_config):
        """A linked pair found in one frame is reported via is_linked()."""
        config = iridium_config.with_overrides(max_link_distance=4100.0)
        frame = ConstellationEngine(config).compute_frame(0.0)
        assert LinkEdge.between(1, 0) in frame.links
        assert frame.is_linked(1, 0)
