"""
Tests for the presentation adapter.

Tests:
    - Press edges spawn exactly one ring
    - Draw commands mirror the ring snapshot
    - Rendering onto an off-screen surface
"""

import logging

import pygame
import pytest

import config
import draw
from draw import DrawCommand, PresentationAdapter
from rings import Point, Ring, RingDirection, RingSet


@pytest.fixture
def adapter(rng):
    return PresentationAdapter(RingSet(rng=rng))


class TestPointerEdges:
    """Tests for PresentationAdapter.handle_pointer."""

    def test_press_spawns_at_position(self, adapter):
        assert adapter.handle_pointer(True, (12, 34)) == 0
        (ring,) = adapter.ring_set.snapshot()
        assert ring.origin == Point(12.0, 34.0)

    def test_held_button_spawns_once(self, adapter):
        adapter.handle_pointer(True, (5, 5))
        for _ in range(10):
            assert adapter.handle_pointer(True, (5, 5)) is None
            adapter.ring_set.step()
        assert len(adapter.ring_set) == 1

    def test_release_does_not_spawn(self, adapter):
        adapter.handle_pointer(True, (5, 5))
        assert adapter.handle_pointer(False, (5, 5)) is None
        assert len(adapter.ring_set) == 1

    def test_one_ring_per_press(self, adapter):
        for _ in range(3):
            adapter.handle_pointer(True, (8, 8))
            adapter.handle_pointer(False, (8, 8))
        assert len(adapter.ring_set) == 3

    def test_initial_release_is_ignored(self, adapter):
        assert adapter.handle_pointer(False, (1, 1)) is None
        assert len(adapter.ring_set) == 0


class TestDrawCommands:
    """Tests for PresentationAdapter.draw_commands."""

    def test_one_command_per_ring_in_order(self):
        rings = [
            Ring(Point(1.0, 2.0), radius=4.0, color=(10, 20, 210)),
            Ring(Point(30.0, 40.0), radius=1.5, color=(0, 0, 254)),
        ]
        adapter = PresentationAdapter(RingSet(rings))
        assert adapter.draw_commands() == [
            DrawCommand((1.0, 2.0), 4.0, (10, 20, 210), 3),
            DrawCommand((30.0, 40.0), 1.5, (0, 0, 254), 3),
        ]

    def test_negative_radius_is_clamped(self):
        ring = Ring(Point(), radius=-0.5, direction=RingDirection.GROWING)
        adapter = PresentationAdapter(RingSet([ring]))
        assert adapter.draw_commands()[0].radius == 0.0

    def test_commands_do_not_touch_rings(self):
        ring_set = RingSet([Ring(Point(), radius=-0.5)])
        PresentationAdapter(ring_set).draw_commands()
        assert ring_set.snapshot()[0].radius == -0.5


class TestRender:
    """Tests for PresentationAdapter.render."""

    def test_background_and_outline(self):
        ring = Ring(Point(50.0, 50.0), radius=20.0, color=(255, 0, 220))
        adapter = PresentationAdapter(RingSet([ring]))
        surface = pygame.Surface((100, 100))
        adapter.render(surface)

        assert tuple(surface.get_at((50, 50)))[:3] == (0, 0, 0)
        assert tuple(surface.get_at((68, 50)))[:3] == (255, 0, 220)
        assert tuple(surface.get_at((2, 2)))[:3] == (0, 0, 0)

    def test_background_follows_config_at_call_time(self, monkeypatch):
        monkeypatch.setattr(config, "BACKGROUND_COLOR", "honeydew")
        adapter = PresentationAdapter(RingSet())
        assert adapter.background == pygame.Color("honeydew")

    def test_named_background(self):
        adapter = PresentationAdapter(RingSet(), background="steelblue")
        surface = pygame.Surface((10, 10))
        adapter.render(surface)
        assert tuple(surface.get_at((5, 5)))[:3] == (70, 130, 180)


class TestMain:
    """Runs the main loop headless for a few frames."""

    @pytest.fixture(autouse=True)
    def _reset_logger(self):
        yield
        logging.getLogger("ringlife").handlers.clear()

    def test_frame_limit(self, monkeypatch, caplog):
        flips = []
        real_flip = pygame.display.flip
        monkeypatch.setattr(pygame.display, "flip", lambda: flips.append(real_flip()))
        monkeypatch.setattr(config, "FRAME_LIMIT", 3)
        monkeypatch.setattr(config, "RECORD", False)
        monkeypatch.setattr(config, "WIDTH", 64)
        monkeypatch.setattr(config, "SEED", 0)
        with caplog.at_level(logging.INFO, logger="ringlife"):
            draw.main()
        assert len(flips) == 3
        assert any("rings after 3 frames" in r.getMessage() for r in caplog.records)

    def test_recording_stops_at_frame_limit(self, monkeypatch):
        saved = {}
        monkeypatch.setattr(draw.imageio, "mimsave", lambda path, frames, fps: saved.update(frames=frames))
        monkeypatch.setattr(config, "FRAME_LIMIT", 2)
        monkeypatch.setattr(config, "RECORD", True)
        monkeypatch.setattr(config, "WIDTH", 64)
        draw.main()
        assert len(saved["frames"]) == 2
        assert saved["frames"][0].shape == (36, 64, 3)
