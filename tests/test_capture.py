"""Tests for StateCapturer and the snapshot models."""

import dataclasses

import pytest

from animation_inspector.capture import STYLE_KEYS, Phase, StateCapturer, sample_animation
from animation_inspector.capture.models import SourceLocation
from animation_inspector.host.memory import MemoryAnimation, MemoryNode
from animation_inspector.registry import AnimationRegistry


@pytest.fixture
def capturer(host):
    return StateCapturer(host, AnimationRegistry(host), clock=lambda: 1234)


class TestCapture:
    def test_missing_node_returns_none(self, capturer):
        assert capturer.capture(None) is None

    def test_identity_fields(self, capturer, host):
        snapshot = capturer.capture(host.find("hero"))
        assert snapshot.tag_name == "div"
        assert snapshot.element_id == "hero"
        assert snapshot.class_name == "card"
        assert snapshot.captured_at_epoch_millis == 1234

    def test_class_whitespace_normalized(self, capturer, host):
        assert capturer.capture(host.find("static")).class_name == "plain box"

    def test_absent_id_and_class(self, capturer, host):
        node = host.root.append(MemoryNode("p"))
        snapshot = capturer.capture(node)
        assert snapshot.element_id is None
        assert snapshot.class_name is None

    def test_bounding_rect(self, capturer, host):
        rect = capturer.capture(host.find("badge")).bounding_rect
        assert (rect.x, rect.y, rect.width, rect.height) == (10, 10, 40, 20)

    def test_styles_hold_exactly_fixed_keys(self, capturer, host):
        styles = capturer.capture(host.find("hero")).computed_styles
        assert tuple(styles) == STYLE_KEYS
        assert styles["opacity"] == "1"
        assert styles["backgroundColor"] == "rgb(255, 255, 255)"
        assert styles["fill"] == ""

    def test_kebab_case_host_keys_accepted(self, capturer, host):
        styles = capturer.capture(host.find("stroke")).computed_styles
        assert styles["strokeWidth"] == "2px"

    def test_samples_cover_node_and_descendants(self, capturer, host):
        samples = capturer.capture(host.find("hero")).animation_samples
        assert [s.name for s in samples] == ["fade", "pulse", "spin"]
        fade = samples[0]
        assert fade.current_time == 400
        assert fade.duration == 1000
        assert fade.progress == pytest.approx(0.4)
        assert fade.phase is Phase.ACTIVE
        assert fade.play_state == "running"
        assert fade.easing == "ease-in-out"

    def test_capture_has_no_playback_side_effects(self, capturer, host):
        capturer.capture(host.find("hero"))
        for animation in host.list_animations(host.find("hero")):
            assert animation.pause_calls == 0
            assert animation.play_calls == 0

    def test_source_location_is_one_based(self, capturer, host):
        location = capturer.capture(host.find("hero")).source_location
        assert location == SourceLocation("src/Card.svelte", 12, 5)
        assert str(location) == "src/Card.svelte:12:5"

    def test_missing_source_metadata(self, capturer, host):
        assert capturer.capture(host.find("badge")).source_location is None

    def test_malformed_source_metadata(self, capturer, host):
        node = host.root.append(MemoryNode("div", source={"file": "x.svelte", "line": "?"}))
        assert capturer.capture(node).source_location is None

    def test_path_payload(self, capturer, host):
        snapshot = capturer.capture(host.find("stroke"))
        assert snapshot.svg_payload.is_path
        assert snapshot.svg_path_data == "M0 0 L10 10"

    def test_svg_root_payload(self, capturer, host):
        snapshot = capturer.capture(host.find("logo"))
        assert snapshot.svg_payload.kind == "markup"
        assert snapshot.svg_payload.value == '<path d="M0 0 L10 10"/>'
        assert snapshot.svg_path_data is None

    def test_no_payload_for_html(self, capturer, host):
        assert capturer.capture(host.find("hero")).svg_payload is None


class TestSnapshotImmutability:
    def test_fields_frozen(self, capturer, host):
        snapshot = capturer.capture(host.find("hero"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.tag_name = "span"

    def test_styles_frozen(self, capturer, host):
        snapshot = capturer.capture(host.find("hero"))
        with pytest.raises(TypeError):
            snapshot.computed_styles["opacity"] = "0"

    def test_host_changes_do_not_leak_into_snapshot(self, capturer, host):
        hero = host.find("hero")
        snapshot = capturer.capture(hero)
        hero.style["opacity"] = "0.5"
        assert snapshot.computed_styles["opacity"] == "1"

    def test_rejects_partial_style_set(self):
        from animation_inspector.capture.models import BoundingRect, ElementSnapshot

        with pytest.raises(ValueError):
            ElementSnapshot(
                tag_name="div",
                bounding_rect=BoundingRect(),
                computed_styles={"opacity": "1"},
            )

    def test_to_dict(self, capturer, host):
        data = capturer.capture(host.find("hero")).to_dict()
        assert data["source_location"] == "src/Card.svelte:12:5"
        assert data["animation_samples"][0]["phase"] == "active"


class TestSampleAnimation:
    def test_name_falls_back_to_id(self):
        assert sample_animation(MemoryAnimation(anim_id="draw")).name == "draw"

    def test_name_falls_back_to_unnamed(self):
        assert sample_animation(MemoryAnimation()).name == "unnamed"

    def test_explicit_name_wins(self):
        assert sample_animation(MemoryAnimation(name="fade", anim_id="x")).name == "fade"

    def test_progress_clamped(self):
        assert sample_animation(MemoryAnimation(progress=1.3)).progress == 1.0

    def test_nan_timing_is_unresolved(self):
        nan = float("nan")
        sample = sample_animation(
            MemoryAnimation(name="glitch", current_time=nan, duration=nan, progress=nan)
        )
        assert sample.progress is None
        assert sample.current_time is None
        assert sample.duration is None
        assert sample.phase is Phase.BEFORE

    def test_infinite_duration_kept(self):
        sample = sample_animation(MemoryAnimation(duration=float("inf"), progress=0.5))
        assert sample.duration == float("inf")

    def test_phase_derived_active(self):
        assert sample_animation(MemoryAnimation(progress=0.2)).phase is Phase.ACTIVE

    def test_phase_derived_before(self):
        sample = sample_animation(MemoryAnimation(current_time=0, progress=None))
        assert sample.phase is Phase.BEFORE

    def test_phase_derived_after(self):
        sample = sample_animation(MemoryAnimation(current_time=1200, progress=None))
        assert sample.phase is Phase.AFTER

    def test_unknown_reported_phase_is_derived(self):
        sample = sample_animation(MemoryAnimation(progress=0.5, phase="sideways"))
        assert sample.phase is Phase.ACTIVE

    def test_missing_effect_timing(self):
        class NoEffect(MemoryAnimation):
            def effect_timing(self):
                return None

        sample = sample_animation(NoEffect(name="bare", current_time=None))
        assert sample.progress is None
        assert sample.duration is None
        assert sample.easing == "linear"
        assert sample.phase is Phase.BEFORE
