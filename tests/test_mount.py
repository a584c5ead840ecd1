"""Tests for mounting the overlay into a host."""

import pytest

from animation_inspector import mount_overlay
from animation_inspector.config import InspectorConfig
from animation_inspector.exceptions import DuplicateMountError, HostError
from animation_inspector.session import SessionPhase


class TestMountOverlay:
    def test_creates_host_element(self, host, clipboard):
        controller = mount_overlay(host, clipboard=clipboard)
        assert host.has_element("animation-inspector-host")
        assert controller.mount_node is host.find("animation-inspector-host")
        assert controller.phase is SessionPhase.DISABLED

    def test_custom_element_id(self, host, clipboard):
        config = InspectorConfig(host_element_id="inspector-root")
        mount_overlay(host, config=config, clipboard=clipboard)
        assert host.has_element("inspector-root")

    def test_explicit_element_id_wins(self, host, clipboard):
        mount_overlay(host, clipboard=clipboard, element_id="second-root")
        assert host.has_element("second-root")
        assert not host.has_element("animation-inspector-host")

    def test_duplicate_mount(self, host, clipboard):
        mount_overlay(host, clipboard=clipboard)
        with pytest.raises(DuplicateMountError) as exc_info:
            mount_overlay(host, clipboard=clipboard)
        assert str(exc_info.value).startswith("animation-inspector-host element already exists")
        assert isinstance(exc_info.value, HostError)

    def test_existing_scene_id_conflicts(self, host, clipboard):
        with pytest.raises(DuplicateMountError):
            mount_overlay(host, clipboard=clipboard, element_id="hero")

    def test_overlay_element_not_hit_tested(self, host, clipboard):
        controller = mount_overlay(host, clipboard=clipboard)
        controller.enable()
        # the overlay element sits at the origin, last in document order
        assert host.node_at(0, 0) is host.find("hero")
        snapshot = controller.pick(viewport_x=0, viewport_y=0)
        assert snapshot is not None
        assert snapshot.element_id == "hero"

    def test_pick_on_overlay_element_ignored(self, host, clipboard):
        controller = mount_overlay(host, clipboard=clipboard)
        controller.enable()
        assert controller.pick(controller.mount_node) is None
        assert controller.phase is SessionPhase.IDLE
