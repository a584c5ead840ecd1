"""Shared test fixtures for Animation Inspector tests."""

import json
import logging
import os

import pytest

from animation_inspector.capture.models import BoundingRect, ElementSnapshot, empty_styles
from animation_inspector.clipboard import MemoryClipboard
from animation_inspector.config import InspectorConfig
from animation_inspector.host.memory import MemoryAnimation, MemoryHost, build_host
from animation_inspector.session import SessionController


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep user/project config files and env vars out of every test."""
    for key in list(os.environ):
        if key.startswith("ANIMATION_INSPECTOR_"):
            monkeypatch.delenv(key)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo logger levels and root handlers installed by setup_logging."""
    inspector_logger = logging.getLogger("animation_inspector")
    root = logging.getLogger()
    level, root_level, handlers = inspector_logger.level, root.level, list(root.handlers)
    yield
    inspector_logger.setLevel(level)
    root.setLevel(root_level)
    root.handlers[:] = handlers


SCENE = {
    "nodes": [
        {
            "tag": "div",
            "id": "hero",
            "class": "card",
            "rect": {"x": 0, "y": 0, "width": 300, "height": 200},
            "style": {
                "opacity": "1",
                "transform": "matrix(1, 0, 0, 1, 0, 0)",
                "display": "block",
                "backgroundColor": "rgb(255, 255, 255)",
                "width": "300px",
                "margin": "0px",
                "visibility": "visible",
            },
            "source": {"file": "src/Card.svelte", "line": 11, "column": 4},
            "animations": [
                {
                    "name": "fade",
                    "play_state": "running",
                    "current_time": 400,
                    "duration": 1000,
                    "progress": 0.4,
                    "phase": "active",
                    "easing": "ease-in-out",
                }
            ],
            "children": [
                {
                    "tag": "span",
                    "id": "badge",
                    "rect": {"x": 10, "y": 10, "width": 40, "height": 20},
                    "animations": [
                        {
                            "name": "pulse",
                            "play_state": "running",
                            "current_time": 250,
                            "duration": 500,
                            "progress": 0.5,
                        },
                        {
                            "name": "spin",
                            "play_state": "paused",
                            "current_time": 100,
                            "duration": 1000,
                            "progress": 0.1,
                        },
                    ],
                }
            ],
        },
        {
            "tag": "svg",
            "id": "logo",
            "rect": {"x": 400, "y": 0, "width": 100, "height": 100},
            "markup": '<path d="M0 0 L10 10"/>',
            "children": [
                {
                    "tag": "path",
                    "id": "stroke",
                    "d": "M0 0 L10 10",
                    "rect": {"x": 400, "y": 0, "width": 50, "height": 50},
                    "style": {"fill": "none", "stroke": "rgb(0, 0, 0)", "stroke-width": "2px"},
                    "animations": [
                        {
                            "id": "draw",
                            "play_state": "running",
                            "current_time": 300,
                            "duration": 600,
                            "progress": 0.5,
                        }
                    ],
                }
            ],
        },
        {
            "tag": "div",
            "id": "static",
            "class": "plain  box",
            "rect": {"x": 0, "y": 300, "width": 100, "height": 100},
            "style": {"display": "none", "opacity": "1"},
        },
        {
            "tag": "div",
            "id": "settled",
            "rect": {"x": 0, "y": 500, "width": 100, "height": 100},
            "animations": [
                {"name": "done", "play_state": "finished", "current_time": 1000, "duration": 1000},
                {"name": "waiting", "play_state": "idle", "current_time": None},
            ],
        },
    ]
}


@pytest.fixture
def scene_data():
    return json.loads(json.dumps(SCENE))


@pytest.fixture
def host(scene_data) -> MemoryHost:
    return build_host(scene_data)


@pytest.fixture
def scene_file(tmp_path, scene_data):
    path = tmp_path / "scene.json"
    path.write_text(json.dumps(scene_data), encoding="utf-8")
    return path


@pytest.fixture
def clipboard():
    return MemoryClipboard()


@pytest.fixture
def multi_controller(host, clipboard):
    config = InspectorConfig(mode="multi", async_clipboard=False, clipboard="memory")
    return SessionController(host, config=config, clipboard=clipboard)


@pytest.fixture
def single_controller(host, clipboard):
    config = InspectorConfig(mode="single", async_clipboard=False, clipboard="memory")
    return SessionController(host, config=config, clipboard=clipboard)


def make_snapshot(
    tag_name="div",
    element_id=None,
    class_name=None,
    samples=(),
    svg_payload=None,
    source_location=None,
    **styles,
) -> ElementSnapshot:
    """Build a snapshot directly, filling unlisted style keys with ''."""
    computed = empty_styles()
    computed.update(styles)
    return ElementSnapshot(
        tag_name=tag_name,
        element_id=element_id,
        class_name=class_name,
        bounding_rect=BoundingRect(0, 0, 10, 10),
        computed_styles=computed,
        animation_samples=tuple(samples),
        svg_payload=svg_payload,
        source_location=source_location,
        captured_at_epoch_millis=1_700_000_000_000,
    )


def running(name="anim", **kwargs) -> MemoryAnimation:
    return MemoryAnimation(name=name, play_state="running", **kwargs)
