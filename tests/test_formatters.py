"""Tests for report output formatters."""

import json

import pytest
from rich.console import Console

from animation_inspector.capture.models import SvgPayload
from animation_inspector.formatters import (
    JsonFormatter,
    MarkdownFormatter,
    RichFormatter,
    get_formatter,
)
from animation_inspector.report import render_all
from animation_inspector.store import AnnotationStore
from conftest import make_snapshot


@pytest.fixture
def entries():
    store = AnnotationStore()
    store.add(make_snapshot(element_id="hero", opacity="0.5"), "slower")
    store.add(make_snapshot(tag_name="path", svg_payload=SvgPayload("path", "M0 0")), "")
    return store.list()


class TestGetFormatter:
    @pytest.mark.parametrize(
        "name,cls",
        [("markdown", MarkdownFormatter), ("rich", RichFormatter), ("json", JsonFormatter)],
    )
    def test_known(self, name, cls):
        assert isinstance(get_formatter(name), cls)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("html")


class TestMarkdownFormatter:
    def test_format_matches_report(self, entries):
        assert MarkdownFormatter().format(entries, "Review") == render_all(entries, "Review")

    def test_render_prints(self, entries, capsys):
        MarkdownFormatter().render(entries)
        assert capsys.readouterr().out == render_all(entries)


class TestJsonFormatter:
    def test_structure(self, entries):
        data = json.loads(JsonFormatter().format(entries, "Review"))
        assert data["title"] == "Review"
        assert [a["id"] for a in data["annotations"]] == ["ann-1", "ann-2"]
        assert data["annotations"][1]["note"] == "(no note)"
        snapshot = data["annotations"][0]["snapshot"]
        assert snapshot["element_id"] == "hero"
        assert snapshot["computed_styles"]["opacity"] == "0.5"


class TestRichFormatter:
    def test_format_contains_entries(self, entries):
        formatter = RichFormatter(console=Console(width=100, color_system=None))
        text = formatter.format(entries, "Review")
        assert "Review" in text
        assert "2 annotations" in text
        assert "Annotation 1" in text
        assert "slower" in text
