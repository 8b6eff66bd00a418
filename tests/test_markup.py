"""Tests for Pango markup rendering (markup.py)."""

import pytest

from jenkinsbar.config import TrackedGroup
from jenkinsbar.markup import (
    SEPARATOR,
    SPACE,
    GroupSummary,
    StyledText,
    render,
    render_all,
    render_group,
)

LABEL_CI = "<span foreground='white' background='black'>CI</span>"
GREY_CI = "<span foreground='grey' background='black'>CI</span>"


def test_render_defaults():
    assert render(StyledText("hi")) == "<span foreground='white' background='black'>hi</span>"


def test_render_colors():
    styled = StyledText("b #12", background="red")
    assert render(styled) == "<span foreground='white' background='red'>b #12</span>"
    assert render(StyledText("x", foreground="#00FF00")).startswith("<span foreground='#00FF00'")


def test_render_escapes_text():
    assert render(StyledText("a<b> & c")) == (
        "<span foreground='white' background='black'>a&lt;b&gt; &amp; c</span>"
    )


def test_styled_text_is_immutable():
    styled = StyledText("x")
    with pytest.raises(AttributeError):
        styled.text = "y"


class TestRenderGroup:
    @pytest.fixture
    def ci(self):
        return TrackedGroup(endpoint="https://ci.example.org", name="CI", job_ids=("a", "b"))

    def test_connected_without_fragments(self, ci):
        assert render_group(ci, GroupSummary(connected=True)) == LABEL_CI

    def test_disconnected_is_grey(self, ci):
        assert render_group(ci, GroupSummary(connected=False)) == GREY_CI

    def test_fragments_joined_by_pipes(self, ci):
        fragments = (
            StyledText("a #1", background="blue"),
            StyledText("b #2", background="red"),
            StyledText("c #3", background="red"),
        )
        out = render_group(ci, GroupSummary(connected=True, fragments=fragments))
        assert out.startswith(LABEL_CI + SPACE)
        assert out.count(SEPARATOR) == 2
        assert out.count(SPACE) == 1
        assert out.endswith(render(fragments[-1]))


class TestRenderAll:
    def test_empty(self):
        assert render_all([]) == ""

    def test_groups_joined_by_one_space(self):
        one = TrackedGroup(endpoint="https://a", name="A")
        two = TrackedGroup(endpoint="https://b", name="B")
        out = render_all([(one, GroupSummary(True)), (two, GroupSummary(False))])
        assert out == (
            "<span foreground='white' background='black'>A</span>"
            + SPACE
            + "<span foreground='grey' background='black'>B</span>"
        )

    def test_deterministic(self):
        group = TrackedGroup(endpoint="https://a", name="A", job_ids=("x",))
        summary = GroupSummary(True, (StyledText("x #1", background="red"),))
        pairs = [(group, summary)]
        assert render_all(pairs) == render_all(pairs)
        assert summary == GroupSummary(True, (StyledText("x #1", background="red"),))
