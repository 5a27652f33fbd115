"""Tests for the centered mode controller."""

from unittest.mock import patch

from centerpiece.body_width import Columns, Fraction
from centerpiece.config import ModeConfig
from centerpiece.constants import ModeConstants
from centerpiece.events import WindowEvent
from centerpiece.host import WindowHost
from centerpiece.mode import CenteredMode, StatusLineState


class FakeHost(WindowHost):
    """Records every call centered mode makes."""

    def __init__(self, width=100):
        super().__init__()
        self.width = width
        self.margins = None
        self.status_visible = True
        self.messages = []
        self.calls = []

    @property
    def window_width(self):
        return self.width

    def apply_window_margins(self, left, right):
        self.margins = (left, right)
        self.calls.append(('apply', left, right))

    def reset_window_margins(self):
        self.margins = None
        self.calls.append(('reset',))

    def set_status_line_visible(self, visible):
        self.status_visible = visible
        self.calls.append(('status', visible))

    def request_redraw(self):
        self.calls.append(('redraw',))

    def show_message(self, text):
        self.messages.append(text)


def test_activate_applies_margins():
    host = FakeHost(100)
    mode = CenteredMode(host)
    mode.activate()

    assert mode.active
    assert host.margins == (17, 17)
    assert mode.last_margin == 17
    assert host.calls[-1] == ('redraw',)


def test_activate_twice_subscribes_once():
    host = FakeHost()
    mode = CenteredMode(host)
    mode.activate()
    mode.activate()
    assert host.events.subscriber_count(WindowEvent.RESIZE) == 1
    assert host.events.subscriber_count(WindowEvent.FONT_METRICS_CHANGED) == 1


def test_resize_recomputes_from_host_width():
    host = FakeHost(100)
    mode = CenteredMode(host)
    mode.activate()

    host.width = 80
    host.on_window_resize(80)
    assert host.margins == (7, 7)


def test_font_metrics_change_recomputes():
    host = FakeHost(100)
    mode = CenteredMode(host, ModeConfig(body_width=Fraction(0.5)))
    mode.activate()
    assert host.margins == (25, 25)

    # Bigger font: fewer columns fit in the same window
    host.width = 60
    host.on_font_metrics_changed()
    # 40 / 60 = 0.67 beats 0.5 -> body 40.2 columns
    assert host.margins == (10, 10)


def test_deactivate_restores_defaults():
    host = FakeHost(100)
    mode = CenteredMode(host, ModeConfig(hide_status_line=True))
    mode.activate()
    assert host.status_visible is False

    mode.deactivate()
    assert not mode.active
    assert host.margins is None
    assert host.status_visible is True
    assert mode.status_line is StatusLineState.SHOWN
    assert mode.last_margin is None
    assert host.events.subscriber_count(WindowEvent.RESIZE) == 0
    assert host.calls[-1] == ('redraw',)


def test_events_after_deactivate_are_ignored():
    host = FakeHost(100)
    mode = CenteredMode(host)
    mode.activate()
    mode.deactivate()
    host.calls.clear()

    host.width = 80
    host.on_window_resize(80)
    host.on_font_metrics_changed()
    assert host.calls == []


def test_deactivate_when_inactive_does_nothing():
    host = FakeHost()
    mode = CenteredMode(host)
    mode.deactivate()
    assert host.calls == []


def test_toggle():
    host = FakeHost()
    mode = CenteredMode(host)
    assert mode.toggle() is True
    assert mode.toggle() is False
    assert host.margins is None


def test_invalid_width_falls_back_to_default():
    host = FakeHost(100)
    mode = CenteredMode(host, ModeConfig(body_width="abc"))
    mode.activate()

    assert mode.config.body_width == Columns(66)
    assert host.margins == (17, 17)
    assert host.messages == [ModeConstants.INVALID_BODY_WIDTH_MESSAGE]


def test_raw_column_count_is_accepted():
    host = FakeHost(100)
    mode = CenteredMode(host, ModeConfig(body_width=66))
    mode.activate()

    assert mode.config.body_width == Columns(66)
    assert host.margins == (17, 17)
    assert host.messages == []


def test_invalid_minimum_width_falls_back_to_default():
    host = FakeHost(100)
    mode = CenteredMode(host, ModeConfig(minimum_body_width=0))
    mode.activate()

    assert mode.config.minimum_body_width == ModeConstants.DEFAULT_MINIMUM_BODY_WIDTH
    assert host.margins == (17, 17)
    assert host.messages == [ModeConstants.INVALID_MINIMUM_WIDTH_MESSAGE]


def test_diagnostics_shown_once():
    host = FakeHost(100)
    mode = CenteredMode(host, ModeConfig(body_width="abc"))
    mode.activate()
    mode.deactivate()
    mode.activate()
    assert host.messages == [ModeConstants.INVALID_BODY_WIDTH_MESSAGE]


def test_unresolved_margin_leaves_margins_untouched():
    host = FakeHost(100)
    mode = CenteredMode(host)
    with patch('centerpiece.mode.compute_margin', return_value=None):
        mode.activate()

    assert host.margins is None
    assert not any(call[0] == 'apply' for call in host.calls)
    assert host.messages == [ModeConstants.INVALID_BODY_WIDTH_MESSAGE]


def test_status_line_toggle_transitions():
    host = FakeHost()
    mode = CenteredMode(host)
    mode.activate()
    host.calls.clear()

    assert mode.toggle_status_line() is StatusLineState.HIDDEN
    assert host.calls == [('status', False), ('redraw',)]
    assert mode.config.hide_status_line is True

    host.calls.clear()
    assert mode.toggle_status_line() is StatusLineState.SHOWN
    assert host.calls == [('status', True), ('redraw',)]
    assert mode.config.hide_status_line is False


def test_status_line_not_hidden_by_default():
    host = FakeHost()
    mode = CenteredMode(host)
    mode.activate()
    assert not any(call[0] == 'status' for call in host.calls)
    assert mode.status_line is StatusLineState.SHOWN


def test_set_body_width():
    host = FakeHost(100)
    mode = CenteredMode(host)
    mode.activate()

    assert mode.set_body_width("0.6") is True
    assert mode.config.body_width == Fraction(0.6)
    assert host.margins == (20, 20)


def test_set_body_width_invalid_keeps_current():
    host = FakeHost(100)
    mode = CenteredMode(host)
    mode.activate()

    assert mode.set_body_width("abc") is False
    assert mode.config.body_width == Columns(66)
    assert host.margins == (17, 17)
    assert host.messages == [ModeConstants.INVALID_BODY_WIDTH_MESSAGE]


def test_set_body_width_while_inactive_does_not_apply():
    host = FakeHost(100)
    mode = CenteredMode(host)
    mode.set_body_width(80)
    assert mode.config.body_width == Columns(80)
    assert host.calls == []


def test_expand_and_shrink():
    host = FakeHost(100)
    mode = CenteredMode(host)
    mode.activate()

    mode.expand()
    assert mode.config.body_width == Columns(68)
    assert host.margins == (16, 16)

    mode.shrink(2)
    assert mode.config.body_width == Columns(64)
    assert host.margins == (18, 18)


def test_config_changes_are_reported():
    host = FakeHost()
    seen = []
    mode = CenteredMode(host, on_config_changed=seen.append)
    mode.activate()
    assert seen == []

    mode.expand()
    mode.toggle_status_line()
    assert [config.body_width for config in seen] == [Columns(68), Columns(68)]
    assert seen[-1].hide_status_line is True


def test_original_config_is_not_mutated():
    host = FakeHost()
    config = ModeConfig()
    mode = CenteredMode(host, config)
    mode.expand()
    assert config.body_width == Columns(66)
    assert mode.config is not config


def test_window_as_wide_as_minimum():
    host = FakeHost(40)
    mode = CenteredMode(host, ModeConfig(body_width=Fraction(0.5), minimum_body_width=40))
    mode.activate()
    assert host.margins == (0, 0)
