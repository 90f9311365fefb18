from __future__ import annotations

import pytest

from notifications.panels.showcase_panel import (
    PRESETS,
    SAVE_OK_MESSAGE,
    SUBMIT_INVALID_MESSAGE,
    SUBMIT_OK_MESSAGE,
    ToastFormController,
    ToastShowcasePanel,
    compute_validation,
    field_hint,
)


def _items(scheduler):
    return [(i.message, i.category, i.lifetime_ms) for i in scheduler.snapshot()]


@pytest.mark.parametrize(
    "username, password, errors",
    [
        ("", "", ("Username is required", "Password is required")),
        ("ab", "12345", ("Username must be at least 3 characters", "Password must be at least 6 characters")),
        ("  abc  ", "   ", ("Password is required",)),
        ("alice", "secret1", ()),
    ],
)
def test_compute_validation(username, password, errors):
    result = compute_validation(username, password)
    assert result.errors == errors
    assert result.valid is (not errors)


def test_field_hint():
    assert field_hint("", 3) == "Required"
    assert field_hint(" a ", 3) == "Must be at least 3 characters"
    assert field_hint("abc", 3) == ""


def test_submit_invalid_raises_single_error_toast(scheduler):
    ids = ToastFormController(scheduler).submit("", "")
    assert len(ids) == 1
    assert _items(scheduler) == [(SUBMIT_INVALID_MESSAGE, "error", 3000)]


def test_submit_valid_raises_success_toast(scheduler):
    ToastFormController(scheduler).submit("alice", "secret1")
    assert _items(scheduler) == [(SUBMIT_OK_MESSAGE, "success", 3000)]


def test_save_invalid_stacks_one_toast_per_error(scheduler):
    ids = ToastFormController(scheduler).save_changes("ab", "")
    assert len(ids) == 2
    assert _items(scheduler) == [
        ("Username must be at least 3 characters", "error", 5000),
        ("Password is required", "error", 5000),
    ]


def test_save_valid(scheduler, timers):
    ToastFormController(scheduler).save_changes("alice", "secret1")
    assert _items(scheduler) == [(SAVE_OK_MESSAGE, "success", 3000)]
    timers.advance(3000)
    assert scheduler.snapshot() == ()


def test_presets_match_showcase(scheduler):
    controller = ToastFormController(scheduler)
    for preset in PRESETS:
        controller.push_preset(preset)
    assert _items(scheduler) == [
        ("Operation succeeded", "success", 2000),
        ("Heads up, this is some information", "info", 3000),
        ("Something went wrong", "error", 5000),
    ]


@pytest.mark.parametrize(
    "message, duration, expected",
    [
        ("Hello", 1500, ("Hello", "warning", 1500)),
        ("   ", 2000, ("Custom toast", "warning", 2000)),
        ("Hello", 0, ("Hello", "warning", 3000)),
        ("Hello", -5, ("Hello", "warning", 3000)),
        ("Hello", "abc", ("Hello", "warning", 3000)),
        ("Hello", None, ("Hello", "warning", 3000)),
    ],
)
def test_custom_toast_fallbacks(scheduler, message, duration, expected):
    ToastFormController(scheduler).push_custom(message, "warning", duration)
    assert _items(scheduler) == [expected]


def test_panel_wires_form_to_scheduler(qapp, scheduler):
    panel = ToastShowcasePanel(scheduler)
    try:
        assert panel.username_hint.text() == "Required"
        panel.username_edit.setText("al")
        assert panel.username_hint.text() == "Must be at least 3 characters"

        panel.submit_button.click()
        assert _items(scheduler) == [(SUBMIT_INVALID_MESSAGE, "error", 3000)]

        panel.username_edit.setText("alice")
        panel.password_edit.setText("secret1")
        assert panel.password_hint.text() == ""
        panel.save_button.click()
        assert _items(scheduler)[-1] == (SAVE_OK_MESSAGE, "success", 3000)

        panel.preset_buttons[2].click()
        assert _items(scheduler)[-1] == ("Something went wrong", "error", 5000)

        panel.custom_message.setText("From the form")
        panel.custom_category.setCurrentText("neutral")
        panel.custom_duration.setValue(2500)
        panel.custom_button.click()
        assert _items(scheduler)[-1] == ("From the form", "neutral", 2500)
    finally:
        panel.deleteLater()


def test_password_toggle(qapp, scheduler):
    panel = ToastShowcasePanel(scheduler)
    try:
        panel.show_password.setChecked(True)
        assert panel.password_edit.echoMode() == panel.password_edit.EchoMode.Normal
        assert panel.show_password.text() == "Hide"
        panel.show_password.setChecked(False)
        assert panel.password_edit.echoMode() == panel.password_edit.EchoMode.Password
    finally:
        panel.deleteLater()
