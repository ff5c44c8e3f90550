import pytest

from gardenray.keyboard import Key, Keyboard, scancode_for


def test_scancode_of_escape():
    assert scancode_for(Key.ESC) == 1


def test_scancode_of_up_arrow():
    assert scancode_for(Key.UP) == 72


def test_upper_and_lower_case_share_scancode():
    assert scancode_for(ord("a")) == scancode_for(ord("A"))


def test_scancode_out_of_range():
    with pytest.raises(ValueError):
        scancode_for(256)
    with pytest.raises(ValueError):
        scancode_for(-1)


def test_press_and_release():
    kb = Keyboard()
    assert kb.is_key_down(Key.UP) is False
    kb.handle_scancode(scancode_for(Key.UP))
    assert kb.is_key_down(Key.UP) is True
    kb.handle_scancode(scancode_for(Key.UP) | 0x80)
    assert kb.is_key_down(Key.UP) is False


def test_keys_are_independent():
    kb = Keyboard()
    kb.handle_scancode(scancode_for(Key.DOWN))
    assert kb.is_key_down(Key.DOWN) is True
    assert kb.is_key_down(Key.UP) is False


def test_was_pressed_reports_once_per_press():
    kb = Keyboard()
    assert kb.was_pressed(Key.ESC) is False
    kb.handle_scancode(scancode_for(Key.ESC))
    assert kb.was_pressed(Key.ESC) is True
    assert kb.was_pressed(Key.ESC) is False
    assert kb.is_key_down(Key.ESC) is True
    kb.handle_scancode(scancode_for(Key.ESC) | 0x80)
    assert kb.was_pressed(Key.ESC) is False
    kb.handle_scancode(scancode_for(Key.ESC))
    assert kb.was_pressed(Key.ESC) is True


def test_last_scancode_recorded():
    kb = Keyboard()
    kb.handle_scancode(scancode_for(Key.LEFT) | 0x80)
    assert kb.last_scancode == scancode_for(Key.LEFT) | 0x80