"""Tests for the single-line text editor."""
import pytest
from business_logic.keys import Key, KeyEvent, Modifier, parse_key
from business_logic.line_editor import EditorAction, LineEditor, delete_last_word


def at(text, cursor):
    return LineEditor(text, cursor)


class TestConstruction:
    """Test cursor placement on construction."""

    def test_cursor_defaults_to_end(self):
        assert LineEditor("hello").cursor == 5

    def test_empty_editor(self):
        editor = LineEditor()
        assert editor.text == ""
        assert editor.cursor == 0

    def test_cursor_is_clamped(self):
        assert at("abc", 10).cursor == 3
        assert at("abc", -4).cursor == 0


class TestInsertAndDelete:
    """Test character insertion and deletion at the cursor."""

    def test_insert_at_cursor(self):
        editor = at("held", 3).insert("l")
        assert editor.text == "helld"
        assert editor.cursor == 4

    def test_insert_multiple_characters_advances_by_length(self):
        editor = at("ad", 1).insert("bc")
        assert editor.text == "abcd"
        assert editor.cursor == 3

    def test_insert_drops_control_characters(self):
        editor = LineEditor("a").insert("\x1b\x7f")
        assert editor.text == "a"
        assert editor.cursor == 1

    def test_backspace_removes_previous_character(self):
        editor = at("abc", 2).backspace()
        assert editor.text == "ac"
        assert editor.cursor == 1

    def test_backspace_at_start_is_noop(self):
        editor = at("abc", 0)
        assert editor.backspace() == editor

    def test_delete_forward_removes_character_at_cursor(self):
        editor = at("abc", 1).delete_forward()
        assert editor.text == "ac"
        assert editor.cursor == 1

    def test_delete_forward_at_end_is_noop(self):
        editor = LineEditor("abc")
        assert editor.delete_forward() == editor


class TestCursorMovement:
    """Test single-step and word-wise cursor movement."""

    def test_move_left_and_right_are_clamped(self):
        assert at("ab", 0).move_left().cursor == 0
        assert at("ab", 2).move_right().cursor == 2
        assert at("ab", 1).move_left().cursor == 0
        assert at("ab", 1).move_right().cursor == 2

    def test_word_left_from_end(self):
        assert LineEditor("hello world").word_left().cursor == 6

    def test_word_left_skips_whitespace_first(self):
        assert at("hello   world", 8).word_left().cursor == 0

    def test_word_left_at_start_stays(self):
        assert at("hello", 0).word_left().cursor == 0

    def test_word_right_from_start(self):
        assert at("hello world", 0).word_right().cursor == 5

    def test_word_right_skips_whitespace_then_word(self):
        assert at("hello world", 5).word_right().cursor == 11

    def test_word_right_at_end_stays(self):
        assert LineEditor("hello").word_right().cursor == 5

    def test_word_jumps_on_empty_buffer(self):
        assert LineEditor().word_left().cursor == 0
        assert LineEditor().word_right().cursor == 0

    @pytest.mark.parametrize("text", ["one two  three", "  lead", "trail  ", "a b c", "x"])
    def test_word_jumps_land_on_boundaries(self, text):
        """Every landing spot is a buffer edge or a whitespace/word boundary."""
        def on_boundary(pos):
            if pos in (0, len(text)):
                return True
            return text[pos - 1].isspace() != text[pos].isspace()

        for start in range(len(text) + 1):
            assert on_boundary(at(text, start).word_left().cursor)
            assert on_boundary(at(text, start).word_right().cursor)

    def test_word_left_then_right_returns_to_boundary(self):
        editor = at("alpha beta gamma", 16).word_left().word_right()
        assert editor.cursor == 16


class TestDeleteWordBackward:
    """Test Ctrl+W word deletion."""

    def test_trailing_space_word_and_space_removed(self):
        editor = LineEditor("hello world ").delete_word_backward()
        assert editor.text == "hello"
        assert editor.cursor == 5

    def test_text_after_cursor_preserved(self):
        editor = at("foo bar baz", 7).delete_word_backward()
        assert editor.text == "foo baz"
        assert editor.cursor == 3

    def test_single_word(self):
        editor = LineEditor("word").delete_word_backward()
        assert editor.text == ""
        assert editor.cursor == 0

    def test_at_start_is_noop(self):
        editor = at("abc", 0).delete_word_backward()
        assert editor.text == "abc"
        assert editor.cursor == 0

    def test_delete_last_word_helper(self):
        assert delete_last_word("hello world ") == "hello"
        assert delete_last_word("") == ""
        assert delete_last_word("   ") == ""


class TestHandle:
    """Test keypress interpretation."""

    def test_escape_cancels(self):
        editor = LineEditor("draft")
        result, action = editor.handle(KeyEvent(Key.ESCAPE))
        assert action is EditorAction.CANCEL
        assert result == editor

    def test_escape_with_modifier_still_cancels(self):
        _, action = LineEditor().handle(KeyEvent(Key.ESCAPE, modifiers=frozenset({Modifier.CTRL})))
        assert action is EditorAction.CANCEL

    def test_enter_submits(self):
        _, action = LineEditor("x").handle(KeyEvent(Key.ENTER))
        assert action is EditorAction.SUBMIT

    def test_submit_trims_whitespace(self):
        assert LineEditor("  buy milk  ").submit() == "buy milk"

    def test_ctrl_c_is_ignored(self):
        editor = LineEditor("abc")
        result, action = editor.handle(parse_key("ctrl+c", "\x03"))
        assert action is EditorAction.IGNORED
        assert result.text == "abc"

    def test_printable_character_inserted(self):
        result, action = LineEditor("ab").handle(parse_key("c", "c"))
        assert action is EditorAction.EDITED
        assert result.text == "abc"

    def test_space_inserted(self):
        result, _ = LineEditor("a").handle(parse_key("space", " "))
        assert result.text == "a "

    def test_ctrl_letters_not_inserted(self):
        result, action = LineEditor("ab").handle(parse_key("ctrl+a", "\x01"))
        assert action is EditorAction.IGNORED
        assert result.text == "ab"

    def test_ctrl_w_deletes_word(self):
        result, _ = LineEditor("hello world").handle(parse_key("ctrl+w", "\x17"))
        assert result.text == "hello"

    def test_ctrl_arrows_jump_words(self):
        result, _ = LineEditor("hello world").handle(parse_key("ctrl+left"))
        assert result.cursor == 6
        result, _ = result.handle(parse_key("ctrl+right"))
        assert result.cursor == 11

    def test_arrows_move_cursor(self):
        result, _ = LineEditor("ab").handle(parse_key("left"))
        assert result.cursor == 1
        result, _ = result.handle(parse_key("right"))
        assert result.cursor == 2

    def test_backspace_and_delete_keys(self):
        result, _ = LineEditor("abc").handle(parse_key("backspace", "\x7f"))
        assert result.text == "ab"
        result, _ = at("abc", 0).handle(parse_key("delete"))
        assert result.text == "bc"

    def test_unknown_key_ignored(self):
        _, action = LineEditor("a").handle(parse_key("f5"))
        assert action is EditorAction.IGNORED
