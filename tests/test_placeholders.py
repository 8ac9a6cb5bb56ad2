"""Tests for placeholder detection."""

import pytest

from studio2md.parser.models import Role, SourceMessage
from studio2md.parser.placeholders import is_placeholder_message, is_placeholder_text


class TestIsPlaceholderText:
    @pytest.mark.parametrize("text", ["", "   ", "\n\t ", None])
    def test_blank_is_placeholder(self, text):
        assert is_placeholder_text(text) is True

    @pytest.mark.parametrize(
        "text",
        [
            "INSERT_INPUT_HERE",
            "insert_input_here",
            "  Insert_Input_Here \n",
            "INSERT_YOUR_PROMPT_HERE",
            "INSERT_USER_INPUT_HERE",
        ],
    )
    def test_known_placeholders_any_case(self, text):
        assert is_placeholder_text(text) is True

    def test_pattern_matches_anywhere(self):
        assert is_placeholder_text("Please answer: INSERT_QUESTION_HERE thanks") is True

    def test_pattern_needs_a_name_between_markers(self):
        assert is_placeholder_text("INSERT_HERE") is False

    @pytest.mark.parametrize(
        "text",
        ["Hello", "insert the input here", "INSERT_ 42 _HERE", "INSERT-INPUT-HERE"],
    )
    def test_real_text_is_kept(self, text):
        assert is_placeholder_text(text) is False


class TestIsPlaceholderMessage:
    def test_no_parts(self):
        assert is_placeholder_message(SourceMessage(role=Role.user, parts=[])) is True

    def test_all_parts_placeholders(self):
        msg = SourceMessage(role=Role.model, parts=["", "INSERT_INPUT_HERE"])
        assert is_placeholder_message(msg) is True

    def test_one_real_part_keeps_message(self):
        msg = SourceMessage(role=Role.model, parts=["INSERT_INPUT_HERE", "answer"])
        assert is_placeholder_message(msg) is False
