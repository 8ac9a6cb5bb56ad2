"""Tests for the ast-based source parser."""

import textwrap

import pytest

from studio2md.errors import NotFoundError, ShapeError, SourceSyntaxError
from studio2md.parser.extractor import AstExtractor, TextStructureExtractor
from studio2md.parser.models import Role


def _content(role, *texts):
    parts = ", ".join(f"types.Part.from_text(text={t!r})" for t in texts)
    return f"types.Content(role={role!r}, parts=[{parts}])"


def _source(*elements, config=""):
    body = ",\n    ".join(elements)
    return f"contents = [\n    {body}\n]\n{config}"


@pytest.fixture
def extractor():
    return AstExtractor()


# ---------------------------------------------------------------------------
# contents extraction
# ---------------------------------------------------------------------------


class TestExtractMessages:
    def test_sample_export(self, extractor, sample_export):
        result = extractor.parse(sample_export)

        assert [m.role for m in result.messages] == [
            Role.user,
            Role.model,
            Role.user,
            Role.model,
        ]
        assert result.messages[0].parts == ["What is a monad?"]
        assert len(result.messages[1].parts) == 2
        assert result.messages[1].parts[1] == "A monad is a way to chain computations."
        assert result.system_instruction == "You are a patient tutor."

    def test_implements_protocol(self, extractor):
        assert isinstance(extractor, TextStructureExtractor)

    def test_preserves_source_order(self, extractor):
        src = _source(
            _content("user", "one"),
            _content("model", "two"),
            _content("model", "three"),
            _content("user", "four"),
        )
        texts = [m.parts[0] for m in extractor.parse(src).messages]
        assert texts == ["one", "two", "three", "four"]

    def test_parts_kept_verbatim(self, extractor):
        src = _source(_content("user", "  padded  \n"))
        assert extractor.parse(src).messages[0].parts == ["  padded  \n"]

    def test_placeholder_parts_dropped(self, extractor):
        src = _source(_content("model", "INSERT_INPUT_HERE", "real answer"))
        assert extractor.parse(src).messages[0].parts == ["real answer"]

    def test_message_with_only_placeholders_dropped(self, extractor):
        src = _source(
            _content("user", "hi"),
            _content("user", " insert_input_here "),
            _content("model", "", "   "),
        )
        result = extractor.parse(src)
        assert len(result.messages) == 1
        assert result.messages[0].parts == ["hi"]

    def test_unknown_role_skipped(self, extractor):
        src = _source(_content("system", "x"), _content("user", "y"))
        result = extractor.parse(src)
        assert [m.parts for m in result.messages] == [["y"]]

    @pytest.mark.parametrize(
        "element",
        [
            "Content(role='user', parts=[types.Part.from_text(text='x')])",
            "other.Content(role='user', parts=[types.Part.from_text(text='x')])",
            "types.Message(role='user', parts=[types.Part.from_text(text='x')])",
            "types.Content(role=ROLE, parts=[types.Part.from_text(text='x')])",
            "types.Content(role='user', parts=(types.Part.from_text(text='x'),))",
            "types.Content(parts=[types.Part.from_text(text='x')])",
            "types.Content(role='user')",
            "{'role': 'user', 'parts': ['x']}",
            "'just a string'",
        ],
    )
    def test_malformed_elements_skipped(self, extractor, element):
        src = _source(element, _content("model", "kept"))
        result = extractor.parse(src)
        assert len(result.messages) == 1
        assert result.messages[0].parts == ["kept"]

    @pytest.mark.parametrize(
        "part",
        [
            "types.Part.from_text('positional')",
            "types.Part.from_text(text=VARIABLE)",
            "types.Part.from_text(text=f'{x}')",
            "types.Part.from_uri(file_uri='gs://a', mime_type='image/png')",
            "Part.from_text(text='two-level')",
            "'bare string'",
        ],
    )
    def test_malformed_parts_skipped(self, extractor, part):
        src = f"contents = [types.Content(role='user', parts=[{part}, types.Part.from_text(text='ok')])]"
        assert extractor.parse(src).messages[0].parts == ["ok"]

    def test_implicit_string_concatenation(self, extractor):
        src = "contents = [types.Content(role='user', parts=[types.Part.from_text(text='a' 'b')])]"
        assert extractor.parse(src).messages[0].parts == ["ab"]

    def test_nested_assignment_found(self, extractor):
        src = textwrap.dedent(
            """\
            def generate():
                if True:
                    contents = [types.Content(role="user", parts=[types.Part.from_text(text="deep")])]
            """
        )
        assert extractor.parse(src).messages[0].parts == ["deep"]

    def test_empty_list_yields_no_messages(self, extractor):
        assert extractor.parse("contents = []").messages == []

    def test_idempotent(self, extractor, sample_export):
        assert extractor.parse(sample_export) == extractor.parse(sample_export)


# ---------------------------------------------------------------------------
# errors
# ---------------------------------------------------------------------------


class TestParseErrors:
    def test_syntax_error_includes_reason(self, extractor):
        with pytest.raises(SourceSyntaxError) as exc_info:
            extractor.parse("contents = [types.Content(")
        assert str(exc_info.value).startswith("Python syntax error:")
        assert exc_info.value.reason
        assert isinstance(exc_info.value.__cause__, SyntaxError)

    def test_deeply_nested_source_is_a_syntax_error(self, extractor):
        src = "contents = [" + "1+" * 200000 + "1]"
        with pytest.raises(SourceSyntaxError) as exc_info:
            extractor.parse(src)
        assert str(exc_info.value).startswith("Python syntax error:")

    @pytest.mark.parametrize(
        ("error", "reason"),
        [
            (RecursionError("maximum recursion depth exceeded"), "maximum recursion depth exceeded"),
            (MemoryError(), "MemoryError"),
        ],
    )
    def test_compiler_limits_are_syntax_errors(self, extractor, monkeypatch, error, reason):
        def explode(source):
            raise error

        monkeypatch.setattr("studio2md.parser.extractor.ast.parse", explode)
        with pytest.raises(SourceSyntaxError) as exc_info:
            extractor.parse("contents = []")
        assert exc_info.value.reason == reason
        assert exc_info.value.__cause__ is error

    def test_missing_contents(self, extractor):
        with pytest.raises(NotFoundError, match="No contents assignment found"):
            extractor.parse("messages = [1, 2, 3]\nprint(messages)")

    def test_annotated_or_tuple_targets_not_matched(self, extractor):
        with pytest.raises(NotFoundError):
            extractor.parse("contents: list = []\na, contents = 1, []\ncontents += []")

    def test_contents_not_a_list(self, extractor):
        with pytest.raises(ShapeError, match="contents is not a list"):
            extractor.parse("contents = build_contents()")

    def test_tuple_is_not_a_list(self, extractor):
        with pytest.raises(ShapeError):
            extractor.parse("contents = (types.Content(role='user', parts=[]),)")

    def test_error_kinds(self):
        assert SourceSyntaxError("x").kind == "syntax"
        assert NotFoundError().kind == "not_found"
        assert ShapeError().kind == "shape"


# ---------------------------------------------------------------------------
# system instruction
# ---------------------------------------------------------------------------


class TestSystemInstruction:
    def _parse(self, extractor, config):
        return extractor.parse(_source(_content("user", "hi"), config=config))

    def test_list_form(self, extractor):
        cfg = "generate_content_config = types.GenerateContentConfig(system_instruction=[types.Part.from_text(text='Be brief.')])"
        assert self._parse(extractor, cfg).system_instruction == "Be brief."

    def test_string_form(self, extractor):
        cfg = "generate_content_config = types.GenerateContentConfig(system_instruction='Be kind.')"
        assert self._parse(extractor, cfg).system_instruction == "Be kind."

    def test_only_first_list_element_used(self, extractor):
        cfg = (
            "generate_content_config = types.GenerateContentConfig(system_instruction=["
            "types.Part.from_text(text='first'), types.Part.from_text(text='second')])"
        )
        assert self._parse(extractor, cfg).system_instruction == "first"

    @pytest.mark.parametrize(
        "cfg",
        [
            "",
            "generate_content_config = types.GenerateContentConfig(response_mime_type='text/plain')",
            "generate_content_config = {'system_instruction': 'x'}",
            "generate_content_config = types.GenerateContentConfig(system_instruction=[])",
            "generate_content_config = types.GenerateContentConfig(system_instruction=[Part(text='x')])",
            "generate_content_config = types.GenerateContentConfig(system_instruction=INSTR)",
            "generate_content_config = types.GenerateContentConfig(system_instruction=42)",
            "generate_content_config = types.GenerateContentConfig(system_instruction='INSERT_INPUT_HERE')",
        ],
    )
    def test_absent_or_malformed_is_none(self, extractor, cfg):
        assert self._parse(extractor, cfg).system_instruction is None

    def test_instruction_does_not_require_messages(self, extractor):
        src = (
            "contents = []\n"
            "generate_content_config = types.GenerateContentConfig(system_instruction='solo')"
        )
        result = extractor.parse(src)
        assert result.messages == []
        assert result.system_instruction == "solo"


def test_initialize_is_cheap_and_repeatable(extractor):
    extractor.initialize()
    extractor.initialize()
