"""
Basic parser tests - simplest cases

Tests text without tags, scanning, single tags, unknown tags and the
enabled switch.
"""

import pytest
from rich.color import ColorSystem

import tagtint.lib.parser as parser_module
import tagtint.lib.stack as stack_module
from tagtint.lib.parser import TagParser, parser_default, tags_parse, tagParsing_stop, tagParsing_resume
from tagtint.lib.capabilities import CapabilityRegistry
from tagtint.models.tags import CapabilityKey, Token


registry = CapabilityRegistry(color_system=ColorSystem.TRUECOLOR)


def style(name: str, background: bool = False, bright: bool = False):
    """Renderer for a key, straight from the capability table"""
    renderer = registry.get(CapabilityKey(name, background=background, bright=bright))
    assert renderer is not None
    return renderer


@pytest.fixture
def parser():
    return TagParser(registry=registry, enabled=True, marker="~")


class TestNoTags:
    """Text without markup passes straight through"""

    def test_empty_string(self, parser):
        """Empty input stays empty"""
        assert parser.parse("") == ""

    def test_plain_text(self, parser):
        """No '<' means the input is returned as is"""
        assert parser.parse("No tags") == "No tags"

    def test_plain_text_with_markers(self, parser):
        """Escape markers without tags are untouched"""
        assert parser.parse("a ~~ b ~ c > d") == "a ~~ b ~ c > d"

    def test_unclosed_bracket_is_text(self, parser):
        """A '<' with no later '>' is literal text"""
        assert parser.parse("1 < 2 and more") == "1 < 2 and more"

    def test_multiline_plain_text(self, parser):
        """Newlines are preserved"""
        assert parser.parse("Line 1\nLine 2\n") == "Line 1\nLine 2\n"


class TestScanning:
    """Test tokens_scan() splitting"""

    def test_no_tags_single_token(self, parser):
        """Text without tags is one token with no tag"""
        assert parser.tokens_scan("hello") == [Token(literal="hello", tag="")]

    def test_tag_in_middle(self, parser):
        """Literal, tag, then trailing literal"""
        assert parser.tokens_scan("a<b>c") == [
            Token(literal="a", tag="<b>"),
            Token(literal="c", tag=""),
        ]

    def test_tag_at_end_leaves_empty_trailing_token(self, parser):
        """The last token has an empty literal when text ends with a tag"""
        tokens = parser.tokens_scan("x</b>")
        assert tokens == [Token(literal="x", tag="</b>"), Token(literal="", tag="")]

    def test_group_kept_whole(self, parser):
        """A group with several names is a single tag token"""
        tokens = parser.tokens_scan("<red bg:blue bold>T")
        assert tokens[0] == Token(literal="", tag="<red bg:blue bold>")

    def test_shortest_group(self, parser):
        """A group ends at the first '>'"""
        tokens = parser.tokens_scan("<a <b>c>")
        assert tokens[0].tag == "<a <b>"
        assert tokens[1].literal == "c>"

    def test_tokens_rebuild_source(self, parser):
        """Concatenating every literal and tag gives back the input"""
        source = "Start <red>one</red> mid ~<b> <x y>\n<#123456>end</> tail <"
        tokens = parser.tokens_scan(source)
        assert "".join(t.literal + t.tag for t in tokens) == source


class TestSingleTags:
    """Single open/close pairs"""

    def test_red(self, parser):
        """Named color"""
        result = parser.parse("No tags 01 <red>Red tag</red> No tags 02")
        assert result == "No tags 01 " + style("red")("Red tag") + " No tags 02"

    def test_bold_shorthand(self, parser):
        """<b> is bold"""
        assert parser.parse("<b>Bold tag</b> No tags 02") == style("bold")("Bold tag") + " No tags 02"

    def test_italic_shorthand(self, parser):
        """<i> is italic"""
        assert parser.parse("<i>Italic tag</i> No tags 02") == style("italic")("Italic tag") + " No tags 02"

    def test_dangling_open_styles_to_end(self, parser):
        """An open tag never closed styles everything after it"""
        assert parser.parse("a <red>b c") == "a " + style("red")("b c")

    def test_close_without_open_is_noop(self, parser):
        """Closing a tag that was never opened does nothing"""
        assert parser.parse("a </red>b") == "a b"


class TestUnknownTags:
    """Unrecognized names strip their delimiters and style nothing"""

    def test_unknown_tag_removed(self, parser):
        """Unknown tag vanishes, content unchanged"""
        assert parser.parse("<sparkle>Hi</sparkle> there") == "Hi there"

    def test_balanced_unknown_tags(self, parser):
        """Balanced unknown tags leave only the text between them"""
        source = "<foo>one <bar baz>two</bar baz> three</foo>"
        assert parser.parse(source) == "one two three"

    def test_unknown_next_to_known(self, parser):
        """Other open tags still apply around an unknown one"""
        assert parser.parse("<red nope>X</>") == style("red")("X")

    def test_empty_group(self, parser):
        """'<>' opens an empty tag that styles nothing"""
        assert parser.parse("a<>b") == "ab"

    def test_invalid_hex(self, parser):
        """Malformed hex codes are ignored"""
        assert parser.parse("<#12zz56>X</>") == "X"


class TestEnabledSwitch:
    """stop()/resume() on a parser and through the module functions"""

    def test_stop_returns_input(self, parser):
        """Disabled parser returns markup verbatim"""
        parser.stop()
        assert parser.parse("<red>Red tag</red> No tags") == "<red>Red tag</red> No tags"

    def test_resume_restores_parsing(self, parser):
        """Resumed parser styles again"""
        parser.stop()
        parser.resume()
        assert parser.parse("<red>Red tag</red> No tags") == style("red")("Red tag") + " No tags"

    def test_disabled_at_construction(self):
        """enabled=False starts disabled"""
        assert TagParser(registry=registry, enabled=False).parse("<b>x</b>") == "<b>x</b>"

    def test_parsers_are_independent(self, parser):
        """Stopping one parser does not affect another"""
        other = TagParser(registry=registry, enabled=True)
        parser.stop()
        assert other.parse("<b>x</b>") == style("bold")("x")

    def test_module_functions(self):
        """tagParsing_stop/resume act on an explicit parser"""
        target = TagParser(registry=registry, enabled=True)
        tagParsing_stop(target)
        assert tags_parse("<red>Red tag</red> No tags", target) == "<red>Red tag</red> No tags"
        tagParsing_resume(target)
        assert tags_parse("<red>Red tag</red> No tags", target) == style("red")("Red tag") + " No tags"

    def test_callable(self, parser):
        """Parsers can be called directly"""
        assert parser("<b>x</b>") == parser.parse("<b>x</b>")

    def test_bad_marker_rejected(self):
        """The escape marker must be one character"""
        with pytest.raises(ValueError):
            TagParser(registry=registry, marker="~~")


@pytest.fixture
def default_parser(monkeypatch):
    """A fresh module default parser, dropped again after the test"""
    monkeypatch.setattr(parser_module, "_default_parser", None)
    target = parser_default()
    target.registry = registry
    target.resume()
    return target


class TestDefaultParser:
    """Module functions called without a parser"""

    def test_created_once(self, default_parser):
        assert parser_default() is default_parser

    def test_tags_parse(self, default_parser):
        assert tags_parse("<b>x</b>") == style("bold")("x")

    def test_stop_and_resume(self, default_parser):
        """Stopping the default parser makes tags_parse verbatim until resumed"""
        tagParsing_stop()
        assert not default_parser.enabled
        assert tags_parse("<b>x</b>") == "<b>x</b>"
        tagParsing_resume()
        assert default_parser.enabled
        assert tags_parse("<b>x</b>") == style("bold")("x")

    def test_explicit_parser_unaffected(self, default_parser):
        target = TagParser(registry=registry, enabled=True)
        tagParsing_stop()
        assert tags_parse("<b>x</b>", target) == style("bold")("x")


class TestDebugLogging:
    """Per token and per group debug messages"""

    @pytest.fixture
    def logged(self, monkeypatch):
        messages = []

        def record(message, level=1, **kwargs):
            messages.append(message)

        monkeypatch.setattr(parser_module, "LOG", record)
        monkeypatch.setattr(stack_module, "LOG", record)
        return messages

    def verbosity_set(self, monkeypatch, level):
        monkeypatch.setattr(parser_module, "verbosity_get", lambda: level)
        monkeypatch.setattr(stack_module, "verbosity_get", lambda: level)

    def test_quiet_builds_no_messages(self, parser, logged, monkeypatch):
        self.verbosity_set(monkeypatch, 0)
        parser.parse("<red>a</red> b")
        assert logged == []

    def test_debug_logs_tokens_and_stack(self, parser, logged, monkeypatch):
        self.verbosity_set(monkeypatch, 3)
        parser.parse("<red>a</red> b")
        assert any(message.startswith("Token ") for message in logged)
        assert "Stack after '<red>': ['red']" in logged
