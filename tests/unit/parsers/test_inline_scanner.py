#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for inline scanning, exercised through single-paragraph documents."""

import pytest

from furimark import parse


def inline(text: str, **kwargs):
    """Return the children of the single paragraph produced by ``text``."""
    result = parse(text, export="ast", **kwargs)
    assert len(result) == 1 and result[0][0] == "p", result
    return result[0][2]


@pytest.mark.unit
class TestRuby:
    """Test ruby annotation recognition."""

    def test_explicit_ruby(self) -> None:
        """Test that ｜base《reading》 becomes a ruby element."""
        assert inline("｜漢字《かんじ》") == [["ruby", None, ["漢字", ["rt", None, "かんじ"]]]]

    def test_ruby_inside_text(self) -> None:
        """Test that surrounding text is kept around the ruby element."""
        assert inline("これは｜漢字《かんじ》です") == [
            "これは",
            ["ruby", None, ["漢字", ["rt", None, "かんじ"]]],
            "です",
        ]

    def test_unterminated_ruby_is_literal(self) -> None:
        """Test that a missing 《》 pair degrades to literal text."""
        assert inline("｜漢字") == ["｜漢字"]

    def test_unclosed_reading_is_literal(self) -> None:
        """Test that a missing 》 degrades to literal text."""
        assert inline("｜漢字《かんじ") == ["｜漢字《かんじ"]

    def test_empty_reading_is_literal(self) -> None:
        """Test that an empty reading is not a ruby annotation."""
        assert inline("｜漢字《》") == ["｜漢字《》"]

    def test_reading_on_next_line_is_literal(self) -> None:
        """Test that a ruby annotation never spans a line break."""
        assert inline("｜漢字\n《かんじ》") == ["｜漢字\n《かんじ》"]
        assert inline("｜漢字《かん\nじ》") == ["｜漢字《かん\nじ》"]

    def test_later_pipe_starts_the_base(self) -> None:
        """Test that only the last ｜ before 《 marks the base text."""
        assert inline("｜a｜漢字《かんじ》") == ["｜a", ["ruby", None, ["漢字", ["rt", None, "かんじ"]]]]

    def test_many_unmatched_pipes_are_literal(self) -> None:
        """Test that a long run of unmatched ruby markers stays plain text."""
        text = "｜a" * 5000 + "\n" + "《b" * 5000
        assert inline(text) == [text]

    def test_implicit_ruby_disabled_by_default(self) -> None:
        """Test that ideographs without ｜ are plain text by default."""
        assert inline("東京《とうきょう》へ") == ["東京《とうきょう》へ"]

    def test_implicit_ruby(self) -> None:
        """Test that an ideograph run directly before 《》 is annotated when enabled."""
        assert inline("へ東京《とうきょう》へ", implicit_ruby=True) == [
            "へ",
            ["ruby", None, ["東京", ["rt", None, "とうきょう"]]],
            "へ",
        ]

    def test_implicit_ruby_without_reading(self) -> None:
        """Test that ideographs without a reading stay one text leaf."""
        assert inline("漢字です", implicit_ruby=True) == ["漢字です"]


@pytest.mark.unit
class TestEmphasis:
    """Test strong and emphasis delimiters."""

    def test_strong_with_nested_em(self) -> None:
        """Test that strong contains the nested em with surrounding text."""
        assert inline("**a *b* c**") == [["strong", None, ["a ", ["em", None, ["b"]], " c"]]]

    def test_underscore_forms(self) -> None:
        """Test that __x__ and _x_ mirror the asterisk forms."""
        assert inline("__a__ _b_") == [["strong", None, ["a"]], " ", ["em", None, ["b"]]]

    def test_triple_delimiter(self) -> None:
        """Test that ***x*** nests em inside strong."""
        assert inline("***x***") == [["strong", None, [["em", None, ["x"]]]]]

    def test_unpaired_delimiter_is_literal(self) -> None:
        """Test that an unpaired delimiter stays literal."""
        assert inline("*a") == ["*a"]
        assert inline("2 * 3 * 4") == ["2 * 3 * 4"]

    def test_delimiters_must_pair_on_one_line(self) -> None:
        """Test that delimiters on different lines do not pair."""
        assert inline("*a\nb*") == ["*a\nb*"]

    def test_intraword_underscore_is_literal(self) -> None:
        """Test that snake_case words are not emphasised."""
        assert inline("snake_case_name") == ["snake_case_name"]


@pytest.mark.unit
class TestCodeSpans:
    """Test backtick code spans."""

    def test_code_span_is_verbatim(self) -> None:
        """Test that markup inside a code span is not parsed."""
        assert inline("`a *b* <i>`") == [["code", None, "a *b* <i>"]]

    def test_double_backticks(self) -> None:
        """Test that a longer run can contain a shorter one."""
        assert inline("``a ` b``") == [["code", None, "a ` b"]]

    def test_single_space_padding_stripped(self) -> None:
        """Test that one space on each side is removed."""
        assert inline("` x `") == [["code", None, "x"]]

    def test_unmatched_backtick_is_literal(self) -> None:
        """Test that an unmatched backtick stays literal."""
        assert inline("`a") == ["`a"]


@pytest.mark.unit
class TestLinksAndImages:
    """Test links and images."""

    def test_link(self) -> None:
        """Test that the link text is scanned recursively."""
        assert inline("[a *b*](/x)") == [["a", {"href": "/x"}, ["a ", ["em", None, ["b"]]]]]

    def test_link_title(self) -> None:
        """Test that a quoted title becomes an attribute."""
        assert inline('[site](https://x.org "Home")') == [
            ["a", {"href": "https://x.org", "title": "Home"}, ["site"]]
        ]

    def test_link_with_parentheses_in_destination(self) -> None:
        """Test balanced parentheses inside the destination."""
        assert inline("[w](https://en.wikipedia.org/wiki/A_(b))") == [
            ["a", {"href": "https://en.wikipedia.org/wiki/A_(b)"}, ["w"]]
        ]

    def test_angle_bracket_destination(self) -> None:
        """Test that <...> destinations may contain spaces."""
        assert inline("[x](<a b.html>)") == [["a", {"href": "a b.html"}, ["x"]]]

    @pytest.mark.security
    def test_dangerous_link_blanked(self) -> None:
        """Test that javascript: targets are removed."""
        assert inline("[x](javascript:alert(1))") == [["a", {"href": ""}, ["x"]]]

    @pytest.mark.security
    def test_sanitization_can_be_disabled(self) -> None:
        """Test that sanitize_link_urls=False keeps the target."""
        assert inline("[x](javascript:void(0))", sanitize_link_urls=False) == [
            ["a", {"href": "javascript:void(0)"}, ["x"]]
        ]

    def test_image(self) -> None:
        """Test that images are void elements with src and alt."""
        assert inline("![alt text](a.png)") == [["img", {"src": "a.png", "alt": "alt text"}, None]]

    def test_malformed_link_is_literal(self) -> None:
        """Test that a bracket without a destination stays literal."""
        assert inline("[a] (b)") == ["[a] (b)"]
        assert inline("![a](b") == ["![a](b"]


@pytest.mark.unit
class TestEscapesEntitiesBreaks:
    """Test backslash escapes, entity references and line breaks."""

    def test_backslash_escape(self) -> None:
        """Test that escaped punctuation is literal."""
        assert inline("\\*not em\\*") == ["*not em*"]

    def test_backslash_before_letter_kept(self) -> None:
        """Test that a backslash before a letter is literal."""
        assert inline("a\\b") == ["a\\b"]

    def test_entities_decoded(self) -> None:
        """Test that known entity references are decoded."""
        assert inline("&amp; &copy; &#65; &zzz;") == ["& © A &zzz;"]

    def test_hard_break_with_spaces(self) -> None:
        """Test that two trailing spaces produce a br."""
        assert inline("a  \nb") == ["a", ["br", None, None], "\nb"]

    def test_hard_break_with_backslash(self) -> None:
        """Test that a trailing backslash produces a br."""
        assert inline("a\\\nb") == ["a", ["br", None, None], "\nb"]

    def test_escaped_backslash_before_newline(self) -> None:
        """Test that an escaped backslash at the end of a line is not a break."""
        assert inline("a\\\\\nb") == ["a\\\nb"]

    def test_unescaped_backslash_after_escaped_one(self) -> None:
        """Test that a third backslash still requests a break."""
        assert inline("a\\\\\\\nb") == ["a\\", ["br", None, None], "\nb"]

    def test_soft_break(self) -> None:
        """Test that a plain newline is kept as text."""
        assert inline("a\nb") == ["a\nb"]

    def test_hard_breaks_can_be_disabled(self) -> None:
        """Test that hard_line_breaks=False keeps the spaces."""
        assert inline("a  \nb", hard_line_breaks=False) == ["a  \nb"]


@pytest.mark.unit
class TestInlineHtml:
    """Test HTML passthrough inside paragraphs."""

    def test_paired_tag(self) -> None:
        """Test that a paired tag becomes an element."""
        assert inline("a <cite>X</cite> b") == ["a ", ["cite", None, ["X"]], " b"]

    def test_markdown_inside_tag(self) -> None:
        """Test that inline markup is parsed inside passthrough tags."""
        assert inline('<span class="x">*y*</span>') == [["span", {"class": "x"}, [["em", None, ["y"]]]]]

    def test_void_tag(self) -> None:
        """Test that void tags need no closing tag."""
        assert inline("a<br>b") == ["a", ["br", None, None], "b"]

    def test_self_closing_tag(self) -> None:
        """Test that an explicitly self-closed tag is void."""
        assert inline("<x-icon name='star'/>") == [["x-icon", {"name": "star"}, None]]

    def test_nested_same_name_tags(self) -> None:
        """Test that nested tags of the same name pair correctly."""
        assert inline("<b>a<b>b</b>c</b>") == [["b", None, ["a", ["b", None, ["b"]], "c"]]]

    def test_unmatched_tag_is_literal(self) -> None:
        """Test that a tag without a closing tag stays literal."""
        assert inline("<b>x") == ["<b>x"]
        assert inline("1 < 2") == ["1 < 2"]

    def test_code_tag_content_is_not_markdown(self) -> None:
        """Test that markup inside <code> is kept literally."""
        assert inline("<code>*x* &lt;</code>") == [["code", None, ["*x* <"]]]

    def test_ruby_tag_with_markup(self) -> None:
        """Test that explicit <ruby> HTML keeps working with inline content."""
        assert inline("<ruby>*漢*<rt>かん</rt></ruby>") == [
            ["ruby", None, [["em", None, ["漢"]], ["rt", None, ["かん"]]]]
        ]
