"""Tests for the nested rule text parser."""

import logging

import pytest

from nestcss.errors import StyleSyntaxError
from nestcss.rules import parse_rules, tokenize
from nestcss.rules.parser import normalize


# ---------------------------------------------------------------------------
# Pre-processing and scanning
# ---------------------------------------------------------------------------


class TestNormalize:
    def test_block_comment_removed(self):
        assert normalize("a /* x\n y */ b") == "a b"

    def test_line_comment_removed(self):
        assert normalize("a // comment\nb") == "a b"

    def test_line_comment_on_last_line_removed(self):
        assert normalize("a; // note: x") == "a; "
        assert parse_rules("color: red; // note: x") == {"color": "red"}

    def test_space_before_comma_dropped(self):
        assert normalize("rgba(0 ,  0)") == "rgba(0, 0)"


class TestTokenize:
    def test_delimiters_and_end(self):
        tokens = list(tokenize("a { b: c; }"))
        assert [(t.text, t.delimiter) for t in tokens] == [
            ("a", "{"),
            ("b: c", ";"),
            ("", "}"),
            ("", ""),
        ]

    def test_positions(self):
        tokens = list(tokenize("a{b;}"))
        assert [t.position for t in tokens] == [1, 3, 4, 5]

    def test_end_token_always_present(self):
        tokens = list(tokenize(""))
        assert len(tokens) == 1
        assert tokens[0].is_end

    def test_escaped_delimiter_not_split(self):
        tokens = list(tokenize(r"content: \; x; y"))
        assert tokens[0].text == r"content: \; x"
        assert tokens[1].text == "y"


# ---------------------------------------------------------------------------
# Empty input
# ---------------------------------------------------------------------------


class TestEmptyInput:
    @pytest.mark.parametrize("value", ["", None, 42])
    def test_returns_none(self, value):
        assert parse_rules(value) is None

    def test_whitespace_only(self):
        assert parse_rules("   \n\t  ") is None

    def test_rule_without_properties(self):
        assert parse_rules("body {}") is None

    def test_property_before_closing_brace_is_ignored(self):
        assert parse_rules("body { width: 10px }") is None


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestProperties:
    def test_values_are_strings(self):
        assert parse_rules("width: 0; opacity: 0.5;") == {"width": "0", "opacity": "0.5"}

    def test_empty_values_ignored(self):
        assert parse_rules("width: ; color: red;") == {"color": "red"}
        assert parse_rules(".foo { width: ; color: red; }") == {".foo": {"color": "red"}}

    def test_last_write_wins(self):
        assert parse_rules("color: blue; color: red;") == {"color": "red"}

    def test_last_property_without_semicolon(self):
        assert parse_rules("width: 10rem;\n color: red") == {"width": "10rem", "color": "red"}

    def test_missing_semicolon_swallows_next_property(self):
        rules = parse_rules("width: 10rem\n color: red;")
        assert "color" not in rules

    def test_trailing_property_inside_block_ignored(self):
        assert parse_rules(".foo { width: 10rem; color: red }") == {".foo": {"width": "10rem"}}

    def test_whitespace_normalized(self):
        source = """
            div     >
               img
                 {
                   background-color   :   rgba(0  ,  0,
                                                0, 0.5);
                 }
        """
        assert parse_rules(source) == {"div > img": {"background-color": "rgba(0, 0, 0, 0.5)"}}

    def test_comments_removed(self):
        source = """
            body > div { // comment
              opacity: /*
                 multi line
               */ 0.5;
            }
        """
        assert parse_rules(source) == {"body > div": {"opacity": "0.5"}}


class TestNestedProperties:
    def test_segments_joined_with_dash(self):
        source = "padding: { inline: { start: 1rem; end: 2rem; } }"
        assert parse_rules(source) == {
            "padding-inline-start": "1rem",
            "padding-inline-end": "2rem",
        }

    def test_segment_with_value(self):
        assert parse_rules("margin: auto { right: 1rem; }") == {
            "margin": "auto",
            "margin-right": "1rem",
        }

    def test_segment_value_without_children(self):
        assert parse_rules("margin: auto {}") == {"margin": "auto"}

    def test_segments_without_values_dropped(self):
        assert parse_rules("margin: { inline: { } }") is None

    def test_space_after_colon_required(self):
        with pytest.raises(StyleSyntaxError):
            parse_rules("margin:auto { right: 1rem; }")

    def test_inside_selector(self):
        assert parse_rules(".a { margin: 0 { top: 1px; } }") == {
            ".a": {"margin": "0", "margin-top": "1px"}
        }


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


class TestSelectors:
    def test_selector_list(self):
        assert parse_rules(" div > img, #id { color: red; }") == {"div > img, #id": {"color": "red"}}

    def test_multiline_selector(self):
        assert parse_rules("body,\n div {\n width: 10rem;\n }") == {"body, div": {"width": "10rem"}}

    def test_attribute_selector(self):
        source = """[attr^$|*="'foo'"] >+~ p { color: red; }"""
        assert parse_rules(source) == {"""[attr^$|*="'foo'"] >+~ p""": {"color": "red"}}

    def test_pseudo_classes(self):
        assert parse_rules(" p:hover { color: red; }") == {"p:hover": {"color": "red"}}
        assert parse_rules(" ::before { color: red; }") == {"::before": {"color": "red"}}

    def test_invalid_pseudo_class(self):
        with pytest.raises(StyleSyntaxError, match="Illegal selector"):
            parse_rules(":foo { color: red; }")

    def test_placeholder(self):
        assert parse_rules("div { &__active { color: red; } }") == {"div__active": {"color": "red"}}

    def test_descendant(self):
        assert parse_rules("div { img { color: red; } }") == {"div img": {"color": "red"}}

    def test_all_combinations(self):
        source = """
            div, section {
              .foo, & + #id {
                &:hover {
                  color: red;
                }
              }
            }
        """
        assert parse_rules(source) == {
            "div .foo:hover, div + #id:hover, section .foo:hover, section + #id:hover": {
                "color": "red"
            }
        }

    def test_property_after_nested_rule(self):
        source = "width: 1rem; body { img { color: red; } } opacity: 0;"
        assert parse_rules(source) == {
            "width": "1rem",
            "opacity": "0",
            "body img": {"color": "red"},
        }

    def test_parent_properties_after_child(self):
        source = "div { img { color: red; } width: 1px; }"
        assert parse_rules(source) == {"div": {"width": "1px"}, "div img": {"color": "red"}}

    def test_repeated_selector_merges(self):
        source = ".a { color: red; width: 1px; } .a { color: blue; }"
        assert parse_rules(source) == {".a": {"color": "blue", "width": "1px"}}


# ---------------------------------------------------------------------------
# At-rules
# ---------------------------------------------------------------------------


class TestAtRules:
    def test_statement_at_rule(self):
        rules = parse_rules('@import url("style.css") screen;')
        assert rules == {'@import url("style.css") screen': None}

    def test_statement_at_rule_is_elevated(self):
        rules = parse_rules(".a { @charset x; color: red; }")
        assert rules == {".a": {"color": "red"}, "@charset x": None}

    def test_page_block(self):
        source = "@page { width: 2rem; margin: { right: 3rem; } }"
        assert parse_rules(source) == {"@page": {"width": "2rem", "margin-right": "3rem"}}

    def test_keyframes(self):
        source = """
            @keyframes slidein {
              from { transform: translateX(0%); }
              to { transform: translateY(100%); }
            }
        """
        assert parse_rules(source) == {
            "@keyframes slidein": {
                "from": {"transform": "translateX(0%)"},
                "to": {"transform": "translateY(100%)"},
            }
        }

    def test_repeated_at_rule_replaces(self):
        source = "a { @media print { x { c: 1; } } } b { @media print { y { c: 2; } } }"
        assert parse_rules(source) == {"@media print": {"b y": {"c": "2"}}}

    def test_repeated_font_face_keeps_last(self):
        source = "@font-face { font-family: A; } @font-face { font-family: B; }"
        assert parse_rules(source) == {"@font-face": {"font-family": "B"}}

    def test_media(self):
        source = "@media (min-width: 500px) { body { color : blue; } }"
        assert parse_rules(source) == {"@media (min-width: 500px)": {"body": {"color": "blue"}}}

    def test_nested_at_rule_elevated(self):
        source = """
            body > div {
              img { width: 50%; }
              @media (min-width: 720px) {
                img { width: 20rem; }
              }
            }
        """
        assert parse_rules(source) == {
            "body > div img": {"width": "50%"},
            "@media (min-width: 720px)": {"body > div img": {"width": "20rem"}},
        }

    def test_selector_properties_after_at_rule(self):
        source = "div { @media print { color: red; } width: 1px; }"
        assert parse_rules(source) == {
            "div": {"width": "1px"},
            "@media print": {"color": "red"},
        }

    def test_only_one_level_pruned(self):
        assert parse_rules("@media print { div {} }") == {"@media print": {"div": {}}}

    def test_empty_at_rule_pruned(self):
        assert parse_rules("@media print {} a { color: red; }") == {"a": {"color": "red"}}


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestUnbalancedBraces:
    @pytest.mark.parametrize(
        "source",
        [
            "body { { width: 10rem; }",
            "margin: { right: 10rem; { }",
        ],
    )
    def test_unmatched_open(self, source):
        with pytest.raises(StyleSyntaxError, match="Unmatched '{'"):
            parse_rules(source)

    @pytest.mark.parametrize(
        "source",
        [
            "body { width: 10rem; } }",
            "margin: { } right: 10rem; }",
        ],
    )
    def test_unmatched_close(self, source):
        with pytest.raises(StyleSyntaxError, match="Unmatched '}'") as info:
            parse_rules(source)
        assert info.value.position == len(source) - 1

    def test_is_a_syntax_error(self):
        with pytest.raises(SyntaxError):
            parse_rules("}")


class TestLogging:
    def test_parse_logs_entry_count(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="nestcss.rules.parser"):
            parse_rules("a { color: red; } b { color: blue; }")
        assert any("2 top-level entries" in r.message for r in caplog.records)
