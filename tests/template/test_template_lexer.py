"""
Tests for the template lexer.
"""

from tpl.template.lexer import TemplateLexer, tokenize_template
from tpl.template.segments import ControlSegment, InterpolationSegment, TextSegment


class TestTemplateLexer:

    def test_empty_template(self):
        assert tokenize_template("") == []

    def test_plain_text_is_one_segment(self):
        text = "<html><body>Hello</body></html>"
        assert tokenize_template(text) == [TextSegment(text)]

    def test_interpolation(self):
        assert tokenize_template("Hello, {{name}}!") == [
            TextSegment("Hello, "),
            InterpolationSegment("name"),
            TextSegment("!"),
        ]

    def test_interpolation_keeps_inner_whitespace(self):
        assert tokenize_template("{{ a + b }}") == [InterpolationSegment(" a + b ")]

    def test_interpolation_is_lazy(self):
        assert tokenize_template("{{a}}{{b}}") == [InterpolationSegment("a"), InterpolationSegment("b")]

    def test_control_tags(self):
        segments = tokenize_template("{% for x in xs %}{{x}}{% endfor %}")
        assert segments == [
            ControlSegment("for", "x in xs"),
            InterpolationSegment("x"),
            ControlSegment("endfor", ""),
        ]

    def test_control_argument_is_trimmed(self):
        assert tokenize_template("{%   if  a == 1   %}") == [ControlSegment("if", "a == 1")]

    def test_control_without_spaces(self):
        assert tokenize_template("{%endif%}") == [ControlSegment("endif", "")]

    def test_command_is_first_whitespace_delimited_word(self):
        assert tokenize_template("{%if(a)%}") == [ControlSegment("if(a)", "")]
        assert tokenize_template("{%if (a)%}") == [ControlSegment("if", "(a)")]

    def test_empty_control_tag(self):
        assert tokenize_template("{% %}") == [ControlSegment("", "")]

    def test_unclosed_openers_are_text(self):
        assert tokenize_template("a {{ b") == [TextSegment("a {{ b")]
        assert tokenize_template("50% {% off") == [TextSegment("50% {% off")]

    def test_tags_do_not_span_lines(self):
        assert tokenize_template("{{a\n}}") == [TextSegment("{{a\n}}")]

    def test_single_braces_are_text(self):
        assert tokenize_template("f(x) = {x}") == [TextSegment("f(x) = {x}")]

    def test_text_between_tags(self):
        segments = tokenize_template("a{% if c %}b{% else %}c{% endif %}d")
        assert [type(s).__name__ for s in segments] == [
            "TextSegment", "ControlSegment", "TextSegment", "ControlSegment",
            "TextSegment", "ControlSegment", "TextSegment",
        ]

    def test_locations(self):
        segments = TemplateLexer("line one\n  {{x}} and {% if y %}").tokenize()
        assert [str(s.location) for s in segments] == ["1:1", "2:3", "2:8", "2:13"]
        assert segments[1].location.position == 11
