"""Tests for template parameter sanitizing."""

import pytest

from adminrelay.whatsapp.models import TemplateComponent, TemplateParameter
from adminrelay.whatsapp.sanitize import sanitize_components, sanitize_text

ZWSP = chr(0x200B)
ZWNJ = chr(0x200C)
ZWJ = chr(0x200D)
BOM = chr(0xFEFF)


class TestSanitizeText:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("hello", "hello"),
            ("line1\nline2", "line1 line2"),
            ("a\r\n\r\nb", "a b"),
            ("col1\tcol2", "col1 col2"),
            ("a     b", "a    b"),
            ("a          b", "a    b"),
            ("a    b", "a    b"),
            (f"he{ZWSP}ll{ZWNJ}o{ZWJ}{BOM}", "hello"),
            ("", ""),
        ],
    )
    def test_cases(self, raw, expected):
        assert sanitize_text(raw) == expected

    def test_output_invariants(self):
        raw = f"\t\tdear admin,\n\n{ZWSP}      see{BOM}  \t   attached\r\n" + " " * 12 + "end"
        result = sanitize_text(raw)

        assert "\t" not in result
        assert "\n" not in result
        assert "\r" not in result
        assert " " * 5 not in result
        for ch in (ZWSP, ZWNJ, ZWJ, BOM):
            assert ch not in result


class TestSanitizeComponents:
    def test_only_text_parameters_change(self):
        components = [
            TemplateComponent(
                type="header",
                parameters=[TemplateParameter.of_media("image", "media\n1")],
            ),
            TemplateComponent(
                type="body",
                parameters=[
                    TemplateParameter.of_text("123"),
                    TemplateParameter.of_text("multi\nline"),
                ],
            ),
        ]

        result = sanitize_components(components)

        assert result[0].parameters[0].media_id == "media\n1"
        assert [p.text for p in result[1].parameters] == ["123", "multi line"]

    def test_input_is_not_mutated(self):
        components = [
            TemplateComponent(type="body", parameters=[TemplateParameter.of_text("a\nb")])
        ]

        sanitize_components(components)

        assert components[0].parameters[0].text == "a\nb"
