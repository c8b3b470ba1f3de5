"""Tests for the style allow-list filter."""

import pytest

from paste_cleaner.utils.styles import (
    ALLOWED_PROPERTIES,
    GENERAL_ALLOWED_PROPERTIES,
    filter_style,
    rewrite_style_attributes,
)


class TestFilterStyle:
    """Tests for filter_style."""

    def test_keeps_allowed_and_drops_vendor(self):
        style = "color: red; mso-bidi-font-family: Arial; font-weight: bold"
        assert filter_style(style) == "color: red;font-weight: bold"

    @pytest.mark.parametrize("style", ["", None, ";", " ; ;  "])
    def test_empty_input(self, style):
        assert filter_style(style) == ""

    def test_transparent_background_dropped(self):
        assert filter_style("background-color: transparent; color: blue") == "color: blue"

    def test_opaque_background_kept(self):
        assert filter_style("background-color:#fff") == "background-color:#fff"

    def test_preserves_original_casing(self):
        assert filter_style("COLOR: Red") == "COLOR: Red"

    def test_font_family_only_with_general_allow_list(self):
        assert filter_style("font-family: Georgia") == ""
        assert (
            filter_style("font-family: Georgia", allowed=GENERAL_ALLOWED_PROPERTIES)
            == "font-family: Georgia"
        )

    def test_default_sans_serif_family_is_a_leak(self):
        style = "font-family: Arial, sans-serif"
        assert filter_style(style, allowed=GENERAL_ALLOWED_PROPERTIES) == ""

    @pytest.mark.parametrize(
        "declaration",
        [
            "-webkit-text-stroke: 1px",
            "vertical-align: baseline",
            "white-space: pre-wrap",
            "white-space:pre",
            "font-variant: normal",
            "mso-line-height-rule: exactly",
        ],
    )
    def test_leak_markers(self, declaration):
        assert filter_style(f"{declaration}; color: red") == "color: red"

    def test_layout_properties_dropped(self):
        style = "margin: 0; padding: 4px; line-height: 1.38; text-align: center"
        assert filter_style(style) == "text-align: center"

    def test_declaration_without_colon_dropped(self):
        assert filter_style("color; font-size: 12pt") == "font-size: 12pt"

    def test_also_remove_predicate(self):
        result = filter_style(
            "color:red;font-size:12pt",
            also_remove=lambda d: d.startswith("font-size"),
        )
        assert result == "color:red"

    def test_never_adds_properties(self):
        style = "text-decoration: underline; display: block; color: #333"
        result = filter_style(style)
        for declaration in result.split(";"):
            assert declaration in style

    def test_retained_properties_are_allowed(self):
        style = (
            "color:red;float:left;font-size:9pt;position:absolute;"
            "font-style:italic;background-color:yellow;z-index:3"
        )
        result = filter_style(style)
        kept = {d.split(":")[0] for d in result.split(";")}
        assert kept <= ALLOWED_PROPERTIES
        assert kept == {"color", "font-size", "font-style", "background-color"}

    def test_idempotent(self):
        style = "color : red ;  mso-x: 1; font-weight:700 ;"
        once = filter_style(style)
        assert filter_style(once) == once


class TestRewriteStyleAttributes:
    """Tests for rewrite_style_attributes."""

    def test_filters_attribute(self):
        html = '<span style="color:red;mso-x:1">a</span>'
        assert rewrite_style_attributes(html) == '<span style="color:red">a</span>'

    def test_removes_attribute_left_empty(self):
        html = '<p style="mso-margin-top-alt:auto">x</p>'
        assert rewrite_style_attributes(html) == "<p>x</p>"

    def test_keeps_other_attributes(self):
        html = '<a href="/x" style="margin:0" title="t">x</a>'
        assert rewrite_style_attributes(html) == '<a href="/x" title="t">x</a>'

    def test_single_quoted_attribute(self):
        html = "<span style='font-family:\"Times\";color:red;margin:0'>a</span>"
        result = rewrite_style_attributes(html, allowed=GENERAL_ALLOWED_PROPERTIES)
        assert result == "<span style='font-family:\"Times\";color:red'>a</span>"

    def test_multiple_attributes(self):
        html = '<p style="color:blue"><span style="vertical-align:baseline">x</span></p>'
        assert rewrite_style_attributes(html) == '<p style="color:blue"><span>x</span></p>'

    def test_never_emits_empty_style(self):
        html = '<p style="">a</p><p style="  ">b</p>'
        assert 'style=""' not in rewrite_style_attributes(html)
