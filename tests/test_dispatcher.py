"""
Tests for the parameter dispatcher (populate).
"""

import logging

import pytest
from lxml import etree

from rt3scene import (
    AttributeDecl, ParamKind, ParamSet, populate,
    MalformedPolicy, ParseOptions, DiagnosticCollector, AttributeConversionError,
    int_val, string_val, array_val,
)


FILM_ATTRIBUTES = (
    AttributeDecl(ParamKind.STRING, "type"),
    AttributeDecl(ParamKind.STRING, "filename"),
    AttributeDecl(ParamKind.STRING, "img_type"),
    AttributeDecl(ParamKind.INT, "x_res"),
    AttributeDecl(ParamKind.INT, "y_res"),
    AttributeDecl(ParamKind.ARR_REAL, "crop_window"),
    AttributeDecl(ParamKind.STRING, "gamma_corrected"),
)


def element(markup: str):
    return etree.fromstring(markup)


class TestPopulate:
    """Test extraction of declared attributes."""

    def test_absent_attributes_have_no_entry(self):
        """Test that missing attributes leave no entry."""
        ps = populate(element('<film/>'), FILM_ATTRIBUTES)
        assert len(ps) == 0

    def test_converted_values(self):
        """Test typed values for each declared attribute."""
        e = element('<film type="image" x_res="800" y_res="600" crop_window="0 1 0 1"/>')
        ps = populate(e, FILM_ATTRIBUTES)
        assert ps == ParamSet({
            "type": string_val("image"),
            "x_res": int_val(800),
            "y_res": int_val(600),
            "crop_window": array_val(ParamKind.ARR_REAL, [0, 1, 0, 1]),
        })

    def test_undeclared_attributes_ignored(self):
        """Undeclared attributes never reach the ParamSet."""
        ps = populate(element('<film x_res="10" colour="red"/>'), FILM_ATTRIBUTES)
        assert ps.names() == ["x_res"]

    def test_malformed_attribute_omitted(self):
        """Test that a malformed value is dropped silently by default."""
        e = element('<film x_res="abc" y_res="20"/>')
        diagnostics = DiagnosticCollector()
        ps = populate(e, FILM_ATTRIBUTES, diagnostics=diagnostics)
        assert "x_res" not in ps
        assert ps.get("y_res") == 20
        assert diagnostics.diagnostics == []

    def test_idempotent(self):
        """Test that populating twice gives equal sets."""
        e = element('<film type="image" x_res="800" y_res="x" crop_window="0 .5 0 .5"/>')
        assert populate(e, FILM_ATTRIBUTES) == populate(e, FILM_ATTRIBUTES)

    def test_bool_as_text(self):
        """Test the string-then-flag route for booleans."""
        ps = populate(element('<film gamma_corrected="true"/>'), FILM_ATTRIBUTES)
        assert ps.get("gamma_corrected", ParamKind.STRING) == "true"
        assert ps.retrieve_flag("gamma_corrected") is True

    def test_redeclared_name_overwrites(self):
        """Test that the later declaration of a name wins."""
        declared = [
            AttributeDecl(ParamKind.STRING, "size"),
            AttributeDecl(ParamKind.INT, "size"),
        ]
        ps = populate(element('<tag size="12"/>'), declared)
        assert ps.value("size") == int_val(12)

    def test_composite_kinds(self):
        """Test composite kinds through populate."""
        declared = [
            AttributeDecl(ParamKind.VEC3F, "up"),
            AttributeDecl(ParamKind.VEC3F, "short"),
        ]
        ps = populate(element('<lookat up="1.0 2.0 3.0" short="1.0 2.0"/>'), declared)
        assert ps.get("up") == (1.0, 2.0, 3.0)
        assert "short" not in ps

    def test_empty_array_is_stored(self):
        """An empty array is present, not absent."""
        ps = populate(element('<film crop_window=""/>'), FILM_ATTRIBUTES)
        assert ps.get("crop_window") == ()


class TestUnsupportedKind:
    """Kinds without a conversion are reported and skipped."""

    def test_bool_kind_warns(self):
        """Test W102 for a present bool attribute."""
        declared = [
            AttributeDecl(ParamKind.BOOL, "flag"),
            AttributeDecl(ParamKind.INT, "count"),
        ]
        diagnostics = DiagnosticCollector()
        ps = populate(element('<tag flag="true" count="3"/>'), declared, diagnostics=diagnostics)
        assert "flag" not in ps
        assert ps.get("count") == 3
        assert diagnostics.codes() == ["W102"]
        assert "bool" in diagnostics.diagnostics[0].message

    def test_absent_bool_is_silent(self):
        """Test no warning when the bool attribute is missing."""
        diagnostics = DiagnosticCollector()
        populate(element('<tag/>'), [AttributeDecl(ParamKind.BOOL, "flag")], diagnostics=diagnostics)
        assert diagnostics.diagnostics == []

    def test_warning_is_logged(self, caplog):
        """Test that W102 also goes to the module logger."""
        with caplog.at_level(logging.WARNING, logger="rt3scene.dispatcher"):
            populate(element('<tag flag="yes"/>'), [AttributeDecl(ParamKind.BOOL, "flag")])
        assert "W102" in caplog.text


class TestMalformedPolicy:
    """Test the configurable handling of malformed attributes."""

    def test_warn_policy(self):
        """Test W103 under the warn policy."""
        diagnostics = DiagnosticCollector()
        options = ParseOptions(malformed=MalformedPolicy.WARN)
        ps = populate(element('<film x_res="abc"/>'), FILM_ATTRIBUTES,
                      options=options, diagnostics=diagnostics)
        assert "x_res" not in ps
        assert diagnostics.codes() == ["W103"]
        assert "x_res" in diagnostics.diagnostics[0].message

    def test_strict_policy_raises(self):
        """Test E101 raised under the strict policy."""
        options = ParseOptions(malformed=MalformedPolicy.STRICT)
        with pytest.raises(AttributeConversionError) as exc_info:
            populate(element('<film x_res="abc"/>'), FILM_ATTRIBUTES, options=options)
        assert exc_info.value.diagnostic.code == "E101"

    def test_strict_policy_accepts_valid_input(self):
        """Test that strict mode passes well-formed input through."""
        options = ParseOptions(malformed=MalformedPolicy.STRICT)
        ps = populate(element('<film x_res="10"/>'), FILM_ATTRIBUTES, options=options)
        assert ps.get("x_res") == 10

    def test_diagnostic_location(self):
        """Test line number and source text on diagnostics."""
        e = etree.fromstring('<scene>\n  <film x_res="abc"/>\n</scene>')[0]
        diagnostics = DiagnosticCollector()
        populate(e, FILM_ATTRIBUTES, options=ParseOptions(malformed=MalformedPolicy.WARN),
                 diagnostics=diagnostics, filename="scene.xml",
                 source_lines=['<scene>', '  <film x_res="abc"/>', '</scene>'])
        diag = diagnostics.diagnostics[0]
        assert diag.span.start.line == 2
        assert diag.span.start.filename == "scene.xml"
        assert diag.source_line == '  <film x_res="abc"/>'
        assert diag.format().startswith("scene.xml:2:1: warning[W103]")
