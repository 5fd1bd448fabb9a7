"""
Tests for the document entry point (parse / parse_string).
"""

import io
import textwrap

import pytest

from rt3scene import (
    parse, parse_string, RecordingAPI, RenderAPI, ParamKind,
    ParseOptions, MalformedPolicy,
    SceneLoadError, EmptySceneError, AttributeConversionError,
)


SIMPLE_SCENE = textwrap.dedent("""\
    <?xml version="1.0" encoding="UTF-8"?>
    <RT3>
        <!-- The Film -->
        <film type="image" x_res="800" y_res="600" filename="flat_color.png"
              img_type="png" gamma_corrected="false" crop_window="0 1 0 1"/>
        <world_begin/>
            <background type="colors" mapping="screen" color="153 204 255"/>
        <world_end/>
    </RT3>
""")


class TestEndToEnd:
    """Test whole-document parsing."""

    def test_film_and_world(self):
        """Test the canonical film plus world block scene."""
        api = RecordingAPI()
        result = parse_string('<RT3><film x_res="800" y_res="600" type="image"/>'
                              '<world_begin/><world_end/></RT3>', api)
        assert api.names() == ["film", "world_begin", "world_end"]
        assert api.calls[0].params.to_dict() == {"x_res": 800, "y_res": 600, "type": "image"}
        assert api.calls[1].params is None
        assert api.calls[2].params is None
        assert result.tag_count == 3
        assert not result.has_warnings

    def test_scene_file(self, tmp_path):
        """Test parsing from a file on disk."""
        path = tmp_path / "flat.xml"
        path.write_text(SIMPLE_SCENE)
        api = RecordingAPI()
        result = parse(path, api)

        assert api.names() == ["film", "world_begin", "background", "world_end"]
        film = api.calls[0].params
        assert film.get("filename") == "flat_color.png"
        assert film.get("crop_window", ParamKind.ARR_REAL) == (0.0, 1.0, 0.0, 1.0)
        assert film.retrieve_flag("gamma_corrected", default=True) is False
        background = api.calls[2].params
        assert background.get("color", ParamKind.COLOR) == (153.0, 204.0, 255.0)
        assert result.filename == str(path)

    def test_str_path_and_stream(self, tmp_path):
        """Test str paths and open binary streams."""
        path = tmp_path / "flat.xml"
        path.write_text(SIMPLE_SCENE)
        api_a, api_b = RecordingAPI(), RecordingAPI()
        parse(str(path), api_a)
        parse(io.BytesIO(SIMPLE_SCENE.encode("utf-8")), api_b)
        assert api_a.names() == api_b.names()

    def test_unknown_tag_warning_has_location(self):
        """Test that W101 carries the tag's line."""
        api = RecordingAPI()
        result = parse_string('<RT3>\n<film x_res="1"/>\n<sphere/>\n</RT3>', api, filename="s.xml")
        assert api.names() == ["film"]
        (warning,) = result.warnings
        assert warning.code == "W101"
        assert warning.span.start.line == 3
        assert warning.source_line == "<sphere/>"

    def test_partial_attributes_still_render(self):
        """Bad attributes do not block the call."""
        api = RecordingAPI()
        parse_string('<RT3><film x_res="wide" y_res="600"/></RT3>', api)
        assert api.calls[0].params.to_dict() == {"y_res": 600}

    def test_strict_policy_aborts(self):
        """Test that strict mode aborts the whole parse."""
        with pytest.raises(AttributeConversionError):
            parse_string('<RT3><film x_res="wide"/></RT3>', RecordingAPI(),
                         options=ParseOptions(malformed=MalformedPolicy.STRICT))

    def test_custom_api_subclass(self):
        """Test a hand-written RenderAPI subclass."""
        class Renderer(RenderAPI):
            def __init__(self):
                self.resolution = None
                self.in_world = False

            def background(self, ps):
                pass

            def film(self, ps):
                self.resolution = (ps.retrieve("x_res", ParamKind.INT, 800),
                                   ps.retrieve("y_res", ParamKind.INT, 600))

            def world_begin(self):
                self.in_world = True

            def world_end(self):
                self.in_world = False

        renderer = Renderer()
        parse_string('<RT3><camera fovy="45"/><film x_res="320"/><world_begin/></RT3>', renderer)
        assert renderer.resolution == (320, 600)
        assert renderer.in_world is True


class TestFatalErrors:
    """Test conditions that abort the whole parse."""

    def test_missing_file(self, tmp_path):
        """Test E001 for an unreadable path."""
        with pytest.raises(SceneLoadError) as exc_info:
            parse(tmp_path / "missing.xml", RecordingAPI())
        assert exc_info.value.diagnostic.code == "E001"

    def test_invalid_markup(self):
        """Test E002 for malformed markup."""
        with pytest.raises(SceneLoadError) as exc_info:
            parse_string('<RT3><film></RT3>', RecordingAPI())
        assert exc_info.value.diagnostic.code == "E002"

    def test_empty_scene(self):
        """Test E003 for a root with no child elements."""
        with pytest.raises(EmptySceneError) as exc_info:
            parse_string('<RT3>  <!-- nothing here --> </RT3>', RecordingAPI())
        assert exc_info.value.diagnostic.code == "E003"
        assert "rt3" in str(exc_info.value)

    def test_no_api_calls_before_load_failure(self):
        """Test that nothing is dispatched when loading fails."""
        api = RecordingAPI()
        with pytest.raises(SceneLoadError):
            parse_string('<RT3><film x_res="1"/><world_begin>', api)
        assert api.calls == []
