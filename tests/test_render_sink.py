import numpy as np
import pytest
from PIL import Image

from pngmask.models.errors import InvalidBuffer
from pngmask.models.raster_model import RasterImage
from pngmask.services.render_sink import PngFileSink, RenderSink, render_to_sink


def _white(height, width):
    arr = np.full((height, width, 4), 255, dtype=np.uint8)
    return RasterImage.from_array(arr)


def test_png_sink_writes_image(tmp_path):
    path = tmp_path / "out" / "mask.png"
    PngFileSink(path).render(_white(6, 4))

    with Image.open(path) as written:
        assert written.size == (4, 6)
        assert written.convert("RGBA").getpixel((0, 0)) == (255, 255, 255, 255)


def test_png_sink_applies_residual_scale_around_center(tmp_path):
    path = tmp_path / "scaled.png"
    PngFileSink(path).render(_white(100, 100), scale=0.5)

    with Image.open(path) as written:
        rgba = written.convert("RGBA")
        assert rgba.size == (100, 100)
        assert rgba.getpixel((0, 0)) == (0, 0, 0, 255)
        assert rgba.getpixel((50, 50)) == (255, 255, 255, 255)


def test_png_sink_satisfies_protocol(tmp_path):
    assert isinstance(PngFileSink(tmp_path / "x.png"), RenderSink)


def test_render_to_sink_rejects_objects_without_render():
    with pytest.raises(InvalidBuffer):
        render_to_sink(object(), _white(1, 1))

    class NotCallable:
        render = "s0"

    with pytest.raises(InvalidBuffer):
        render_to_sink(NotCallable(), _white(1, 1))


def test_render_to_sink_passes_scale():
    calls = []

    class Sink:
        def render(self, image, scale=1.0):
            calls.append(scale)

    render_to_sink(Sink(), _white(1, 1), 2.5)
    assert calls == [2.5]
