import threading

import numpy as np
import pytest
from PIL import Image

from pngmask.models.errors import MaskNotFound
from pngmask.models.params_model import FitMode, GeometryParams, clamp01
from pngmask.models.raster_model import RasterImage
from pngmask.services.mask_store import MaskStore


def test_raster_rejects_wrong_buffer_length():
    with pytest.raises(ValueError):
        RasterImage(width=2, height=2, pixels=b"\x00" * 15)


def test_raster_blank_is_opaque_black():
    arr = RasterImage.blank(3, 2).to_array()
    assert arr.shape == (2, 3, 4)
    assert (arr[..., :3] == 0).all()
    assert (arr[..., 3] == 255).all()


def test_raster_pil_conversion_keeps_pixels():
    pil = Image.new("RGBA", (2, 1), (1, 2, 3, 4))
    image = RasterImage.from_pil(pil)
    assert image.pixels == bytes([1, 2, 3, 4, 1, 2, 3, 4])
    assert image.to_pil().getpixel((1, 0)) == (1, 2, 3, 4)


def test_raster_to_array_is_a_copy():
    image = RasterImage.blank(1, 1)
    arr = image.to_array()
    arr[0, 0, 0] = 99
    assert image.pixels[0] == 0


def test_raster_empty_to_pil():
    assert RasterImage(width=0, height=5, pixels=b"").to_pil().size == (0, 5)


def test_raster_from_array_checks_shape():
    with pytest.raises(ValueError):
        RasterImage.from_array(np.zeros((2, 2), dtype=np.uint8))


@pytest.mark.parametrize("value,expected", [("contain", FitMode.CONTAIN), ("COVER", FitMode.COVER),
                                            ("stretch", FitMode.STRETCH), ("zoom", FitMode.CONTAIN),
                                            (None, FitMode.CONTAIN), (FitMode.COVER, FitMode.COVER)])
def test_fit_mode_parse(value, expected):
    assert FitMode.parse(value) is expected


def test_clamp01():
    assert clamp01(-1) == 0.0
    assert clamp01(0.25) == 0.25
    assert clamp01(3) == 1.0
    assert clamp01(None) == 0.0


def test_geometry_params_normalize_inputs():
    params = GeometryParams(size=2, hard_edge=1.7, preserve_aspect=1, fit_mode="weird")
    assert params.size == 2.0
    assert params.hard_edge == 1.0
    assert params.preserve_aspect is True
    assert params.fit_mode is FitMode.CONTAIN


@pytest.mark.parametrize("size", [0, -0.5])
def test_geometry_params_reject_non_positive_size(size):
    with pytest.raises(ValueError):
        GeometryParams(size=size)


def test_store_put_get_remove():
    store = MaskStore()
    store.put("a", RasterImage.blank(1, 1))
    assert "a" in store
    assert len(store) == 1
    store.remove("a")
    assert store.names() == []
    with pytest.raises(MaskNotFound):
        store.get("a")
    with pytest.raises(MaskNotFound):
        store.remove("a")


def test_store_names_is_a_snapshot():
    store = MaskStore()
    store.put("a", RasterImage.blank(1, 1))
    names = store.names()
    store.put("b", RasterImage.blank(1, 1))
    assert names == ["a"]


def test_store_concurrent_writers():
    store = MaskStore()
    image = RasterImage.blank(1, 1)

    def writer(prefix):
        for i in range(200):
            store.put(f"{prefix}-{i % 50}", image)

    threads = [threading.Thread(target=writer, args=(p,)) for p in "abcd"]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 200
