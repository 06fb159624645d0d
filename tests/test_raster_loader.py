import cv2
import numpy as np
import pytest

from core.exceptions import ImageDecodeError, InvalidArgumentError, QrPipelineError
from core.raster import OpenCvImageCodec, RasterImage, RasterLoader
from tests.conftest import RecordingCodec, toPngBytes


@pytest.fixture
def loader(codec) -> RasterLoader:
    return RasterLoader(codec)


def test_load_from_bytes(loader, qrImage, qrPng):
    raster = loader.load(qrPng)
    assert isinstance(raster, RasterImage)
    assert (raster.height, raster.width, raster.channels) == qrImage.shape
    np.testing.assert_array_equal(raster.pixels, qrImage)


@pytest.mark.parametrize("wrap", [bytearray, memoryview])
def test_load_from_other_buffers(loader, qrPng, wrap):
    assert loader.load(wrap(qrPng)).width > 0


def test_load_from_path_and_pathlike(loader, qrImage, tmp_path):
    path = tmp_path / "qr.png"
    cv2.imwrite(str(path), qrImage)

    assert loader.load(str(path)).width == qrImage.shape[1]
    assert loader.load(path).height == qrImage.shape[0]


def test_grayscale_file_is_loaded_as_color(loader, tmp_path):
    path = tmp_path / "gray.png"
    cv2.imwrite(str(path), np.full((20, 30), 128, np.uint8))
    assert loader.load(str(path)).channels == 3


def test_none_is_invalid_argument(loader, codec):
    with pytest.raises(InvalidArgumentError):
        loader.load(None)
    assert codec.calls == []


@pytest.mark.parametrize("source", [42, 3.5, ["a.png"], {"path": "a.png"}, np.zeros(4)])
def test_wrong_type_is_invalid_argument(loader, codec, source):
    with pytest.raises(InvalidArgumentError) as info:
        loader.load(source)
    assert type(source).__name__ in str(info.value)
    assert codec.calls == []


def test_invalid_argument_is_type_error(loader):
    with pytest.raises(TypeError):
        loader.load(7)


def test_missing_file(loader, tmp_path):
    with pytest.raises(ImageDecodeError):
        loader.load(str(tmp_path / "missing.png"))


def test_empty_buffer(loader):
    with pytest.raises(ImageDecodeError):
        loader.load(b"")


def test_garbage_buffer(loader):
    with pytest.raises(ImageDecodeError) as info:
        loader.load(b"definitely not an image")
    assert isinstance(info.value, ValueError)
    assert isinstance(info.value, QrPipelineError)


def test_garbage_file(loader, tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"\x89PNG broken")
    with pytest.raises(ImageDecodeError):
        loader.load(str(path))


def test_codec_png_round_trip(qrImage):
    codec = OpenCvImageCodec(pngCompression=9)
    png = codec.encodePng(qrImage)
    assert png.startswith(b"\x89PNG")
    np.testing.assert_array_equal(codec.decode(png), qrImage)


def test_recording_codec_sees_buffer_decode(qrPng):
    codec = RecordingCodec()
    RasterLoader(codec).load(qrPng)
    assert codec.calls == ["decode"]


def test_raster_dimensions():
    raster = RasterImage(pixels=np.zeros((10, 20), np.uint8))
    assert (raster.width, raster.height, raster.channels) == (20, 10, 1)
    assert not raster.isEmpty()
    assert toPngBytes(raster.pixels).startswith(b"\x89PNG")
