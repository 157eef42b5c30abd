from io import BytesIO

import pytest
from PIL import Image

from output.gif import GifEncoder


def _frames(n=6, size=(40, 30)):
    return [Image.new("RGBA", size, (i * 40, 0, 255 - i * 40, 255)) for i in range(n)]


def test_encoder_writes_looping_gif():
    encoder = GifEncoder(40, 30, delay_ms=120, loop=0)
    for frame in _frames():
        encoder.add_frame(frame)

    data = encoder.finish()
    assert data[:6] == b"GIF89a"
    with Image.open(BytesIO(data)) as gif:
        assert gif.size == (40, 30)
        assert gif.n_frames == 6
        assert gif.info["loop"] == 0
        assert gif.info["duration"] == 120


def test_frame_size_must_match():
    encoder = GifEncoder(40, 30)
    with pytest.raises(ValueError):
        encoder.add_frame(Image.new("RGB", (41, 30)))


def test_finish_without_frames():
    with pytest.raises(ValueError):
        GifEncoder(40, 30).finish()


def test_delay_must_be_positive():
    with pytest.raises(ValueError):
        GifEncoder(40, 30, delay_ms=0)
