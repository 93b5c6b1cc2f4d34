import pytest
from PIL import Image

from romcatalog.preview.decoder import DecodeError, decode_image, encode_png


@pytest.mark.unit
def test_decode_png_reports_dimensions(tmp_path, make_png):
    path = make_png(tmp_path / "cover.png", size=(4, 3))
    image, width, height = decode_image(path)
    try:
        assert (width, height) == (4, 3)
    finally:
        image.close()


@pytest.mark.unit
def test_decode_corrupt_file_raises(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")
    with pytest.raises(DecodeError):
        decode_image(path)


@pytest.mark.unit
def test_encode_png_creates_directories(tmp_path):
    target = tmp_path / "NES" / "Zelda II.png"
    with Image.new("RGB", (2, 2)) as image:
        encode_png(image, target)
    with Image.open(target) as saved:
        assert saved.format == "PNG"
