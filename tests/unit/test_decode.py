import sys
import unittest
from io import BytesIO
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from asciireel_renderer.decode import decode_frame, image_to_raster
from asciireel_renderer.models import DecodeFailure


def _png(image: Image.Image) -> bytes:
    buf = BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


class DecodeTests(unittest.TestCase):
    def test_grayscale_png(self):
        raster = decode_frame(_png(Image.new("L", (16, 9), 200)))
        self.assertEqual((raster.width, raster.height), (16, 9))
        self.assertEqual(raster.luminance(15, 8), 200)

    def test_colour_png_is_converted(self):
        raster = decode_frame(_png(Image.new("RGB", (3, 2), (255, 255, 255))))
        self.assertEqual((raster.width, raster.height), (3, 2))
        self.assertEqual(raster.luminance(0, 0), 255)

    def test_garbage_raises_decode_failure(self):
        with self.assertRaises(DecodeFailure):
            decode_frame(b"\x89PNG\r\n\x1a\nnot really a png IEND\xaeB`\x82")

    def test_image_to_raster(self):
        raster = image_to_raster(Image.new("RGB", (4, 4), (0, 0, 0)))
        self.assertEqual(raster.luminance(3, 3), 0)


if __name__ == "__main__":
    unittest.main()
