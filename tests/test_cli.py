import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from PIL import Image

from tests._test_path import SRC  # noqa: F401
from tests._fakes import StubEnhancer, png_bytes

from alphaportrait import cli
from alphaportrait.core.data_uri import encode_data_uri
from alphaportrait.core.errors import EmptyResultError


class TestCli(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp = Path(self._tmp.name)
        self.src = self.tmp / "me.jpg"
        self.src.write_bytes(b"jpeg-ish")

    def _run(self, argv, client=None):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = cli.main(argv, client=client)
        return code, out.getvalue(), err.getvalue()

    def test_success_writes_output(self):
        client = StubEnhancer(result=encode_data_uri(png_bytes(), "image/png"))
        dest = self.tmp / "out.png"

        code, out, _ = self._run(["-i", str(self.src), "-o", str(dest)], client)

        self.assertEqual(code, 0)
        self.assertIn("Saved:", out)
        self.assertEqual(client.calls[0][1], "image/jpeg")
        self.assertTrue(client.calls[0][0].startswith("data:image/jpeg;base64,"))
        with Image.open(dest) as img:
            self.assertEqual(img.format, "PNG")

    def test_explicit_mime(self):
        client = StubEnhancer(result=encode_data_uri(png_bytes(), "image/png"))
        self._run(["-i", str(self.src), "-o", str(self.tmp / "o.png"), "--mime", "image/heic"], client)
        self.assertEqual(client.calls[0][1], "image/heic")

    def test_enhancement_failure(self):
        client = StubEnhancer(error=EmptyResultError("Model did not return an enhanced image."))
        code, _, err = self._run(["-i", str(self.src), "-o", str(self.tmp / "o.png")], client)
        self.assertEqual(code, 1)
        self.assertIn("did not return", err)

    def test_missing_input(self):
        code, _, err = self._run(["-i", str(self.tmp / "nope.jpg")], StubEnhancer())
        self.assertEqual(code, 1)
        self.assertIn("ERROR", err)

    def test_missing_api_key(self):
        with patch.dict("os.environ", {}, clear=True):
            code, _, err = self._run(["-i", str(self.src)])
        self.assertEqual(code, 2)
        self.assertIn("GEMINI_API_KEY", err)
