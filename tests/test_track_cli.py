import contextlib
import io
import json
import os
import unittest
from unittest import mock

import track_cli


FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")
NO_ENV = os.path.join(FIXTURES, "missing.env")


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = track_cli.main(argv + ["--env", NO_ENV])
    return code, out.getvalue(), err.getvalue()


class TestTrackCli(unittest.TestCase):
    def test_saved_page_json(self):
        code, out, _ = _run(["ZAI9821100042", "--html", os.path.join(FIXTURES, "activity_page.html")])
        self.assertEqual(code, 0)
        body = json.loads(out)
        self.assertEqual(body["shipping"], "ZAI9821100042")
        self.assertEqual(body["last_status"]["status"], "En tránsito")

    def test_saved_page_timeline(self):
        code, out, _ = _run(["ZAI9821100042", "--timeline", "--html", os.path.join(FIXTURES, "embedded_page.html")])
        self.assertEqual(code, 0)
        self.assertIn("Guía: ZAI9821100042", out)
        self.assertIn("* En tránsito (Bodega Santiago - 2024-05-12 10:30)", out)

    def test_empty_timeline(self):
        code, out, _ = _run(["ZAI9821100042", "--timeline", "--html", os.path.join(FIXTURES, "empty_page.html")])
        self.assertEqual(code, 0)
        self.assertIn("Sin actividad registrada.", out)

    def test_missing_tracking_number(self):
        code, out, err = _run([])
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertEqual(json.loads(err), {"error": "Falta el número de seguimiento."})

    @mock.patch("zaitrack.carrier.controlbox.requests.post")
    def test_upstream_failure(self, post):
        post.return_value = mock.Mock(status_code=502, text="")
        code, _, err = _run(["ZAI9821100042"])
        self.assertEqual(code, 1)
        self.assertIn("502", json.loads(err)["error"])


if __name__ == "__main__":
    unittest.main()
