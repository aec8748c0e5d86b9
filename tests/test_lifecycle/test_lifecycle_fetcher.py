"""Tests for the lifecycle document fetcher."""

import http.client
import socket
import unittest
import urllib.error
from unittest.mock import MagicMock, patch

from lifecycle.fetcher import DocumentFetcher, FetchError, FetchResult

URL = "https://example.com/model-retirements.md"


def _response(body: bytes, status: int = 200):
    resp = MagicMock()
    resp.status = status
    resp.read.return_value = body
    cm = MagicMock()
    cm.__enter__.return_value = resp
    cm.__exit__.return_value = False
    return cm


class TestDocumentFetcher(unittest.TestCase):

    def test_fetch_success(self):
        with patch("urllib.request.urlopen", return_value=_response(b"### Audio\n")) as urlopen:
            result = DocumentFetcher(timeout=5).fetch(URL)
        self.assertTrue(result.ok)
        self.assertEqual(result.text, "### Audio\n")
        self.assertIsNone(result.error)
        self.assertEqual(urlopen.call_args.kwargs["timeout"], 5)

    def test_fetch_decodes_invalid_utf8(self):
        with patch("urllib.request.urlopen", return_value=_response(b"gpt\xff")):
            result = DocumentFetcher().fetch(URL)
        self.assertTrue(result.ok)
        self.assertTrue(result.text.startswith("gpt"))

    def test_http_error_returns_fetch_error(self):
        err = urllib.error.HTTPError(URL, 404, "Not Found", hdrs=None, fp=None)
        with patch("urllib.request.urlopen", side_effect=err):
            result = DocumentFetcher().fetch(URL)
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, FetchError)
        self.assertEqual(result.error.status, 404)
        self.assertIs(result.error.cause, err)
        self.assertEqual(result.text, "")

    def test_error_status_without_exception(self):
        with patch("urllib.request.urlopen", return_value=_response(b"", status=503)):
            result = DocumentFetcher().fetch(URL)
        self.assertFalse(result.ok)
        self.assertEqual(result.error.status, 503)

    def test_network_error_returns_fetch_error(self):
        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("no route")):
            result = DocumentFetcher().fetch(URL)
        self.assertFalse(result.ok)
        self.assertIsNone(result.error.status)
        self.assertIn(URL, str(result.error))

    def test_timeout_returns_fetch_error(self):
        with patch("urllib.request.urlopen", side_effect=socket.timeout("timed out")):
            result = DocumentFetcher().fetch(URL)
        self.assertFalse(result.ok)

    def test_invalid_port_returns_fetch_error(self):
        result = DocumentFetcher().fetch("https://learn.microsoft.com:abc/x.md")
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error.cause, http.client.InvalidURL)

    def test_truncated_body_returns_fetch_error(self):
        cm = _response(b"")
        cm.__enter__.return_value.read.side_effect = http.client.IncompleteRead(b"partial", 100)
        with patch("urllib.request.urlopen", return_value=cm):
            result = DocumentFetcher().fetch(URL)
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error.cause, http.client.IncompleteRead)
        self.assertEqual(result.text, "")

    def test_empty_url(self):
        with patch("urllib.request.urlopen") as urlopen:
            result = DocumentFetcher().fetch("")
        self.assertFalse(result.ok)
        urlopen.assert_not_called()

    def test_fetch_result_ok_property(self):
        self.assertTrue(FetchResult(url=URL, text="x").ok)
        self.assertFalse(FetchResult(url=URL, error=FetchError(URL, ValueError("x"))).ok)


if __name__ == "__main__":
    unittest.main()
