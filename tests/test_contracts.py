import unittest

import orjson
from pydantic import ValidationError

from pingserver.contracts.http_request import HttpRequest
from pingserver.contracts.http_response import HttpResponse
from pingserver.contracts.ping_response import ErrorResponse, PingResponse


class TestHttpRequestContract(unittest.TestCase):
    def test_request_fields(self):
        r = HttpRequest(method="GET", target="/ping?host=a", query={"host": "a"})
        self.assertEqual(r.method, "GET")
        self.assertEqual(r.target, "/ping?host=a")
        self.assertEqual(r.get_query_param("host"), "a")
        self.assertEqual(r.get_query_param("missing", "x"), "x")

    def test_request_fields_are_method_target_query(self):
        self.assertEqual(set(HttpRequest.model_fields), {"method", "target", "query"})

    def test_request_validation(self):
        with self.assertRaises(ValidationError):
            HttpRequest()


class TestHttpResponseContract(unittest.TestCase):
    def test_to_bytes_layout(self):
        resp = HttpResponse(status=200, body=b"OK\n", content_type="text/plain")
        self.assertEqual(
            resp.to_bytes(),
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: text/plain\r\n"
            b"Content-Length: 3\r\n"
            b"Connection: close\r\n"
            b"\r\n"
            b"OK\n",
        )

    def test_reason_phrases(self):
        self.assertEqual(HttpResponse(status=400).reason, "Bad Request")
        self.assertEqual(HttpResponse(status=404).reason, "Not Found")
        self.assertEqual(HttpResponse(status=500).reason, "Internal Server Error")
        self.assertEqual(HttpResponse(status=418).reason, "OK")

    def test_default_content_type_is_json(self):
        self.assertEqual(HttpResponse(status=200).content_type, "application/json")

    def test_response_is_immutable(self):
        resp = HttpResponse(status=200)
        with self.assertRaises(ValidationError):
            resp.status = 500


class TestPingResponseContract(unittest.TestCase):
    def test_latency_has_two_decimals(self):
        body = PingResponse(host="8.8.8.8", latency_ms=12.3).to_json()
        self.assertEqual(body, b'{"host":"8.8.8.8","latency_ms":12.30}')

    def test_latency_is_rounded(self):
        body = PingResponse(host="h", latency_ms=0.456).to_json()
        self.assertEqual(orjson.loads(body)["latency_ms"], 0.46)
        self.assertIn(b"0.46}", body)

    def test_negative_latency_rejected(self):
        with self.assertRaises(ValidationError):
            PingResponse(host="h", latency_ms=-1.0)

    def test_error_envelope(self):
        self.assertEqual(ErrorResponse(error="Not found").to_json(), b'{"error":"Not found"}')


if __name__ == "__main__":
    unittest.main()
