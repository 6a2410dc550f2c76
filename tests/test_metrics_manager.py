import unittest
from unittest.mock import patch

from prometheus_client import CollectorRegistry

from pingserver.core.metrics_manager import MetricsManager


class TestMetricsManager(unittest.TestCase):
    def setUp(self):
        self.mm = MetricsManager()

    def test_managers_do_not_collide(self):
        # Each manager owns a registry, so a second one registers cleanly
        other = MetricsManager()
        self.assertIsNot(other.registry, self.mm.registry)

    def test_shared_registry(self):
        registry = CollectorRegistry()
        mm = MetricsManager(registry=registry)
        self.assertIs(mm.registry, registry)

    def test_record_response(self):
        self.mm.record_response(200)
        self.mm.record_response(200)
        self.mm.record_response(404)
        self.assertEqual(
            self.mm.get_sample_value("pingserver_requests_total", {"status": "200"}), 2.0
        )
        self.assertEqual(
            self.mm.get_sample_value("pingserver_requests_total", {"status": "404"}), 1.0
        )

    def test_record_probe(self):
        self.mm.record_probe(12.5)
        self.mm.record_probe(None)
        self.assertEqual(self.mm.get_sample_value("pingserver_probe_latency_ms_sum"), 12.5)
        self.assertEqual(self.mm.get_sample_value("pingserver_probe_failures_total"), 1.0)

    def test_in_flight(self):
        self.assertEqual(self.mm.get_in_flight(), 0)
        self.mm.IN_FLIGHT.inc()
        self.assertEqual(self.mm.get_in_flight(), 1)
        self.mm.IN_FLIGHT.dec()
        self.assertEqual(self.mm.get_in_flight(), 0)

    @patch("pingserver.core.metrics_manager.start_http_server")
    def test_start_exporter(self, mock_start):
        self.mm.start_exporter(9100, addr="127.0.0.1")
        mock_start.assert_called_once_with(9100, addr="127.0.0.1", registry=self.mm.registry)


if __name__ == "__main__":
    unittest.main()
