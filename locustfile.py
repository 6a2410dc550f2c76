import os

from locust import FastHttpUser, between, task

PING_HOST = os.environ.get("LOCUST_PING_HOST", "127.0.0.1")


class PingServerUser(FastHttpUser):
    wait_time = between(1, 5)

    @task(3)
    def health_check(self):
        self.client.get("/health")

    @task
    def ping(self):
        with self.client.get(
            f"/ping?host={PING_HOST}", name="/ping", catch_response=True
        ) as response:
            if response.status_code != 200:
                response.failure(f"ping returned {response.status_code}")
            elif "latency_ms" not in response.json():
                response.failure("missing latency_ms")
