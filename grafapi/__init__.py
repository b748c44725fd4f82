"""Client for the Grafana HTTP API; the full client is grafapi.client.Client."""

__version__ = "0.1.0"