"""Root conftest — shared test configuration."""

import os

# Ensure tests never load real SnapTrade credentials
os.environ.setdefault("CLIENT_ID", "test-client-id")
os.environ.setdefault("CONSUMER_SECRET", "test-consumer-secret")
