"""Allow `python -m relay`."""

from relay.server import run

run()
