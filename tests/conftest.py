"""Global test fixtures."""

import os

import logfire

# Set before any test module builds a Config
# This must happen at module load time, not in a fixture
os.environ.setdefault("CUTOUT_TELEMETRY__INSTRUMENT", "false")

logfire.configure(send_to_logfire=False, console=False)
