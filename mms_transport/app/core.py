"""Service-wide identifiers shared by logging call sites."""
from __future__ import annotations

SERVICE_NAME = "mms_transport"
