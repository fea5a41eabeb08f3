"""
Shared PDUs and URLs for transport unit and integration tests.
"""

# m-send-req header start (X-Mms-Message-Type: m-send-req, transaction id "T1")
SEND_REQ_PDU = b"\x8c\x80\x98T1\x00\x8d\x92"

# m-send-conf body an MMSC answers with
SEND_CONF_PDU = b"\x8c\x81\x98T1\x00\x8d\x92\x92\x80"

# m-retrieve-conf body for downloads
RETRIEVE_CONF_PDU = b"\x8c\x84\x98T2\x00\x8d\x92\x84\xa3"

MMSC_URL = "http://mmsc.example.net/mms"
MMSC_HTTPS_URL = "https://mmsc.example.net/mms"
CONTENT_LOCATION_URL = "http://mmsc.example.net/retrieve?id=0042"

UNSUPPORTED_SCHEME_URLS = [
    "ftp://mmsc.example.net/mms",
    "file:///tmp/pdu",
    "ws://mmsc.example.net/mms",
]
