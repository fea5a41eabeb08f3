"""Command-line entry point: run one MMS transaction against the configured carrier.

    mms-transport get URL [--output FILE]
    mms-transport post URL PDU_FILE [--output FILE]

Carrier configuration (user agent, UA profile, extra headers, macros, proxy) is
read from the environment / .env via Settings.
"""
import argparse
import sys
from pathlib import Path

from loguru import logger

from mms_transport.app.composition import create_transport_dependencies
from mms_transport.app.constants import HTTP_METHOD
from mms_transport.app.core import SERVICE_NAME


def _log(event: str, **kwargs) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info(event)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="mms-transport", description="Send or download one MMS PDU.")
    commands = parser.add_subparsers(dest="command", required=True)

    get = commands.add_parser("get", help="download a message from its content location")
    get.add_argument("url")
    get.add_argument("--output", type=Path, help="write the response body here instead of stdout")

    post = commands.add_parser("post", help="send an encoded PDU to the MMSC")
    post.add_argument("url")
    post.add_argument("pdu", type=Path, help="file holding the encoded PDU")
    post.add_argument("--output", type=Path, help="write the response body here instead of stdout")

    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    payload = args.pdu.read_bytes() if args.command == "post" else None
    method = HTTP_METHOD.POST if args.command == "post" else HTTP_METHOD.GET

    with create_transport_dependencies() as deps:
        result = deps.executor.execute(args.url, payload, method, deps.proxy(), deps.config_snapshot())

    if not result.ok:
        error = result.error
        _log("mms_transaction_failed", kind=error.kind.value, status_code=error.status_code, error=error.message)
        return 1

    body = result.body or b""
    if args.output is not None:
        args.output.write_bytes(body)
    else:
        sys.stdout.buffer.write(body)
    _log("mms_transaction_completed", size=len(body))
    return 0


def main() -> None:
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        _log("mms_transport_interrupted")
    except Exception as e:
        logger.exception("mms transport failed: {}", e)
        raise


if __name__ == "__main__":
    main()
