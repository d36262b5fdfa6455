"""
Check email addresses against NeverBounce from the command line.

Credentials and options default to the NEVERBOUNCE_* settings; flags override
them. The client authenticates once and checks each address in turn.
"""

import argparse
import json
import sys
from typing import List, Optional

from shared.config import get_settings
from shared.errors import NeverBounceError
from shared.logging import clear_context, configure_logging, set_request_id
from neverbounce.client import NeverBounceClient

EXIT_ALL_VALID = 0
EXIT_ERROR = 1
EXIT_NOT_VALID = 2


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="neverbounce-verify",
        description="Check email addresses with the NeverBounce API."
    )
    parser.add_argument("emails", nargs="+", metavar="EMAIL", help="Address to check")
    parser.add_argument("--username", default=None, help="API username (NEVERBOUNCE_API_USERNAME)")
    parser.add_argument("--api-key", default=None, help="API key (NEVERBOUNCE_API_KEY)")
    parser.add_argument("--base-url", default=None, help="API base URL (NEVERBOUNCE_BASE_URL)")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds (NEVERBOUNCE_TIMEOUT)")
    parser.add_argument("--log-level", default=None, help="Log level (NEVERBOUNCE_LOG_LEVEL)")
    parser.add_argument("--json", action="store_true", help="Print outcomes as JSON")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    overrides = {
        "api_username": args.username,
        "api_key": args.api_key,
        "base_url": args.base_url,
        "timeout": args.timeout,
        "log_level": args.log_level,
    }

    try:
        settings = get_settings(**{key: value for key, value in overrides.items() if value is not None})
        configure_logging("neverbounce", settings.log_level)
        set_request_id()

        with NeverBounceClient.from_settings(settings) as client:
            client.authenticate()
            outcomes = [client.check_email(email) for email in args.emails]
    except KeyboardInterrupt:
        return 130
    except NeverBounceError as exc:
        print(exc.to_response().model_dump_json(), file=sys.stderr)
        return EXIT_ERROR
    finally:
        clear_context()

    if args.json:
        print(json.dumps([outcome.model_dump(mode="json") for outcome in outcomes], indent=2))
    else:
        for outcome in outcomes:
            status = "valid" if outcome.valid else "not valid"
            print(f"{outcome.email}\t{status}\t{outcome.label}")

    return EXIT_ALL_VALID if all(outcome.valid for outcome in outcomes) else EXIT_NOT_VALID


if __name__ == "__main__":
    raise SystemExit(main())
