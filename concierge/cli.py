# concierge/cli.py
# ──────────────────────────────────────────────────────────────────────────────
# Place a one-off scripted call from the terminal.
# - Same validation rules as POST /api/call
# - Credentials come from TWILIO_* env vars (or .env)
# - Exit code 0 on success, 1 on any failure
# ──────────────────────────────────────────────────────────────────────────────

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from .config import configure_logging, get_settings, load_twilio_credentials
from .dispatcher import CallDispatcher, CallFailed
from .errors import CallValidationError
from .schemas import DEFAULT_VOICE, Voice, validate_call_request
from .twilio_client import TwilioService


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="concierge", description="Call Concierge utilities")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_call = sub.add_parser("call", help="Place an outbound call that reads a message aloud")
    p_call.add_argument("--name", required=True, help="Name the agent introduces itself with")
    p_call.add_argument("--to", required=True, help="E.164 number, e.g. +14155550123")
    p_call.add_argument("--message", required=True, help="Message to read (10-600 characters)")
    p_call.add_argument(
        "--voice",
        default=DEFAULT_VOICE.value,
        help=f"One of: {', '.join(v.value for v in Voice)}",
    )
    return ap


def main(argv: Optional[Sequence[str]] = None, *, dispatcher: Optional[CallDispatcher] = None) -> int:
    load_dotenv()
    args = _parser().parse_args(argv)
    configure_logging(get_settings().log_level)
    dispatcher = dispatcher or CallDispatcher(TwilioService)

    try:
        call = validate_call_request(
            {
                "callerName": args.name,
                "targetNumber": args.to,
                "message": args.message,
                "voice": args.voice,
            }
        )
    except CallValidationError as e:
        print(f"❌ Error: {e.message}", file=sys.stderr)
        return 1

    result = dispatcher.dispatch(call, load_twilio_credentials())
    if isinstance(result, CallFailed):
        print(f"❌ Error: {result.message}", file=sys.stderr)
        return 1
    print(f"📞 Call placed: SID={result.sid}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
