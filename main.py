#!/usr/bin/env python3
"""
FormFlow -- command-line front end for the form workflow and fetch helpers.

Usage:
  python main.py users
  python main.py user 3
  python main.py posts
  python main.py photos
  python main.py signup --name "Jane Doe" --email jane@example.com --password secret1
  python main.py register --name "Jane Doe" --email jane@example.com --password secret1
  python main.py login --email jane@example.com --password secret1
  python main.py login --provider google

All endpoints come from the environment (see core/config.py), e.g.
  REGISTER_URL=https://jsonplaceholder.typicode.com/posts python main.py register ...
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

import requests

from auth.identity import IdentityClient
from auth.oauth import oauth
from core.config import get_settings
from core.fetcher import FetchError, fetch_photos, fetch_posts, fetch_user, fetch_users
from core.http import RestClient
from core.models import FormFields, FormState, Mode
from forms.collaborators import RecordingNavigator
from forms.workflow import FormWorkflow

_FETCHERS = {
    "users": fetch_users,
    "posts": fetch_posts,
    "photos": fetch_photos,
}


def _print_json(data) -> None:
    print(json.dumps(data, indent=2))


def run_fetch(command: str, user_id: Optional[int] = None) -> int:
    try:
        data = fetch_user(user_id) if command == "user" else _FETCHERS[command]()
    except (FetchError, requests.RequestException) as e:
        print(f"  [!] {e}", file=sys.stderr)
        return 1
    _print_json(data)
    return 0


async def run_form(mode: Mode, args: argparse.Namespace) -> int:
    """Run one workflow submission and report the outcome. Returns the exit code."""
    cfg = get_settings()
    http = RestClient(timeout=cfg.http_timeout)
    identity = IdentityClient(cfg.auth_base_url, oauth, timeout=cfg.http_timeout)
    navigator = RecordingNavigator()
    workflow = FormWorkflow.from_settings(mode, identity=identity, http=http, navigator=navigator)
    try:
        if args.provider:
            result = await workflow.sign_in_with(args.provider)
            if result is None or not result.url:
                print(f"  [!] {args.provider} sign-in did not start (see log).", file=sys.stderr)
                return 1
            print(f"  Continue at: {result.url}")
            return 0

        state = await workflow.submit(FormFields(email=args.email or "", password=args.password or "", name=args.name))
    finally:
        http.close()
        identity.close()

    if workflow.errors:
        for field_name, message in workflow.errors.items():
            print(f"  [!] {field_name}: {message}", file=sys.stderr)
        return 2
    if state is FormState.failed:
        print(f"  [!] {workflow.error}", file=sys.stderr)
        return 1

    if mode is Mode.register and workflow.registered is not None:
        print("  User registered successfully.")
        shown = dict(workflow.registered)
        if "password" in shown and not args.show_password:
            shown["password"] = "*" * len(str(shown["password"]))
        _print_json(shown)
    elif navigator.location:
        print(f"  Signed up. Continue at: {navigator.location}")
    else:
        print("  Signed in.")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="formflow",
        description="Sign in, sign up or register against the demo APIs; browse the mock resources.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name in _FETCHERS:
        sub.add_parser(name, help=f"List {name} from the resource API")
    user_p = sub.add_parser("user", help="Show one user")
    user_p.add_argument("user_id", type=int)

    for mode in Mode:
        form_p = sub.add_parser(mode.value, help=f"Submit the {mode.value} form")
        form_p.add_argument("--email")
        form_p.add_argument("--password")
        if mode.requires_name:
            form_p.add_argument("--name")
        if mode is Mode.login:
            form_p.add_argument("--provider", choices=["google", "github"], help="Use a social provider instead")
        if mode is Mode.register:
            form_p.add_argument("--show-password", action="store_true", help="Print the registered password")
        form_p.set_defaults(mode=mode)

    args = parser.parse_args()
    for attr in ("name", "provider", "show_password"):
        if not hasattr(args, attr):
            setattr(args, attr, None)

    if getattr(args, "mode", None) is not None:
        sys.exit(asyncio.run(run_form(args.mode, args)))
    sys.exit(run_fetch(args.command, getattr(args, "user_id", None)))


if __name__ == "__main__":
    main()
