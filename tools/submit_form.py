#!/usr/bin/env python3
# ============================================================================
# CLI FORM SUBMISSION TOOL
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Tool - Submit a permit application over HTTP
# PURPOSE: Exercise the intake endpoints without a frontend
# CREATED: 18 OCT 2026
# ============================================================================
"""
Submit a research or internship form to a running intake API.

Usage:
    # Research form, fields from JSON, three attachments
    python tools/submit_form.py penelitian fields.json \\
        --file suratPengantarFile=letter.pdf \\
        --file proposalFile=proposal.pdf \\
        --file ktpFile=ktp.jpg

    # Internship form against another host
    python tools/submit_form.py magang fields.json --url http://intake:3000 \\
        --file suratPengantarFile=letter.pdf --file proposalFile=plan.pdf --file ktpFile=ktp.png
"""

import argparse
import json
import mimetypes
import os
import sys
from typing import Dict, List, Tuple

import httpx


def parse_file_args(values: List[str]) -> List[Tuple[str, str]]:
    """Turn ["slot=path", ...] into [(slot, path), ...]."""
    pairs = []
    for value in values:
        slot, sep, path = value.partition("=")
        if not sep or not slot or not path:
            raise ValueError(f"Expected slot=path, got: {value}")
        pairs.append((slot, path))
    return pairs


def submit_form(
    base_url: str,
    service: str,
    fields: Dict[str, str],
    file_args: List[Tuple[str, str]],
    timeout: float = 60.0,
) -> httpx.Response:
    """POST one multipart submission and return the response."""
    handles = []
    try:
        files = []
        for slot, path in file_args:
            content_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
            handle = open(path, "rb")
            handles.append(handle)
            files.append((slot, (os.path.basename(path), handle, content_type)))

        with httpx.Client(timeout=timeout) as client:
            return client.post(
                f"{base_url.rstrip('/')}/api/{service}",
                data=fields,
                files=files,
            )
    finally:
        for handle in handles:
            handle.close()


def main():
    parser = argparse.ArgumentParser(
        description="Submit a permit application to the intake API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("service", choices=["penelitian", "magang", "submit-form"])
    parser.add_argument("fields", help="Path to a JSON object of form fields")
    parser.add_argument(
        "--file", "-f",
        action="append",
        default=[],
        help="Attachment as slot=path (repeatable)",
    )
    parser.add_argument(
        "--url",
        default=os.environ.get("INTAKE_API_URL", "http://localhost:3000"),
        help="Base URL of the intake API",
    )
    args = parser.parse_args()

    with open(args.fields, "r", encoding="utf-8") as f:
        fields = {k: str(v) for k, v in json.load(f).items()}

    try:
        file_args = parse_file_args(args.file)
    except ValueError as e:
        parser.error(str(e))

    print(f"Submitting {args.service} form to {args.url}")
    print(f"  Fields: {len(fields)}")
    for slot, path in file_args:
        print(f"  File:   {slot} <- {path}")

    try:
        resp = submit_form(args.url, args.service, fields, file_args)
    except httpx.HTTPError as e:
        print(f"\nRequest failed: {e}")
        return 2

    print(f"\nHTTP {resp.status_code}")
    try:
        print(json.dumps(resp.json(), indent=2))
    except ValueError:
        print(resp.text)

    return 0 if resp.status_code == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
