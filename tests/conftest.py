import pytest

from licensefetch_cli.errors import RetrievalError, UnavailableError
from licensefetch_cli.registry import LicenseRecord, LicenseSummary

MIT_BODY = (
    "MIT License\n"
    "\n"
    "Copyright (c) [year] [fullname]\n"
    "\n"
    "Permission is hereby granted, free of charge, to any person obtaining a copy\n"
)

GPL3_BODY = (
    "    <one line to give the program's name and a brief idea of what it does.>\n"
    "    Copyright (C) <year>  <name of author>\n"
    "\n"
    "    <program>  Copyright (C) <year>  <name of author>\n"
    "    This program comes with ABSOLUTELY NO WARRANTY.\n"
)

APACHE_BODY = (
    "   Copyright [yyyy] [name of copyright owner]\n"
    "\n"
    '   Licensed under the Apache License, Version 2.0 (the "License");\n'
)

UNLICENSE_BODY = "This is free and unencumbered software released into the public domain. [year] <year>\n"


def make_payload(key, name, body, **extra):
    payload = {
        "key": key,
        "name": name,
        "spdx_id": key.upper(),
        "url": f"https://api.github.com/licenses/{key}",
        "html_url": f"https://choosealicense.com/licenses/{key}/",
        "description": f"The {name}.",
        "implementation": "Create a text file named LICENSE.",
        "permissions": ["commercial-use", "modifications"],
        "conditions": ["include-copyright"],
        "limitations": ["liability", "warranty"],
        "body": body,
        "featured": True,
    }
    payload.update(extra)
    return payload


PAYLOADS = {
    "mit": make_payload("mit", "MIT License", MIT_BODY),
    "gpl-3.0": make_payload("gpl-3.0", "GNU General Public License v3.0", GPL3_BODY),
    "apache-2.0": make_payload("apache-2.0", "Apache License 2.0", APACHE_BODY),
    "unlicense": make_payload("unlicense", "The Unlicense", UNLICENSE_BODY, featured=False),
}


class FakeRegistry:
    def __init__(self, payloads=None, available=True):
        self.payloads = dict(PAYLOADS if payloads is None else payloads)
        self.available = available
        self.requested = []

    def fetch_all(self):
        if not self.available:
            raise UnavailableError("License registry is unavailable: connection refused")
        return [
            LicenseSummary(key=p["key"], name=p["name"], url=p["url"])
            for p in self.payloads.values()
        ]

    def fetch_one(self, key):
        self.requested.append(key)
        if key not in self.payloads:
            raise RetrievalError(key, "404 Client Error: Not Found")
        return LicenseRecord.from_payload(self.payloads[key])


class RecordingIdentity:
    def __init__(self, name=""):
        self.name = name
        self.calls = 0

    def author_name(self):
        self.calls += 1
        return self.name


@pytest.fixture
def registry():
    return FakeRegistry()


@pytest.fixture
def identity():
    return RecordingIdentity("Git User")
