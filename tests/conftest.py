"""
Pytest configuration for the subdata test suite.

Puts the src directory on the Python path so tests run without an
editable install, and provides a recording fake transport.
"""
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode

import pytest

project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))


def envelope(**payloads: Any) -> Dict[str, Any]:
    """Build an "ok" response document carrying the given payload fields."""
    return {"subsonic-response": {"status": "ok", "version": "1.16.1", **payloads}}


def failed(code: int, message: str, **payloads: Any) -> Dict[str, Any]:
    """Build a "failed" response document."""
    return {
        "subsonic-response": {
            "status": "failed",
            "version": "1.16.1",
            "error": {"code": code, "message": message},
            **payloads,
        }
    }


class FakeTransport:
    """Transport returning canned documents and recording every call.

    ``responses`` maps an operation name to a document, or to a list of
    documents consumed one per call.
    """

    def __init__(self, responses: Optional[Dict[str, Any]] = None, binaries: Optional[Dict[str, bytes]] = None):
        self.responses = responses or {}
        self.binaries = binaries or {}
        self.calls: List[Tuple[str, Optional[Dict[str, str]]]] = []

    def invoke(self, operation: str, query: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        self.calls.append((operation, query))
        response = self.responses[operation]
        if isinstance(response, list):
            return response.pop(0)
        return response

    def invoke_bytes(self, operation: str, query: Optional[Dict[str, str]] = None) -> bytes:
        self.calls.append((operation, query))
        return self.binaries[operation]

    def build_url(self, operation: str, query: Optional[Dict[str, str]] = None) -> str:
        self.calls.append((operation, query))
        return f"https://music.example.com/rest/{operation}?{urlencode(query or {})}"

    def operations(self) -> List[str]:
        return [operation for operation, _ in self.calls]


@pytest.fixture
def fixtures() -> Dict[str, Any]:
    """Load Subsonic API response fixtures from JSON file."""
    fixtures_path = Path(__file__).parent / "subsonic" / "fixtures" / "subsonic_responses.json"
    with open(fixtures_path, "r") as f:
        return json.load(f)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()
