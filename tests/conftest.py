"""Shared test fixtures for rexclient."""

from __future__ import annotations

from typing import Any

import pytest

from rexclient.config import Settings

BASE_URL = "https://rex.test"


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url=BASE_URL, client_id="client", client_secret="secret")


@pytest.fixture
def project_payload() -> dict[str, Any]:
    """A project as returned by GET /api/v2/projects/1020."""
    return {
        "name": "Office Graz",
        "owner": "user-1",
        "type": "rex",
        "tagLine": "",
        "description": "Ground floor",
        "dateCreated": "2018-03-01T10:00:00.000+0000",
        "createdBy": "user-1",
        "_embedded": {
            "rootRexReference": {
                "rootReference": True,
                "key": "4e4b8f6c-1111-2222-3333-444455556666",
                "_links": {
                    "self": {"href": f"{BASE_URL}/api/v2/rexReferences/77"},
                    "project": {"href": f"{BASE_URL}/api/v2/projects/1020{{?projection}}"},
                },
            },
            "projectFiles": [
                {
                    "name": "floor plan",
                    "type": "rex",
                    "fileSize": 4096,
                    "lastModified": "2018-03-02T09:00:00.000+0000",
                    "_links": {
                        "self": {"href": f"{BASE_URL}/api/v2/projectFiles/501"},
                        "rexReference": {"href": f"{BASE_URL}/api/v2/rexReferences/78"},
                        "file.download": {"href": f"{BASE_URL}/api/v2/projectFiles/501/file"},
                    },
                },
                {
                    "name": "a rather long file name that will be truncated.rex",
                    "fileSize": 2048,
                    "_links": {"self": {"href": f"{BASE_URL}/api/v2/projectFiles/502"}},
                },
            ],
            "rexReferences": [
                {
                    "rootReference": False,
                    "key": "aa",
                    "_links": {
                        "self": {"href": f"{BASE_URL}/api/v2/rexReferences/78"},
                        "parentReference": {"href": f"{BASE_URL}/api/v2/rexReferences/77"},
                    },
                }
            ],
        },
        "_links": {
            "self": {"href": f"{BASE_URL}/api/v2/projects/1020"},
            "projectFiles": {"href": f"{BASE_URL}/api/v2/projects/1020/projectFiles"},
            "rexReferences": {"href": f"{BASE_URL}/api/v2/projects/1020/rexReferences"},
            "thumbnail.download": {"href": f"{BASE_URL}/api/v2/projects/1020/thumbnail"},
        },
    }
