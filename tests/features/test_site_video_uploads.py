"""
Test Large Video Uploads

This module tests the large and XL video routes including:
- Attaching the video to a new or existing content block
- Required section and key
- Type and size rules of each route
- Authorization
"""

import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from careadmin.features.uploads.constants import ERROR_INVALID_LARGE_VIDEO_TYPE, MAX_LARGE_VIDEO_SIZE
from careadmin.features.uploads.policies import LARGE_VIDEO_POLICY, XL_VIDEO_POLICY
from careadmin.shared.database import SITE_CONTENT
from careadmin.shared.exceptions import UNAUTHORIZED_MESSAGE, FileTooLargeError

LARGE_URL = "/api/center/large-video-upload"
XL_URL = "/api/xl-video-upload"
HERO = {"section": "homepage", "key": "hero-video"}


def video_file(name="hero.mp4", content_type="video/mp4", size=2048):
    return {"video": (name, io.BytesIO(b"\0" * size), content_type)}


def stored_videos(upload_root):
    directory = upload_root / "videos"
    return sorted(p.name for p in directory.iterdir()) if directory.exists() else []


@pytest.mark.parametrize("url", [LARGE_URL, XL_URL])
def test_upload_creates_content_block(auth_client, fake_db, upload_root, url):
    response = auth_client.post(url, data=dict(HERO, title="Welcome"), files=video_file())

    assert response.status_code == 201
    body = response.json()
    assert body["key"] == "hero-video"
    assert body["section"] == "homepage"
    assert body["title"] == "Welcome"
    assert body["content"] == ""
    assert body["videoUrl"] == f"/uploads/videos/{stored_videos(upload_root)[0]}"
    assert body["updatedAt"] is not None
    assert fake_db[SITE_CONTENT].docs[0]["video_url"] == body["videoUrl"]


def test_upload_updates_existing_block(auth_client, fake_db):
    fake_db[SITE_CONTENT].seed({
        "key": "hero-video", "section": "homepage", "title": "Old title", "content": "Old copy",
    })

    response = auth_client.post(
        LARGE_URL,
        data=dict(HERO, content="New copy"),
        files=video_file(name="clip.webm", content_type="video/webm"),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Old title"
    assert body["content"] == "New copy"
    assert body["videoUrl"].endswith(".webm")
    assert len(fake_db[SITE_CONTENT].docs) == 1


@pytest.mark.parametrize("form", [{"section": "homepage"}, {"key": "hero-video"}, {}])
def test_section_and_key_required(auth_client, fake_db, upload_root, form):
    response = auth_client.post(LARGE_URL, data=form, files=video_file())

    assert response.status_code == 400
    assert response.json() == {"error": "Section and key are required."}
    assert stored_videos(upload_root) == []
    assert fake_db[SITE_CONTENT].docs == []


@pytest.mark.parametrize("files", [None, {"other": ("hero.mp4", io.BytesIO(b"x"), "video/mp4")}])
def test_missing_video(auth_client, files):
    response = auth_client.post(XL_URL, data=dict(HERO, video="not a file"), files=files)

    assert response.status_code == 400
    assert response.json() == {"error": "No video file was uploaded"}


@pytest.mark.parametrize("url", [LARGE_URL, XL_URL])
def test_quicktime_rejected(auth_client, upload_root, url):
    response = auth_client.post(url, data=HERO, files=video_file(name="clip.mov", content_type="video/quicktime"))

    assert response.status_code == 400
    assert response.json() == {"error": ERROR_INVALID_LARGE_VIDEO_TYPE}
    assert stored_videos(upload_root) == []


def test_large_route_limit_and_xl_route_unlimited(acceptor):
    oversized = UploadFile(
        io.BytesIO(b""),
        size=MAX_LARGE_VIDEO_SIZE + 1,
        filename="huge.mp4",
        headers=Headers({"content-type": "video/mp4"}),
    )

    with pytest.raises(FileTooLargeError) as excinfo:
        acceptor.check(LARGE_VIDEO_POLICY, oversized)
    assert excinfo.value.message == "File too large. Maximum allowed size is 250MB"

    assert acceptor.check(XL_VIDEO_POLICY, oversized) is oversized


@pytest.mark.parametrize("url", [LARGE_URL, XL_URL])
def test_requires_session(test_client, fake_db, upload_root, url):
    response = test_client.post(url, data=HERO, files=video_file())

    assert response.status_code == 401
    assert response.json() == {"error": UNAUTHORIZED_MESSAGE}
    assert stored_videos(upload_root) == []
    assert fake_db[SITE_CONTENT].docs == []
