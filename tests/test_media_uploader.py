"""Tests for asset upload dispatch."""

import pytest

from simple_anki_sync.domain.entities.flashcard import AssetUpload
from simple_anki_sync.exceptions import AnkiRejectedError
from simple_anki_sync.sync.media import MediaUploader


@pytest.mark.asyncio
async def test_uploads_in_order_once_per_occurrence(anki_store, notifier) -> None:
    uploader = MediaUploader(anki_store, notifier)
    uploads = [
        AssetUpload("a.png", "QQ=="),
        AssetUpload("b.png", "Qg=="),
        AssetUpload("a.png", "QQ=="),
    ]

    stored = await uploader.upload_all(uploads)

    assert stored == ["a.png", "b.png", "a.png"]
    assert [args[0] for args in anki_store.calls_to("upload_asset")] == [
        "a.png",
        "b.png",
        "a.png",
    ]


@pytest.mark.asyncio
async def test_failure_is_reported_and_skipped(anki_store, notifier) -> None:
    anki_store.failures["upload_asset"] = AnkiRejectedError("disk full")
    uploader = MediaUploader(anki_store, notifier)

    stored = await uploader.upload_all(
        [AssetUpload("a.png", "QQ=="), AssetUpload("b.png", "Qg==")]
    )

    assert stored == []
    assert len(anki_store.calls_to("upload_asset")) == 2
    assert notifier.messages("error") == [
        "Failed to upload a.png to Anki",
        "Failed to upload b.png to Anki",
    ]
