"""Upload embedded assets to Anki's media folder."""

from ..domain.entities.flashcard import AssetUpload
from ..domain.interfaces.anki_store import IAnkiStore
from ..domain.interfaces.notifier import INotifier
from ..error_codes import ErrorCode
from ..exceptions import AnkiError
from ..utils.logging import get_logger

logger = get_logger(__name__)


class MediaUploader:
    """Dispatch asset uploads one at a time, tolerating individual failures."""

    def __init__(self, anki_store: IAnkiStore, notifier: INotifier):
        self.anki = anki_store
        self.notifier = notifier

    async def upload_all(self, uploads: list[AssetUpload]) -> list[str]:
        """Upload every asset in order, once per occurrence.

        Returns:
            Names of the assets Anki stored
        """
        stored: list[str] = []
        for upload in uploads:
            try:
                name = await self.anki.upload_asset(
                    upload.target_file_name, upload.payload
                )
            except AnkiError as e:
                logger.error(
                    "asset_upload_failed",
                    file=upload.target_file_name,
                    error=str(e),
                    error_code=ErrorCode.ANK_MEDIA_FAILED.value,
                )
                self.notifier.notify(
                    f"Failed to upload {upload.target_file_name} to Anki",
                    level="error",
                )
                continue
            logger.debug("asset_uploaded", file=name)
            stored.append(name)
        return stored
