"""Rewrite Obsidian field text into Anki HTML.

Two steps, always in this order:

1. ``![[image.png]]`` / ``![[image.png|200]]`` embeds that resolve to a vault
   file become ``<img>`` tags, and the file is queued for upload.
2. Math delimiters become MathJax delimiters and ``**bold**`` becomes
   ``<b>`` outside math.
"""

import base64
import re

from ..domain.entities.flashcard import AssetUpload, TransformedText
from ..domain.interfaces.document_store import IDocumentStore
from ..utils.logging import get_logger

logger = get_logger(__name__)

IMAGE_EMBED = re.compile(r"!\[\[([^|\]\n]+)(?:\|(\d+))?\]\]")

# group 1: $$block$$, group 2: $inline$
MATH_SPAN = re.compile(r"\$\$([\s\S]*?)\$\$|(?<![\$\\])\$([^$]+?)(?<!\\)\$")
BOLD = re.compile(r"\*\*(.+?)\*\*")


def _image_tag(name: str, width: str | None) -> str:
    if width:
        return f'<img src="{name}" width="{width}">'
    return f'<img src="{name}">'


def _convert_bold(text: str) -> str:
    return BOLD.sub(r"<b>\1</b>", text)


def convert_markup(text: str) -> str:
    """Convert math delimiters and bold markers in a single pass.

    >>> convert_markup("**x** is $x^2$")
    '<b>x</b> is \\\\(x^2\\\\)'
    """
    out: list[str] = []
    pos = 0
    for match in MATH_SPAN.finditer(text):
        out.append(_convert_bold(text[pos : match.start()]))
        block, inline = match.group(1), match.group(2)
        if block is not None:
            out.append(f"\\[{block}\\]")
        else:
            out.append(f"\\({inline}\\)")
        pos = match.end()
    out.append(_convert_bold(text[pos:]))
    return "".join(out)


class ContentTransformer:
    """Turn raw cell text into field HTML plus the assets it needs."""

    def __init__(self, document_store: IDocumentStore):
        self.document_store = document_store

    async def embed_assets(self, text: str, from_document: str) -> TransformedText:
        """Replace resolvable image embeds with ``<img>`` tags.

        Each occurrence is handled independently, so the same image embedded
        twice yields two uploads. References that do not resolve are left
        exactly as written.
        """
        out: list[str] = []
        uploads: list[AssetUpload] = []
        pos = 0

        for match in IMAGE_EMBED.finditer(text):
            reference, width = match.group(1), match.group(2)
            asset = await self.document_store.resolve_asset_reference(
                reference, from_document
            )
            if asset is None:
                logger.debug(
                    "asset_reference_unresolved",
                    document=from_document,
                    reference=reference,
                )
                continue

            data = await self.document_store.read_binary(asset)
            name = self.document_store.display_name(asset)
            uploads.append(
                AssetUpload(
                    target_file_name=name,
                    payload=base64.b64encode(data).decode("ascii"),
                )
            )
            out.append(text[pos : match.start()])
            out.append(_image_tag(name, width))
            pos = match.end()

        out.append(text[pos:])
        return TransformedText(content="".join(out), uploads=uploads)

    async def transform(self, text: str, from_document: str) -> TransformedText:
        """Embed assets, then convert markup."""
        embedded = await self.embed_assets(text, from_document)
        return TransformedText(
            content=convert_markup(embedded.content), uploads=embedded.uploads
        )
