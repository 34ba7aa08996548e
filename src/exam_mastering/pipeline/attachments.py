"""
Attachment handling.

Collects the files a mastered exam version references, marks restricted
audio and enriches media elements with their dimensions or duration.
"""

from typing import List
import logging

from lxml import etree

from ..external.collaborators import GetMediaMetadata
from ..models import Attachment, AudioMetadata
from ..schema import ATTACHMENT_TYPES, GRADING_INSTRUCTION_ELEMENTS, NS, VISIBLE_IN_GRADING_INSTRUCTIONS_ELEMENTS
from ..utils.xml import format_number, get_attribute, local_name, query_ancestors, xpath_or

logger = logging.getLogger(__name__)


def find_attachments(root: etree._Element) -> List[etree._Element]:
    """Media elements (audio, audio-test, file, image, video) in document order."""
    return root.xpath(xpath_or(ATTACHMENT_TYPES), namespaces=NS)


def is_restricted(attachment: etree._Element) -> bool:
    """Restricted audio carries a play limit in its times attribute."""
    return attachment.get("times") is not None


def is_visible_in_grading_instructions(attachment: etree._Element) -> bool:
    return query_ancestors(
        attachment, lambda e: local_name(e) in VISIBLE_IN_GRADING_INSTRUCTIONS_ELEMENTS
    ) is not None


def is_within_grading_instructions(attachment: etree._Element) -> bool:
    return query_ancestors(
        attachment, lambda e: local_name(e) in GRADING_INSTRUCTION_ELEMENTS
    ) is not None


def add_restricted_audio_metadata(attachments: List[etree._Element]) -> None:
    """Number restricted audio elements 0, 1, ... in encounter order."""
    restricted_audio = [a for a in attachments if local_name(a) == "audio" and is_restricted(a)]
    for i, audio in enumerate(restricted_audio):
        audio.set("restricted-audio-id", str(i))


def add_media_metadata(attachments: List[etree._Element], get_media_metadata: GetMediaMetadata) -> None:
    """
    Write duration on audio, width and height on images and videos.

    Lookups run one at a time in document order.
    """
    for attachment in attachments:
        name = local_name(attachment)
        if name not in ("audio", "audio-test", "image", "video"):
            continue

        kind = "audio" if name == "audio-test" else name
        metadata = get_media_metadata(get_attribute("src", attachment), kind)

        if kind == "audio":
            if not isinstance(metadata, AudioMetadata):
                metadata = AudioMetadata.model_validate(metadata)
            attachment.set("duration", format_number(metadata.duration))
        else:
            width = metadata["width"] if isinstance(metadata, dict) else metadata.width
            height = metadata["height"] if isinstance(metadata, dict) else metadata.height
            attachment.set("width", format_number(width))
            attachment.set("height", format_number(height))


def collect_attachments(root: etree._Element, attachments: List[etree._Element]) -> List[Attachment]:
    """
    Describe the attachments of an exam version.

    The exam's custom stylesheet is included as a plain attachment.
    Duplicates (equal in all four fields) are dropped, keeping the first.
    """
    collected = [
        Attachment(
            filename=get_attribute("src", attachment),
            restricted=is_restricted(attachment),
            visible_in_grading_instructions=is_visible_in_grading_instructions(attachment),
            within_grading_instruction=is_within_grading_instructions(attachment),
        )
        for attachment in attachments
    ]

    custom_stylesheet = root.get("exam-stylesheet")
    if custom_stylesheet:
        collected.append(Attachment(filename=custom_stylesheet))

    seen = set()
    unique: List[Attachment] = []
    for attachment in collected:
        key = attachment.key()
        if key not in seen:
            seen.add(key)
            unique.append(attachment)

    logger.debug(f"Collected {len(unique)} attachments ({len(collected) - len(unique)} duplicates)")
    return unique
