"""Slack Block Kit payload for an item record.

The message is always three blocks: a header with the record title, a
divider, and a section holding the record text as mrkdwn.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from kakomon.items import ItemRecord


class PlainText(BaseModel):
    type: Literal["plain_text"] = "plain_text"
    text: str
    emoji: bool = True


class Mrkdwn(BaseModel):
    type: Literal["mrkdwn"] = "mrkdwn"
    text: str


class HeaderBlock(BaseModel):
    type: Literal["header"] = "header"
    text: PlainText


class DividerBlock(BaseModel):
    type: Literal["divider"] = "divider"


class SectionBlock(BaseModel):
    type: Literal["section"] = "section"
    text: Mrkdwn


Block = Annotated[
    HeaderBlock | DividerBlock | SectionBlock,
    Field(discriminator="type"),
]


class Payload(BaseModel):
    blocks: list[Block]


def build_payload(record: ItemRecord) -> Payload:
    return Payload(
        blocks=[
            HeaderBlock(text=PlainText(text=record.title)),
            DividerBlock(),
            SectionBlock(text=Mrkdwn(text=record.text)),
        ],
    )


def format_record(record: ItemRecord) -> dict[str, Any]:
    """Return the JSON-serializable webhook payload for *record*."""
    return build_payload(record).model_dump(mode="json")


def payload_to_json(payload: dict[str, Any]) -> str:
    """Serialize *payload* for the wire, keeping non-ASCII text readable."""
    return json.dumps(payload, ensure_ascii=False)


def parse_payload(data: dict[str, Any] | str | bytes) -> ItemRecord:
    """Recover the :class:`ItemRecord` carried by a payload.

    Raises:
        pydantic.ValidationError: *data* is not a Block Kit payload.
        ValueError: the blocks are not header, divider, section in order.
    """
    if isinstance(data, (str, bytes)):
        payload = Payload.model_validate_json(data)
    else:
        payload = Payload.model_validate(data)

    if len(payload.blocks) != 3:
        raise ValueError(f"expected 3 blocks, got {len(payload.blocks)}")
    header, divider, section = payload.blocks
    if not (
        isinstance(header, HeaderBlock)
        and isinstance(divider, DividerBlock)
        and isinstance(section, SectionBlock)
    ):
        kinds = [block.type for block in payload.blocks]
        raise ValueError(f"expected header, divider, section blocks, got {kinds}")

    return ItemRecord(title=header.text.text, text=section.text.text)
