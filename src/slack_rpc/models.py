"""Structured payloads embedded in request parameters.

These cover just enough of Block Kit, legacy attachments, dialogs and views to
build requests. Every model accepts extra keys, so any field Slack supports can
be passed through even when it is not declared here.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SlackPayload(BaseModel):
    model_config = ConfigDict(extra="allow")


class TextObject(SlackPayload):
    type: str = "mrkdwn"
    text: str
    emoji: Optional[bool] = None
    verbatim: Optional[bool] = None


class Block(SlackPayload):
    type: str
    block_id: Optional[str] = None
    text: Optional[TextObject] = None
    elements: Optional[List[Dict[str, Any]]] = None
    fields: Optional[List[TextObject]] = None
    accessory: Optional[Dict[str, Any]] = None


class AttachmentField(SlackPayload):
    title: Optional[str] = None
    value: Optional[str] = None
    short: Optional[bool] = None


class Attachment(SlackPayload):
    fallback: Optional[str] = None
    color: Optional[str] = None
    pretext: Optional[str] = None
    author_name: Optional[str] = None
    author_link: Optional[str] = None
    author_icon: Optional[str] = None
    title: Optional[str] = None
    title_link: Optional[str] = None
    text: Optional[str] = None
    fields: Optional[List[AttachmentField]] = None
    image_url: Optional[str] = None
    thumb_url: Optional[str] = None
    footer: Optional[str] = None
    footer_icon: Optional[str] = None
    callback_id: Optional[str] = None
    actions: Optional[List[Dict[str, Any]]] = None
    mrkdwn_in: Optional[List[str]] = None
    blocks: Optional[List[Block]] = None


class DialogElement(SlackPayload):
    type: str
    label: str
    name: str
    placeholder: Optional[str] = None
    value: Optional[str] = None
    optional: Optional[bool] = None
    hint: Optional[str] = None
    subtype: Optional[str] = None
    max_length: Optional[int] = None
    min_length: Optional[int] = None
    options: Optional[List[Dict[str, Any]]] = None


class Dialog(SlackPayload):
    title: str
    callback_id: str
    elements: List[DialogElement] = Field(default_factory=list)
    submit_label: Optional[str] = None
    notify_on_cancel: Optional[bool] = None
    state: Optional[str] = None


class View(SlackPayload):
    type: Optional[str] = None
    blocks: List[Block] = Field(default_factory=list)
    title: Optional[TextObject] = None
    submit: Optional[TextObject] = None
    close: Optional[TextObject] = None
    private_metadata: Optional[str] = None
    callback_id: Optional[str] = None
    external_id: Optional[str] = None
