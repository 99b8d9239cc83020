# ─────────────────────────────────────────────────────────────────────────────
# File: roadmap_definition.py
# Directory: services
# Purpose: Load the roadmap definition (Balsamiq mockup JSON) and enumerate its
#          topic groups with their display labels.
#
# Upstream:
#   - ENV: —
#   - Imports: json, pathlib, pydantic, services.errors
#
# Downstream:
#   - services.orchestrator
#
# Contents:
#   - RoadmapDocument, MockupControl (pydantic models of the raw JSON)
#   - GroupNode, LabelNode, OtherNode (typed control tree)
#   - TopicGroup
#   - parse_control()
#   - definition_path()
#   - load_roadmap_document()
#   - load_topic_groups()
# ─────────────────────────────────────────────────────────────────────────────
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from services.errors import RoadmapDefinitionError

GROUP_TYPE_ID = "__group__"
LABEL_TYPE_ID = "Label"
EXTERNAL_LINK_PREFIX = "ext_link"


# ---- Raw document models ---------------------------------------------------------------------

class ControlProperties(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    control_name: Optional[str] = Field(None, alias="controlName")
    text: Optional[str] = None

    @field_validator("control_name", "text", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Optional[str]:
        # Balsamiq writes numeric-looking labels as numbers.
        if value is None:
            return None
        return str(value)


class MockupControl(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type_id: str = Field("", alias="typeID")
    properties: ControlProperties = Field(default_factory=ControlProperties)
    children: Optional["ChildControls"] = None

    def child_controls(self) -> List["MockupControl"]:
        if self.children is None or self.children.controls is None:
            return []
        return self.children.controls.control


class ControlList(BaseModel):
    control: List[MockupControl] = Field(default_factory=list)


class ChildControls(BaseModel):
    controls: Optional[ControlList] = None


class Mockup(BaseModel):
    controls: ControlList


class RoadmapDocument(BaseModel):
    mockup: Mockup


for _model in (MockupControl, ControlList, ChildControls, Mockup, RoadmapDocument):
    _model.model_rebuild()


# ---- Typed control tree ----------------------------------------------------------------------

@dataclass
class LabelNode:
    text: str


@dataclass
class GroupNode:
    control_name: Optional[str]
    children: List["ControlNode"] = field(default_factory=list)

    def first_label(self) -> Optional[LabelNode]:
        return next((c for c in self.children if isinstance(c, LabelNode)), None)


@dataclass
class OtherNode:
    type_id: str
    children: List["ControlNode"] = field(default_factory=list)


ControlNode = Union[GroupNode, LabelNode, OtherNode]


@dataclass(frozen=True)
class TopicGroup:
    control_id: str
    title: str


def parse_control(control: MockupControl) -> ControlNode:
    """Recursive descent from raw mockup controls into group/label/other nodes."""
    children = [parse_control(c) for c in control.child_controls()]
    if control.type_id == GROUP_TYPE_ID:
        return GroupNode(control_name=control.properties.control_name, children=children)
    if control.type_id == LABEL_TYPE_ID:
        return LabelNode(text=control.properties.text or "")
    return OtherNode(type_id=control.type_id, children=children)


# ---- Loading ---------------------------------------------------------------------------------

def definition_path(roadmap_dir: Path, roadmap_id: str) -> Path:
    """`<dir>/<id>` if it exists as a file, else `<dir>/<id>.json`."""
    bare = roadmap_dir / roadmap_id
    if bare.is_file():
        return bare
    return roadmap_dir / f"{roadmap_id}.json"


def load_roadmap_document(path: Path) -> RoadmapDocument:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise RoadmapDefinitionError(f"Roadmap definition not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise RoadmapDefinitionError(f"Roadmap definition is not valid JSON: {path}: {exc}") from exc

    try:
        return RoadmapDocument.model_validate(raw)
    except ValidationError as exc:
        raise RoadmapDefinitionError(f"Unexpected roadmap definition shape in {path}: {exc}") from exc


def load_topic_groups(document: RoadmapDocument) -> List[TopicGroup]:
    """
    Top-level `__group__` controls that are not external links.

    Groups with no control name are dropped; a group with no Label child keeps
    an empty title.
    """
    groups: List[TopicGroup] = []
    for control in document.mockup.controls.control:
        node = parse_control(control)
        if not isinstance(node, GroupNode):
            continue
        name = node.control_name
        if not name:
            continue
        if name.startswith(EXTERNAL_LINK_PREFIX):
            continue
        label = node.first_label()
        groups.append(TopicGroup(control_id=name, title=label.text if label else ""))
    return groups
