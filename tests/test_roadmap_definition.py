# File: test_roadmap_definition.py
# Directory: tests
# Purpose: Mockup JSON parsing and topic group selection.

import pytest

from services.errors import RoadmapDefinitionError
from services.roadmap_definition import (
    GroupNode,
    LabelNode,
    OtherNode,
    RoadmapDocument,
    TopicGroup,
    definition_path,
    load_roadmap_document,
    load_topic_groups,
    parse_control,
)
from tests.conftest import group_control


def _doc(*controls):
    return RoadmapDocument.model_validate({"mockup": {"controls": {"control": list(controls)}}})


def test_groups_with_labels_are_returned_in_order():
    doc = _doc(
        group_control("100-internet", "Internet"),
        {"typeID": "Arrow", "properties": {}},
        group_control("100-internet:101-dns", "DNS"),
    )
    assert load_topic_groups(doc) == [
        TopicGroup(control_id="100-internet", title="Internet"),
        TopicGroup(control_id="100-internet:101-dns", title="DNS"),
    ]


def test_external_link_groups_are_excluded():
    doc = _doc(
        group_control("ext_link:roadmap.sh/frontend", "Frontend"),
        group_control("101-git", "Git"),
    )
    assert [g.control_id for g in load_topic_groups(doc)] == ["101-git"]


def test_group_without_name_is_skipped_and_without_label_has_empty_title():
    doc = _doc(group_control(None, "Orphan"), group_control("102-ci"))
    assert load_topic_groups(doc) == [TopicGroup(control_id="102-ci", title="")]


def test_first_label_wins():
    control = group_control("101-git", "Git", extra_children=[
        {"typeID": "TextArea", "properties": {}},
        {"typeID": "Label", "properties": {"text": "Version Control"}},
    ])
    assert load_topic_groups(_doc(control))[0].title == "Version Control"


def test_parse_control_builds_typed_tree():
    control = group_control("101-git", "Git", extra_children=[
        {"typeID": "Canvas", "properties": {}, "children": {"controls": {"control": [
            {"typeID": "Label", "properties": {"text": 42}},
        ]}}},
    ])
    node = parse_control(_doc(control).mockup.controls.control[0])

    assert isinstance(node, GroupNode)
    canvas, label = node.children
    assert isinstance(canvas, OtherNode) and canvas.type_id == "Canvas"
    assert canvas.children == [LabelNode(text="42")]
    assert label == LabelNode(text="Git")


def test_load_document_prefers_bare_path(tmp_path):
    (tmp_path / "git").write_text('{"mockup": {"controls": {"control": []}}}', encoding="utf-8")
    assert definition_path(tmp_path, "git") == tmp_path / "git"
    assert definition_path(tmp_path, "devops") == tmp_path / "devops.json"
    assert load_roadmap_document(tmp_path / "git").mockup.controls.control == []


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(RoadmapDefinitionError):
        load_roadmap_document(path)


def test_missing_document_raises(tmp_path):
    with pytest.raises(RoadmapDefinitionError):
        load_roadmap_document(tmp_path / "missing.json")


@pytest.mark.parametrize("payload", ['{}', '{"mockup": {}}', '{"roadmap": {"controls": {"control": []}}}'])
def test_document_without_mockup_controls_raises(tmp_path, payload):
    path = tmp_path / "backend.json"
    path.write_text(payload, encoding="utf-8")
    with pytest.raises(RoadmapDefinitionError, match="Unexpected roadmap definition shape"):
        load_roadmap_document(path)
