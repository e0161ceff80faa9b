import json

import pytest

from recipechef.watch import Update, UpdateKind, relative_cook_paths


def _parse_event(text):
    assert text.endswith("\n\n")
    event = None
    data = []
    for line in text[:-2].split("\n"):
        field, _, value = line.partition(": ")
        if field == "event":
            event = value
        elif field == "data":
            data.append(value)
    return event, "\n".join(data)


@pytest.mark.parametrize(
    "kind", [UpdateKind.MODIFIED, UpdateKind.ADDED, UpdateKind.DELETED]
)
def test_simple_update_event(tmp_path, kind):
    update = Update(kind, tmp_path / "dir" / "soup.cook")
    event, data = _parse_event(update.to_sse(tmp_path))
    assert event == kind.value
    assert data == "dir/soup.cook"


def test_modified_event_text(tmp_path):
    update = Update(UpdateKind.MODIFIED, tmp_path / "soup.cook")
    assert update.to_sse(tmp_path) == "event: modified\ndata: soup.cook\n\n"


def test_renamed_event_carries_json(tmp_path):
    update = Update(UpdateKind.RENAMED, tmp_path / "a.cook", tmp_path / "sub" / "b.cook")
    event, data = _parse_event(update.to_sse(tmp_path))
    assert event == "renamed"
    assert json.loads(data) == {"from": "a.cook", "to": "sub/b.cook"}


def test_renamed_needs_destination(tmp_path):
    with pytest.raises(ValueError):
        Update(UpdateKind.RENAMED, tmp_path / "a.cook")


def test_destination_only_for_rename(tmp_path):
    with pytest.raises(ValueError):
        Update(UpdateKind.ADDED, tmp_path / "a.cook", tmp_path / "b.cook")


def test_path_outside_base_is_rejected(tmp_path):
    update = Update(UpdateKind.DELETED, tmp_path / "elsewhere" / "a.cook")
    with pytest.raises(ValueError):
        update.to_sse(tmp_path / "collection")


def test_relative_cook_paths_filters_and_strips(tmp_path):
    paths = [
        tmp_path / "one.cook",
        tmp_path / "dir" / "two.cook",
        tmp_path / "image.jpg",
        tmp_path / ".cook",
        tmp_path.parent / "outside.cook",
    ]
    result = relative_cook_paths(tmp_path, paths)
    assert [p.as_posix() for p in result] == ["one.cook", "dir/two.cook"]


def test_relative_cook_paths_round_trip(tmp_path):
    paths = [tmp_path / "x" / "y.cook", tmp_path / "z.cook"]
    result = relative_cook_paths(tmp_path, paths)
    assert [tmp_path / p for p in result] == paths


def test_relative_cook_paths_accepts_strings(tmp_path):
    result = relative_cook_paths(str(tmp_path), [str(tmp_path / "r.cook")])
    assert [p.name for p in result] == ["r.cook"]


def test_relative_cook_paths_empty(tmp_path):
    assert relative_cook_paths(tmp_path, []) == []