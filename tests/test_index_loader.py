import pytest

from helpers import index_payload, item_payload
from lessonlint.config import LintConfig
from lessonlint.index_loader import IndexLoadError, is_kebab_case, load_curriculum, parse_index
from lessonlint.models import DiagnosticSink


def _load(index: dict) -> tuple[tuple, DiagnosticSink]:
    sink = DiagnosticSink()
    curriculum = load_curriculum(index, sink, LintConfig())
    return curriculum.items, sink


@pytest.mark.parametrize("text", ["{not json", "[]", '"chapters"', "{}", '{"chapters": {}}'])
def test_parse_index_rejects_bad_top_level(text: str) -> None:
    with pytest.raises(IndexLoadError):
        parse_index(text)


def test_parse_index_accepts_object_with_chapters() -> None:
    assert parse_index('{"chapters": []}') == {"chapters": []}


def test_kebab_case() -> None:
    assert is_kebab_case("01-intro")
    assert is_kebab_case("abc")
    assert not is_kebab_case("Intro")
    assert not is_kebab_case("-intro")
    assert not is_kebab_case("intro-")
    assert not is_kebab_case("a--b")
    assert not is_kebab_case("a_b")
    assert not is_kebab_case("")


def test_valid_index_has_no_errors(valid_index: dict) -> None:
    items, sink = _load(valid_index)
    assert sink.errors == ()
    assert [item.id for item in items] == ["01-setup", "02-git", "03-first-app"]
    assert [item.sequence for item in items] == [0, 1, 2]
    assert items[2].unit_id == "building"
    assert items[2].prerequisites == ("01-setup", "02-git")


def test_unit_fields_are_checked() -> None:
    index = {"chapters": [{"id": "Bad_Unit", "items": []}, {"title": "No id", "items": []}]}
    _, sink = _load(index)
    assert sink.errors == (
        "Unit Bad_Unit: unit id must be kebab-case (got `Bad_Unit`).",
        "Unit Bad_Unit: missing a non-empty string `title`.",
        "Unit (missing-unit-id): missing a non-empty string `id`.",
    )


def test_unit_without_items_array_contributes_nothing() -> None:
    items, sink = _load({"chapters": [{"id": "u", "title": "U"}, "not-a-unit"]})
    assert items == ()
    assert "Unit u: missing or invalid `items` array." in sink.errors
    assert "Unit (missing-unit-id): missing or invalid `items` array." in sink.errors


def test_each_field_violation_is_reported_independently() -> None:
    index = index_payload(
        (
            "u",
            [
                {
                    "id": "Lesson",
                    "title": "",
                    "estimatedMinutes": 0,
                    "practiceMinutes": -1,
                    "hasAssignment": "yes",
                    "difficulty": "expert",
                    "type": "video",
                    "tags": [],
                    "prerequisites": "a",
                }
            ],
        )
    )
    items, sink = _load(index)
    ref = "u/Lesson ((missing-path))"
    assert sink.errors == (
        f"{ref}: lesson id must be kebab-case (got `Lesson`).",
        f"{ref}: missing a non-empty string `title`.",
        f"{ref}: missing a non-empty string `path`.",
        f"{ref}: missing or invalid `estimatedMinutes` (expected number > 0).",
        f"{ref}: missing or invalid `hasAssignment` (expected boolean).",
        f"{ref}: missing or invalid `practiceMinutes` (expected number >= 0).",
        f"{ref}: missing or invalid `type` (expected one of: guide, lesson, hands-on, project, reference).",
        f"{ref}: missing or invalid `difficulty` (expected one of: beginner, intermediate, advanced).",
        f"{ref}: missing or invalid `tags` (expected non-empty string[]).",
        f"{ref}: missing or invalid `prerequisites` (expected string[]).",
    )
    assert items[0].path is None


def test_booleans_are_not_numbers() -> None:
    _, sink = _load(index_payload(("u", [item_payload("a", estimatedMinutes=True, practiceMinutes=False)])))
    assert len(sink.errors) == 2


def test_zero_practice_minutes_is_allowed() -> None:
    _, sink = _load(index_payload(("u", [item_payload("a", practiceMinutes=0)])))
    assert sink.errors == ()


def test_duplicate_tags_and_prerequisites_after_trimming() -> None:
    index = index_payload(("u", [item_payload("a", tags=["git", " git"], prerequisites=["b", "b "])]))
    _, sink = _load(index)
    assert sink.errors == (
        "u/a (chapters/a.md): `tags` contains duplicates.",
        "u/a (chapters/a.md): `prerequisites` contains duplicates.",
    )


def test_non_object_item_decodes_to_empty_fields() -> None:
    items, sink = _load(index_payload(("u", ["oops"])))
    assert items[0].id is None
    assert items[0].ref == "u/(missing-id) ((missing-path))"
    assert "u/(missing-id) ((missing-path)): item is missing a non-empty string `id`." in sink.errors


def test_sequence_spans_units() -> None:
    index = index_payload(("u1", [item_payload("a")]), ("u2", [item_payload("b"), item_payload("c")]))
    items, _ = _load(index)
    assert [(item.unit_id, item.sequence) for item in items] == [("u1", 0), ("u2", 1), ("u2", 2)]


def test_custom_enums_from_config() -> None:
    config = LintConfig(item_types=("video",), difficulties=("easy",))
    sink = DiagnosticSink()
    load_curriculum(index_payload(("u", [item_payload("a", type="video", difficulty="easy")])), sink, config)
    assert sink.errors == ()


def test_integers_beyond_float_range_are_decoded() -> None:
    index = index_payload(("u", [item_payload("a", estimatedMinutes=10**400, practiceMinutes=-(10**400))]))
    items, sink = _load(index)
    assert items[0].estimated_minutes == 10**400
    assert sink.errors == ("u/a (chapters/a.md): missing or invalid `practiceMinutes` (expected number >= 0).",)


def test_non_finite_floats_are_invalid() -> None:
    index = index_payload(("u", [item_payload("a", estimatedMinutes=float("inf"), practiceMinutes=float("nan"))]))
    items, sink = _load(index)
    assert items[0].estimated_minutes is None
    assert items[0].practice_minutes is None
    assert len(sink.errors) == 2
