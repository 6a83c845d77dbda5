import textwrap

import pytest

from CourseMarkup import line_parser
from CourseMarkup.course_parser import format_course_detailed_content_to_html
from CourseMarkup.model import TableBlock, TableCell
from CourseMarkup.styles import COURSE
from CourseMarkup.tables import TableSchemaRegistry, default_registry, load_registry

MARKER = "some_content_marker_for_bar_ilan"


def _texts(row):
    return [cell.text for cell in row.cells]


def test_default_registry_loads_packaged_schemas():
    registry = default_registry()
    assert registry.header_cells("מאפיין/נושאפירוט") == ["מאפיין/נושא", "פירוט"]
    assert len(registry.header_cells("מאפיין/נושאתוכנית העשרהתוכנית האצה")) == 3
    assert registry.header_cells("Unknown header") == ["Unknown header"]
    assert registry.fallback_colspan == 5


def test_known_key_splits_row_into_key_and_value():
    row = default_registry().split_row("שם המבחןמבחן מחוננים שלב א'")
    assert _texts(row) == ["שם המבחן", "מבחן מחוננים שלב א'"]
    assert row.cells[0].key and not row.cells[1].key


def test_literal_row_has_fixed_cells():
    line = "שם התוכניתנוער מוכשר במתמטיקה - בר אילןנוער מוכשר במתמטיקה - בר אילן"
    row = default_registry().split_row(line)
    assert _texts(row) == ["שם התוכנית", "נוער מוכשר במתמטיקה - בר אילן", "נוער מוכשר במתמטיקה - בר אילן"]


def test_context_splits_value_into_two_columns():
    registry = default_registry()
    row = registry.split_row("פרטי מבחן כניסה- מועד מאי יוני", document_text=MARKER)
    assert _texts(row) == ["פרטי מבחן כניסה- מועד", "מאי", "יוני"]

    single = registry.split_row("פרטי מבחן כניסה- מועד מאי", document_text=MARKER)
    assert single.cells[1] == TableCell("מאי", colspan=2)


def test_context_spanning_keys_and_no_context():
    registry = default_registry()
    spanning = registry.split_row("מבנה התוכנית שנתיים", document_text=MARKER)
    assert spanning.cells[1] == TableCell("שנתיים", colspan=2)

    plain = registry.split_row("פרטי מבחן כניסה- מועד מאי יוני")
    assert _texts(plain) == ["פרטי מבחן כניסה- מועד", "מאי יוני"]


def test_stage_row_uses_fixed_widths():
    rest = "א" * 10 + "ב" * 40 + "ג" * 20 + "סוף"
    row = default_registry().split_row("1" + rest)
    assert _texts(row) == ["1", "א" * 10, "ב" * 40, "ג" * 20, "סוף"]


def test_unknown_row_falls_back_to_wide_cell():
    row = default_registry().split_row("something else")
    assert row.cells == [TableCell("something else", colspan=5)]


def test_custom_registry_from_yaml():
    registry = TableSchemaRegistry.from_yaml(
        textwrap.dedent(
            """
            headers:
              - signature: "NameAge"
                columns: ["Name", "Age"]
            row_keys: ["Alice", "Bob"]
            stage_rows:
              widths: [2]
            fallback_colspan: 2
            """
        )
    )
    assert registry.header_cells("NameAge") == ["Name", "Age"]
    assert _texts(registry.split_row("Alice 30")) == ["Alice", "30"]
    assert _texts(registry.split_row("7abcd")) == ["7", "ab", "cd"]
    assert registry.split_row("Carol").cells[0].colspan == 2


def test_registry_rejects_bad_shapes():
    with pytest.raises(ValueError):
        TableSchemaRegistry.from_yaml("- just\n- a list\n")
    with pytest.raises(ValueError):
        TableSchemaRegistry.from_yaml("row_keys: not-a-list\n")
    with pytest.raises(ValueError):
        TableSchemaRegistry.from_yaml("headers:\n  - columns: [a]\n")


def test_load_registry_from_file(tmp_path):
    path = tmp_path / "schemas.yaml"
    path.write_text('row_keys: ["Key"]\n', encoding="utf-8")
    registry = load_registry(path)
    assert registry.row_keys == ("Key",)


def test_table_block_parsing():
    text = textwrap.dedent(
        """
        טבלה 2: השוואת מבחנים
        מאפיין/נושאפירוט
        שם המבחןמבחן מחוננים
        כיתות יעדב'-ג'

        פסקה אחרי הטבלה
        """
    )
    document = line_parser.parse_content(text, COURSE)
    table = document.blocks[0]
    assert isinstance(table, TableBlock)
    assert table.caption == "השוואת מבחנים"
    assert table.header == ["מאפיין/נושא", "פירוט"]
    assert [_texts(r) for r in table.rows] == [["שם המבחן", "מבחן מחוננים"], ["כיתות יעד", "ב'-ג'"]]
    assert len(document.blocks) == 2


def test_table_row_starting_with_bare_marker_word_stays_in_table():
    text = "טבלה 4: הערות\nכותרת\nטבלהX נוספת\nטבלה 5: הבאה\nכותרת"
    document = line_parser.parse_content(text, COURSE)
    assert [type(block) for block in document.blocks] == [TableBlock, TableBlock]
    first = document.blocks[0]
    assert [_texts(r) for r in first.rows] == [["טבלהX נוספת"]]
    assert first.rows[0].cells[0] == TableCell("טבלהX נוספת", colspan=5)
    assert document.blocks[1].caption == "הבאה"


def test_table_without_header_line():
    document = line_parser.parse_content("טבלה 3: ריקה\n\nטקסט", COURSE)
    table = document.blocks[0]
    assert table.header == [] and table.rows == []


def test_table_rendering_in_context():
    text = f"{MARKER}\n\nטבלה 3: תוכניות\nמאפיין/נושאתוכנית העשרהתוכנית האצה\nפרטי מבחן כניסה- מועד מאי יוני\nמבנה התוכנית שנתיים"
    html = format_course_detailed_content_to_html(text)[0].content
    assert html.count('<th scope="col"') == 3
    assert ">מאי</td>" in html and ">יוני</td>" in html
    assert 'colspan="2">שנתיים</td>' in html
    assert "bg-white dark:bg-slate-800/70" in html
    assert "bg-slate-50/50 dark:bg-slate-800/40" in html


def test_custom_registry_is_used_by_course_parser():
    registry = TableSchemaRegistry.from_yaml('row_keys: ["Key"]\n')
    html = format_course_detailed_content_to_html("טבלה 1: T\nHead\nKeyValue", registry=registry)[0].content
    assert ">Key</td>" in html and ">Value</td>" in html
