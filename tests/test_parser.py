import textwrap

from CourseMarkup import line_parser
from CourseMarkup.model import (
    AlertBlock,
    AlertType,
    Blockquote,
    Document,
    Heading,
    HorizontalRule,
    ListBlock,
    Paragraph,
    TableBlock,
)
from CourseMarkup.styles import ARTICLE, COURSE


def test_parse_blocks_in_source_order():
    text = textwrap.dedent(
        """
        # כותרת ראשית

        פסקה עם **הדגשה**
        שממשיכה בשורה הבאה.

        - פריט ראשון
        * פריט שני

        3. שלישי
        4. רביעי

        > ציטוט
        > המשך ציטוט

        ---
        #### תת-כותרת
        """
    )
    document = line_parser.parse_content(text, ARTICLE)
    kinds = [type(block) for block in document.blocks]
    assert kinds == [Heading, Paragraph, ListBlock, ListBlock, Blockquote, HorizontalRule, Heading]
    assert document.blocks[0].level == 1 and document.blocks[0].text == "כותרת ראשית"
    assert document.blocks[1].lines == ["פסקה עם **הדגשה**", "שממשיכה בשורה הבאה."]
    assert document.blocks[2].items == ["פריט ראשון", "פריט שני"] and not document.blocks[2].ordered
    assert document.blocks[3].ordered and document.blocks[3].start == 3
    assert document.blocks[3].items == ["שלישי", "רביעי"]
    assert document.blocks[4].lines == ["ציטוט", "המשך ציטוט"]
    assert document.blocks[6].level == 4


def test_heading_prefixes_match_longest_first():
    document = line_parser.parse_content("### Three\n## Two\n# One", ARTICLE)
    assert [(b.level, b.text) for b in document.blocks] == [(3, "Three"), (2, "Two"), (1, "One")]


def test_horizontal_rules_need_exact_match():
    document = line_parser.parse_content("***\n___\n---\n----", ARTICLE)
    assert [type(b) for b in document.blocks] == [HorizontalRule, HorizontalRule, HorizontalRule, Paragraph]


def test_paragraph_ends_at_block_start():
    document = line_parser.parse_content("line one\nline two\n- item", ARTICLE)
    assert isinstance(document.blocks[0], Paragraph)
    assert document.blocks[0].lines == ["line one", "line two"]
    assert isinstance(document.blocks[1], ListBlock)


def test_lines_that_only_look_like_block_starts_become_paragraphs():
    document = line_parser.parse_content("#hashtag\n>quoted without space", ARTICLE)
    assert [type(b) for b in document.blocks] == [Paragraph, Paragraph]
    assert document.blocks[0].lines == ["#hashtag"]
    assert document.blocks[1].lines == [">quoted without space"]


def test_alert_collects_continuation_lines():
    text = ">>> warning: זהירות\nשורה שנייה\nשורה שלישית\n- list item"
    document = line_parser.parse_content(text, ARTICLE)
    alert = document.blocks[0]
    assert isinstance(alert, AlertBlock)
    assert alert.alert_type is AlertType.WARNING
    assert alert.lines == ["זהירות", "שורה שנייה", "שורה שלישית"]
    assert isinstance(document.blocks[1], ListBlock)


def test_alert_without_known_type_falls_back_to_note():
    document = line_parser.parse_content(">>> DANGER: careful\n\n>>> no type here", ARTICLE)
    first, second = document.blocks
    assert first.alert_type is AlertType.NOTE and first.lines == ["careful"]
    assert second.alert_type is AlertType.NOTE and second.lines == ["no type here"]


def test_course_alert_stops_at_table_marker():
    text = ">>> INFO: מידע\nטבלה 1: נתונים\nמאפיין/נושאפירוט\nשם המבחןמבחן מחוננים"
    document = line_parser.parse_content(text, COURSE)
    assert isinstance(document.blocks[0], AlertBlock)
    assert document.blocks[0].lines == ["מידע"]
    assert isinstance(document.blocks[1], TableBlock)


def test_tables_only_in_course_dialect():
    text = "טבלה 1: נתונים\nמאפיין/נושאפירוט"
    assert isinstance(line_parser.parse_content(text, ARTICLE).blocks[0], Paragraph)
    assert isinstance(line_parser.parse_content(text, COURSE).blocks[0], TableBlock)


def test_quiz_markers_stay_literal_in_course_dialect():
    text = ">>> QUIZ_JSON:\n{broken}\n<<< QUIZ_JSON_END"
    course = line_parser.parse_content(text, COURSE)
    assert [type(b) for b in course.blocks] == [Paragraph]
    assert course.blocks[0].lines == [">>> QUIZ_JSON:", "{broken}", "<<< QUIZ_JSON_END"]

    article = line_parser.parse_content(text, ARTICLE)
    assert isinstance(article.blocks[0], AlertBlock)


def test_cursor_peek_and_advance():
    cursor = line_parser.LineCursor(["  a ", "b"])
    assert cursor.peek() == "a"
    assert cursor.advance() == "a"
    assert cursor.advance() == "b"
    assert cursor.at_end()
    assert cursor.peek() is None


def test_alert_type_normalize():
    assert AlertType.normalize("tip") is AlertType.TIP
    assert AlertType.normalize(" Warning ") is AlertType.WARNING
    assert AlertType.normalize("caution") is AlertType.NOTE
    assert AlertType.normalize(None) is AlertType.NOTE


def test_documents_compare_by_blocks_only():
    padded = line_parser.parse_content("\n\n## כותרת\n\nטקסט\n\n\n", ARTICLE)
    tight = line_parser.parse_content("## כותרת\nטקסט", ARTICLE)
    assert padded == tight == Document(blocks=[Heading(level=2, text="כותרת"), Paragraph(lines=["טקסט"])])
