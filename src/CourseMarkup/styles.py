from __future__ import annotations

from dataclasses import dataclass, field

from .model import AlertType

TABLE_MARKER = "טבלה "
QUIZ_OPEN_MARKER = ">>> QUIZ_JSON:"
QUIZ_CLOSE_MARKER = "<<< QUIZ_JSON_END"

# Lines matching these start a new block and end alert bodies and paragraphs.
BLOCK_START_PATTERN = r"^(#|>|- |\* |\d+\. |---|\*\*\*|___|>>> )"
COURSE_BLOCK_START_PATTERN = r"^(#|>|- |\* |\d+\. |---|\*\*\*|___|>>> |טבלה)"

_ICON_PATHS = {
    AlertType.INFO: (
        "text-sky-500 dark:text-sky-400",
        '<path fill-rule="evenodd" d="M2.25 12c0-5.385 4.365-9.75 9.75-9.75s9.75 4.365 9.75 9.75-4.365 9.75-9.75 '
        "9.75S2.25 17.385 2.25 12zm8.706-1.442c1.146-.573 2.437.463 2.126 1.706l-.709 2.836.042-.02a.75.75 0 01.67 "
        "1.34l-.041.022l-1.293.517a.75.75 0 01-.942-.015l-.442-.442a.75.75 0 01-.21-.527l.035-2.886c.086-.715.738-1.245 "
        '1.452-1.245zM12 15.75a.75.75 0 100-1.5.75.75 0 000 1.5z" clip-rule="evenodd" />',
    ),
    AlertType.TIP: (
        "text-emerald-500 dark:text-emerald-400",
        '<path d="M12 2.25c-3.866 0-7 3.134-7 7 0 2.643 1.33 4.932 3.327 6.23v1.77a.75.75 0 00.75.75h5.846a.75.75 '
        "0 00.75-.75v-1.77c1.996-1.298 3.327-3.587 3.327-6.23 0-3.866-3.134-7-7-7zM9.009 18.75a.75.75 0 00.75.75h4.482a.75.75 "
        '0 00.75-.75v-.938a3.001 3.001 0 01-5.982 0v.938z" />',
    ),
    AlertType.NOTE: (
        "text-slate-500 dark:text-slate-400",
        '<path fill-rule="evenodd" d="M5.074 2.276a2.5 2.5 0 012.176-.018L19.02 8.532a2.5 2.5 0 011.23 2.175v6.586a2.5 '
        "2.5 0 01-1.23 2.175L7.25 22.744a2.5 2.5 0 01-2.176-.018A2.5 2.5 0 013.75 20.55V4.45a2.5 2.5 0 011.324-2.174zm0 "
        "1.448A1 1 0 004.75 4.45v16.1a1 1 0 00.526.868l.001.001 11.77-6.276a1 1 0 00.494-.868V10.707a1 1 0 00-.494-.868L5.074 "
        "3.724zM8.25 8.25a.75.75 0 01.75-.75h6a.75.75 0 010 1.5h-6a.75.75 0 01-.75-.75zm.75 3a.75.75 0 000 1.5h6a.75.75 0 "
        '000-1.5h-6zm-.75 3.75a.75.75 0 01.75-.75h3a.75.75 0 010 1.5h-3a.75.75 0 01-.75-.75z" clip-rule="evenodd"></path>',
    ),
    AlertType.WARNING: (
        "text-amber-500 dark:text-amber-400",
        '<path fill-rule="evenodd" d="M9.401 3.003c1.155-2 4.043-2 5.197 0l7.557 13.031c1.155 2-.002 4.5-2.598 '
        "4.5H4.442c-2.598 0-3.752-2.5-2.598-4.5L9.4 3.003zM12 8.25a.75.75 0 01.75.75v3.75a.75.75 0 01-1.5 0V9a.75.75 0 "
        '01.75-.75zm0 8.25a.75.75 0 100-1.5.75.75 0 000 1.5z" clip-rule="evenodd" />',
    ),
}


def build_icons(size_class: str) -> dict[AlertType, str]:
    """Render the four alert icons as inline SVG with the given size classes."""
    icons = {}
    for alert_type, (color_class, path) in _ICON_PATHS.items():
        icons[alert_type] = (
            f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="currentColor" '
            f'class="{size_class} {color_class}">{path}</svg>'
        )
    return icons


@dataclass(frozen=True)
class Dialect:
    """Per-site flavour of the markup: inline rules, recognised blocks and CSS classes."""

    name: str
    block_start_pattern: str
    heading_tags: tuple[str, str, str, str]
    heading_classes: tuple[str, str, str, str]
    paragraph_class: str
    unordered_list_class: str
    ordered_list_class: str
    list_item_class: str
    blockquote_class: str
    hr_html: str
    alert_box_class: str
    alert_body_class: str
    alert_text_class: str
    alert_type_classes: dict[AlertType, str]
    icons: dict[AlertType, str]
    extended_inline: bool = False
    tables: bool = False
    literal_quiz_markers: bool = False
    table_classes: dict[str, str] = field(default_factory=dict)


ARTICLE = Dialect(
    name="article",
    block_start_pattern=BLOCK_START_PATTERN,
    heading_tags=("h1", "h2", "h3", "h4"),
    heading_classes=(
        "text-4xl font-extrabold mt-10 mb-6 text-slate-900 dark:text-slate-50 tracking-tight",
        "text-3xl font-bold mt-12 mb-5 text-slate-800 dark:text-slate-100",
        "text-2xl font-semibold mt-10 mb-4 text-slate-800 dark:text-slate-200",
        "text-xl font-medium mt-8 mb-3 text-slate-700 dark:text-slate-300",
    ),
    paragraph_class=(
        "text-base sm:text-lg text-slate-700 dark:text-slate-300 leading-relaxed my-5 hyphens-auto text-justify break-words"
    ),
    unordered_list_class=(
        "list-disc list-outside pl-7 my-5 space-y-1 text-base sm:text-lg text-slate-700 dark:text-slate-300"
    ),
    ordered_list_class=(
        "list-decimal list-outside pl-7 my-5 space-y-1 text-base sm:text-lg text-slate-700 dark:text-slate-300"
    ),
    list_item_class="mb-1.5",
    blockquote_class=(
        "border-r-4 border-primary dark:border-primary-light bg-slate-100 dark:bg-slate-800/70 p-5 my-7 "
        "text-base sm:text-lg text-slate-600 dark:text-slate-300 shadow rounded-r-md leading-relaxed"
    ),
    hr_html='<hr class="my-10 sm:my-12 border-t-2 border-slate-200 dark:border-slate-700/60" />',
    alert_box_class="my-8 p-5 rounded-xl shadow-lg border flex items-start gap-x-4",
    alert_body_class="flex-grow",
    alert_text_class="text-base leading-relaxed",
    alert_type_classes={
        AlertType.INFO: "bg-sky-50 dark:bg-sky-900/70 border-sky-400 dark:border-sky-700 text-sky-800 dark:text-sky-100",
        AlertType.TIP: (
            "bg-emerald-50 dark:bg-emerald-900/70 border-emerald-400 dark:border-emerald-700 "
            "text-emerald-800 dark:text-emerald-100"
        ),
        AlertType.NOTE: (
            "bg-slate-100 dark:bg-slate-800/70 border-slate-400 dark:border-slate-600 text-slate-800 dark:text-slate-100"
        ),
        AlertType.WARNING: (
            "bg-amber-50 dark:bg-amber-900/70 border-amber-400 dark:border-amber-700 text-amber-800 dark:text-amber-100"
        ),
    },
    icons=build_icons("h-6 w-6"),
    extended_inline=True,
)


COURSE = Dialect(
    name="course",
    block_start_pattern=COURSE_BLOCK_START_PATTERN,
    heading_tags=("h2", "h3", "h4", "h5"),
    heading_classes=(
        "text-4xl font-black mt-10 mb-6 text-slate-900 dark:text-slate-50 tracking-tight",
        "text-3xl font-extrabold mt-12 mb-5 text-slate-800 dark:text-slate-100",
        "text-2xl font-bold mt-10 mb-4 text-slate-800 dark:text-slate-100",
        "text-xl font-semibold mt-8 mb-3 text-slate-700 dark:text-slate-200",
    ),
    paragraph_class="text-base text-slate-700 dark:text-slate-300 leading-relaxed my-4 hyphens-auto text-justify break-words",
    unordered_list_class="list-disc list-outside ms-6 my-5 space-y-1 text-slate-700 dark:text-slate-300",
    ordered_list_class="list-decimal list-outside ms-6 my-5 space-y-1 text-slate-700 dark:text-slate-300",
    list_item_class="py-1",
    blockquote_class=(
        "border-s-4 border-primary dark:border-primary-light bg-slate-100 dark:bg-slate-800/50 p-5 my-6 "
        "text-slate-600 dark:text-slate-300 rounded-e-md leading-relaxed"
    ),
    hr_html='<hr class="my-8 sm:my-10 border-t-2 border-slate-200 dark:border-slate-700/60" />',
    alert_box_class="my-6 p-5 rounded-xl shadow-md border-s-4 flex items-start gap-x-4",
    alert_body_class="flex-grow prose prose-sm sm:prose-base dark:prose-invert max-w-none",
    alert_text_class="text-sm sm:text-base leading-relaxed",
    alert_type_classes={
        AlertType.INFO: "bg-sky-50 dark:bg-sky-900/50 border-sky-400 dark:border-sky-600 text-sky-700 dark:text-sky-200",
        AlertType.TIP: (
            "bg-emerald-50 dark:bg-emerald-900/50 border-emerald-400 dark:border-emerald-600 "
            "text-emerald-700 dark:text-emerald-200"
        ),
        AlertType.NOTE: (
            "bg-slate-100 dark:bg-slate-800/50 border-slate-300 dark:border-slate-600 text-slate-700 dark:text-slate-200"
        ),
        AlertType.WARNING: (
            "bg-amber-50 dark:bg-amber-900/50 border-amber-400 dark:border-amber-600 text-amber-700 dark:text-amber-200"
        ),
    },
    icons=build_icons("h-7 w-7"),
    tables=True,
    literal_quiz_markers=True,
    table_classes={
        "wrapper": "my-8 overflow-x-auto rounded-lg shadow-lg border border-slate-200 dark:border-slate-700",
        "table": "w-full text-sm text-right border-collapse",
        "caption": (
            "p-4 text-lg font-semibold text-right text-slate-900 bg-slate-100 dark:bg-slate-700 dark:text-white "
            "border-b border-slate-200 dark:border-slate-700"
        ),
        "thead": "text-xs text-slate-700 uppercase bg-slate-50 dark:bg-slate-800 dark:text-slate-300",
        "th": "px-4 py-3 border-x border-slate-200 dark:border-slate-700 text-right font-semibold",
        "td_key": (
            "px-4 py-3 font-semibold text-slate-800 dark:text-white border-x border-slate-200 dark:border-slate-700 "
            "text-right whitespace-nowrap"
        ),
        "td_value": "px-4 py-3 text-slate-600 dark:text-slate-300 border-x border-slate-200 dark:border-slate-700 text-right",
        "row_even": "bg-white dark:bg-slate-800/70",
        "row_odd": "bg-slate-50/50 dark:bg-slate-800/40",
        "row": "border-b border-slate-200 dark:border-slate-700 hover:bg-slate-100 dark:hover:bg-slate-700/60",
    },
)
