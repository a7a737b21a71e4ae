"""Table extraction, chart eligibility and chart-type inference"""

import logging
import math
import re
from typing import Iterable, Optional

from doclayout.config import Settings
from doclayout.core.models import ChartSeries, ChartSpec, ChartStyle, ChartType, TableData
from doclayout.core.utils.text import parse_number


logger = logging.getLogger(__name__)

CHART_COLORS = [
    '4472C4', 'ED7D31', 'A5A5A5', 'FFC000', '5B9BD5',
    '70AD47', '264478', '9E480E', '636363', '997300',
]
TIME_VALUE_PATTERNS = [
    re.compile(r'\b(19|20)\d{2}\b'),
    re.compile(
        r'\b(jan(uary)?|feb(ruary)?|mar(ch)?|apr(il)?|may|june?|july?|aug(ust)?|sep(t(ember)?)?|oct(ober)?|nov(ember)?|dec(ember)?)\b',
        re.I,
    ),
    re.compile(r'\bq[1-4]\b', re.I),
    re.compile(r'\b\d{1,2}/\d{1,2}\b'),
]
TIME_HEADER_RE = re.compile(r'\b(year|years|quarter|month|week|day|date|period|fy)\b', re.I)
PIE_MAX_CATEGORIES = 8
AREA_MIN_ROWS = 20
SCATTER_MIN_CORRELATION = 0.3
_TITLE_SKIP = {'id', 'index', '#'}


def extract_table_data(node) -> TableData:
    """Headers from <th> cells (or the first row when there are none), then <td> rows."""
    header_cells = node.find_all('th')
    headers = [th.get_text(" ", strip=True) for th in header_cells]
    rows: list[list[str]] = []
    first_row_is_header = False

    if not headers:
        first = node.find('tr')
        if first is not None:
            headers = [td.get_text(" ", strip=True) for td in first.find_all('td')]
            first_row_is_header = bool(headers)

    for i, tr in enumerate(node.find_all('tr')):
        if i == 0 and first_row_is_header:
            continue
        if tr.find('th') is not None:
            continue
        row = [td.get_text(" ", strip=True) for td in tr.find_all('td')]
        if row:
            rows.append(row)
    return TableData(headers=headers, rows=rows)


def should_convert_to_chart(table: TableData, settings: Settings) -> bool:
    """Row count within [chart_min_rows, chart_max_rows] and auto charts enabled."""
    if not table.rows or not settings.auto_charts:
        return False
    return settings.chart_min_rows <= len(table.rows) <= settings.chart_max_rows


def _cell(row: list[str], col: int) -> str:
    return row[col] if col < len(row) else ''


def numeric_columns(table: TableData) -> list[int]:
    """Columns whose every cell parses as a number."""
    width = max((len(r) for r in table.rows), default=0)
    return [
        col for col in range(width)
        if all(parse_number(_cell(r, col)) is not None for r in table.rows)
    ]


def _is_time_like(value: str) -> bool:
    return any(p.search(value) for p in TIME_VALUE_PATTERNS)


def is_time_series(table: TableData) -> bool:
    """Period-like headers, or a first column made entirely of period-like values."""
    if any(TIME_HEADER_RE.search(h) or _is_time_like(h) for h in table.headers):
        return True
    first = [_cell(r, 0) for r in table.rows]
    return bool(first) and all(_is_time_like(v) for v in first)


def correlation(xs: list[float], ys: list[float]) -> float:
    """Pearson correlation; 0 when either series is constant."""
    n = len(xs)
    sx, sy = sum(xs), sum(ys)
    sxy = sum(x * y for x, y in zip(xs, ys))
    sx2, sy2 = sum(x * x for x in xs), sum(y * y for y in ys)
    denom = math.sqrt(max(0.0, (n * sx2 - sx * sx) * (n * sy2 - sy * sy)))
    return 0.0 if denom == 0 else (n * sxy - sx * sy) / denom


def _monotonic(values: list[float]) -> bool:
    pairs = list(zip(values, values[1:]))
    return all(a <= b for a, b in pairs) or all(a >= b for a, b in pairs)


def _category_column(table: TableData, numeric: list[int]) -> Optional[int]:
    """First non-numeric column; a numeric period column counts when the data is a time series."""
    width = max((len(r) for r in table.rows), default=0)
    for col in range(width):
        if col not in numeric:
            return col
    if numeric and numeric[0] == 0 and len(numeric) > 1 and is_time_series(table):
        return 0
    return None


def _column(table: TableData, col: int) -> list[float]:
    return [parse_number(_cell(r, col)) or 0.0 for r in table.rows]


def determine_chart_type(table: TableData, series_cols: list[int], category_col: Optional[int]) -> ChartType:
    rows = len(table.rows)
    time_series = is_time_series(table)

    if len(series_cols) == 1 and rows <= PIE_MAX_CATEGORIES and not time_series:
        return "pie"
    if time_series:
        return "line"
    if len(series_cols) == 2 and category_col is None:
        xs, ys = _column(table, series_cols[0]), _column(table, series_cols[1])
        if not _monotonic(xs) and abs(correlation(xs, ys)) > SCATTER_MIN_CORRELATION:
            return "scatter"
    if rows > AREA_MIN_ROWS:
        return "area"
    return "bar"


def _compatible(chart_type: str, series_cols: list[int], category_col: Optional[int]) -> bool:
    if chart_type == "pie":
        return len(series_cols) == 1
    if chart_type == "scatter":
        return len(series_cols) == 2 and category_col is None
    return True


def chart_title(headers: list[str]) -> str:
    named = [h for h in headers if h and h.lower() not in _TITLE_SKIP]
    return " vs ".join(named) if named else "Data Analysis"


def infer_chart(table: TableData, preferred_types: Iterable[str] = ()) -> Optional[ChartSpec]:
    """Pick a chart for table data; None when there is nothing numeric to plot."""
    if not table.rows:
        return None
    numeric = numeric_columns(table)
    if not numeric:
        logger.debug("Table has no numeric column; keeping it as a table")
        return None

    category_col = _category_column(table, numeric)
    series_cols = [c for c in numeric if c != category_col]
    if not series_cols:
        return None

    chart_type: ChartType = determine_chart_type(table, series_cols, category_col)
    preferred = list(preferred_types)
    if preferred and chart_type not in preferred:
        chart_type = next((t for t in preferred if _compatible(t, series_cols, category_col)), chart_type)

    series = [
        ChartSeries(
            name=table.headers[col] if col < len(table.headers) and table.headers[col] else f"Series {i + 1}",
            values=_column(table, col),
            color=CHART_COLORS[i % len(CHART_COLORS)],
        )
        for i, col in enumerate(series_cols)
    ]
    if category_col is not None:
        categories = [_cell(r, category_col) for r in table.rows]
    else:
        categories = [f"Item {i + 1}" for i in range(len(table.rows))]

    return ChartSpec(
        chart_type=chart_type,
        title=chart_title(table.headers),
        categories=categories,
        series=series,
        style=ChartStyle(
            show_legend=len(series) > 1,
            show_values=len(table.rows) <= 10,
        ),
    )


def chart_for_table(node, settings: Settings) -> Optional[ChartSpec]:
    """Build TableData for a table node and convert it when eligible; None means render as a table."""
    table = extract_table_data(node)
    if not should_convert_to_chart(table, settings):
        return None
    return infer_chart(table, settings.preferred_chart_types)
