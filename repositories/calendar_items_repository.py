import json
from datetime import datetime, time

from db import get_db
from helpers.normalize import normalize_item_row

# -----------------------------
# Calendar Items Repository
# -----------------------------

def list_calendar_items(conn, window_start, window_end):
    """
    Returns CalendarItems whose start falls inside the window.
    - window_start / window_end: dates, both inclusive
    """
    own_conn = False
    if conn is None:
        conn = get_db()
        own_conn = True

    try:
        result = conn.execute(
            """
            SELECT item_id, title, start_time, end_time, item_type, data
            FROM calendar_items
            WHERE start_time >= ? AND start_time <= ?
            ORDER BY start_time, item_id
            """,
            (
                datetime.combine(window_start, time.min),
                datetime.combine(window_end, time.max),
            )
        )
        columns = [col[0] for col in result.description]
        return [normalize_item_row(dict(zip(columns, row))) for row in result.fetchall()]
    finally:
        if own_conn:
            conn.close()


def add_calendar_item(conn, item):
    """
    Inserts a CalendarItem; ``data`` is stored as JSON text.
    """
    conn.execute(
        """
        INSERT INTO calendar_items
        (item_id, title, start_time, end_time, item_type, data)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (
            item.item_id, item.title, item.start_time, item.end_time,
            item.item_type, json.dumps(item.data, default=str),
        )
    )
