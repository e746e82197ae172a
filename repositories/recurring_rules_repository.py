from duckdb import IntegrityError

from db import get_db
from helpers.normalize import normalize_rule_row

RULE_COLUMNS = """
    id, description, amount, kind, frequency, occurrence_day,
    start_date, end_date, last_processed_date, active
"""


def _rows_as_dicts(result):
    columns = [col[0] for col in result.description]
    return [dict(zip(columns, row)) for row in result.fetchall()]


def list_recurring_rules(conn=None, active_only=True):
    """
    Return recurring rules as RecurrenceRule objects, ordered by id.

    Args:
        conn: Optional database connection. If not provided, opens a new one.
        active_only: Skip rules that have been switched off.
    """
    own_conn = False
    if conn is None:
        conn = get_db()
        own_conn = True

    try:
        query = f"SELECT {RULE_COLUMNS} FROM recurring_rules"
        if active_only:
            query += " WHERE active = TRUE"
        query += " ORDER BY id"
        return [normalize_rule_row(row) for row in _rows_as_dicts(conn.execute(query))]
    finally:
        if own_conn:
            conn.close()


def get_rule_by_id(conn, rule_id):
    """
    Return a single rule by ID, or None if not found.
    """
    rows = _rows_as_dicts(conn.execute(
        f"SELECT {RULE_COLUMNS} FROM recurring_rules WHERE id = ?",
        (str(rule_id),)
    ))
    return normalize_rule_row(rows[0]) if rows else None


def add_recurring_rule(conn, rule):
    """
    Insert a RecurrenceRule; a duplicate id raises ValueError.
    """
    try:
        conn.execute(
            """
            INSERT INTO recurring_rules
            (id, description, amount, kind, frequency, occurrence_day,
             start_date, end_date, last_processed_date, active)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                str(rule.id), rule.description, rule.amount, rule.kind, rule.frequency,
                rule.occurrence_day, rule.start_date, rule.end_date,
                rule.last_processed_date, rule.active,
            )
        )
    except IntegrityError as e:
        raise ValueError(f"Duplicate recurring rule: {rule.id}") from e


def update_last_processed(conn, rule_id, processed_date):
    """
    Move a rule's materialization cursor forward to ``processed_date``.

    The cursor never regresses: an earlier (or equal) date leaves the stored
    value untouched. Returns True when the cursor moved.
    """
    row = conn.execute(
        "SELECT last_processed_date FROM recurring_rules WHERE id = ?",
        (str(rule_id),)
    ).fetchone()
    if row is None:
        raise ValueError(f"Unknown recurring rule: {rule_id}")

    current = row[0]
    if current is not None and processed_date <= current:
        return False

    conn.execute(
        "UPDATE recurring_rules SET last_processed_date = ? WHERE id = ?",
        (processed_date, str(rule_id))
    )
    return True


def delete_rule(conn, rule_id):
    """
    Delete a rule by ID.
    """
    conn.execute(
        "DELETE FROM recurring_rules WHERE id = ?",
        (str(rule_id),)
    )
