import duckdb
import logging

from utils.config import DB_FILE, LOG_FILE

# -----------------------------
# Logging
# -----------------------------
logging.basicConfig(
    filename=LOG_FILE,
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)

def log_info(msg):
    logging.info(msg)

def log_error(msg):
    logging.error(msg)

# -----------------------------
# Get a DB connection
# -----------------------------
def get_db():
    """
    Returns a new DuckDB connection.
    """
    return duckdb.connect(DB_FILE)

# -----------------------------
# Initialize database schema
# -----------------------------
def init_db(conn=None):
    own_conn = conn is None
    if own_conn:
        conn = get_db()
    try:
        # Recurring rules table
        conn.execute("""
        CREATE TABLE IF NOT EXISTS recurring_rules (
            id VARCHAR PRIMARY KEY,
            description VARCHAR NOT NULL,
            amount DECIMAL(12,2) NOT NULL DEFAULT 0,
            kind VARCHAR CHECK(kind IS NULL OR kind IN ('earning','expense')),
            frequency VARCHAR NOT NULL,
            occurrence_day INTEGER,
            start_date DATE,
            end_date DATE,
            last_processed_date DATE,
            active BOOLEAN DEFAULT TRUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Recurring rules table ensured.")

        # One-off calendar items
        conn.execute("""
        CREATE TABLE IF NOT EXISTS calendar_items (
            item_id VARCHAR PRIMARY KEY,
            title VARCHAR NOT NULL,
            start_time TIMESTAMP NOT NULL,
            end_time TIMESTAMP,
            item_type VARCHAR NOT NULL,
            data VARCHAR
        );
        """)
        log_info("Calendar items table ensured.")

        conn.execute("CREATE INDEX IF NOT EXISTS idx_items_start ON calendar_items(start_time);")
        log_info("Indexes created/ensured.")

    except Exception as e:
        log_error(f"Error initializing DB: {e}")
        raise
    finally:
        if own_conn:
            conn.close()
            log_info("Database setup complete and connection closed.")
