from playhouse.db_url import connect

from infrastructure.settings import get_settings

# SQLite by default; PostgreSQL URLs go through psycopg2.
db = connect(get_settings().database_url)
