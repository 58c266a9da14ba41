"""Database schema initialization.

Contains the CREATE TABLE and CREATE INDEX statements for the content API.
Every statement is idempotent, so running it against an existing database
only fills in what is missing.

Called by database.init_db() when INIT_DB=true, or by scripts/create_admin.py.
"""


def create_schema(conn, cursor):
    """Create all tables and indexes.

    Args:
        conn: Database connection (the caller commits)
        cursor: Database cursor from get_cursor(conn)
    """
    cursor.execute('''
        CREATE TABLE IF NOT EXISTS websites (
            id SERIAL PRIMARY KEY,
            domain TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # Admins survive the deletion of their website; they lose the scope only
    cursor.execute('''
        CREATE TABLE IF NOT EXISTS admins (
            id SERIAL PRIMARY KEY,
            username TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            website_id INTEGER REFERENCES websites(id) ON DELETE SET NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    cursor.execute('''
        CREATE TABLE IF NOT EXISTS sales_info (
            id SERIAL PRIMARY KEY,
            website_id INTEGER REFERENCES websites(id) ON DELETE CASCADE,
            name TEXT NOT NULL,
            phone TEXT NOT NULL,
            location TEXT,
            image_url TEXT,
            instagram_url TEXT,
            tiktok_url TEXT
        )
    ''')

    cursor.execute('''
        CREATE TABLE IF NOT EXISTS cars (
            id SERIAL PRIMARY KEY,
            website_id INTEGER REFERENCES websites(id) ON DELETE CASCADE,
            slug TEXT NOT NULL,
            name TEXT NOT NULL,
            variant TEXT NOT NULL,
            image_url TEXT,
            price BIGINT NOT NULL,
            promo BIGINT,
            type TEXT NOT NULL,
            description TEXT,
            features TEXT[] DEFAULT '{}',
            specs JSONB DEFAULT '{}'::jsonb
        )
    ''')

    cursor.execute('''
        CREATE UNIQUE INDEX IF NOT EXISTS idx_cars_website_slug
        ON cars (website_id, slug)
    ''')

    cursor.execute('''
        CREATE TABLE IF NOT EXISTS testimonials (
            id SERIAL PRIMARY KEY,
            website_id INTEGER REFERENCES websites(id) ON DELETE CASCADE,
            name TEXT NOT NULL,
            image_url TEXT,
            car TEXT NOT NULL,
            stars INTEGER NOT NULL,
            text TEXT NOT NULL
        )
    ''')

    cursor.execute('''
        CREATE TABLE IF NOT EXISTS faqs (
            id SERIAL PRIMARY KEY,
            website_id INTEGER REFERENCES websites(id) ON DELETE CASCADE,
            question TEXT NOT NULL,
            answer TEXT NOT NULL
        )
    ''')

    for table in ('sales_info', 'cars', 'testimonials', 'faqs'):
        cursor.execute(f'CREATE INDEX IF NOT EXISTS idx_{table}_website ON {table} (website_id)')
