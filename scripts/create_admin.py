#!/usr/bin/env python3
"""
Bootstrap script: create the first microsite admin.

The /api/admins endpoints require a token, so the very first admin has to
be created out of band. Optionally creates the schema and the website the
admin belongs to.

Usage:
    DATABASE_URL='postgresql://...' python scripts/create_admin.py \\
        --username owner --website-domain dealer.example --website-name "Dealer"

Options:
    --init-schema      Create missing tables before inserting
    --website-id N     Attach the admin to an existing website
    --password         Read from the ADMIN_PASSWORD env var or prompted if omitted
"""

import os
import sys
import argparse
import getpass

import psycopg2

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'dealersite'))

from config import build_database_url
from database import Database, get_cursor
from migrations.init_schema import create_schema
from core.auth.repositories import AdminRepository
from core.errors import StoreError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Create a DealerSite admin account.')
    parser.add_argument('--username', required=True)
    parser.add_argument('--password', help='Defaults to $ADMIN_PASSWORD, else prompts')
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument('--website-id', type=int)
    group.add_argument('--website-domain', help='Create (or reuse) a website with this domain')
    parser.add_argument('--website-name', help='Display name when a website is created')
    parser.add_argument('--init-schema', action='store_true')
    return parser.parse_args(argv)


def ensure_website(db, domain, name):
    """Return the id of the website with ``domain``, inserting it if needed."""
    with db.transaction() as conn:
        cursor = get_cursor(conn)
        cursor.execute('SELECT id FROM websites WHERE domain = %s', (domain,))
        row = cursor.fetchone()
        if row:
            return row['id']
        cursor.execute(
            'INSERT INTO websites (domain, name) VALUES (%s, %s) RETURNING id',
            (domain, name or domain)
        )
        return cursor.fetchone()['id']


def main(argv=None):
    args = parse_args(argv)
    password = args.password or os.environ.get('ADMIN_PASSWORD') or getpass.getpass('Password: ')
    if not password:
        print('ERROR: password must not be empty')
        return 1

    try:
        dsn = build_database_url(os.environ)
    except ValueError as e:
        print(f'ERROR: {e}')
        return 1

    sslmode = 'require' if os.environ.get('DB_SSL', '').lower() == 'true' else 'disable'
    db = Database(dsn, minconn=1, maxconn=2, sslmode=sslmode)
    try:
        db.open()
        if args.init_schema:
            with db.transaction() as conn:
                create_schema(conn, get_cursor(conn))
            print('Schema ready.')

        website_id = args.website_id
        if website_id is None:
            website_id = ensure_website(db, args.website_domain, args.website_name)
            print(f'Website {args.website_domain} -> id {website_id}')

        admin = AdminRepository(db).create(args.username, password, website_id)
        print(f"Admin '{admin['username']}' created with id {admin['id']} (website {admin['website_id']})")
        return 0
    except (StoreError, psycopg2.Error) as e:
        print(f'ERROR: {e}')
        return 1
    finally:
        db.close()


if __name__ == '__main__':
    sys.exit(main())
