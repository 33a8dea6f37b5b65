"""End-to-end demo against a MySQL server (change credentials as needed)."""

import logging
from datetime import datetime
from pprint import pprint

from querylite import DB

logging.basicConfig(level=logging.INFO)


def main():
    DB.connect({
        'host': '127.0.0.1',
        'database': 'querylite_demo',
        'username': 'root',
        'password': '',
        'charset': 'utf8mb4',
    })

    print('=== QueryLite Demo ===\n')

    if not DB.table('users').limit(1).get():
        print('No users found. Inserting a demo user...')
        demo_id = DB.table('users').insert({
            'name': 'Demo User',
            'email': 'demo@example.com',
            'status': 'active',
            'created_at': datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
        })
        print(f'Demo user inserted with ID: {demo_id}\n')

    users = (DB.table('users')
             .where('status', 'active')
             .order_by('created_at', 'desc')
             .limit(10)
             .get())
    print('Active users:')
    pprint(users)

    new_id = DB.table('users').insert({
        'name': 'John Doe',
        'email': 'john@example.com',
        'status': 'active',
        'created_at': datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
    })
    print(f'Inserted user ID: {new_id}\n')

    print(f'User with ID {new_id} (from find()):')
    pprint(DB.table('users').find(new_id))

    updated = DB.table('users').where('id', new_id).update({'status': 'inactive'})
    print(f"Updated rows (set status = 'inactive'): {updated}\n")

    print('Recently inactive users:')
    pprint(DB.table('users').where('status', 'inactive').order_by('id', 'desc').limit(5).get())


if __name__ == '__main__':
    main()
