"""Connection defaults, identifier quoting and placeholder prefixes."""

from typing import Dict

# Connection defaults
default_driver = 'mysql+pymysql'
default_host = '127.0.0.1'
default_charset = 'utf8mb4'

# Dialect-specific identifier quote characters
quote_chars: Dict[str, str] = {
    'mysql': '`',
    'mariadb': '`',
    'sqlite': '`',
    'postgresql': '"',
    'oracle': '"',
    'mssql': '"',
}

# Dialects that take a charset query argument in the URL
charset_dialects = ('mysql', 'mariadb')

# Placeholder prefixes per compile context
placeholders = {
    'where': 'w',
    'where_in': 'in',
    'insert': 'ins_{column}',
    'update': 'upd_{column}',
}
