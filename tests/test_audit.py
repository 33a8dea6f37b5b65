"""Tests for the statement audit trail."""

import pytest

from querylite import Audit, Connection, ConnectionError, QueryError


@pytest.fixture
def audited_conn(tmp_path):
    c = Connection({'driver': 'sqlite', 'database': ':memory:', 'audit_db': str(tmp_path / 'audit.db')})
    c.execute('CREATE TABLE t (id INTEGER PRIMARY KEY, v TEXT)')
    yield c
    c.close()


def test_audit_disabled_by_default(conn):
    assert conn.audit_obj is None


def test_successful_statements_are_recorded(audited_conn):
    audited_conn.table('t').insert({'v': 'a'})
    entries = audited_conn.audit_obj.entries()
    assert [e['op'] for e in entries] == ['execute', 'execute']
    assert entries[1]['sql'] == 'INSERT INTO `t` (`v`) VALUES (:ins_v_1)'
    assert entries[1]['params'] == "{'ins_v_1': 'a'}"
    assert [e['ok'] for e in entries] == [1, 1]
    assert entries[1]['error'] is None
    assert entries[1]['caller'].endswith('test_audit')


def test_failed_statements_are_recorded_and_raised(audited_conn):
    with pytest.raises(QueryError):
        audited_conn.execute('SELECT * FROM nowhere')
    entry = audited_conn.audit_obj.entries()[-1]
    assert entry['ok'] == 0
    assert 'nowhere' in entry['error']


def test_dataframe_queries_are_recorded(audited_conn):
    audited_conn.table('t').where('v', 'a').get_df()
    entry = audited_conn.audit_obj.entries()[-1]
    assert entry['op'] == 'fetch_df'
    assert entry['sql'] == 'SELECT * FROM `t` WHERE `v` = :w_1'
    assert entry['params'] == "{'w_1': 'a'}"


def test_entries_survive_reopening(tmp_path):
    path = str(tmp_path / 'audit.db')
    with Connection({'driver': 'sqlite', 'database': ':memory:', 'audit_db': path}) as c:
        c.execute('SELECT 1')
    assert [e['sql'] for e in Audit(path).entries()] == ['SELECT 1']


def test_unusable_audit_path_raises_connection_error(tmp_path):
    path = str(tmp_path / 'missing' / 'audit.db')
    with pytest.raises(ConnectionError) as exc:
        Connection({'driver': 'sqlite', 'database': ':memory:', 'audit_db': path})
    assert str(exc.value).startswith('Audit database unavailable: ')
