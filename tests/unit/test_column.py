"""
Tests for Column descriptors and dialect column description.
"""
import sqlite3
from types import SimpleNamespace

import pytest
from dbq.adapters.column_info import Column
from dbq.adapters.type_mapping import TypeClass
from dbq.strategy import GenericStrategy, PostgresStrategy, SQLiteStrategy
from dbq.strategy import get_db_strategy
from dbq.strategy.postgres import type_name_for_oid
from dbq.strategy.sqlite import storage_class
from tests.fixtures.mocks import col


def test_column_defaults():
    """Test a bare column is nullable text with no width hint"""
    column = Column('name')
    assert column.type_name is None
    assert column.nullable is True
    assert column.scan_type is None
    assert column.type_class is TypeClass.FALLBACK
    assert column.integer_width == (64, True)


def test_column_normalizes_type_name():
    column = Column('n', 'int4', nullable=False, scan_type='uint32')
    assert column.type_name == 'INT4'
    assert column.type_class is TypeClass.INTEGER
    assert column.integer_width == (32, False)
    assert column.to_dict() == {
        'name': 'n',
        'type_name': 'INT4',
        'type_class': 'integer',
        'nullable': False,
        'scan_type': 'uint32',
        'internal_size': None,
        'decoded': False,
        }
    assert 'INT4' in repr(column)


class FakeDescribedCursor:
    def __init__(self, description):
        self.description = description


class TestGenericStrategy:

    def test_type_name_and_nullability(self):
        cursor = FakeDescribedCursor([
            col('id', 'INT4', null_ok=False, internal_size=4),
            col('name', 'VARCHAR'),
        ])
        columns = GenericStrategy().describe_columns(cursor, [])
        assert columns == [
            Column('id', 'INT4', nullable=False, scan_type='int32', type_code='INT4', internal_size=4),
            Column('name', 'VARCHAR', nullable=True, type_code='VARCHAR'),
        ]

    def test_non_string_type_code_falls_back(self):
        cursor = FakeDescribedCursor([('x', 23, None, None, None, None, None)])
        [column] = GenericStrategy().describe_columns(cursor, [])
        assert column.type_name is None
        assert column.type_class is TypeClass.FALLBACK
        assert column.nullable is True

    def test_short_description_items(self):
        [column] = GenericStrategy().describe_columns(FakeDescribedCursor([('x',)]), [])
        assert column.name == 'x'
        assert column.type_class is TypeClass.FALLBACK

    def test_no_description(self):
        assert GenericStrategy().describe_columns(FakeDescribedCursor(None), []) == []


class TestPostgresStrategy:

    @pytest.mark.parametrize(('oid', 'name'), [
        (16, 'bool'),
        (20, 'int8'),
        (23, 'int4'),
        (25, 'text'),
        (701, 'float8'),
        (1043, 'varchar'),
        (1082, 'date'),
        (1083, 'time'),
        (1114, 'timestamp'),
        (1184, 'timestamptz'),
        (1700, 'numeric'),
        (3802, 'jsonb'),
    ])
    def test_type_name_for_oid(self, oid, name):
        assert type_name_for_oid(oid) == name

    def test_unknown_oid(self):
        assert type_name_for_oid(987654321) is None
        assert type_name_for_oid(None) is None

    def test_describe_column(self):
        item = SimpleNamespace(name='n', type_code=21, internal_size=2, null_ok=None)
        column = PostgresStrategy().describe_column(item, [1, 2])
        assert column.type_name == 'INT2'
        assert column.type_class is TypeClass.INTEGER
        assert column.scan_type == 'int16'
        assert column.nullable is True

    def test_describe_text_column(self):
        item = SimpleNamespace(name='s', type_code=1043, internal_size=None, null_ok=False)
        column = PostgresStrategy().describe_column(item, [])
        assert column.type_class is TypeClass.TEXT
        assert column.scan_type is None
        assert column.nullable is False

    @pytest.mark.parametrize('oid', [114, 3802])
    def test_json_columns_are_decoded(self, oid):
        """Test json and jsonb columns are marked as parsed by the driver"""
        item = SimpleNamespace(name='j', type_code=oid, internal_size=None, null_ok=None)
        column = PostgresStrategy().describe_column(item, [])
        assert column.type_class is TypeClass.JSON
        assert column.decoded is True

    def test_other_columns_are_not_decoded(self):
        item = SimpleNamespace(name='n', type_code=23, internal_size=4, null_ok=None)
        assert PostgresStrategy().describe_column(item, []).decoded is False


class TestSQLiteStrategy:

    def test_storage_class(self):
        assert storage_class([1]) == 'INTEGER'
        assert storage_class([None, 1.5]) == 'REAL'
        assert storage_class(['a']) == 'TEXT'
        assert storage_class([b'a']) == 'BLOB'
        assert storage_class([None]) == 'NULL'

    @pytest.mark.parametrize(('values', 'expected'), [
        ([1, 2.5], 'REAL'),
        ([None, 2.5, 3], 'REAL'),
        ([1, 'a'], 'TEXT'),
        ([1.5, b'a'], 'TEXT'),
        (['a', b'a'], 'TEXT'),
        ([1, 2, None], 'INTEGER'),
    ])
    def test_storage_class_of_mixed_values(self, values, expected):
        """Test every value is considered, not just the first"""
        assert storage_class(values) == expected

    def test_describe_columns_from_values(self):
        conn = sqlite3.connect(':memory:')
        cursor = conn.execute("select 1 as i, 2.5 as r, 'x' as t, null as n")
        rows = cursor.fetchall()
        columns = SQLiteStrategy().describe_columns(cursor, rows)
        assert [c.type_name for c in columns] == ['INTEGER', 'REAL', 'TEXT', 'NULL']
        assert [c.type_class for c in columns] == [
            TypeClass.INTEGER, TypeClass.FLOAT, TypeClass.TEXT, TypeClass.NULL
        ]
        assert all(c.nullable for c in columns)
        conn.close()


def test_strategy_lookup(fake_connection):
    """Test strategies are found from the connection's type"""
    conn = sqlite3.connect(':memory:')
    assert isinstance(get_db_strategy(conn), SQLiteStrategy)
    conn.close()

    assert isinstance(get_db_strategy(fake_connection()), GenericStrategy)
    assert isinstance(get_db_strategy(object()), GenericStrategy)
    assert get_db_strategy(SimpleNamespace(dialect='postgresql')).dialect_name == 'postgresql'
    assert isinstance(get_db_strategy(SimpleNamespace(dialect='oracle')), GenericStrategy)


if __name__ == '__main__':
    __import__('pytest').main([__file__])
