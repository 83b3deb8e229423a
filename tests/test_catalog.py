import pytest

from pagestore.catalog import Column, Schema, TableInfo, parse_create_stmt
from pagestore.types import DataType, TypeId


def test_parse_single_bigint():
    key_schema = parse_create_stmt("a bigint")
    assert key_schema.column_count() == 1
    assert key_schema.columns[0] == Column("a", DataType(TypeId.BIGINT))


def test_parse_several_columns():
    schema = parse_create_stmt("a bigint,b varchar(20),c bool")
    assert [c.name for c in schema.columns] == ["a", "b", "c"]
    assert schema.columns[1].data_type == DataType(TypeId.VARCHAR, 20)
    assert schema.columns[2].data_type == DataType(TypeId.BOOLEAN)


def test_parse_lowercases():
    schema = parse_create_stmt("A INT")
    assert schema.columns[0] == Column("a", DataType(TypeId.INTEGER))


def test_parse_missing_type():
    with pytest.raises(ValueError):
        parse_create_stmt("a")


def test_parse_bad_varchar_size():
    with pytest.raises(ValueError):
        parse_create_stmt("a varchar(big)")


def test_column_index():
    schema = parse_create_stmt("a bigint,b int")
    assert schema.column_index("b") == 1
    assert schema.column_index("a") == 0
    assert schema.column_index("z") is None


def test_non_inlined_count_starts_empty():
    schema = Schema([Column("x", DataType(TypeId.INTEGER))])
    assert schema.non_inlined_column_count() == 0
    assert schema.column_count() == 1


def test_table_info():
    schema = parse_create_stmt("a bigint")
    info = TableInfo(schema, "foo", 3)
    assert info.schema.column_index("a") == 0
    assert (info.name, info.table_oid) == ("foo", 3)