"""Unit tests for engines.sql.helpers: raw, join, insert, set."""

import pytest

from pgcompose.engines.sql import TextNode, quote_ident, sql


class TestRaw:
    @pytest.mark.parametrize(
        "value, text",
        [(True, "true"), (False, "false"), ("username", "username"), (2**53 - 1, "9007199254740991")],
    )
    def test_single_text_node(self, value, text):
        assert sql.raw(value).nodes == (TextNode(text),)

    def test_not_bound(self):
        query = sql("select * from t order by id {}", sql.raw("desc"))
        assert query.text == "select * from t order by id desc"
        assert query.values == []


class TestJoin:
    def test_joins_with_separator(self):
        ids = [1, 2, 3]
        conditions = [
            sql.inject("active = {}", True),
            sql.inject("id = any({})", ids),
            sql.inject("name like '%{}%'", "user"),
        ]
        frozen = sql.join(conditions, " and ").freeze()
        assert frozen.text == "active = $1 and id = any($2) and name like '%$3%'"
        assert frozen.values == [True, ids, "user"]

    def test_single_query(self):
        fragment = sql.inject("a = {}", 1)
        assert sql.join([fragment], " or ") == fragment

    def test_empty_separator_adds_no_node(self):
        joined = sql.join([sql.inject("{}", 1), sql.inject("{}", 2)], "")
        assert joined.freeze().text == "$1$2"
        assert TextNode("") not in joined.nodes

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            sql.join([], " and ")


class TestInsert:
    def test_insert_records(self):
        users = [
            {"id": 1, "name": "john", "age": 14},
            {"id": 2, "name": "selena", "age": 23},
        ]
        frozen = sql.insert(users, "name", "age").freeze()
        assert frozen.text == '("name","age") values ($1, $2), ($3, $4)'
        assert frozen.values == ["john", 14, "selena", 23]

    def test_embedded_in_statement(self):
        query = sql("insert into users {} returning id", sql.insert([{"name": "ann"}], "name"))
        assert query.text == 'insert into users ("name") values ($1) returning id'
        assert query.values == ["ann"]

    def test_rejects_no_records(self):
        with pytest.raises(ValueError):
            sql.insert([], "name")

    def test_rejects_no_keys(self):
        with pytest.raises(ValueError):
            sql.insert([{"name": "ann"}])

    def test_missing_key(self):
        with pytest.raises(KeyError):
            sql.insert([{"name": "ann"}], "name", "age")


class TestSet:
    def test_set_expression(self):
        updated_user = {"id": 1, "name": "alan", "age": 23}
        frozen = sql.set(updated_user, "name", "age").freeze()
        assert frozen.text == 'set ("name","age") = row($1, $2)'
        assert frozen.values == ["alan", 23]

    def test_in_update(self):
        query = sql(
            "update users {} where id = {}", sql.set({"name": "alan"}, "name"), 1
        )
        assert query.text == 'update users set ("name") = row($1) where id = $2'
        assert query.values == ["alan", 1]

    def test_rejects_no_keys(self):
        with pytest.raises(ValueError):
            sql.set({"name": "alan"})


def test_quote_ident_doubles_quotes():
    assert quote_ident("name") == '"name"'
    assert quote_ident('we"ird') == '"we""ird"'
