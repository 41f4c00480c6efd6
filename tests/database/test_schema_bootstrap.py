from attendance_tracker.database.bootstrap import SCHEMA_PATH, _iter_sql_statements


def test_splitter_ignores_semicolons_inside_quotes():
    sql = "CREATE TABLE a (x TEXT DEFAULT 'a;b');\nINSERT INTO a VALUES (\"c;d\");\n\n"

    assert list(_iter_sql_statements(sql)) == [
        "CREATE TABLE a (x TEXT DEFAULT 'a;b')",
        'INSERT INTO a VALUES ("c;d")',
    ]


def test_bundled_schema_defines_all_tables():
    statements = list(_iter_sql_statements(SCHEMA_PATH.read_text(encoding="utf-8")))
    joined = "\n".join(statements)

    for table in ("users", "subjects", "attendance"):
        assert f"CREATE TABLE IF NOT EXISTS {table}" in joined
    assert "UNIQUE KEY" in joined
    assert "ON DELETE CASCADE" in joined
