from p75search.models import Row
from p75search.search import find_code, search


def make_rows(*codes):
    return [Row(code=c, p75=str(i)) for i, c in enumerate(codes)]


def test_substring_match_in_order():
    rows = [Row(code="A100", p75="12.5"), Row(code="A200", p75="8.0"), Row(code="B300", p75="5.5")]
    assert search(rows, "A") == rows[:2]


def test_match_is_case_insensitive():
    rows = make_rows("abc-1", "XYZ", "ABC-2")
    assert [r.code for r in search(rows, "Abc")] == ["abc-1", "ABC-2"]


def test_results_capped_at_ten():
    rows = make_rows(*[f"C{i:03d}" for i in range(25)])
    results = search(rows, "c0")
    assert len(results) == 10
    assert results == rows[:10]


def test_custom_limit():
    rows = make_rows("A1", "A2", "A3")
    assert search(rows, "a", limit=2) == rows[:2]


def test_empty_and_whitespace_queries_return_nothing():
    rows = make_rows("A1", " ")
    assert search(rows, "") == []
    assert search(rows, "   ") == []


def test_no_match():
    assert search(make_rows("A1"), "zz") == []


def test_find_code_is_exact_and_case_insensitive():
    rows = make_rows("A100", "a1000")
    assert find_code(rows, "a100") is rows[0]
    assert find_code(rows, " A1000 ") is rows[1]
    assert find_code(rows, "A10") is None
