import pytest

from recipechef.search import (
    All,
    Any,
    Cookware,
    Ingredient,
    NamePart,
    Not,
    RecipeData,
    Tag,
    error_correct_query,
    parse_conjunct_chunks,
    parse_disjunct_chunks,
    parse_search,
)


@pytest.mark.parametrize(
    "query, expected",
    [
        ("a b c", "a b c"),
        ("a | c", "a | c"),
        ("(b c", "(b c)"),
        ("(a b)", "(a b)"),
        ("a | (b | c)", "a | (b | c)"),
        ("b) c", "(b) c"),
    ],
)
def test_error_correct_query(query, expected):
    assert error_correct_query(query) == expected


def test_disjunct_chunks():
    assert parse_disjunct_chunks("a | (b | c) | d") == ["a", "(b | c)", "d"]


def test_conjunct_chunks():
    assert parse_conjunct_chunks("a (b c) d") == ["a", "(b c)", "d"]


def test_empty_query_matches_all():
    assert parse_search(None) == All()
    assert parse_search("") == All()


def test_single_name():
    assert parse_search("pasta") == NamePart("pasta")


def test_conjunction():
    assert parse_search("a b") == All((NamePart("a"), NamePart("b")))


def test_disjunction():
    assert parse_search("a | b") == Any((NamePart("a"), NamePart("b")))


def test_nested_any_in_all():
    result = parse_search("a (b | c)")
    assert result == All((NamePart("a"), Any((NamePart("b"), NamePart("c")))))
    assert result.to_query() == "a (b | c)"


def test_nested_all_in_any():
    result = parse_search("a | (b c)")
    assert result == Any((NamePart("a"), All((NamePart("b"), NamePart("c")))))
    assert result.to_query() == "a | b c"


def test_negation_and_prefixes():
    result = parse_search("!tag:vegan ingredient:olive+oil cookware:pan")
    assert result == All(
        (Not(Tag("vegan")), Ingredient("olive oil"), Cookware("pan"))
    )
    assert result.to_query() == "!tag:vegan ingredient:olive+oil cookware:pan"


def test_invalid_tag_is_dropped():
    assert parse_search("tag:Bad") == All()


def test_negated_group_query():
    result = parse_search("!(a | b) c")
    assert result == All((Not(Any((NamePart("a"), NamePart("b")))), NamePart("c")))
    assert result.to_query() == "!(a | b) c"


def _data():
    return RecipeData(
        metadata={"tags": ["italian", "pasta-dish"]},
        ingredients=["Olive Oil", "Spaghetti"],
        cookware=["Large Pot"],
    )


def test_matches_name_part():
    assert parse_search("carb").matches_recipe("Pasta Carbonara", _data()) is True
    assert parse_search("soup").matches_recipe("Pasta Carbonara", _data()) is False


def test_matches_tag():
    assert parse_search("tag:pasta").matches_recipe("x", _data()) is True
    assert parse_search("tag:french").matches_recipe("x", _data()) is False


def test_tag_without_metadata():
    assert Tag("italian").matches_recipe("x", RecipeData()) is False


def test_matches_ingredient_and_cookware():
    assert parse_search("ingredient:olive+oil").matches_recipe("x", _data()) is True
    assert parse_search("cookware:pot").matches_recipe("x", _data()) is True
    assert parse_search("cookware:wok").matches_recipe("x", _data()) is False


def test_matches_combinators():
    data = _data()
    assert parse_search("soup | carb").matches_recipe("carbonara", data) is True
    assert parse_search("soup carb").matches_recipe("carbonara", data) is False
    assert parse_search("!soup").matches_recipe("carbonara", data) is True


def test_empty_searchers_match():
    assert All().matches_recipe("x", RecipeData()) is True
    assert Any().matches_recipe("x", RecipeData()) is True


def test_round_trip_query():
    query = "a | tag:vegan | ingredient:red+onion"
    assert parse_search(parse_search(query).to_query()) == parse_search(query)