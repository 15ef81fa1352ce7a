import pytest

from tuidict.trie import PrefixTrie


def test_basic_insert_and_search():
    trie = PrefixTrie()
    trie.insert("hello", 0, 10)
    trie.insert("help", 10, 8)
    trie.insert("hero", 18, 12)

    results = trie.search_prefix("hel", 10)
    assert len(results) == 2
    assert results[0][0] == "help"
    assert results[1][0] == "hello"


def test_case_insensitive():
    trie = PrefixTrie()
    trie.insert("Hello", 0, 10)

    results = trie.search_prefix("hel", 10)
    assert len(results) == 1
    assert results[0][0] == "hello"


def test_exact_match_priority():
    trie = PrefixTrie()
    trie.insert("test", 0, 10)
    trie.insert("testing", 10, 15)
    trie.insert("testament", 25, 20)

    results = trie.search_prefix("test", 10)
    assert results[0][0] == "test"


def test_limit():
    trie = PrefixTrie()
    trie.insert("apple", 0, 10)
    trie.insert("application", 10, 15)
    trie.insert("apply", 25, 8)

    results = trie.search_prefix("app", 2)
    assert len(results) == 2


def test_results_carry_locations():
    trie = PrefixTrie()
    trie.insert("hero", 18, 12)
    assert trie.search_prefix("HER", 5) == [("hero", 18, 12)]


def test_empty_prefix_returns_nothing():
    trie = PrefixTrie()
    trie.insert("anything", 0, 1)
    assert trie.search_prefix("", 10) == []


def test_no_match():
    trie = PrefixTrie()
    trie.insert("alpha", 0, 1)
    assert trie.search_prefix("beta", 10) == []


def test_same_length_sorted_alphabetically():
    trie = PrefixTrie()
    for word in ["abz", "aby", "abx"]:
        trie.insert(word, 0, 1)
    assert [w for w, _, _ in trie.search_prefix("ab", 10)] == ["abx", "aby", "abz"]


def test_reinsert_overwrites_and_len():
    trie = PrefixTrie()
    trie.insert("Word", 0, 1)
    trie.insert("word", 5, 6)
    assert len(trie) == 1
    assert trie.search_prefix("word", 1) == [("word", 5, 6)]


def test_entries_round_trip():
    trie = PrefixTrie()
    trie.insert("hello", 0, 10)
    trie.insert("help", 10, 8)
    trie.insert("Zebra", 18, 4)
    rebuilt = PrefixTrie.from_entries(trie.entries())
    assert rebuilt.entries() == trie.entries()
    assert len(rebuilt) == 3
    assert rebuilt.search_prefix("hel", 10) == trie.search_prefix("hel", 10)


def test_search_after_insert_between_queries():
    trie = PrefixTrie()
    trie.insert("cat", 0, 1)
    assert len(trie.search_prefix("c", 10)) == 1
    trie.insert("car", 1, 1)
    assert [w for w, _, _ in trie.search_prefix("ca", 10)] == ["car", "cat"]


@pytest.mark.parametrize("limit", [0, 1, 3])
def test_limit_never_exceeded(limit):
    trie = PrefixTrie()
    for word in ["ab", "abc", "abcd", "abcde"]:
        trie.insert(word, 0, 1)
    assert len(trie.search_prefix("ab", limit)) == limit