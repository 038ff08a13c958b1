import pytest

from detective_quest.suspects import SuspectRegistry


@pytest.fixture
def registry():
    return SuspectRegistry()


def test_bucket_index_uses_first_byte(registry):
    assert registry.bucket_index("Mordomo") == ord("M") % 7
    assert registry.bucket_index("Cozinheira") == registry.bucket_index("Camareira")
    assert registry.bucket_index("") == 0


def test_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        SuspectRegistry(capacity=0)


def test_lookup_missing_returns_none(registry):
    assert registry.lookup("Mordomo") is None
    assert "Mordomo" not in registry


def test_associate_creates_then_updates(registry):
    suspect = registry.associate("Mordomo", "A")
    assert suspect.citation_count == 1
    again = registry.associate("Mordomo", "B")
    assert again is suspect
    assert suspect.citation_count == 2
    assert suspect.clue_texts() == ["B", "A"]
    assert len(registry) == 1


def test_citation_count_matches_association_calls(registry):
    calls = [("Mordomo", "x"), ("Cozinheira", "y"), ("Mordomo", "x"), ("Mordomo", "z"), ("Cozinheira", "y")]
    for name, clue in calls:
        registry.associate(name, clue)
    assert registry.lookup("Mordomo").citation_count == 3
    assert registry.lookup("Cozinheira").citation_count == 2
    # Repeated clue texts are all kept.
    assert registry.lookup("Mordomo").clue_texts() == ["z", "x", "x"]


def test_colliding_names_share_a_chain(registry):
    registry.associate("Cozinheira", "Faca de cozinha faltando")
    registry.associate("Camareira", "Lencol manchado")
    index = registry.bucket_index("Cozinheira")
    assert registry.chain(index) == ["Camareira", "Cozinheira"]
    assert registry.lookup("Cozinheira").clue_texts() == ["Faca de cozinha faltando"]
    assert registry.lookup("Camareira").clue_texts() == ["Lencol manchado"]


def test_enumerate_follows_bucket_then_chain_order(registry):
    registry.associate("Cozinheira", "c1")
    registry.associate("Mordomo", "m1")
    registry.associate("Jardineiro", "j1")
    summaries = registry.enumerate()
    assert [s.name for s in summaries] == ["Mordomo", "Jardineiro", "Cozinheira"]
    assert summaries[0].to_dict() == {"name": "Mordomo", "citation_count": 1, "clues": ["m1"]}


def test_enumerate_empty_registry(registry):
    assert registry.enumerate() == []


def test_most_likely_empty_is_insufficient(registry):
    assert registry.most_likely() is None


def test_most_likely_single_association(registry):
    registry.associate("Jardineiro", "Pegadas de lama")
    leader = registry.most_likely()
    assert leader.name == "Jardineiro"
    assert leader.citation_count == 1


def test_most_likely_first_seen_wins_ties(registry):
    registry.associate("Jardineiro", "a")
    registry.associate("Mordomo", "b")
    # Mordomo sits in bucket 0, scanned before Jardineiro's bucket 4.
    assert registry.most_likely().name == "Mordomo"
    registry.associate("Jardineiro", "c")
    assert registry.most_likely().name == "Jardineiro"


def test_names_and_clues_are_bounded():
    registry = SuspectRegistry(max_text_length=4)
    registry.associate("Mordomo", "Chave do Escritorio")
    suspect = registry.lookup("Mordomo")
    assert suspect.name == "Mor"
    assert suspect.clue_texts() == ["Cha"]


def test_clear_releases_everything(registry):
    registry.associate("Mordomo", "a")
    registry.associate("Mordomo", "b")
    registry.associate("Cozinheira", "c")
    assert registry.clear() == 2
    assert len(registry) == 0
    assert registry.enumerate() == []
    assert registry.most_likely() is None
