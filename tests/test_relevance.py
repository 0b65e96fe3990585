import pytest

from docchat.pipeline.relevance import (
    filter_documents,
    filter_relevant_documents,
    filter_relevant_lines,
)
from docchat.schemas.documents import Document
from docchat.utils.text import significant_terms

DOCS = [
    Document(content="Pravilnik o radu propisuje...", source="a.pdf"),
    Document(content="Nevezan sadržaj", source="b.pdf"),
]


def test_pravilnik_query_keeps_only_matching_document():
    terms = significant_terms("što je pravilnik", {"što", "je"}, 3)
    assert terms == ["pravilnik"]
    assert filter_relevant_documents(terms, DOCS) == [DOCS[0]]


def test_no_terms_returns_input_unchanged():
    terms = significant_terms("je i u", {"je"}, 3)
    assert terms == []
    assert filter_relevant_documents(terms, DOCS) == DOCS


def test_partial_word_match_counts():
    assert filter_relevant_documents(["pravil"], DOCS) == [DOCS[0]]


def test_any_term_is_enough_and_order_is_preserved():
    docs = [
        Document(content="gamma", source="1"),
        Document(content="alpha", source="2"),
        Document(content="beta", source="3"),
    ]
    assert filter_relevant_documents(["beta", "gamma"], docs) == [docs[0], docs[2]]


def test_no_match_returns_empty():
    assert filter_relevant_documents(["nepostojeće"], DOCS) == []


def test_filter_relevant_lines():
    text = "Plaća se isplaćuje mjesečno.\nGodišnji odmor traje 20 dana.\nOstalo."
    assert filter_relevant_lines(["odmor"], text) == ["Godišnji odmor traje 20 dana."]
    assert filter_relevant_lines([], text) == text.splitlines()


def test_line_granularity_narrows_documents():
    docs = [
        Document(content="Uvod\nGodišnji odmor traje 20 dana\nKraj", source="a.pdf"),
        Document(content="Plaća\nBonus", source="b.pdf"),
    ]
    result = filter_documents(["odmor"], docs, "line")
    assert result == [Document(content="Godišnji odmor traje 20 dana", source="a.pdf")]


def test_document_granularity_is_default():
    assert filter_documents(["pravilnik"], DOCS) == [DOCS[0]]


def test_unknown_granularity_raises():
    with pytest.raises(ValueError):
        filter_documents(["x"], DOCS, "sentence")
