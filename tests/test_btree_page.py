import pytest

from pagestore.btree_page import (
    BPLUS_TREE_INTERNAL_PAGE_HEADER_SIZE,
    BPLUS_TREE_LEAF_PAGE_HEADER_SIZE,
    IndexPageType,
    InternalHeader,
    InternalPage,
    LeafHeader,
    LeafPage,
    slot_count,
)
from pagestore.disk import PAGE_SIZE


def test_page_type_codes():
    assert [IndexPageType(code) for code in (1, 2, 3)] == list(IndexPageType)
    assert IndexPageType(2) is IndexPageType.LEAF_PAGE
    with pytest.raises(ValueError):
        IndexPageType(0)


def test_header_sizes():
    assert BPLUS_TREE_INTERNAL_PAGE_HEADER_SIZE == 8
    assert BPLUS_TREE_LEAF_PAGE_HEADER_SIZE == 16
    assert InternalHeader.SIZE == BPLUS_TREE_INTERNAL_PAGE_HEADER_SIZE
    assert LeafHeader.SIZE == BPLUS_TREE_LEAF_PAGE_HEADER_SIZE
    assert slot_count(BPLUS_TREE_INTERNAL_PAGE_HEADER_SIZE, 8, 8) == 51
    assert slot_count(BPLUS_TREE_LEAF_PAGE_HEADER_SIZE, 8, 8) == 50


@pytest.mark.parametrize("header", [8, 16, 100])
@pytest.mark.parametrize("key_size,value_size", [(8, 8), (4, 16), (0, 0), (64, 12)])
def test_slot_count_fills_page(header, key_size, value_size):
    slots = slot_count(header, key_size, value_size)
    per_slot = key_size + value_size + 64
    room = PAGE_SIZE - header - 8
    assert slots * per_slot <= room < (slots + 1) * per_slot


def test_slot_count_shrinks_with_larger_keys():
    assert slot_count(8, 8, 8) > slot_count(8, 128, 8)


def test_slot_count_rejects_oversized_header():
    with pytest.raises(ValueError):
        slot_count(PAGE_SIZE, 8, 8)


def test_slot_count_rejects_negative_sizes():
    with pytest.raises(ValueError):
        slot_count(8, -1, 8)


def test_internal_page_str_skips_first_key():
    page = InternalPage(keys=[1, 2, 3], values=[10, 20, 30])
    assert str(page) == "(,2,3"


def test_leaf_page_str_of_empty_page():
    assert str(LeafPage()) == "("


def test_leaf_page_str_uses_repr_of_keys():
    page = LeafPage(keys=["a", "b"])
    assert str(page) == "(," + repr("b")


def test_default_headers_are_empty():
    assert InternalPage().header == InternalHeader(0, 0)
    assert LeafPage().header == LeafHeader(0, 0, 0)
    assert LeafPage().keys == []