import pytest

from pagestore.replacer import AccessType, LruKReplacer


def test_sample():
    replacer = LruKReplacer(7, 2)
    for i in range(1, 7):
        replacer.record_access(i)
    for i in range(1, 6):
        replacer.set_evictable(i, True)
    replacer.set_evictable(6, False)
    assert len(replacer) == 5

    replacer.record_access(1)
    for i in range(2, 5):
        assert replacer.evict() == i
    assert len(replacer) == 2

    for i in [3, 4, 5, 4]:
        replacer.record_access(i)
    replacer.set_evictable(3, True)
    replacer.set_evictable(4, True)
    assert len(replacer) == 4

    assert replacer.evict() == 3
    assert len(replacer) == 3

    replacer.set_evictable(6, True)
    assert len(replacer) == 4
    assert replacer.evict() == 6
    assert len(replacer) == 3

    replacer.set_evictable(1, False)
    assert len(replacer) == 2
    assert replacer.evict() == 5
    assert len(replacer) == 1

    replacer.record_access(1)
    replacer.record_access(1)
    replacer.set_evictable(1, True)
    assert len(replacer) == 2

    assert replacer.evict() == 4
    assert len(replacer) == 1
    assert replacer.evict() == 1
    assert len(replacer) == 0

    replacer.record_access(1)
    replacer.set_evictable(1, False)
    assert len(replacer) == 0
    assert replacer.evict() is None

    replacer.set_evictable(1, True)
    assert len(replacer) == 1
    assert replacer.evict() == 1
    assert len(replacer) == 0

    assert replacer.evict() is None
    assert len(replacer) == 0

    replacer.set_evictable(6, False)
    replacer.set_evictable(6, True)
    assert len(replacer) == 0


def test_invalid_frame_id_raises():
    replacer = LruKReplacer(3, 2)
    with pytest.raises(ValueError):
        replacer.record_access(4)
    with pytest.raises(ValueError):
        replacer.set_evictable(4, True)


def test_frame_id_equal_to_size_is_accepted():
    replacer = LruKReplacer(3, 2)
    replacer.record_access(3, AccessType.SCAN)
    replacer.set_evictable(3, True)
    assert replacer.evict() == 3


def test_remove_evictable_frame():
    replacer = LruKReplacer(5, 2)
    replacer.record_access(1)
    replacer.record_access(2)
    replacer.set_evictable(1, True)
    replacer.set_evictable(2, True)
    replacer.remove(1)
    assert len(replacer) == 1
    assert replacer.evict() == 2
    assert replacer.evict() is None


def test_remove_unknown_frame_is_ignored():
    replacer = LruKReplacer(5, 2)
    replacer.remove(3)
    assert len(replacer) == 0


def test_remove_non_evictable_frame_raises():
    replacer = LruKReplacer(5, 2)
    replacer.record_access(2)
    with pytest.raises(ValueError):
        replacer.remove(2)


def test_setting_same_state_twice_counts_once():
    replacer = LruKReplacer(5, 2)
    replacer.record_access(0)
    replacer.set_evictable(0, True)
    replacer.set_evictable(0, True)
    assert len(replacer) == 1


def test_non_evictable_frames_are_never_evicted():
    replacer = LruKReplacer(5, 3)
    for frame in (0, 1, 2):
        replacer.record_access(frame)
    replacer.set_evictable(1, True)
    assert replacer.evict() == 1
    assert replacer.evict() is None


def test_k_must_be_positive():
    with pytest.raises(ValueError):
        LruKReplacer(5, 0)