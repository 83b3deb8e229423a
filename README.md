# pagestore

The storage layer of a small relational database engine. It is written in
plain Python and has no third-party dependencies.

## What it provides

- **Page storage** (`pagestore.disk`). Pages are fixed at 4 KiB
  (`PAGE_SIZE`).
  - `MemoryManager(page_capacity)` keeps pages in memory. A page id outside
    the capacity raises `IndexError`.
  - `DiskManager(path)` keeps pages in one file. It can be used as a context
    manager.
  - `DiskScheduler(page_operator)` runs `DiskRequest.read(page_id)` and
    `DiskRequest.write(page_id, data)` on a background thread.
    `schedule()` returns a `concurrent.futures.Future` that holds the result.
- **Frames** (`pagestore.frame`).
  - `FrameHeader` is one in-memory frame. It has a page buffer, a pin count
    and a dirty flag.
  - `ReadWriteLock` is the frame's latch. It allows many readers or one
    writer. A waiting writer goes before new readers.
- **LRU-K replacement** (`pagestore.replacer`). `LruKReplacer` evicts the
  evictable frame with the largest backward k-distance. Frames with fewer
  than k accesses go first, oldest first. `len()` gives the number of
  evictable frames.
- **Page guards** (`pagestore.page_guard`). `ReadPageGuard` and
  `WritePageGuard` latch a frame and pin it until `release()` is called or
  the `with` block ends. The data of a read guard is a `bytes` snapshot. The
  data of a write guard is the frame's own `bytearray`, and taking a write
  guard marks the frame dirty.
- **Buffer pool** (`pagestore.buffer_pool`). `BufferPoolManager` maps page
  ids onto a fixed number of frames. When a dirty frame is evicted, its page
  is written out. That page is read back the next time it is fetched.
- **Catalog types**:
  - `pagestore.types`: `TypeId`, `DataType`, `parse_data_type`, and `Value`,
    which checks its value against the range of its type.
  - `pagestore.catalog`: `Column`, `Schema`, `TableInfo`, and
    `parse_create_stmt`.
  - `pagestore.rid`: `RID`.
- **B+ tree pieces**:
  - `pagestore.btree_page`: the page layouts (`InternalPage`, `LeafPage`),
    their headers, `IndexPageType`, and `slot_count` for page capacity.
  - `pagestore.index`: `GenericKey` and the `BPlusTree` configuration.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Using the buffer pool

```python
from pagestore.buffer_pool import BufferPoolManager
from pagestore.disk import MemoryManager

with BufferPoolManager(10, 5, MemoryManager(1000)) as bpm:
    page_id = bpm.new_page_id()

    with bpm.write_page(page_id) as guard:
        guard.data[:5] = b"hello"

    with bpm.read_page(page_id) as guard:
        assert guard.data[:5] == b"hello"
```

`read_page` and `write_page` return `None` when every frame is pinned and no
frame can be evicted. `pin_count(page_id)` reports how many guards hold a
page, or `None` if the page is not in memory. `delete_page(page_id)` returns
`False` while the page is pinned, and `True` otherwise. `close()` stops the
background disk scheduler; leaving the `with` block calls it for you.

## Schemas

```python
from pagestore.catalog import parse_create_stmt

schema = parse_create_stmt("id int,name varchar(32)")
schema.column_count()          # 2
schema.column_index("name")    # 1
```

The text is lower-cased and split on commas. In each part, the column name
runs up to the first space and the type follows it. Separate columns with a
bare comma, with no space after it. An unknown type name is taken as
INTEGER.

## Replacer

```python
from pagestore.replacer import LruKReplacer

replacer = LruKReplacer(7, 2)
replacer.record_access(1, None)
replacer.set_evictable(1, True)
len(replacer)        # 1
replacer.evict()     # 1
```

## What it does not do

- There is no query processing, SQL parser or server. `parse_create_stmt`
  only builds a `Schema` from a column list.
- `BPlusTree` holds an index's configuration: its name, header page and
  maximum page sizes. It cannot insert, look up or remove keys.
- The buffer pool writes dirty pages out only when it evicts their frames.
  There is no explicit flush, and `close()` does not write pinned or cached
  dirty pages back.
- `delete_page` forgets a page but does not reclaim its space in the page
  store.