# naza

A collection of small building blocks for network and media programs, plus
a handful of command-line helpers for working on source trees, blog posts,
CSV data and thread stack dumps.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

The only runtime dependency is `cryptography`, used by `naza.crypto`.

## What is inside

| Module | Purpose |
| --- | --- |
| `naza.bele` | Big/little endian decoding (`be_uint16` … `be_uint64`, `be_float64`, `le_uint16`, `le_uint32`), encoding into a `bytearray` (`be_put_uint24`, `le_put_uint32`, …), reading from binary streams (`read_be_uint32`, …) and writing with `write_be` / `write_le` |
| `naza.bits` | `BitReader` and `BitWriter` for most-significant-bit-first bit streams, Exp-Golomb decoding, and `get_bit8`, `get_bits8`, `get_bit16`, `get_bits16` |
| `naza.circularqueue` | `CircularQueue`, a fixed-capacity FIFO queue |
| `naza.lru` | `Lru`, a least-recently-used cache |
| `naza.bininfo` | Build information strings (`stringify_single_line`, `stringify_multi_line`) |
| `naza.atomic` | Lock-guarded integers that wrap like machine integers (`AtomicInt32`, `AtomicUint32`, `AtomicInt64`, `AtomicUint64`) and `AtomicBool` |
| `naza.bitrate` | `Bitrate`, a sliding-window rate meter with a choice of `Unit` |
| `naza.consistenthash` | `ConsistentHash`, a hash ring with virtual nodes (CRC-32 by default) |
| `naza.crypto` | AES-CBC encryption (`encrypt_aes_cbc`, `decrypt_aes_cbc`) and PKCS#5 / PKCS#7 padding |
| `naza.dataops` | `slice_limit`, `limit_indices`, `unique_count` and `min_max` for sequences |
| `naza.chartbar` | `ChartBar`, horizontal bar charts for the console, from items, mappings, iterables or a CSV file |
| `naza.fake` | Test doubles: `with_fake_os_exit` / `os_exit`, `with_recover`, and the scriptable `FakeWriter` |
| `naza.defertask` | `DeferTaskThread` and `go`, run a task after a delay on a background timer thread |
| `naza.connection` | `Connection`, a socket wrapper with read/write buffering, per-call timeouts, an optional background write queue and byte statistics |
| `naza.filebatch` | `walk` a directory and rewrite files; `add_head_content`, `add_tail_content`; `delete_lines` with a `LineRange` |
| `naza.filesystemlayer` | A file-system interface with `DiskFileSystem` and `MemoryFileSystem` backends, chosen with `fsl_factory` |

## A few examples

Byte order:

```python
from naza import bele

bele.be_uint24(b"\x0c\x22\x38")   # 12*65536 + 34*256 + 56
out = bytearray(4)
bele.le_put_uint32(out, 1)         # out == b"\x01\x00\x00\x00"
```

Reading bits:

```python
from naza.bits import BitReader

reader = BitReader(b"\x30\x39")
reader.read_bits(3)       # 1
reader.read_ue_golomb()
reader.avail_bits()
```

Padding and encryption:

```python
from naza import crypto

key = bytes(16)
padded = crypto.pkcs7_pad(b"1234567890", 16)
cipher_text = crypto.encrypt_aes_cbc(padded, key, crypto.COMMON_IV)
plain = crypto.pkcs7_unpad(crypto.decrypt_aes_cbc(cipher_text, key, crypto.COMMON_IV))
```

Queue and cache:

```python
from naza.circularqueue import CircularQueue
from naza.lru import Lru

queue = CircularQueue(3)
queue.push_back(1)
queue.push_back(2)
queue.pop_front()   # 1
len(queue)          # 1

cache = Lru(2)
cache.put("a", 1)   # True: the key is new
cache.get("a")      # 1
```

Consistent hashing:

```python
from naza.consistenthash import ConsistentHash

ring = ConsistentHash(1024)
ring.add("10.0.0.1", "10.0.0.2")
ring.get("some-key")   # one of the two nodes
```

Bar chart:

```python
from naza.chartbar import ChartBar, Item

print(ChartBar().with_items([Item("a", 3), Item("b", 6)]), end="")
print(ChartBar().with_options(hide_num=True).with_mapping({"x": 1, "y": 2}), end="")
```

Errors are raised as exceptions: an empty or full queue raises
`CircularQueueError`, a short bit stream raises `BitsError`, a short stream
read raises `ShortReadError`, bad padding raises `PaddingError`, an empty hash
ring raises `EmptyRingError`, a bad line range raises `LineRangeError`, and a
missing in-memory file raises `NotFoundError`.

## Command-line tools

Draw a bar chart from a CSV file whose rows are `name,value`:

```
naza-chartbar -f data.csv
```

Prepend a header comment to every `.go` file under a module directory whose
first line does not already carry the `Notice` marker. The module path is read
from the directory's `go.mod`; the header holds the current year, the name,
the module path and the e-mail address:

```
naza-add-go-license -d path/to/repo -n "Jane Doe" -e jane@example.com
```

Append a closing reprint notice, with a link built from the post's `abbrlink`
front-matter field, to every Markdown post under a directory that does not end
with one already. It stops with exit status 1 at the first post without an
`abbrlink`:

```
naza-add-blog-license -d path/to/posts
```

List lines in `.go` files where two capital letters stand next to each other,
printed as `path:line` with each run highlighted in red. String, comment and
test-file lines, and a fixed list of known identifiers, are left out:

```
naza-camel -d path/to/source
```

Compare two pstack dumps; each thread of the newer dump is printed, red when
its stack changed and cyan when it is new. The files default to `old.txt` and
`new.txt` in the current directory:

```
naza-diffpstack
naza-diffpstack before.txt after.txt
```

Print the program's build information to standard error and exit with
status 1 (without `-v` it prints two lines and exits normally):

```
naza-myapp -v
```

## Limits

- The build information in `naza.bininfo` is `unknown` unless the module
  values `GIT_TAG`, `GIT_COMMIT_LOG`, `GIT_STATUS`, `BUILD_TIME` and
  `BUILD_VERSION` are set by the program that uses it.
- `MemoryFileSystem` keeps whole files keyed by name; it has no directories,
  no listing and no reading through open file objects.
- `BitWriter` does not grow its buffer: writing past its end raises
  `IndexError`.
- `DeferTaskThread` runs every task on its own timer thread, so tasks may run
  concurrently and in any order.
- `Connection` works on plain connected sockets; it does not provide TLS or
  connection setup.