import pytest

from naza.tools.add_blog_license import (
    LICENSE_MARKER,
    MissingAbbrlinkError,
    add_licenses,
    find_abbrlink,
    has_license,
    main,
)

POST = b"---\ntitle: t\nabbrlink: abc123\n---\nbody\n"


def test_find_abbrlink():
    assert find_abbrlink(POST.split(b"\n")) == "abc123"
    assert find_abbrlink([b"title: t", b"body"]) == ""


def test_has_license():
    marker = LICENSE_MARKER.encode("utf-8")
    assert has_license([b"a", marker + b" x"])
    assert has_license([b"a", marker + b" x", b""])
    assert not has_license([marker, b"a", b"b"])
    assert not has_license([b"only"])


def test_add_licenses(tmp_path):
    (tmp_path / "p.md").write_bytes(POST)
    (tmp_path / "note.txt").write_bytes(b"abbrlink: zz\n")
    assert add_licenses(tmp_path) == (1, 0)
    content = (tmp_path / "p.md").read_bytes()
    assert content.startswith(POST)
    assert b"/p/abc123/" in content
    assert has_license(content.split(b"\n"))
    assert (tmp_path / "note.txt").read_bytes() == b"abbrlink: zz\n"
    assert add_licenses(tmp_path) == (0, 1)
    assert (tmp_path / "p.md").read_bytes() == content


def test_missing_abbrlink(tmp_path):
    (tmp_path / "p.md").write_bytes(b"title: t\nbody\n")
    with pytest.raises(MissingAbbrlinkError):
        add_licenses(tmp_path)
    assert main(["-d", str(tmp_path)]) == 1


def test_main(tmp_path):
    assert main([]) == 1
    (tmp_path / "p.md").write_bytes(POST)
    assert main(["-d", str(tmp_path)]) == 0
    assert b"/p/abc123/" in (tmp_path / "p.md").read_bytes()