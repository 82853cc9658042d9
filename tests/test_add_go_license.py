import datetime

from naza.tools.add_go_license import add_license, build_license, main, read_module_path


def _repo(tmp_path):
    (tmp_path / "go.mod").write_text("module example.com/demo\n\ngo 1.14\n")
    (tmp_path / "a.go").write_bytes(b"package a\n")
    (tmp_path / "b.go").write_bytes(b"// Notice old header\npackage b\n")
    (tmp_path / "c.txt").write_bytes(b"plain\n")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "d.go").write_bytes(b"package sub\n")
    return tmp_path


def test_read_module_path(tmp_path):
    _repo(tmp_path)
    assert read_module_path(tmp_path) == "example.com/demo"


def test_build_license_layout():
    text = build_license(2020, "Alice", "example.com/demo", "alice@example.com")
    lines = text.split("\n")
    assert lines[0] == "// Notice 2020, Alice."
    assert lines[1] == "// https://example.com/demo"
    assert "// Author: Alice (alice@example.com)" in lines
    assert text.endswith("\n\n")


def test_add_license(tmp_path):
    _repo(tmp_path)
    header = build_license(2020, "Alice", "example.com/demo", "alice@example.com")
    assert add_license(tmp_path, header) == (2, 1)
    assert (tmp_path / "a.go").read_text() == header + "package a\n"
    assert (tmp_path / "sub" / "d.go").read_text() == header + "package sub\n"
    assert (tmp_path / "b.go").read_bytes() == b"// Notice old header\npackage b\n"
    assert (tmp_path / "c.txt").read_bytes() == b"plain\n"
    assert add_license(tmp_path, header) == (0, 3)


def test_main_requires_flags(tmp_path):
    assert main(["-d", str(tmp_path)]) == 1


def test_main_adds_headers(tmp_path):
    _repo(tmp_path)
    assert main(["-d", str(tmp_path), "-n", "Alice", "-e", "alice@example.com"]) == 0
    content = (tmp_path / "a.go").read_text()
    year = datetime.date.today().year
    assert content.startswith(f"// Notice {year}, Alice.")
    assert "(alice@example.com)" in content
    assert content.endswith("package a\n")