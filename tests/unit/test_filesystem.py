from sitekit.filesystem import is_really_writable


def test_posix_uses_access_checks(tmp_path) -> None:
    target = tmp_path / "data.txt"
    target.write_text("x")
    assert is_really_writable(tmp_path) is True
    assert is_really_writable(target) is True
    assert is_really_writable(tmp_path / "missing" / "file.txt") is False


def test_writability_check_leaves_no_files_behind(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr("sitekit.filesystem._trusts_access_checks", lambda: False)

    assert is_really_writable(tmp_path) is True
    assert list(tmp_path.iterdir()) == []


def test_append_check_for_files_and_missing_paths(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr("sitekit.filesystem._trusts_access_checks", lambda: False)
    target = tmp_path / "data.txt"
    target.write_text("x")

    assert is_really_writable(target) is True
    assert target.read_text() == "x"
    assert is_really_writable(tmp_path / "missing.txt") is False
