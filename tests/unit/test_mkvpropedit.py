from pathlib import Path

from mkvtoolnix.mkvpropedit import build_attach_command, mkvpropedit_attach_tags


class _Proc:
    def __init__(self, returncode: int = 0, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        self.stdout = ""


class _Locator:
    def __init__(self, present: bool) -> None:
        self.present = present
        self.asked = []

    def exists(self, name: str) -> bool:
        self.asked.append(name)
        return self.present


def _files(tmp_path: Path) -> tuple[Path, Path]:
    container = tmp_path / "Ex Machina.mkv"
    container.write_bytes(b"mkv")
    document = tmp_path / "Ex Machina.xml"
    document.write_text("<Tags/>", encoding="utf-8")
    return container, document


def test_build_attach_command() -> None:
    cmd = build_attach_command("mkvpropedit", Path("/m/a.mkv"), Path("/m/a.xml"))
    assert cmd == ["mkvpropedit", "/m/a.mkv", "--tags", "global:/m/a.xml"]


def test_attach_invokes_mkvpropedit(tmp_path: Path, monkeypatch) -> None:
    container, document = _files(tmp_path)
    calls = []

    def fake_run(cmd, capture_output, text):
        calls.append(cmd)
        return _Proc(0)

    monkeypatch.setattr("subprocess.run", fake_run)
    result = mkvpropedit_attach_tags("mkvpropedit", container, document, locator=_Locator(True))
    assert result.attached is True
    assert calls == [["mkvpropedit", str(container), "--tags", f"global:{document}"]]


def test_attach_skips_when_tool_missing(tmp_path: Path, monkeypatch) -> None:
    container, document = _files(tmp_path)

    def fail_run(*_args, **_kwargs):
        raise AssertionError("mkvpropedit should not run")

    monkeypatch.setattr("subprocess.run", fail_run)
    locator = _Locator(False)
    result = mkvpropedit_attach_tags("mkvpropedit", container, document, locator=locator)
    assert result.attached is False
    assert "not found" in result.message
    assert locator.asked == ["mkvpropedit"]


def test_attach_reports_failure(tmp_path: Path, monkeypatch) -> None:
    container, document = _files(tmp_path)
    monkeypatch.setattr("subprocess.run", lambda cmd, capture_output, text: _Proc(2, "Error: bad file"))
    result = mkvpropedit_attach_tags("mkvpropedit", container, document, locator=_Locator(True))
    assert result.attached is False
    assert "bad file" in result.message


def test_attach_treats_warnings_as_success(tmp_path: Path, monkeypatch) -> None:
    container, document = _files(tmp_path)
    monkeypatch.setattr("subprocess.run", lambda cmd, capture_output, text: _Proc(1, "Warning: x"))
    result = mkvpropedit_attach_tags("mkvpropedit", container, document, locator=_Locator(True))
    assert result.attached is True


def test_attach_requires_container(tmp_path: Path) -> None:
    document = tmp_path / "a.xml"
    document.write_text("<Tags/>", encoding="utf-8")
    result = mkvpropedit_attach_tags("mkvpropedit", tmp_path / "a.mkv", document, locator=_Locator(True))
    assert result.attached is False
